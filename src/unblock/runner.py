"""CLI runner for the Unblock solver.

Usage examples:
- Solve and print every board: ``python -m unblock.runner --file puzzle.txt``
- Step through the solution: ``python -m unblock.runner --file puzzle.txt --step``
- Save the solution: ``python -m unblock.runner --file puzzle.txt --save-record solution.txt``
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from .display import format_layout
from .puzzle_format import PuzzleRecord, block_label, compress_moves, dump_record, format_move, parse_direction, parse_layout
from .solver import BFSSolver, SearchStats, SolveResult, SolverConfig, preset_solver_config
from .types import Layout


def load_layout(path: str) -> Layout:
    with open(path, "r", encoding="utf-8") as f:
        return parse_layout(f.read())


def _format_stats(stats: SearchStats) -> str:
    return (
        f"stats: visited={stats.states_visited} expanded={stats.states_expanded} "
        f"depth={stats.depth_reached} max_frontier={stats.max_frontier} "
        f"elapsed_ms={stats.elapsed_ms:.2f}"
    )


def _summary(result: SolveResult) -> str:
    layout = result.steps[0].layout
    runs = compress_moves(result.moves)
    parts = [f"{block_label(layout, bid)} {direction.name.lower()} {steps}" for bid, direction, steps in runs]
    return "Summary: " + (", ".join(parts) if parts else "no moves needed")


def print_solution(result: SolveResult, config: SolverConfig, step: bool = False) -> None:
    initial = result.steps[0].layout
    total = len(result.steps) - 1
    for idx, solution_step in enumerate(result.steps):
        if solution_step.move.is_sentinel:
            print("Starting board:")
        else:
            print(f"Move {idx}/{total}: {format_move(initial, solution_step.move)}")
        print(format_layout(solution_step.layout, config.exit_direction))
        if step:
            input("Press ENTER for next move")
    print(_summary(result))
    print("Run free, prisoner, run! :-)")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Unblock puzzle solver")
    parser.add_argument("--file", required=True, help="Path to a 6x6 puzzle grid")
    parser.add_argument("--exit", choices=["left", "right", "up", "down"], default="right")
    parser.add_argument("--step", action="store_true", help="Wait for ENTER between boards")
    parser.add_argument("--quiet", action="store_true", help="Suppress search progress on stderr")
    parser.add_argument("--stats", action="store_true", help="Print search statistics")
    parser.add_argument("--save-record", type=str, default=None, help="Path to save the solution record")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    try:
        layout = load_layout(args.file)
    except ValueError as exc:
        print(f"Invalid puzzle: {exc}")
        raise SystemExit(1)

    config = preset_solver_config("default" if args.quiet else "verbose")
    config.exit_direction = parse_direction(args.exit)
    solver = BFSSolver(config, quiet=args.quiet)

    print("Searching for a solution...")
    try:
        result = solver.solve(layout)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)

    if args.stats:
        print(_format_stats(result.stats))

    if not result.solved:
        print("No solution: the prisoner cannot escape.")
        raise SystemExit(2)

    print("Solved!")
    if args.save_record:
        record = PuzzleRecord(
            layout=result.steps[0].layout,
            moves=result.moves,
            comments=[f"# moves={len(result.moves)}"],
            exit_direction=config.exit_direction,
        )
        with open(args.save_record, "w", encoding="utf-8") as f:
            f.write(dump_record(record))
    print_solution(result, config, step=args.step)


if __name__ == "__main__":
    main()
