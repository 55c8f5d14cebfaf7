"""Replay puzzle solution records and validate moves."""
from __future__ import annotations

import argparse
from typing import Dict, List, Optional, Sequence, Tuple

from . import engine
from .board import render
from .display import format_layout
from .puzzle_format import PuzzleRecord, format_move, parse_direction, parse_record
from .types import Direction, Layout, Move


def _describe(layout: Layout, move: Move, labels: Optional[Dict[str, int]]) -> str:
    try:
        return format_move(layout, move, labels)
    except KeyError:
        return f"block {move.block_id} {move.direction.name.lower() if move.direction else '?'}"


def replay_moves(
    layout: Layout,
    moves: Sequence[Move],
    exit_direction: Direction = engine.DEFAULT_EXIT,
    verbose: bool = False,
    labels: Optional[Dict[str, int]] = None,
) -> List[Layout]:
    """Apply ``moves`` in order and return every layout from the start to the end.

    ``labels`` names blocks in messages and boards by their letters in the
    source grid; without it blocks are lettered in layout order.

    Raises:
        ValueError: if a move is not legal on the board it is played against.
    """

    layouts = [layout]
    current = layout
    for step, move in enumerate(moves, start=1):
        board = render(current)
        if not engine.is_legal(current, board, move):
            raise ValueError(f"Illegal move at step {step}: {_describe(layout, move, labels)}")
        current = engine.apply_move(current, move)
        layouts.append(current)
        if verbose:
            print(f"Move {step}: {_describe(layout, move, labels)}")
            print(format_layout(current, exit_direction, labels))
            print()
    return layouts


def replay_record(
    record: PuzzleRecord,
    exit_direction: Optional[Direction] = None,
    verbose: bool = False,
) -> Tuple[Layout, bool]:
    """Replay a parsed record and return the final layout and whether the prisoner is free.

    The record's own exit is used unless ``exit_direction`` overrides it.
    """

    if exit_direction is None:
        exit_direction = record.exit_direction
    labels = record.labels or None
    final = replay_moves(record.layout, record.moves, exit_direction, verbose=verbose, labels=labels)[-1]
    return final, engine.is_goal(render(final), final, exit_direction)


def load_record(path: str) -> PuzzleRecord:
    with open(path, "r", encoding="utf-8") as f:
        return parse_record(f.read())


def replay_file(
    path: str,
    exit_direction: Optional[Direction] = None,
    verbose: bool = False,
) -> Tuple[Layout, bool]:
    return replay_record(load_record(path), exit_direction, verbose=verbose)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Replay an Unblock solution record")
    parser.add_argument("--file", required=True, help="Path to the solution record")
    parser.add_argument(
        "--exit",
        default=None,
        choices=["left", "right", "up", "down"],
        help="Override the exit side stored in the record",
    )
    parser.add_argument("--verbose", action="store_true", help="Print each board during replay")
    args = parser.parse_args(argv)

    try:
        record = load_record(args.file)
        exit_direction = parse_direction(args.exit) if args.exit else record.exit_direction
        final, escaped = replay_record(record, exit_direction, verbose=args.verbose)
    except ValueError as exc:
        print(f"Invalid record: {exc}")
        raise SystemExit(1)
    print(f"Escaped: {'yes' if escaped else 'no'}")
    print("Final board:")
    print(format_layout(final, exit_direction, record.labels or None))


if __name__ == "__main__":
    main()
