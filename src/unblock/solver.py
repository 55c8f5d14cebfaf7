"""Breadth-first search over board states.

The search keeps one flat history map from each reached ``Board`` to the move
that first produced it. Paths are rebuilt by walking that map backward from
the goal and undoing each recorded move, so no parent pointers are stored.
"""

from __future__ import annotations

import sys
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, Dict, List, Optional, Tuple

from . import engine
from .board import Board, render
from .types import SENTINEL, Direction, InvariantViolation, Layout, Move


@dataclass
class SolverConfig:
    exit_direction: Direction = engine.DEFAULT_EXIT
    report_progress: bool = False
    preset: str = "custom"


def preset_solver_config(name: str) -> SolverConfig:
    preset = name.lower()
    if preset == "default":
        return SolverConfig(exit_direction=engine.DEFAULT_EXIT, report_progress=False, preset="default")
    if preset == "verbose":
        return SolverConfig(exit_direction=engine.DEFAULT_EXIT, report_progress=True, preset="verbose")
    raise ValueError(f"Unknown solver preset '{name}'")


class SolveStatus(Enum):
    SOLVED = auto()
    UNSOLVABLE = auto()


@dataclass
class SearchStats:
    """Aggregated statistics from a single search."""

    states_visited: int = 0
    states_expanded: int = 0
    depth_reached: int = 0
    max_frontier: int = 0
    elapsed_ms: float = 0.0


@dataclass(frozen=True)
class SolutionStep:
    """A layout paired with the move that produced it from the previous step."""

    layout: Layout
    move: Move


@dataclass
class SolveResult:
    status: SolveStatus
    steps: List[SolutionStep] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def moves(self) -> List[Move]:
        return [step.move for step in self.steps if not step.move.is_sentinel]

    @property
    def layouts(self) -> List[Layout]:
        return [step.layout for step in self.steps]

    @property
    def final_layout(self) -> Optional[Layout]:
        return self.steps[-1].layout if self.steps else None


def reconstruct_path(goal: Layout, history: Dict[Board, Move]) -> List[SolutionStep]:
    """Walk ``history`` back from ``goal`` to the sentinel and return the steps in play order."""

    steps: List[SolutionStep] = []
    current = goal
    # Each iteration consumes one history entry; more than that means a cycle.
    for _ in range(len(history) + 1):
        board = render(current)
        move = history.get(board)
        if move is None:
            raise InvariantViolation("search history has no entry for a board on the solution path")
        steps.append(SolutionStep(layout=current, move=move))
        if move.is_sentinel:
            steps.reverse()
            return steps
        current = engine.apply_move(current.clone(), move.inverse())
    raise InvariantViolation("search history never reached the initial board")


class BFSSolver:
    """Shortest-path solver counting single-tile slides."""

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        *,
        stderr=None,
        quiet: bool = True,
    ) -> None:
        self.config = config or SolverConfig()
        self.stderr = stderr or sys.stderr
        self.quiet = quiet
        self.last_stats: Optional[SearchStats] = None

    def _log(self, message: str) -> None:
        if self.quiet:
            return
        print(message, file=self.stderr)
        self.stderr.flush()

    def solve(self, layout: Layout) -> SolveResult:
        exit_direction = self.config.exit_direction
        # Fail before searching if the exit cannot be reached along the prisoner's axis.
        engine.exit_path(layout.prisoner(), exit_direction)

        start = time.perf_counter()
        stats = SearchStats()
        # The history map doubles as the visited set.
        history: Dict[Board, Move] = {render(layout): SENTINEL}
        frontier: Deque[Tuple[Layout, int]] = deque([(layout, 0)])
        stats.states_visited = 1
        stats.max_frontier = 1
        current_depth = 0

        while frontier:
            current, depth = frontier.popleft()
            if depth > current_depth:
                current_depth = depth
                if self.config.report_progress:
                    self._log(f"depth={depth} visited={len(history)} frontier={len(frontier) + 1}")
            stats.depth_reached = depth
            board = render(current)

            if engine.is_goal(board, current, exit_direction):
                steps = reconstruct_path(current, history)
                stats.elapsed_ms = (time.perf_counter() - start) * 1000.0
                self.last_stats = stats
                self._log(f"Solved in {len(steps) - 1} moves after visiting {stats.states_visited} boards")
                return SolveResult(status=SolveStatus.SOLVED, steps=steps, stats=stats)

            stats.states_expanded += 1
            for move, successor in engine.successors(current, board):
                next_board = render(successor)
                if next_board in history:
                    continue
                history[next_board] = move
                stats.states_visited += 1
                frontier.append((successor, depth + 1))
            stats.max_frontier = max(stats.max_frontier, len(frontier))

        stats.elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.last_stats = stats
        self._log(f"Unsolvable: exhausted {stats.states_visited} boards")
        return SolveResult(status=SolveStatus.UNSOLVABLE, steps=[], stats=stats)


def solve(layout: Layout, config: Optional[SolverConfig] = None) -> SolveResult:
    """Solve ``layout`` with a quiet solver."""

    return BFSSolver(config).solve(layout)
