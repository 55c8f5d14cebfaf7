"""Unblock sliding-block puzzle solver package."""

from .types import SENTINEL, Block, BlockKind, Direction, IdAllocator, InvariantViolation, Layout, Move, Orientation, TileKind
from .board import BOARD_SIZE, Board, in_bounds, render
from .engine import (
    DEFAULT_EXIT,
    apply_move,
    generate_legal_moves,
    is_goal,
    is_legal,
    successors,
)
from .solver import (
    BFSSolver,
    SearchStats,
    SolutionStep,
    SolveResult,
    SolveStatus,
    SolverConfig,
    preset_solver_config,
    reconstruct_path,
    solve,
)
from .puzzle_format import dump_layout, parse_layout

__all__ = [
    "BFSSolver",
    "BOARD_SIZE",
    "Block",
    "BlockKind",
    "Board",
    "DEFAULT_EXIT",
    "Direction",
    "IdAllocator",
    "InvariantViolation",
    "Layout",
    "Move",
    "Orientation",
    "SENTINEL",
    "SearchStats",
    "SolutionStep",
    "SolveResult",
    "SolveStatus",
    "SolverConfig",
    "TileKind",
    "apply_move",
    "dump_layout",
    "generate_legal_moves",
    "in_bounds",
    "is_goal",
    "is_legal",
    "parse_layout",
    "preset_solver_config",
    "reconstruct_path",
    "render",
    "solve",
    "successors",
]
