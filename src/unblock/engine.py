"""Move generation and goal test for the Unblock puzzle.

Rules:
- A block slides exactly one tile per move, along its own axis only.
- A slide is legal when the tile just past the block's leading edge is on the board and empty.
- The puzzle is solved when every tile between the prisoner and the exit edge is empty.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .board import Board, in_bounds
from .types import DIRECTIONS_FOR, Block, Coord, Direction, Layout, Move, TileKind

DEFAULT_EXIT = Direction.RIGHT


def _can_slide(board: Board, blk: Block, direction: Direction) -> bool:
    r, c = blk.edge_cell(direction)
    return in_bounds(r, c) and board.tile_kind(r, c) is TileKind.EMPTY


def generate_legal_moves(layout: Layout, board: Board) -> List[Move]:
    """Return every one-tile slide that is legal on ``board``."""

    moves: List[Move] = []
    for blk in layout:
        for direction in DIRECTIONS_FOR[blk.orientation]:
            if _can_slide(board, blk, direction):
                moves.append(Move(block_id=blk.id, direction=direction))
    return moves


def is_legal(layout: Layout, board: Board, move: Move) -> bool:
    """Whether ``move`` is one of the slides available on ``board``."""

    if move.is_sentinel:
        return False
    try:
        blk = layout.block(move.block_id)
    except KeyError:
        return False
    if move.direction not in DIRECTIONS_FOR[blk.orientation]:
        return False
    return _can_slide(board, blk, move.direction)


def apply_move(layout: Layout, move: Move) -> Layout:
    """Apply a move and return the resulting layout."""

    return layout.move_block(move.block_id, move.direction)


def successors(layout: Layout, board: Board) -> Iterator[Tuple[Move, Layout]]:
    for move in generate_legal_moves(layout, board):
        yield move, apply_move(layout, move)


def exit_path(prisoner: Block, exit_direction: Direction = DEFAULT_EXIT) -> List[Coord]:
    """Cells the prisoner must cross to leave the board through ``exit_direction``."""

    if exit_direction.axis is not prisoner.orientation:
        raise ValueError(
            f"exit {exit_direction.name.lower()} is not along the prisoner's "
            f"{prisoner.orientation.name.lower()} axis"
        )
    r, c = prisoner.edge_cell(exit_direction)
    dr, dc = exit_direction.value
    cells: List[Coord] = []
    while in_bounds(r, c):
        cells.append((r, c))
        r, c = r + dr, c + dc
    return cells


def is_goal(board: Board, layout: Layout, exit_direction: Direction = DEFAULT_EXIT) -> bool:
    """Whether the prisoner has a clear run to the exit edge."""

    prisoner = layout.prisoner()
    return all(not board.occupied(r, c) for r, c in exit_path(prisoner, exit_direction))
