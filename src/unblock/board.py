"""Rendered board view used for occupancy queries and state deduplication."""

from __future__ import annotations

from dataclasses import dataclass

from .types import Layout, TileKind

BOARD_SIZE = 6


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, order=True)
class Board:
    """A 6x6 grid of tile kinds packed row-major into bytes.

    Equality, hashing and ordering are byte-for-byte, so boards can key the
    visited set and the search history directly.
    """

    data: bytes

    def tile_kind(self, row: int, col: int) -> TileKind:
        return TileKind(self.data[row * BOARD_SIZE + col])

    def occupied(self, row: int, col: int) -> bool:
        return self.data[row * BOARD_SIZE + col] != TileKind.EMPTY

    def rows(self):
        for r in range(BOARD_SIZE):
            yield [TileKind(v) for v in self.data[r * BOARD_SIZE : (r + 1) * BOARD_SIZE]]


def render(layout: Layout) -> Board:
    """Stamp every block's cells with its kind."""

    cells = bytearray(BOARD_SIZE * BOARD_SIZE)
    for blk in layout:
        value = blk.kind.tile
        for r, c in blk.cells():
            cells[r * BOARD_SIZE + c] = value
    return Board(bytes(cells))
