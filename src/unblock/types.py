"""Core data structures for the Unblock solver.

Rule reminders:
- Board is 6x6 with coordinates (row, col) from top-left.
- Horizontal blocks slide left/right, vertical blocks slide up/down, one tile at a time.
- Exactly one block is the prisoner; it escapes through the exit side of its row (right by default).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum, auto
from typing import Dict, Iterator, List, Optional, Tuple


Coord = Tuple[int, int]


class InvariantViolation(RuntimeError):
    """Raised when a layout or search history breaks an internal invariant."""


class TileKind(IntEnum):
    """Contents of a single board cell."""

    EMPTY = 0
    BLOCK = 1
    PRISONER = 2


class Orientation(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


class Direction(Enum):
    """Slide directions; values are (d_row, d_col) deltas."""

    LEFT = (0, -1)
    RIGHT = (0, 1)
    UP = (-1, 0)
    DOWN = (1, 0)

    @property
    def axis(self) -> Orientation:
        return Orientation.HORIZONTAL if self.value[0] == 0 else Orientation.VERTICAL

    def inverse(self) -> "Direction":
        """Return the direction that undoes this one."""

        return _INVERSE[self]


_INVERSE = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

DIRECTIONS_FOR: dict = {
    Orientation.HORIZONTAL: (Direction.LEFT, Direction.RIGHT),
    Orientation.VERTICAL: (Direction.UP, Direction.DOWN),
}


class BlockKind(Enum):
    ORDINARY = auto()
    PRISONER = auto()

    @property
    def tile(self) -> TileKind:
        return TileKind.PRISONER if self is BlockKind.PRISONER else TileKind.BLOCK


@dataclass(frozen=True)
class Block:
    """A rectangle of ``length`` tiles anchored at its top-left cell."""

    id: int
    row: int
    col: int
    orientation: Orientation
    kind: BlockKind
    length: int

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def is_prisoner(self) -> bool:
        return self.kind is BlockKind.PRISONER

    def cells(self) -> List[Coord]:
        if self.is_horizontal:
            return [(self.row, self.col + i) for i in range(self.length)]
        return [(self.row + i, self.col) for i in range(self.length)]

    def edge_cell(self, direction: Direction) -> Coord:
        """Return the cell just beyond the block's leading edge in ``direction``."""

        dr, dc = direction.value
        if direction in (Direction.LEFT, Direction.UP):
            return self.row + dr, self.col + dc
        if self.is_horizontal:
            return self.row, self.col + self.length
        return self.row + self.length, self.col

    def shifted(self, direction: Direction) -> "Block":
        dr, dc = direction.value
        return replace(self, row=self.row + dr, col=self.col + dc)


@dataclass
class IdAllocator:
    """Hands out block ids; each puzzle owns its own allocator."""

    next_id: int = 0

    def allocate(self) -> int:
        block_id = self.next_id
        self.next_id += 1
        return block_id

    def block(
        self,
        row: int,
        col: int,
        orientation: Orientation,
        length: int,
        kind: BlockKind = BlockKind.ORDINARY,
    ) -> Block:
        """Create a block with a freshly allocated id."""

        if length < 2:
            raise ValueError(f"block length must be at least 2, got {length}")
        return Block(id=self.allocate(), row=row, col=col, orientation=orientation, kind=kind, length=length)


@dataclass(frozen=True)
class Move:
    """A one-tile slide of a block; the sentinel (no block) marks the initial state."""

    block_id: Optional[int]
    direction: Optional[Direction]

    @classmethod
    def sentinel(cls) -> "Move":
        return cls(block_id=None, direction=None)

    @property
    def is_sentinel(self) -> bool:
        return self.block_id is None

    def inverse(self) -> "Move":
        if self.direction is None:
            raise InvariantViolation("the sentinel move has no inverse")
        return Move(block_id=self.block_id, direction=self.direction.inverse())


SENTINEL = Move.sentinel()


@dataclass(frozen=True)
class Layout:
    """Complete puzzle state: the ordered tuple of blocks.

    Layouts are immutable; every transformation returns a new layout that shares
    no mutable state with its source.
    """

    blocks: Tuple[Block, ...]
    _index: Optional[Dict[int, int]] = field(default=None, init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))
        object.__setattr__(self, "_index", {blk.id: idx for idx, blk in enumerate(self.blocks)})

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def clone(self) -> "Layout":
        """Return a deep copy: new block values carrying the same ids."""

        return Layout(tuple(replace(blk) for blk in self.blocks))

    def block(self, block_id: int) -> Block:
        try:
            return self.blocks[self._index[block_id]]
        except KeyError:
            raise KeyError(f"no block with id {block_id}") from None

    def prisoner(self) -> Block:
        for blk in self.blocks:
            if blk.is_prisoner:
                return blk
        raise InvariantViolation("layout has no prisoner block")

    def move_block(self, block_id: int, direction: Direction) -> "Layout":
        """Return a new layout with one block shifted a single tile.

        Legality is not checked here; see ``engine.generate_legal_moves``.
        """

        idx = self._index.get(block_id)
        if idx is None:
            raise KeyError(f"no block with id {block_id}")
        blocks = list(self.blocks)
        blocks[idx] = blocks[idx].shifted(direction)
        return Layout(tuple(blocks))
