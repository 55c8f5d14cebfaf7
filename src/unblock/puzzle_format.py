"""Puzzle notation parsing and serialization.

A puzzle is written as a 6x6 grid of characters: ``.`` for an empty tile,
``Z`` for the prisoner and any other capital letter for an ordinary block.
Every letter must cover one straight run of at least two tiles, so two
neighbouring blocks need different letters.

Solution records append numbered moves after the grid::

    # comment
    ......
    ..A...
    ZZA.C.
    ..A.C.
    ......
    ..BB..
    1:B right
    2:A down
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .board import BOARD_SIZE
from .types import BlockKind, Direction, IdAllocator, Layout, Move, Orientation

EMPTY_CHAR = "."
PRISONER_CHAR = "Z"
BLOCK_LABELS = "ABCDEFGHIJKLMNOPQRSTUVWXY"

_DIRECTION_NAMES = {
    "left": Direction.LEFT,
    "l": Direction.LEFT,
    "right": Direction.RIGHT,
    "r": Direction.RIGHT,
    "up": Direction.UP,
    "u": Direction.UP,
    "down": Direction.DOWN,
    "d": Direction.DOWN,
}


def block_label(layout: Layout, block_id: int, labels: Optional[Dict[str, int]] = None) -> str:
    """Return the letter naming ``block_id``: ``Z`` for the prisoner, A.. for the rest in layout order.

    When ``labels`` (letter to block id, as read from a grid) is given, the
    letter comes from it instead.
    """

    if labels is not None:
        for label, bid in labels.items():
            if bid == block_id:
                return label
        raise KeyError(f"no block with id {block_id}")
    index = 0
    for blk in layout:
        if blk.is_prisoner:
            if blk.id == block_id:
                return PRISONER_CHAR
            continue
        if blk.id == block_id:
            if index >= len(BLOCK_LABELS):
                raise ValueError(f"too many blocks to label (block id {block_id})")
            return BLOCK_LABELS[index]
        index += 1
    raise KeyError(f"no block with id {block_id}")


def block_id_for_label(layout: Layout, label: str, labels: Optional[Dict[str, int]] = None) -> int:
    wanted = label.strip().upper()
    if labels is not None:
        if wanted not in labels:
            raise ValueError(f"No block labelled '{label}'")
        return labels[wanted]
    for blk in layout:
        if block_label(layout, blk.id) == wanted:
            return blk.id
    raise ValueError(f"No block labelled '{label}'")


def _grid_lines(text: str) -> List[str]:
    lines: List[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        lines.append(stripped)
    return lines


def _parse_grid(lines: List[str], allocator: IdAllocator) -> Tuple[Layout, Dict[str, int]]:
    if len(lines) != BOARD_SIZE:
        raise ValueError(f"Puzzle grid must have {BOARD_SIZE} rows, got {len(lines)}")

    cells: Dict[str, List[Tuple[int, int]]] = {}
    for r, line in enumerate(lines):
        if len(line) != BOARD_SIZE:
            raise ValueError(f"Row {r + 1} must have {BOARD_SIZE} tiles, got {len(line)}")
        for c, ch in enumerate(line.upper()):
            if ch == EMPTY_CHAR:
                continue
            if not ("A" <= ch <= "Z"):
                raise ValueError(f"Invalid tile '{ch}' at row {r + 1}, column {c + 1}")
            # Row-major scan, so each list starts at the block's top-left cell.
            cells.setdefault(ch, []).append((r, c))

    if PRISONER_CHAR not in cells:
        raise ValueError("Puzzle has no prisoner block 'Z'")

    blocks = []
    labels: Dict[str, int] = {}
    for label, coords in cells.items():
        (r0, c0), length = coords[0], len(coords)
        if length < 2:
            raise ValueError(f"Block '{label}' must cover at least 2 tiles")
        if all(r == r0 for r, _ in coords):
            orientation = Orientation.HORIZONTAL
            expected = [(r0, c0 + i) for i in range(length)]
        elif all(c == c0 for _, c in coords):
            orientation = Orientation.VERTICAL
            expected = [(r0 + i, c0) for i in range(length)]
        else:
            raise ValueError(f"Block '{label}' is not a straight line")
        if coords != expected:
            raise ValueError(f"Block '{label}' is split; use distinct letters for separate blocks")
        kind = BlockKind.PRISONER if label == PRISONER_CHAR else BlockKind.ORDINARY
        blk = allocator.block(r0, c0, orientation, length, kind)
        labels[label] = blk.id
        blocks.append(blk)
    return Layout(tuple(blocks)), labels


def parse_layout(text: str, allocator: Optional[IdAllocator] = None) -> Layout:
    """Parse a puzzle grid into a ``Layout``; block ids follow first appearance."""

    layout, _ = _parse_grid(_grid_lines(text), allocator or IdAllocator())
    return layout


def dump_layout(layout: Layout) -> str:
    """Serialize a layout back to its grid, relabelling ordinary blocks A, B, ..."""

    grid = [[EMPTY_CHAR] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for blk in layout:
        ch = block_label(layout, blk.id)
        for r, c in blk.cells():
            grid[r][c] = ch
    return "\n".join("".join(row) for row in grid) + "\n"


def format_move(layout: Layout, move: Move, labels: Optional[Dict[str, int]] = None) -> str:
    """Render a move as ``"<label> <direction>"``, e.g. ``"A down"``."""

    if move.is_sentinel:
        return "start"
    return f"{block_label(layout, move.block_id, labels)} {move.direction.name.lower()}"


def _split_move_text(raw: str) -> Tuple[str, Direction]:
    text = raw.strip()
    if not text:
        raise ValueError("Move text is empty")
    match = re.match(r"^([A-Za-z])\s*[:\s]\s*([A-Za-z]+)$", text)
    if not match:
        raise ValueError("Could not parse move; use formats like 'A down' or 'Z:right'")
    return match.group(1).upper(), parse_direction(match.group(2))


def parse_move_text(raw: str, layout: Layout, labels: Optional[Dict[str, int]] = None) -> Move:
    """Parse a move such as ``"A down"``, ``"a d"`` or ``"A:down"`` against ``layout``.

    Labels are resolved the way ``dump_layout`` assigns them, or through
    ``labels`` when the letters come from a parsed grid.
    """

    label, direction = _split_move_text(raw)
    return Move(block_id=block_id_for_label(layout, label, labels), direction=direction)


def parse_direction(raw: str) -> Direction:
    direction = _DIRECTION_NAMES.get(raw.strip().lower())
    if direction is None:
        raise ValueError(f"Unknown direction '{raw}'")
    return direction


def compress_moves(moves: List[Move]) -> List[Tuple[int, Direction, int]]:
    """Merge consecutive slides of one block in one direction into (block_id, direction, steps) runs."""

    runs: List[Tuple[int, Direction, int]] = []
    for move in moves:
        if move.is_sentinel:
            continue
        if runs and runs[-1][0] == move.block_id and runs[-1][1] is move.direction:
            block_id, direction, steps = runs[-1]
            runs[-1] = (block_id, direction, steps + 1)
        else:
            runs.append((move.block_id, move.direction, 1))
    return runs


@dataclass
class PuzzleRecord:
    layout: Layout
    moves: List[Move] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    exit_direction: Direction = Direction.RIGHT
    # Letters of the record's own grid; empty means layout-order letters.
    labels: Dict[str, int] = field(default_factory=dict)


_EXIT_HEADER = re.compile(r"^#\s*exit\s*=\s*(\S+)$", re.IGNORECASE)


def _parse_move_line(line: str, layout: Layout, labels: Dict[str, int]) -> Tuple[int, Move]:
    if ":" not in line:
        raise ValueError(f"Invalid move line '{line}'")
    number_str, move_part = line.split(":", 1)
    try:
        number = int(number_str)
    except ValueError as exc:
        raise ValueError(f"Invalid move number in '{line}'") from exc
    return number, parse_move_text(move_part, layout, labels)


def parse_record(text: str) -> PuzzleRecord:
    """Parse a record: comments, the puzzle grid, then numbered moves.

    Move labels refer to the letters used in the record's own grid. A
    ``# exit=<side>`` comment sets the record's exit direction.
    """

    comments: List[str] = []
    exit_direction = Direction.RIGHT
    grid: List[str] = []
    move_lines: List[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if not stripped:
            continue
        if stripped.startswith("#"):
            header = _EXIT_HEADER.match(stripped)
            if header:
                exit_direction = parse_direction(header.group(1))
            else:
                comments.append(stripped)
            continue
        if len(grid) < BOARD_SIZE:
            grid.append(stripped)
        else:
            move_lines.append(stripped)

    layout, labels = _parse_grid(grid, IdAllocator())
    moves: List[Move] = []
    for idx, line in enumerate(move_lines, start=1):
        number, move = _parse_move_line(line, layout, labels)
        if number != idx:
            raise ValueError(f"Move numbering mismatch: expected {idx}, got {number}")
        moves.append(move)
    return PuzzleRecord(
        layout=layout,
        moves=moves,
        comments=comments,
        exit_direction=exit_direction,
        labels=labels,
    )


def dump_record(record: PuzzleRecord) -> str:
    """Serialize a ``PuzzleRecord`` to text, relabelling blocks in layout order."""

    lines: List[str] = [line for line in record.comments if not _EXIT_HEADER.match(line.strip())]
    lines.append(f"# exit={record.exit_direction.name.lower()}")
    lines.append(dump_layout(record.layout).rstrip("\n"))
    for idx, move in enumerate(record.moves, start=1):
        lines.append(f"{idx}:{format_move(record.layout, move)}")
    return "\n".join(lines) + "\n"
