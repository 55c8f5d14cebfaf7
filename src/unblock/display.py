"""Text rendering of puzzle layouts."""
from __future__ import annotations

from typing import Dict, List, Optional

from .board import BOARD_SIZE
from .engine import DEFAULT_EXIT
from .puzzle_format import EMPTY_CHAR, block_label
from .types import Direction, Layout


def format_layout(
    layout: Layout,
    exit_direction: Direction = DEFAULT_EXIT,
    labels: Optional[Dict[str, int]] = None,
) -> str:
    """Draw the board inside a frame, leaving the wall open where the prisoner escapes.

    Every tile is printed as its label doubled (``..`` when empty), so
    ``ZZ ZZ`` is the prisoner and ``AA`` a tile of block A.
    ``labels`` maps letters to block ids when the grid came with its own letters.
    """

    grid = [[EMPTY_CHAR] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for blk in layout:
        ch = block_label(layout, blk.id, labels)
        for r, c in blk.cells():
            grid[r][c] = ch

    prisoner = layout.prisoner()
    border = "+" + "-" * (3 * BOARD_SIZE) + "+"
    top, bottom = list(border), list(border)
    if exit_direction is Direction.UP:
        top[1 + 3 * prisoner.col : 3 + 3 * prisoner.col] = "  "
    elif exit_direction is Direction.DOWN:
        bottom[1 + 3 * prisoner.col : 3 + 3 * prisoner.col] = "  "

    lines: List[str] = ["".join(top)]
    for r, row in enumerate(grid):
        left = right = "|"
        if r == prisoner.row:
            if exit_direction is Direction.LEFT:
                left = " "
            elif exit_direction is Direction.RIGHT:
                right = " "
        lines.append(left + "".join(f"{ch}{ch} " for ch in row) + right)
    lines.append("".join(bottom))
    return "\n".join(lines)
