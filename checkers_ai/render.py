"""
Text rendering of the board for the terminal front end.
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from config import UISettings, get_ui_settings
from checkers_ai.board import Board
from checkers_ai.moves import square_number
from checkers_ai.types import Position

# Cell codes from Board.to_array()
UNICODE_GLYPHS = {1: "⛀", 2: "⛁", -1: "⛂", -2: "⛃"}
ASCII_GLYPHS = {1: "h", 2: "H", -1: "c", -2: "C"}
LIGHT_SQUARE = " "
DARK_SQUARE = "."
HIGHLIGHT = "*"


def render_board(board: Board, settings: Optional[UISettings] = None,
                 highlights: Iterable[Tuple[int, int]] = ()) -> str:
    """Board as text, row 0 at the top. Human pieces are h/H, computer c/C in ASCII mode."""
    settings = settings or get_ui_settings()
    glyphs = UNICODE_GLYPHS if settings.use_unicode else ASCII_GLYPHS
    marked = {Position(*p) for p in highlights} if settings.highlight_moves else set()
    grid = board.to_array()

    lines = ["     " + "".join(f"{c:^4}" for c in range(board.size))]
    for r in range(board.size):
        cells = []
        for c in range(board.size):
            pos = Position(r, c)
            value = int(grid[r, c])
            if value:
                cell = glyphs[value]
            elif not pos.is_dark:
                cell = LIGHT_SQUARE
            elif settings.show_indices:
                cell = str(square_number(pos))
            else:
                cell = DARK_SQUARE
            mark = HIGHLIGHT if pos in marked else " "
            cells.append(f"{mark}{cell:<2} ")
        lines.append(f"{r:>3}  " + "".join(cells).rstrip())
    return "\n".join(lines)
