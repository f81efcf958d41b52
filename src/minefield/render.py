"""
Text rendering of a board.

Maps each tile to a glyph and a style. The curses front end turns styles
into colour pairs; ``render_text`` gives a plain string for logs and the
ansi render mode.
"""
from enum import Enum
from typing import Optional, Tuple

from .board import Board
from .tile import TileState


# ============================================================================
# Constants
# ============================================================================

GLYPH_COVERED = "#"
GLYPH_FLAG = "^"
GLYPH_MINE = "*"
GLYPH_CURSOR = "X"
NUMBER_GLYPHS = " 12345678"


class Style(Enum):
    """
    Visual style of a glyph.

    Values are (foreground colour name, bold).
    """

    DEFAULT = ("default", False)
    FLAG = ("red", True)
    MINE = ("white", True)
    ONE = ("blue", False)
    TWO = ("green", False)
    THREE = ("red", False)
    MANY = ("magenta", False)
    CURSOR = ("yellow", False)

    @property
    def color(self) -> str:
        return self.value[0]

    @property
    def bold(self) -> bool:
        return self.value[1]


NUMBER_STYLES = (
    Style.DEFAULT,
    Style.ONE,
    Style.TWO,
    Style.THREE,
) + (Style.MANY,) * 5


# ============================================================================
# Rendering
# ============================================================================

def tile_glyph(board: Board, x: int, y: int) -> Tuple[str, Style]:
    """
    Get the glyph and style for one tile.

    Args:
        board: Board to read.
        x: Column index.
        y: Row index.

    Returns:
        Tuple of (single character, style).
    """
    state = board.tile_state(x, y)
    if state is TileState.COVERED:
        return GLYPH_COVERED, Style.DEFAULT
    if state is TileState.FLAG:
        return GLYPH_FLAG, Style.FLAG
    if state is TileState.MINE:
        return GLYPH_MINE, Style.MINE
    count = board.adjacent_count(x, y)
    return NUMBER_GLYPHS[count], NUMBER_STYLES[count]


def render_text(
    board: Board, cursor: Optional[Tuple[int, int]] = None
) -> str:
    """Render the board as one line of glyphs per row."""
    lines = []
    for y in range(board.height):
        row_str = ""
        for x in range(board.width):
            if cursor == (x, y):
                row_str += GLYPH_CURSOR
            else:
                row_str += tile_glyph(board, x, y)[0]
        lines.append(row_str)
    return "\n".join(lines)
