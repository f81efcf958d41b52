"""
Game controller.

Keeps the cursor and the current board, and turns key names into board
operations. Knows nothing about the terminal; the front end translates raw
key codes into the names in ``KEY_*`` and redraws on its own cadence.
"""
from typing import Optional, Tuple

from .board import Board
from .difficulty import DEFAULT_DIFFICULTY, Difficulty


# ============================================================================
# Constants
# ============================================================================

HELP_TEXT = "Space to uncover tiles, enter to flag mines, r to restart, q to quit"
REDRAW_INTERVAL_MS = 100

KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_REVEAL = " "
KEY_FLAG = "\n"
KEY_RESET = "r"
KEY_QUIT = "q"

_MOVES = {
    KEY_UP: (0, -1),
    KEY_DOWN: (0, 1),
    KEY_LEFT: (-1, 0),
    KEY_RIGHT: (1, 0),
}


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    One interactive session: a board plus a cursor.

    Attributes:
        board: The current round's board; replaced on reset.
        cursor: (x, y) of the selected tile, always on the board.
    """

    def __init__(
        self,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
        board: Optional[Board] = None,
    ) -> None:
        self.board = board if board is not None else Board(difficulty)
        self.cursor: Tuple[int, int] = (0, 0)

    def move_cursor(self, delta_x: int, delta_y: int) -> None:
        """Move the cursor, clamped to the board edges."""
        x, y = self.cursor
        self.cursor = (
            min(max(x + delta_x, 0), self.board.width - 1),
            min(max(y + delta_y, 0), self.board.height - 1),
        )

    def reveal(self) -> None:
        self.board.reveal(*self.cursor)

    def toggle_flag(self) -> None:
        self.board.toggle_flag(*self.cursor)

    def reset(self) -> None:
        """Throw away the current round and deal a new board."""
        self.board = self.board.reset()
        self.move_cursor(0, 0)

    def handle_key(self, key: str) -> bool:
        """
        Apply one key press.

        Args:
            key: Key name, one of the ``KEY_*`` constants. Anything else
                is ignored.

        Returns:
            False if the player asked to quit, True otherwise.
        """
        if key == KEY_QUIT:
            return False
        if key in _MOVES:
            self.move_cursor(*_MOVES[key])
        elif key == KEY_REVEAL:
            self.reveal()
        elif key == KEY_FLAG:
            self.toggle_flag()
        elif key == KEY_RESET:
            self.reset()
        return True

    def status_text(self) -> str:
        """Short outcome line, empty while the game is undecided."""
        if self.board.is_won:
            return f"Cleared in {int(self.board.elapsed_time)}s!"
        if self.board.is_lost:
            return "Boom! Press r to play again"
        return ""

    def footer_text(self) -> str:
        """Timer, mine counter, outcome and key help for the footer line."""
        parts = []
        if self.board.is_started:
            parts.append(f"Time: {int(self.board.elapsed_time)}")
        parts.append(f"Mines: {self.board.remaining_mines}")
        status = self.status_text()
        if status:
            parts.append(status)
        parts.append(HELP_TEXT)
        return "  ".join(parts)
