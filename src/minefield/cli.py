"""
Command-line entry point: option parsing and the curses front end.

Usage:
    minefield [--difficulty {beginner,intermediate,expert}]
    minefield --width W --height H --mines N [--seed S]
"""
import argparse
import curses
import random
import sys
from typing import Dict, List, Optional

from .board import Board
from .difficulty import DEFAULT_DIFFICULTY, PRESETS, Difficulty
from .errors import InvalidConfiguration
from .game import (
    KEY_DOWN,
    KEY_FLAG,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    REDRAW_INTERVAL_MS,
    Game,
)
from .render import GLYPH_CURSOR, Style, tile_glyph


_CURSES_COLORS = {
    "red": curses.COLOR_RED,
    "white": curses.COLOR_WHITE,
    "blue": curses.COLOR_BLUE,
    "green": curses.COLOR_GREEN,
    "magenta": curses.COLOR_MAGENTA,
    "yellow": curses.COLOR_YELLOW,
}

_CURSES_KEYS = {
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
    curses.KEY_LEFT: KEY_LEFT,
    curses.KEY_RIGHT: KEY_RIGHT,
    curses.KEY_ENTER: KEY_FLAG,
    ord("\r"): KEY_FLAG,
}


# ============================================================================
# Option Parsing
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minefield",
        description="Minefield - clear the board without touching a mine",
    )
    parser.add_argument(
        "--difficulty",
        choices=sorted(PRESETS),
        help="Named board preset",
    )
    parser.add_argument("--width", type=int, help="Board width in tiles")
    parser.add_argument("--height", type=int, help="Board height in tiles")
    parser.add_argument("--mines", type=int, help="Number of mines")
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for the mine layout"
    )
    return parser


def build_difficulty(args: argparse.Namespace) -> Difficulty:
    """
    Turn parsed options into a validated difficulty.

    Explicit dimensions need all of --width, --height and --mines and
    cannot be combined with --difficulty. With neither, the default
    10x10 board is used.

    Raises:
        InvalidConfiguration: If the options do not describe a playable board.
    """
    explicit = (args.width, args.height, args.mines)
    given = [value is not None for value in explicit]
    if any(given):
        if args.difficulty is not None:
            raise InvalidConfiguration(
                "--difficulty cannot be combined with --width/--height/--mines"
            )
        if not all(given):
            raise InvalidConfiguration(
                "--width, --height and --mines must be given together"
            )
        return Difficulty(args.width, args.height, args.mines)
    if args.difficulty is not None:
        return Difficulty.from_preset(args.difficulty)
    return DEFAULT_DIFFICULTY


# ============================================================================
# Curses Front End
# ============================================================================

def _init_styles() -> Dict[Style, int]:
    """Allocate a colour pair per style and return curses attributes."""
    attrs = {}
    use_color = curses.has_colors()
    if use_color:
        curses.start_color()
        curses.use_default_colors()
    for pair, style in enumerate(Style, start=1):
        attr = curses.A_BOLD if style.bold else curses.A_NORMAL
        if use_color and style.color in _CURSES_COLORS:
            curses.init_pair(pair, _CURSES_COLORS[style.color], -1)
            attr |= curses.color_pair(pair)
        attrs[style] = attr
    return attrs


def _key_name(code: int) -> Optional[str]:
    if code in _CURSES_KEYS:
        return _CURSES_KEYS[code]
    if 0 <= code < 256:
        return chr(code).lower()
    return None


def draw(screen, game: Game, attrs: Dict[Style, int]) -> None:
    """Paint the board and footer, or a notice if the window is too small."""
    screen.erase()
    board = game.board
    max_y, max_x = screen.getmaxyx()
    if max_y < board.height + 3 or max_x < board.width + 2:
        notice = f"Terminal too small for a {board.width}x{board.height} board"
        screen.addstr(0, 0, notice[: max_x - 1])
        screen.refresh()
        return
    for y in range(board.height):
        for x in range(board.width):
            glyph, style = tile_glyph(board, x, y)
            if (x, y) == game.cursor and not board.is_game_over:
                glyph, style = GLYPH_CURSOR, Style.CURSOR
            screen.addstr(y + 1, x + 1, glyph, attrs[style])
    screen.addstr(board.height + 2, 0, game.footer_text()[: max_x - 1])
    screen.refresh()


def run(screen, game: Game) -> None:
    """Input/redraw loop; returns when the player quits."""
    curses.curs_set(0)
    screen.keypad(True)
    screen.timeout(REDRAW_INTERVAL_MS)
    attrs = _init_styles()
    while True:
        draw(screen, game, attrs)
        code = screen.getch()
        if code == -1:
            continue
        key = _key_name(code)
        if key is not None and not game.handle_key(key):
            return


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and play until the player quits."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        difficulty = build_difficulty(args)
    except InvalidConfiguration as exc:
        parser.error(str(exc))

    rng = random.Random(args.seed)
    game = Game(board=Board(difficulty, rng=rng))

    try:
        curses.setupterm()
    except curses.error:
        print("No curses backend available")
        sys.exit(1)
    curses.wrapper(run, game)

    board = game.board
    if board.is_game_over:
        outcome = "won" if board.is_won else "lost"
        print(f"You {outcome} in {board.elapsed_time:.1f}s")


if __name__ == "__main__":
    main()
