"""
Unit tests for command-line option handling.
"""
import curses

import pytest

from minefield import (
    DEFAULT_DIFFICULTY,
    EXPERT,
    Board,
    Difficulty,
    Game,
    InvalidConfiguration,
)
from minefield.cli import build_difficulty, build_parser, draw, main
from minefield.render import Style


def parse(*argv: str):
    return build_parser().parse_args(list(argv))


class TestBuildDifficulty:
    """Test turning options into a difficulty."""

    def test_no_options_uses_default(self) -> None:
        assert build_difficulty(parse()) == DEFAULT_DIFFICULTY

    def test_preset(self) -> None:
        assert build_difficulty(parse("--difficulty", "expert")) == EXPERT

    def test_explicit_dimensions(self) -> None:
        args = parse("--width", "12", "--height", "8", "--mines", "20")
        assert build_difficulty(args) == Difficulty(12, 8, 20)

    def test_partial_dimensions_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="together"):
            build_difficulty(parse("--width", "12"))

    def test_preset_and_dimensions_rejected(self) -> None:
        args = parse("--difficulty", "beginner", "--width", "5",
                     "--height", "5", "--mines", "3")
        with pytest.raises(InvalidConfiguration, match="cannot be combined"):
            build_difficulty(args)

    def test_unplayable_dimensions_rejected(self) -> None:
        args = parse("--width", "3", "--height", "3", "--mines", "9")
        with pytest.raises(InvalidConfiguration, match="Too many mines"):
            build_difficulty(args)


class TestMain:
    """Test argument errors surface as usage errors."""

    def test_bad_options_exit_with_usage_error(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--width", "0", "--height", "5", "--mines", "1"])
        assert excinfo.value.code == 2
        assert "dimensions must be positive" in capsys.readouterr().err

    def test_unknown_preset_rejected_by_parser(self) -> None:
        with pytest.raises(SystemExit):
            main(["--difficulty", "nightmare"])

    def test_missing_curses_backend(self, monkeypatch, capsys) -> None:
        """A terminal curses cannot set up exits with status 1."""
        def no_terminal(*args, **kwargs):
            raise curses.error("setupterm: could not find terminal")

        monkeypatch.setattr(curses, "setupterm", no_terminal)
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "No curses backend available" in capsys.readouterr().out

    def test_curses_error_during_play_propagates(self, monkeypatch, capsys) -> None:
        """Errors raised inside the curses loop are not relabelled."""
        def broken_wrapper(*args, **kwargs):
            raise curses.error("addwstr() returned ERR")

        monkeypatch.setattr(curses, "setupterm", lambda *args, **kwargs: None)
        monkeypatch.setattr(curses, "wrapper", broken_wrapper)
        with pytest.raises(curses.error, match="addwstr"):
            main([])
        assert "No curses backend available" not in capsys.readouterr().out


class FakeScreen:
    """Records addstr calls for a window of a fixed size."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self.writes = []

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self) -> None:
        self.writes.clear()

    def refresh(self) -> None:
        pass

    def addstr(self, y, x, text, attr=0) -> None:
        assert 0 <= y < self.rows and 0 <= x + len(text) <= self.cols
        self.writes.append((y, x, text))


@pytest.fixture
def attrs():
    return {style: 0 for style in Style}


class TestDraw:
    """Test painting the board onto a curses window."""

    def test_small_window_shows_notice(self, top_corners_board, attrs) -> None:
        screen = FakeScreen(4, 40)
        draw(screen, Game(board=top_corners_board), attrs)
        assert len(screen.writes) == 1
        assert screen.writes[0][2].startswith("Terminal too small")

    def test_narrow_window_truncates_notice(self, attrs) -> None:
        screen = FakeScreen(30, 10)
        draw(screen, Game(board=Board(EXPERT)), attrs)
        assert screen.writes == [(0, 0, "Terminal ")]

    def test_board_and_footer_drawn(self, top_corners_board, attrs) -> None:
        screen = FakeScreen(6, 20)
        draw(screen, Game(board=top_corners_board), attrs)
        tiles = [write for write in screen.writes if write[0] <= 3]
        assert len(tiles) == 9
        footer = [write for write in screen.writes if write[0] == 5]
        assert footer == [(5, 0, footer[0][2])]
        assert len(footer[0][2]) <= 19
