"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, Difficulty


# ============================================================================
# Test Doubles
# ============================================================================

class FixedMines:
    """Random source stand-in that places mines at chosen tile indices."""

    def __init__(self, mines: Iterable[int]) -> None:
        self.mines = list(mines)

    def sample(self, population, k):
        assert len(self.mines) == k
        return list(self.mines)


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_board(clock: FakeClock) -> Callable[..., Board]:
    """Build a board with a known mine layout and the fake clock."""

    def _make(width: int, height: int, mines: Iterable[int]) -> Board:
        mines = list(mines)
        return Board(
            Difficulty(width, height, len(mines)),
            rng=FixedMines(mines),
            clock=clock,
        )

    return _make


@pytest.fixture
def corner_board(make_board) -> Board:
    """3x3 board with a single mine in the bottom-right corner."""
    return make_board(3, 3, [8])


@pytest.fixture
def top_corners_board(make_board) -> Board:
    """3x3 board with mines in both top corners; the centre shows 2."""
    return make_board(3, 3, [0, 2])


@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 10 mines."""
    return Board()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_difficulty() -> Difficulty:
    """Create a valid board configuration."""
    return Difficulty(9, 9, 10)
