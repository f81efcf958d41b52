"""
Exceptions raised by the minefield engine.

Only configuration problems and out-of-range positions are errors; every
other rejected move during play is a silent no-op.
"""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Board dimensions or mine count are not playable."""


class OutOfBounds(MinefieldError, IndexError):
    """A tile position lies outside the board."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Tile position ({x}, {y}) is out of bounds "
            f"for board size {width}x{height}"
        )
        self.x = x
        self.y = y
