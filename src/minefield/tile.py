"""
Display state of a single tile.

Tile state is derived from the board on every query, never stored.
"""
from enum import Enum, auto


# ============================================================================
# Observation Codes
# ============================================================================

# Values used in array views; uncovered empty tiles use their count 0-8.
OBS_COVERED = -1
OBS_FLAG = -2
OBS_MINE = 9


class TileState(Enum):
    """
    What the player sees on a tile.

    EMPTY tiles carry a number; read it with ``Board.adjacent_count``.
    """

    COVERED = auto()
    FLAG = auto()
    MINE = auto()
    EMPTY = auto()
