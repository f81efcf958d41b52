"""
Minefield puzzle engine.

Provides the board engine (mine placement, reveal propagation, flags,
win/loss), difficulty presets, and the thin controller and rendering
layers used by the terminal front end.
"""
from .errors import MinefieldError, InvalidConfiguration, OutOfBounds
from .difficulty import (
    Difficulty,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
    DEFAULT_DIFFICULTY,
)
from .tile import TileState
from .board import Board, GameState
from .game import Game
from .environment import MinefieldEnv

__all__ = [
    "MinefieldError",
    "InvalidConfiguration",
    "OutOfBounds",
    "Difficulty",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "DEFAULT_DIFFICULTY",
    "TileState",
    "Board",
    "GameState",
    "Game",
    "MinefieldEnv",
]
