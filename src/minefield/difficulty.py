"""
Difficulty configuration for a minefield board.

A difficulty is an immutable (width, height, mine count) triple, either
taken from a named preset or built from explicit dimensions.
"""
from dataclasses import dataclass
from typing import Dict

from .errors import InvalidConfiguration


# ============================================================================
# Difficulty Data Class
# ============================================================================

@dataclass(frozen=True)
class Difficulty:
    """
    Board size and mine density.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 10
    height: int = 10
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """Ensure configuration values are playable."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mine_count < 1:
            raise InvalidConfiguration("Board needs at least one mine")
        if self.mine_count >= self.tile_count:
            raise InvalidConfiguration(
                f"Too many mines (max {self.tile_count - 1})"
            )

    @property
    def tile_count(self) -> int:
        """Total number of tiles on the board."""
        return self.width * self.height

    @classmethod
    def from_preset(cls, name: str) -> "Difficulty":
        """
        Look up a named preset.

        Args:
            name: Preset name, case-insensitive.

        Returns:
            The preset difficulty.
        """
        try:
            return PRESETS[name.strip().lower()]
        except KeyError:
            choices = ", ".join(PRESETS)
            raise InvalidConfiguration(
                f"Unknown difficulty '{name}' (choose from {choices})"
            ) from None


# Preset difficulty levels
BEGINNER = Difficulty(9, 9, 10)
INTERMEDIATE = Difficulty(16, 16, 40)
EXPERT = Difficulty(30, 16, 99)

PRESETS: Dict[str, Difficulty] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}

DEFAULT_DIFFICULTY = Difficulty()
