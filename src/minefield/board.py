"""
Board module for the minefield engine.

Owns all puzzle state: mine placement, adjacency counts, covered tiles,
flags, reveal propagation and the win/loss state machine.
"""
import random
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Deque, Dict, FrozenSet, List, Optional, Set, Tuple

import numpy as np

from .difficulty import Difficulty
from .errors import InvalidConfiguration, OutOfBounds
from .tile import OBS_COVERED, OBS_FLAG, OBS_MINE, TileState


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


_TRANSITIONS: Dict[GameState, Tuple[GameState, ...]] = {
    GameState.NOT_STARTED: (GameState.PLAYING,),
    GameState.PLAYING: (GameState.WON, GameState.LOST),
    GameState.WON: (),
    GameState.LOST: (),
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass(eq=False)
class Board:
    """
    Minesweeper game board.

    Mines are placed at construction. Starting a new round means building
    a new board (see ``reset``); a board's mine layout never changes.

    Attributes:
        difficulty: Board size and mine count.
        rng: Random source used for mine placement; a fresh one if None.
        clock: Time source for start/finish timestamps.
        start_time: Clock value at the first uncover, or None.
        finish_time: Clock value when the game was won or lost, or None.
    """

    difficulty: Difficulty = field(default_factory=Difficulty)
    rng: Optional[random.Random] = field(default=None, repr=False)
    clock: Callable[[], float] = field(default=time.time, repr=False)
    start_time: Optional[float] = field(default=None, init=False)
    finish_time: Optional[float] = field(default=None, init=False)
    _state: GameState = field(default=GameState.NOT_STARTED, init=False)
    _covered: np.ndarray = field(init=False, repr=False)
    _mines: FrozenSet[int] = field(init=False, repr=False)
    _mine_mask: np.ndarray = field(init=False, repr=False)
    _adjacency: np.ndarray = field(init=False, repr=False)
    _flags: Set[int] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the difficulty, place mines and count neighbours."""
        if not isinstance(self.difficulty, Difficulty):
            raise InvalidConfiguration(
                f"Expected a Difficulty, got {type(self.difficulty).__name__}"
            )
        self.difficulty.validate()
        if self.rng is None:
            self.rng = random.Random()
        self._covered = np.ones(self.tile_count, dtype=bool)
        self._place_mines()
        self._calculate_adjacent_mines()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _place_mines(self) -> None:
        """Pick distinct mine tiles uniformly at random."""
        indices = self.rng.sample(range(self.tile_count), self.mine_count)
        self._mines = frozenset(indices)
        self._mine_mask = np.zeros(self.tile_count, dtype=bool)
        self._mine_mask[indices] = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all tiles, mines included."""
        self._adjacency = np.zeros(self.tile_count, dtype=np.int8)
        for index in range(self.tile_count):
            self._adjacency[index] = sum(
                1 for neighbor in self._neighbor_indices(index)
                if neighbor in self._mines
            )

    # ========================================================================
    # Position Utilities (Low-level)
    # ========================================================================

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, x: int, y: int) -> int:
        """Translate a position to a tile index, rejecting bad positions."""
        if not self._is_valid_position(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        return y * self.width + x

    def _position(self, index: int) -> Tuple[int, int]:
        return index % self.width, index // self.width

    def _neighbor_indices(self, index: int) -> List[int]:
        """Indices of the up to 8 tiles surrounding ``index``."""
        x, y = self._position(index)
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append(new_y * self.width + new_x)
        return neighbors

    def _count_adjacent_flags(self, index: int) -> int:
        return sum(
            1 for neighbor in self._neighbor_indices(index)
            if neighbor in self._flags
        )

    # ========================================================================
    # State Machine (Low-level)
    # ========================================================================

    def _transition(self, new_state: GameState) -> None:
        if new_state not in _TRANSITIONS[self._state]:
            raise RuntimeError(
                f"Illegal game state change {self._state.name} -> {new_state.name}"
            )
        self._state = new_state
        if new_state is GameState.PLAYING:
            self.start_time = self.clock()
        elif new_state in (GameState.WON, GameState.LOST):
            self.finish_time = self.clock()

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def toggle_flag(self, x: int, y: int) -> None:
        """
        Flag or unflag a covered tile.

        Does nothing once the game is over or on an uncovered tile. New
        flags are refused once there are as many flags as mines.

        Args:
            x: Column index.
            y: Row index.
        """
        index = self._index(x, y)
        if self.is_game_over or not self._covered[index]:
            return
        if index in self._flags:
            self._flags.remove(index)
        elif len(self._flags) < self.mine_count:
            self._flags.add(index)

    def reveal(self, x: int, y: int) -> None:
        """
        Reveal the tile at the given position.

        A covered tile is uncovered, cascading through zero-count regions.
        An uncovered tile whose flagged neighbours account for all of its
        adjacent mines has its other covered neighbours uncovered (chord).
        Flagged tiles and finished games are left alone.

        Args:
            x: Column index.
            y: Row index.
        """
        index = self._index(x, y)
        pending: Deque[Tuple[int, bool]] = deque([(index, True)])
        while pending and not self.is_game_over:
            tile, may_chord = pending.popleft()
            if tile in self._flags:
                continue
            if self._covered[tile]:
                pending.extend(self._uncover(tile))
            elif may_chord:
                pending.extend(self._chord(tile))

    def _chord(self, index: int) -> List[Tuple[int, bool]]:
        """Uncover requests for the neighbours of a satisfied number."""
        if self._adjacency[index] > self._count_adjacent_flags(index):
            return []
        return [
            (neighbor, False) for neighbor in self._neighbor_indices(index)
            if self._covered[neighbor] and neighbor not in self._flags
        ]

    def _uncover(self, index: int) -> List[Tuple[int, bool]]:
        """
        Uncover one covered tile and settle the consequences.

        Returns:
            Chord requests for already uncovered tiles around a zero region.
        """
        self._covered[index] = False
        if self._state is GameState.NOT_STARTED:
            self._transition(GameState.PLAYING)

        follow_up = []
        if self._adjacency[index] == 0:
            follow_up = self._flood_fill(index)

        if index in self._mines:
            self._transition(GameState.LOST)
            self._covered[self._mine_mask] = False
            return []

        if self.covered_count == self.mine_count:
            self._transition(GameState.WON)
            self._flags = set(self._mines)
            return []
        return follow_up

    def _flood_fill(self, start: int) -> List[Tuple[int, bool]]:
        """
        Reveal every neighbour of the zero region around ``start``.

        Covered neighbours are uncovered here; flagged ones stay flagged.
        Neighbours that were open before the fill are returned as chord
        requests.
        """
        opened = set()
        chords = []
        for tile in self._zero_region(start):
            for neighbor in self._neighbor_indices(tile):
                if neighbor in self._flags:
                    continue
                if self._covered[neighbor]:
                    self._covered[neighbor] = False
                    opened.add(neighbor)
                elif neighbor not in opened and self._adjacency[neighbor] > 0:
                    opened.add(neighbor)
                    chords.append((neighbor, True))
        return chords

    def _zero_region(self, start: int) -> List[int]:
        """
        Breadth-first search over zero-count tiles, flagged or not.

        Args:
            start: Index of a zero-count tile.

        Returns:
            Indices of the connected zero-count region containing ``start``,
            in visiting order.
        """
        visited = {start}
        region = [start]
        queue = deque([start])
        while queue:
            tile = queue.popleft()
            for neighbor in self._neighbor_indices(tile):
                if neighbor in visited or self._adjacency[neighbor] != 0:
                    continue
                visited.add(neighbor)
                region.append(neighbor)
                queue.append(neighbor)
        return region

    def reset(self) -> "Board":
        """Start a new round: a fresh board with the same difficulty."""
        return Board(self.difficulty, rng=self.rng, clock=self.clock)

    # ========================================================================
    # Tile Queries (High-level)
    # ========================================================================

    def tile_state(self, x: int, y: int) -> TileState:
        """
        Get what the player sees at a position.

        Precedence is flag, then covered, then mine, then empty.
        """
        index = self._index(x, y)
        if index in self._flags:
            return TileState.FLAG
        if self._covered[index]:
            return TileState.COVERED
        if index in self._mines:
            return TileState.MINE
        return TileState.EMPTY

    def adjacent_count(self, x: int, y: int) -> int:
        """Number of mines among the tile's neighbours (0-8)."""
        return int(self._adjacency[self._index(x, y)])

    def adjacent_flag_count(self, x: int, y: int) -> int:
        """Number of flags among the tile's neighbours."""
        return self._count_adjacent_flags(self._index(x, y))

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Positions of the up to 8 tiles surrounding (x, y)."""
        return [
            self._position(index)
            for index in self._neighbor_indices(self._index(x, y))
        ]

    def is_mine(self, x: int, y: int) -> bool:
        """Whether the tile holds a mine, regardless of visibility."""
        return self._index(x, y) in self._mines

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = covered
                -2 = flagged
                0-8 = uncovered with adjacent count
                9 = uncovered mine
        """
        obs = self._adjacency.copy()
        obs[self._mine_mask] = OBS_MINE
        obs[self._covered] = OBS_COVERED
        if self._flags:
            obs[list(self._flags)] = OBS_FLAG
        return obs.reshape(self.height, self.width)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.difficulty.width

    @property
    def height(self) -> int:
        return self.difficulty.height

    @property
    def mine_count(self) -> int:
        return self.difficulty.mine_count

    @property
    def tile_count(self) -> int:
        return self.difficulty.tile_count

    @property
    def mines(self) -> FrozenSet[int]:
        """Indices of the mined tiles."""
        return self._mines

    @property
    def flags(self) -> FrozenSet[int]:
        """Indices of the flagged tiles."""
        return frozenset(self._flags)

    @property
    def flag_count(self) -> int:
        return len(self._flags)

    @property
    def remaining_mines(self) -> int:
        """Mine count minus flags placed, for the mine counter."""
        return self.mine_count - len(self._flags)

    @property
    def covered_count(self) -> int:
        return int(np.count_nonzero(self._covered))

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_started(self) -> bool:
        """Check if a tile has been uncovered yet."""
        return self._state is not GameState.NOT_STARTED

    @property
    def is_playing(self) -> bool:
        return self._state is GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state is GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state is GameState.LOST

    @property
    def is_game_over(self) -> bool:
        """Check if the game reached a terminal state."""
        return self._state in (GameState.WON, GameState.LOST)

    @property
    def elapsed_time(self) -> float:
        """
        Seconds since the first uncover.

        Frozen at the finish time once the game is over, 0.0 before start.
        """
        if self.start_time is None:
            return 0.0
        end = self.finish_time if self.finish_time is not None else self.clock()
        return end - self.start_time
