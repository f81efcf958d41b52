"""
Gymnasium environment wrapper for the minefield engine.

Lets scripts and agents play through the standard ``reset``/``step``
interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board
from .difficulty import Difficulty
from .render import render_text
from .tile import OBS_COVERED, OBS_FLAG, OBS_MINE, TileState


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for the minefield puzzle.

    Observation:
        2D array where:
        - -1 = covered tile
        - -2 = flagged tile
        - 0-8 = uncovered tile with adjacent mine count
        - 9 = uncovered mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the tile at (i % width, i // width).

    Rewards:
        - +1 for uncovering a safe tile
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for acting on an uncovered or flagged tile
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Optional[Difficulty] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            difficulty: Board configuration (default: 10x10 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.difficulty = difficulty or Difficulty()
        self.board = Board(self.difficulty)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=OBS_FLAG,
            high=OBS_MINE,
            shape=(self.difficulty.height, self.difficulty.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.difficulty.tile_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Deal a new board for a new episode.

        Args:
            seed: Random seed for a reproducible mine layout.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.board = Board(self.difficulty, rng=random.Random(seed))
        else:
            self.board = self.board.reset()
        self._steps = 0
        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal one tile.

        Args:
            action: Tile index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1
        reward = self._calculate_reward(x, y)

        observation = self.board.get_observation()
        terminated = self.board.is_game_over
        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        action = int(action)
        return action % self.difficulty.width, action // self.difficulty.width

    def _calculate_reward(self, x: int, y: int) -> float:
        """Perform the reveal and score its outcome."""
        if self.board.tile_state(x, y) is not TileState.COVERED:
            return -0.1

        self.board.reveal(x, y)

        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "covered": self.board.covered_count,
            "flags": self.board.flag_count,
            "game_state": self.board.state.name,
            "elapsed_time": self.board.elapsed_time,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_text(self.board)
        if self.render_mode == "human":
            print(render_text(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would uncover something.

        Returns:
            Boolean array where True = covered, unflagged tile.
        """
        obs = self.board.get_observation()
        return obs.reshape(-1) == OBS_COVERED
