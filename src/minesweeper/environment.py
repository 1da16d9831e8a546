"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over the board engine.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, Coordinate
from .cell import EXPLODED_CODE, FLAGGED_CODE, HIDDEN_CODE


REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_LOSS = -10.0
REWARD_IGNORED = -0.1
REWARD_FLAG = 0.0


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array shaped (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = exploded mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height reveals cell (i % width, i // width);
        the upper half toggles a flag on cell i - width * height.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an ignored action (revealed, flagged or out of play)
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[BoardConfig] = None) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self._cells = self.config.area

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=EXPLODED_CODE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board.rng = self.np_random
        self.board.start_new_game()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal or flag action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}")

        self._steps += 1
        flag, (col, row) = self.decode_action(int(action))

        if flag:
            toggled = self.board.toggle_flag(col, row)
            reward = REWARD_FLAG if toggled else REWARD_IGNORED
        else:
            reward = self._reveal_reward(col, row)

        observation = self.board.get_observation()
        terminated = self.board.is_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[bool, Coordinate]:
        """Split an action index into (is_flag, (col, row))."""
        flag, index = divmod(action, self._cells)
        row, col = divmod(index, self.config.width)
        return bool(flag), (col, row)

    def encode_action(self, col: int, row: int, flag: bool = False) -> int:
        """Inverse of :meth:`decode_action`."""
        return row * self.config.width + col + (self._cells if flag else 0)

    def _reveal_reward(self, col: int, row: int) -> float:
        """Reveal a cell and score the outcome."""
        if not self.board.reveal(col, row):
            return REWARD_IGNORED
        if self.board.is_won:
            return REWARD_WIN
        if self.board.is_lost:
            return REWARD_LOSS
        return REWARD_SAFE

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count(),
            "total_safe": self.board.safe_cells,
            "flags": self.board.flags_count(),
            "game_state": self.board.status().name,
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Hidden cells may be revealed or flagged; flagged cells may only be
        unflagged. Nothing is valid once the game is over.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.board.is_over:
            return mask
        obs = self.board.get_observation().ravel()
        hidden = obs == HIDDEN_CODE
        mask[: self._cells] = hidden
        mask[self._cells:] = hidden | (obs == FLAGGED_CODE)
        return mask
