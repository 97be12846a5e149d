"""
Gymnasium environment wrapper for Minesweeper.

Deals no-guess boards (or plain ones) and exposes them through a
standard RL interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .cell import OBS_HIDDEN, OBS_MINE, OBS_SAFE_START
from .reveal import field_clear, reveal_cell


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = hidden safe start
        - 0-8 = revealed cell with adjacent mine count

    Actions:
        Discrete action space of size width * height.
        Action i corresponds to cell at (i // width, i % width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        no_guess: bool = True,
        max_attempts: Optional[int] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
            no_guess: Deal only boards certified as no-guess solvable.
            max_attempts: Retry cap for no-guess generation.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.no_guess = no_guess
        self.max_attempts = max_attempts
        self.board: Optional[Board] = None
        self._lost = False

        self.observation_space = spaces.Box(
            low=OBS_SAFE_START,
            high=OBS_MINE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment with a freshly dealt board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        # Imported here: the generation package depends on this one
        from ..generation.factory import BoardFactory, GenerationConfig

        super().reset(seed=seed)
        board_seed = int(self.np_random.integers(0, 2**31 - 1))
        factory = BoardFactory(
            GenerationConfig(max_attempts=self.max_attempts, seed=board_seed)
        )
        width, height, mines = (
            self.config.width, self.config.height, self.config.num_mines
        )
        if self.no_guess:
            self.board = factory.generate_ng_solvable_board(mines, width, height)
        else:
            self.board = factory.generate_board(mines, width, height)

        self._steps = 0
        self._lost = False
        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * width + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.board is None:
            raise RuntimeError("Call reset() before step()")

        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        terminated = self._lost or field_clear(self.board)

        return self.board.get_observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(int(action), self.config.width)

    def _calculate_reward(self, row: int, col: int) -> float:
        """Reveal a cell and score the result."""
        cell = self.board.get_cell(row, col)

        # Invalid action (already revealed or flagged)
        if not cell.is_hidden:
            return -0.1

        if not reveal_cell(self.board, row, col):
            self._lost = True
            return -10.0
        if field_clear(self.board):
            return 10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        if self._lost:
            game_state = "LOST"
        elif field_clear(self.board):
            game_state = "WON"
        else:
            game_state = "PLAYING"

        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.board.safe_cell_count,
            "game_state": game_state,
            "safe_start": self.board.safe_start,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.board is None:
            return None
        if self.render_mode == "ansi":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden, unflagged cell.
        """
        if self.board is None:
            raise RuntimeError("Call reset() before get_action_mask()")
        obs = self.board.get_observation().flatten()
        return (obs == OBS_HIDDEN) | (obs == OBS_SAFE_START)
