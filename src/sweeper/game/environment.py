"""
Gymnasium environment wrapper around the game engine.

Lets scripted or learning players drive the same engine the terminal
sessions use.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .engine import Engine, RoundOutcome


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for the flag-to-win Minesweeper variant.

    Observation:
        2D array (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height reveals cell i, larger actions flag
        cell i - width * height. Cell i sits at (i % width, i // width).

    Rewards:
        - +1 for a reveal that opens cells
        - +10 for winning the game (all mines flagged)
        - -10 for hitting a mine
        - 0 for a flag toggle that does not win
        - -0.1 for invalid action (cell already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 8x8 at 5% mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.engine = Engine(self.config)
        self.render_mode = render_mode
        self._cell_count = self.config.total_cells

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # One reveal and one flag action per cell
        self.action_space = spaces.Discrete(2 * self._cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a freshly rolled board.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.engine.restart(self.np_random)
        self._steps = 0

        return self.engine.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal or flag index, see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, x, y = self._decode_action(action)
        self._steps += 1

        reward = self._apply(flag, x, y)

        observation = self.engine.board.get_observation()
        terminated = self.engine.outcome.is_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Split a flat action into (is_flag, x, y)."""
        action = int(action)
        flag = action >= self._cell_count
        index = action % self._cell_count
        return flag, index % self.config.width, index // self.config.width

    def _apply(self, flag: bool, x: int, y: int) -> float:
        """Run the action on the engine and score the result."""
        if self.engine.board.cell_at(x, y).is_revealed:
            return -0.1

        if flag:
            outcome = self.engine.flag(x, y)
        else:
            outcome = self.engine.reveal(x, y)

        if outcome is RoundOutcome.WON:
            return 10.0
        if outcome is RoundOutcome.LOST:
            return -10.0
        return 0.0 if flag else 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.engine.board
        return {
            "steps": self._steps,
            "revealed": board.revealed_count,
            "mines": board.mine_count,
            "correct_flags": board.correct_flag_count,
            "game_state": self.engine.outcome.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        lines = []
        obs = self.engine.board.get_observation()

        for row in obs:
            row_str = ""
            for val in row:
                if val == -1:
                    row_str += "."
                elif val == -2:
                    row_str += "F"
                elif val == 9:
                    row_str += "*"
                elif val == 0:
                    row_str += " "
                else:
                    row_str += str(val)
                row_str += " "
            lines.append(row_str)

        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action. Reveal and flag
            actions are valid on every cell that is not revealed.
        """
        unrevealed = np.zeros(self._cell_count, dtype=bool)
        for x, y in self.engine.board.get_valid_actions():
            unrevealed[x + y * self.config.width] = True
        return np.concatenate([unrevealed, unrevealed])
