"""
Engine module for the terminal Minesweeper game.

Sequences one game session: owns the board and the cursor, turns
commands into board operations and decides the round outcome.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from .board import Board, BoardConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class RoundOutcome(Enum):
    """Result of applying one command."""

    CONTINUE = auto()
    LOST = auto()
    WON = auto()

    @property
    def is_over(self) -> bool:
        return self is not RoundOutcome.CONTINUE


@dataclass
class Cursor:
    """Selected cell for keyboard play."""

    x: int = 0
    y: int = 0


# ============================================================================
# Engine
# ============================================================================

class Engine:
    """
    Game state machine around a single board.

    Hitting a mine is reported as ``RoundOutcome.LOST``, not raised.
    Coordinates passed to ``reveal`` and ``flag`` must be on the board;
    anything else raises ``OutOfBounds``.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Create the board and centre the cursor.

        Args:
            config: Board configuration (default: 8x8 at 5% mines).
            rng: Random source for mine placement.
        """
        self.config = config or BoardConfig()
        self.board = Board(self.config, rng)
        self.cursor = Cursor()
        self._outcome = RoundOutcome.CONTINUE
        self._center_cursor()

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        mine_percent: int,
        rng: Optional[np.random.Generator] = None,
    ) -> "Engine":
        """Shortcut taking the three board parameters directly."""
        return cls(BoardConfig(width, height, mine_percent), rng)

    def _center_cursor(self) -> None:
        self.cursor.x = self.board.width // 2
        self.cursor.y = self.board.height // 2

    # ========================================================================
    # Commands
    # ========================================================================

    def move_cursor(self, dx: int, dy: int) -> RoundOutcome:
        """Move the cursor, wrapping around the board edges."""
        width, height = self.board.width, self.board.height
        self.cursor.x = (self.cursor.x + dx + width) % width
        self.cursor.y = (self.cursor.y + dy + height) % height
        return self._finish(RoundOutcome.CONTINUE)

    def reveal(self, x: int, y: int) -> RoundOutcome:
        """
        Reveal ``(x, y)``.

        A mine ends the game and leaves every cell, the mine included,
        as it was. Any other cell starts a flood fill.
        """
        if self.board.cell_at(x, y).is_mine:
            logger.info("Mine hit at (%d, %d)", x, y)
            return self._finish(RoundOutcome.LOST)
        self.board.reveal_from(x, y)
        return self._finish(RoundOutcome.CONTINUE)

    def flag(self, x: int, y: int) -> RoundOutcome:
        """
        Toggle the flag at ``(x, y)``.

        The game is won as soon as the number of flagged mines equals
        the number of mines, which on a mine-free board happens on the
        first flag action.
        """
        self.board.flag(x, y)
        if self.board.all_mines_flagged:
            logger.info(
                "All %d mines flagged", self.board.mine_count
            )
            return self._finish(RoundOutcome.WON)
        return self._finish(RoundOutcome.CONTINUE)

    def reveal_at_cursor(self) -> RoundOutcome:
        return self.reveal(self.cursor.x, self.cursor.y)

    def flag_at_cursor(self) -> RoundOutcome:
        return self.flag(self.cursor.x, self.cursor.y)

    def restart(self, rng: Optional[np.random.Generator] = None) -> None:
        """Re-roll the board and recentre the cursor for a new game."""
        self.board.reset(rng)
        self._center_cursor()
        self._outcome = RoundOutcome.CONTINUE
        logger.debug("Board restarted with %d mines", self.board.mine_count)

    def _finish(self, outcome: RoundOutcome) -> RoundOutcome:
        self._outcome = outcome
        return outcome

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def outcome(self) -> RoundOutcome:
        """Outcome of the most recent command."""
        return self._outcome

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height
