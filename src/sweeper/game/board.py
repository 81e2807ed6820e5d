"""
Board module for the terminal Minesweeper game.

Implements the grid with mine placement, adjacency counts, flood-fill
revealing and flag bookkeeping. The board knows nothing about cursors,
input or rendering.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Errors
# ============================================================================

class InvalidDimensions(ValueError):
    """Board width or height is not a positive integer."""


class OutOfBounds(IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Position ({x}, {y}) is outside the {width}x{height} board"
        )
        self.x = x
        self.y = y


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_percent: Target mine density, in percent of all cells.
        exact_mines: Place exactly the target number of mines instead
            of rolling each cell independently.
    """

    width: int = 8
    height: int = 8
    mine_percent: int = 5
    exact_mines: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got "
                f"{self.width}x{self.height}"
            )
        if not 0 <= self.mine_percent <= 100:
            raise ValueError("Mine percent must be between 0 and 100")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def target_mines(self) -> int:
        """Mine count the density asks for, rounded down."""
        return int(self.mine_percent / 100 * self.total_cells)


DEFAULT = BoardConfig()


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Cells are stored in one row-major list; the cell at ``(x, y)`` lives
    at index ``x + y * width``.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    mine_count: int = field(default=0, init=False)
    correct_flag_count: int = field(default=0, init=False)
    _cells: List[Cell] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate the grid and roll the first layout."""
        if self.rng is None:
            self.rng = np.random.default_rng()
        self._cells = [Cell() for _ in range(self.config.total_cells)]
        self.reset()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    # ========================================================================
    # Layout (Low-level)
    # ========================================================================

    def reset(self, rng: Optional[np.random.Generator] = None) -> None:
        """
        Re-roll the mine layout in place.

        Every cell goes back to hidden, counts are recomputed and both
        mine counters start over.

        Args:
            rng: Random source to use from now on. Keeps the current one
                when omitted.
        """
        if rng is not None:
            self.rng = rng
        for cell in self._cells:
            cell.clear()
        self.mine_count = 0
        self.correct_flag_count = 0

        self._place_mines()
        self._calculate_adjacent_mines()

    def _place_mines(self) -> None:
        """
        Mark mines according to the configured density.

        By default each cell draws a number in ``[0, total)`` and becomes
        a mine when the draw is below the target, so the realized count
        only approximates the target.
        """
        total = self.config.total_cells
        target = self.config.target_mines

        if self.config.exact_mines:
            chosen = self.rng.choice(total, size=target, replace=False)
            mine_indices = [int(index) for index in chosen]
        else:
            draws = self.rng.integers(0, total, size=total)
            mine_indices = [
                index for index, draw in enumerate(draws) if draw < target
            ]

        for index in mine_indices:
            self._cells[index].is_mine = True
        self.mine_count = len(mine_indices)
        logger.debug(
            "Placed %d mines on %dx%d board (target %d)",
            self.mine_count, self.width, self.height, target,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all safe cells."""
        for y in range(self.height):
            for x in range(self.width):
                cell = self._cells[self._index(x, y)]
                if not cell.is_mine:
                    cell.adjacent_mines = self._count_adjacent_mines(x, y)

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for nx, ny in self.neighbors(x, y)
            if self._cells[self._index(nx, ny)].is_mine
        )

    # ========================================================================
    # Coordinates (Low-level)
    # ========================================================================

    def _index(self, x: int, y: int) -> int:
        return x + y * self.width

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def adjacent_positions(self, x: int, y: int) -> List[Position]:
        """
        The eight Moore-neighbourhood positions around ``(x, y)``.

        No bounds filtering is applied, callers decide what to skip.
        """
        return [
            (x - 1, y - 1), (x, y - 1), (x + 1, y - 1),
            (x - 1, y + 1), (x, y + 1), (x + 1, y + 1),
            (x - 1, y), (x + 1, y),
        ]

    def neighbors(self, x: int, y: int) -> List[Position]:
        """In-bounds subset of ``adjacent_positions``."""
        return [
            (nx, ny) for nx, ny in self.adjacent_positions(x, y)
            if self.in_bounds(nx, ny)
        ]

    def cell_at(self, x: int, y: int) -> Cell:
        """
        Get the cell at ``(x, y)``.

        Raises:
            OutOfBounds: If the position is off the grid.
        """
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        return self._cells[self._index(x, y)]

    # ========================================================================
    # Mutations (Mid-level)
    # ========================================================================

    def reveal_from(self, x: int, y: int) -> int:
        """
        Flood-fill reveal starting at ``(x, y)``.

        Breadth-first: every dequeued position that is on the board and
        not yet revealed gets revealed, and empty cells push all eight
        neighbours. Filtering happens on dequeue, so a position may be
        queued several times but is only revealed once.

        The start cell must not be a mine; ``Engine.reveal`` checks that.

        Returns:
            Number of cells that changed to revealed.
        """
        queue = deque([(x, y)])
        revealed = 0
        while queue:
            cx, cy = queue.popleft()
            if not self.in_bounds(cx, cy):
                continue
            cell = self._cells[self._index(cx, cy)]
            if cell.is_revealed:
                continue
            cell.reveal()
            revealed += 1
            if cell.is_empty:
                queue.extend(self.adjacent_positions(cx, cy))

        logger.debug("Flood fill from (%d, %d) revealed %d cells", x, y, revealed)
        return revealed

    def flag(self, x: int, y: int) -> bool:
        """
        Toggle the flag at ``(x, y)``.

        Revealed cells cannot be flagged. Flagging or unflagging a mine
        moves ``correct_flag_count`` accordingly.

        Returns:
            True if the flag was toggled, False otherwise.

        Raises:
            OutOfBounds: If the position is off the grid.
        """
        cell = self.cell_at(x, y)
        if not cell.toggle_flag():
            return False
        if cell.is_mine:
            if cell.is_flagged:
                self.correct_flag_count += 1
            else:
                self.correct_flag_count -= 1
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def all_mines_flagged(self) -> bool:
        """Every mine carries a flag (trivially true with no mines)."""
        return self.correct_flag_count == self.mine_count

    @property
    def revealed_count(self) -> int:
        return sum(1 for cell in self._cells if cell.is_revealed)

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield ``(x, y, cell)`` in row-major order."""
        for index, cell in enumerate(self._cells):
            yield index % self.width, index // self.width, cell

    def mine_positions(self) -> List[Position]:
        return [(x, y) for x, y, cell in self.cells() if cell.is_mine]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y, cell in self.cells():
            obs[y, x] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells a player can still act on.

        Returns:
            List of (x, y) positions that are hidden or flagged.
        """
        return [
            (x, y) for x, y, cell in self.cells()
            if cell.state != CellState.REVEALED
        ]
