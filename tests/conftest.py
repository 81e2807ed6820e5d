"""
Pytest configuration and shared fixtures.
"""
import io
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

import numpy as np
import pytest
from rich.console import Console

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper.game import Board, BoardConfig, Cell, Engine


# ============================================================================
# Deterministic Random Source
# ============================================================================

class FixedDraws:
    """
    Random source that puts mines exactly on the given cell indices.

    Mine cells draw 0 and every other cell draws the largest value, so
    the density rule marks exactly the listed cells as long as the
    target mine count is at least one.
    """

    def __init__(self, mine_indices: Iterable[int]) -> None:
        self.mine_indices = sorted(set(mine_indices))

    def integers(self, low: int, high: int, size: Optional[int] = None) -> np.ndarray:
        return np.array([
            low if index in self.mine_indices else high - 1
            for index in range(size)
        ])

    def choice(self, a: int, size: int, replace: bool = True) -> np.ndarray:
        return np.array(self.mine_indices[:size])


def mines_at(width: int, *positions) -> FixedDraws:
    """Build a FixedDraws from (x, y) positions on a board of ``width``."""
    return FixedDraws(x + y * width for x, y in positions)


@pytest.fixture
def fixed_draws() -> Callable[..., FixedDraws]:
    """Factory for deterministic mine layouts: fixed_draws(width, (x, y), ...)."""
    return mines_at


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 8x8 board at 5% density."""
    return Board(rng=np.random.default_rng(1234))


@pytest.fixture
def single_mine_board() -> Board:
    """8x8 board at 5% density with its only mine at (3, 3)."""
    return Board(BoardConfig(8, 8, 5), mines_at(8, (3, 3)))


@pytest.fixture
def two_mine_board() -> Board:
    """4x4 board with mines at (0, 0) and (3, 3)."""
    return Board(BoardConfig(4, 4, 25), mines_at(4, (0, 0), (3, 3)))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def single_mine_engine() -> Engine:
    """8x8 engine with its only mine at (3, 3)."""
    return Engine(BoardConfig(8, 8, 5), mines_at(8, (3, 3)))


@pytest.fixture
def two_mine_engine() -> Engine:
    """4x4 engine with mines at (0, 0) and (3, 3)."""
    return Engine(BoardConfig(4, 4, 25), mines_at(4, (0, 0), (3, 3)))


@pytest.fixture
def empty_engine() -> Engine:
    """Engine on a 4x4 board without mines."""
    return Engine(BoardConfig(4, 4, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Console Fixtures
# ============================================================================

@pytest.fixture
def console() -> Console:
    """Console writing to memory instead of the terminal."""
    return Console(file=io.StringIO(), width=120, color_system=None)
