"""
Minesweeper game module.

Provides the board, the engine state machine and a Gymnasium wrapper.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    InvalidDimensions,
    OutOfBounds,
    DEFAULT,
)
from .engine import Engine, Cursor, RoundOutcome
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "InvalidDimensions",
    "OutOfBounds",
    "DEFAULT",
    "Engine",
    "Cursor",
    "RoundOutcome",
    "MinesweeperEnv",
]
