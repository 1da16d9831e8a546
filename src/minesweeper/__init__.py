"""
Minesweeper board engine.

Provides the core game logic: board configuration, mine placement,
cascading reveals, flags and game status, plus a Gymnasium environment.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    GameStatus,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameStatus",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "MinesweeperEnv",
]
