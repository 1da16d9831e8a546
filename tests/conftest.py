"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, MinesweeperEnv


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a seeded 9x9 board with 10 mines."""
    return Board(rng=1234)


@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1), rng=7)


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with its only mine fixed at (0, 0), safe cell (2, 2)."""
    board = Board(BoardConfig(3, 3, 1))
    board.place_mines(2, 2, positions=[(0, 0)])
    return board


@pytest.fixture
def dense_board() -> Board:
    """3x3 board with the maximum of 8 mines."""
    return Board(BoardConfig(3, 3, 8), rng=99)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    return Cell.revealed(3)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def env() -> MinesweeperEnv:
    """Beginner environment reset with a fixed seed."""
    environment = MinesweeperEnv()
    environment.reset(seed=42)
    return environment
