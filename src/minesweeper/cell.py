"""
Cell module for Minesweeper game.

Visible cell values exposed by the board for rendering: hidden, flagged,
revealed with an adjacent mine count, or the mine that was triggered.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()
    EXPLODED = auto()


HIDDEN_CODE = -1
FLAGGED_CODE = -2
EXPLODED_CODE = 9


# ============================================================================
# Cell Value
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Player-visible value of a single coordinate.

    Cells are immutable; the board swaps in a new value on every state
    change so snapshots handed to a driver never change underneath it.

    Attributes:
        state: Current visual state.
        adjacent_mines: Count of neighbouring mines (0-8), only meaningful
            once the cell is revealed.
    """

    state: CellState = CellState.HIDDEN
    adjacent_mines: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.adjacent_mines <= 8:
            raise ValueError("adjacent_mines must be between 0 and 8")
        if self.state != CellState.REVEALED and self.adjacent_mines:
            raise ValueError("Only revealed cells carry a mine count")

    @classmethod
    def revealed(cls, adjacent_mines: int) -> "Cell":
        """Build a revealed cell showing ``adjacent_mines``."""
        return cls(CellState.REVEALED, adjacent_mines)

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_exploded(self) -> bool:
        """Check if cell is the mine that ended the game."""
        return self.state == CellState.EXPLODED

    def to_observation(self) -> int:
        """
        Convert cell to an integer observation code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Exploded mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_CODE
        if self.state == CellState.FLAGGED:
            return FLAGGED_CODE
        if self.state == CellState.EXPLODED:
            return EXPLODED_CODE
        return self.adjacent_mines


HIDDEN = Cell()
FLAGGED = Cell(CellState.FLAGGED)
EXPLODED = Cell(CellState.EXPLODED)
