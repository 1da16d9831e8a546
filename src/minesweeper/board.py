"""
Board module for Minesweeper game.

Implements the board engine: deferred mine placement, the cascading
reveal, flag toggling and win/lose detection.

The board keeps two parallel grids. The true layout records where the
mines are and is filled in exactly once, by the first reveal of a game.
The visible layout is what a player may see and is only changed by
``reveal`` and ``toggle_flag``. Coordinates are ``(col, row)``.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Set, Tuple, Union

import numpy as np

from .cell import Cell, EXPLODED, FLAGGED, HIDDEN

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]
RandomSource = Union[np.random.Generator, int, None]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 1:
            raise ValueError("Number of mines must be positive")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def area(self) -> int:
        return self.width * self.height

    @classmethod
    def from_preset(cls, name: str) -> "BoardConfig":
        """Look up a difficulty preset by name (case-insensitive)."""
        try:
            return PRESETS[name.lower()]
        except KeyError:
            choices = ", ".join(sorted(PRESETS))
            raise ValueError(
                f"Unknown preset {name!r} (expected one of: {choices})"
            ) from None


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass(eq=False)
class Board:
    """
    Minesweeper game board.

    Owns the true and visible layouts of one game session. Gameplay calls
    that cannot apply (out of bounds, already revealed, flagged, game
    over) are ignored and report ``False`` instead of raising.

    Attributes:
        config: Fixed dimensions and mine count.
        rng: Random source for mine placement. Accepts a
            ``numpy.random.Generator``, an integer seed or ``None``.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: RandomSource = field(default=None, repr=False)
    _mines: np.ndarray = field(init=False, repr=False)
    _visible: List[List[Cell]] = field(init=False, repr=False)
    _status: GameStatus = field(init=False, default=GameStatus.IN_PROGRESS)
    _first_move: bool = field(init=False, default=True)
    _revealed: int = field(init=False, default=0)
    _flags: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Set up the random source and a fresh game."""
        self.rng = np.random.default_rng(self.rng)
        self.start_new_game()

    # ========================================================================
    # Game Lifecycle
    # ========================================================================

    def start_new_game(self) -> None:
        """Hide every cell, clear the mines and wait for a first move."""
        self._mines = np.zeros(
            (self.config.height, self.config.width), dtype=bool
        )
        self._visible = [
            [HIDDEN for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]
        self._status = GameStatus.IN_PROGRESS
        self._first_move = True
        self._revealed = 0
        self._flags = 0
        logger.debug(
            "New %dx%d game with %d mines",
            self.config.width, self.config.height, self.config.num_mines,
        )

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self.start_new_game()

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def place_mines(
        self,
        col: int,
        row: int,
        positions: Optional[Iterable[Coordinate]] = None,
    ) -> None:
        """
        Fill in the true layout, keeping ``(col, row)`` mine-free.

        This is the one-shot transition out of the first-move state and is
        normally triggered by the first ``reveal``. Without ``positions``,
        ``num_mines`` distinct coordinates are drawn uniformly from every
        other cell using ``rng``.

        Args:
            col: Column of the safe cell.
            row: Row of the safe cell.
            positions: Explicit mine coordinates, for fixed layouts.

        Raises:
            RuntimeError: If mines were already placed this game.
            ValueError: If the safe cell or ``positions`` are invalid.
        """
        if not self._first_move:
            raise RuntimeError("Mines have already been placed")
        if not self._is_valid_position(col, row):
            raise ValueError(f"Safe cell ({col}, {row}) is out of bounds")

        safe = (col, row)
        if positions is None:
            mines = self._sample_mine_positions(safe)
        else:
            mines = self._check_mine_positions(positions, safe)

        for mine_col, mine_row in mines:
            self._mines[mine_row, mine_col] = True
        self._first_move = False
        logger.debug("Placed %d mines avoiding (%d, %d)", len(mines), col, row)

    def _sample_mine_positions(self, safe: Coordinate) -> List[Coordinate]:
        """Draw mine coordinates uniformly without replacement."""
        candidates = [
            (col, row)
            for row in range(self.config.height)
            for col in range(self.config.width)
            if (col, row) != safe
        ]
        picks = self.rng.choice(
            len(candidates), size=self.config.num_mines, replace=False
        )
        return [candidates[int(i)] for i in picks]

    def _check_mine_positions(
        self, positions: Iterable[Coordinate], safe: Coordinate
    ) -> List[Coordinate]:
        """Validate an explicit mine layout."""
        mines = [(int(col), int(row)) for col, row in positions]
        if len(set(mines)) != len(mines):
            raise ValueError("Mine positions must be distinct")
        if len(mines) != self.config.num_mines:
            raise ValueError(
                f"Expected {self.config.num_mines} mine positions, "
                f"got {len(mines)}"
            )
        for col, row in mines:
            if not self._is_valid_position(col, row):
                raise ValueError(f"Mine ({col}, {row}) is out of bounds")
        if safe in mines:
            raise ValueError(f"Mine placed on safe cell {safe}")
        return mines

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def neighbors(self, col: int, row: int) -> Iterator[Coordinate]:
        """Yield the in-bounds neighbours of a cell (up to 8)."""
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_col = col + delta_col
                new_row = row + delta_row
                if self._is_valid_position(new_col, new_row):
                    yield new_col, new_row

    def _count_adjacent_mines(self, col: int, row: int) -> int:
        return sum(
            1 for n_col, n_row in self.neighbors(col, row)
            if self._mines[n_row, n_col]
        )

    def _is_valid_position(self, col: int, row: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= col < self.config.width and 0 <= row < self.config.height

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, col: int, row: int) -> bool:
        """
        Reveal a cell at the given position.

        The first reveal of a game places the mines away from this cell.
        Hitting a mine loses the game; otherwise the cell is revealed and,
        when it has no adjacent mines, the reveal cascades outward.

        Args:
            col: Column index to reveal.
            row: Row index to reveal.

        Returns:
            True if the reveal was applied, False if it was ignored.
        """
        if not self._can_reveal(col, row):
            return False

        if self._first_move:
            self.place_mines(col, row)

        if self._mines[row, col]:
            self._visible[row][col] = EXPLODED
            self._status = GameStatus.LOST
            logger.info("Mine triggered at (%d, %d), game lost", col, row)
            return True

        cleared = self._cascade(col, row)
        logger.debug("Revealed %d cells from (%d, %d)", cleared, col, row)
        self._check_win_condition()
        return True

    def _can_reveal(self, col: int, row: int) -> bool:
        """Check if a cell can be revealed."""
        if self._status != GameStatus.IN_PROGRESS:
            return False
        if not self._is_valid_position(col, row):
            return False
        return self._visible[row][col].is_hidden

    def _cascade(self, col: int, row: int) -> int:
        """
        Breadth-first reveal starting at a safe cell.

        Each coordinate enters the worklist at most once per call, so the
        queue never outgrows the board.

        Returns:
            Number of cells revealed.
        """
        queue = deque([(col, row)])
        queued: Set[Coordinate] = {(col, row)}
        cleared = 0

        while queue:
            cur_col, cur_row = queue.popleft()
            if not self._visible[cur_row][cur_col].is_hidden:
                continue

            count = self._count_adjacent_mines(cur_col, cur_row)
            self._visible[cur_row][cur_col] = Cell.revealed(count)
            self._revealed += 1
            cleared += 1

            if count:
                continue
            for n_col, n_row in self.neighbors(cur_col, cur_row):
                if (n_col, n_row) in queued or self._mines[n_row, n_col]:
                    continue
                if self._visible[n_row][n_col].is_hidden:
                    queued.add((n_col, n_row))
                    queue.append((n_col, n_row))

        return cleared

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._revealed == self.safe_cells:
            self._status = GameStatus.WON
            logger.info("All %d safe cells revealed, game won", self.safe_cells)

    def toggle_flag(self, col: int, row: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            col: Column index.
            row: Row index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._status != GameStatus.IN_PROGRESS:
            return False
        if not self._is_valid_position(col, row):
            return False

        cell = self._visible[row][col]
        if cell.is_hidden:
            self._visible[row][col] = FLAGGED
            self._flags += 1
        elif cell.is_flagged:
            self._visible[row][col] = HIDDEN
            self._flags -= 1
        else:
            return False
        return True

    # ========================================================================
    # State Accessors
    # ========================================================================

    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    def flags_count(self) -> int:
        """Number of cells currently flagged."""
        return self._flags

    def revealed_count(self) -> int:
        """Number of safe cells revealed so far."""
        return self._revealed

    def mines_remaining(self) -> int:
        """Mines not yet accounted for by a flag (may go negative)."""
        return self.config.num_mines - self._flags

    @property
    def safe_cells(self) -> int:
        return self.config.area - self.config.num_mines

    @property
    def first_move(self) -> bool:
        """True until the first reveal places the mines."""
        return self._first_move

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._status == GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def is_over(self) -> bool:
        return self._status != GameStatus.IN_PROGRESS

    def is_mine(self, col: int, row: int) -> bool:
        """
        Query the true layout.

        Always False before the first reveal. Meant for tests and
        post-game display, not for players.
        """
        if not self._is_valid_position(col, row):
            return False
        return bool(self._mines[row, col])

    def get_cell(self, col: int, row: int) -> Optional[Cell]:
        """Get visible cell at position, or None if invalid."""
        if not self._is_valid_position(col, row):
            return None
        return self._visible[row][col]

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        """
        Read-only copy of the visible layout.

        Returns:
            Rows of cells, indexed ``[row][col]``.
        """
        return tuple(tuple(cells) for cells in self._visible)

    def get_observation(self) -> np.ndarray:
        """
        Get visible layout as a numpy array.

        Returns:
            2D int8 array indexed ``[row, col]`` where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = exploded mine
        """
        obs = np.empty((self.config.height, self.config.width), dtype=np.int8)
        for row, cells in enumerate(self._visible):
            for col, cell in enumerate(cells):
                obs[row, col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Coordinate]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (col, row) positions that are hidden and unflagged.
        """
        return [
            (col, row)
            for row, cells in enumerate(self._visible)
            for col, cell in enumerate(cells)
            if cell.is_hidden
        ]
