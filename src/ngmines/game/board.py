"""
Board module for Minesweeper game.

Implements the fixed-size cell grid, mine layout bookkeeping and the
read-only views (observation array, text rendering) used by callers.
State changes during play live in the reveal module.
"""
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, CellState

Position = Tuple[int, int]


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
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    A height x width grid of cells stored row-major. Dimensions are
    fixed by the config; a new round gets a new board.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    @classmethod
    def from_mine_layout(cls, layout: Sequence[Sequence[object]]) -> "Board":
        """
        Build a board from a rectangular grid of mine markers.

        Any truthy entry is a mine. This is the entry point for external
        loaders: the result satisfies the same invariants as a generated
        board.

        Raises:
            ValueError: If the layout is empty, ragged or has no safe cell.
        """
        if not layout or not layout[0]:
            raise ValueError("Layout must have at least one row and column")
        width = len(layout[0])
        if any(len(row) != width for row in layout):
            raise ValueError("Layout rows must all have the same length")

        mines = [
            (row, col)
            for row, line in enumerate(layout)
            for col, value in enumerate(line)
            if value
        ]
        board = cls(BoardConfig(width, len(layout), len(mines)))
        board.place_mines(mines)
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def place_mines(self, positions: Iterable[Position]) -> None:
        """
        Set the mine layout and recompute every adjacency count.

        Args:
            positions: Exactly config.num_mines distinct (row, col) pairs.

        Raises:
            ValueError: If the positions don't match the configured count.
            IndexError: If a position is off the board.
        """
        mines = set(positions)
        if len(mines) != self.config.num_mines:
            raise ValueError(
                f"Expected {self.config.num_mines} distinct mines, "
                f"got {len(mines)}"
            )
        for row, col in mines:
            self._check_position(row, col)

        for row, col in self.positions():
            cell = self._grid[row][col]
            cell.is_mine = (row, col) in mines
            cell.safe_start = False
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row, col in self.positions():
            cell = self._grid[row][col]
            cell.adjacent_mines = 0 if cell.is_mine else self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for nr, nc in self.neighbors(row, col) if self._grid[nr][nc].is_mine
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up to 8 neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _check_position(self, row: int, col: int) -> None:
        if not self.is_valid_position(row, col):
            raise IndexError(
                f"Position ({row}, {col}) is outside the "
                f"{self.config.height}x{self.config.width} board"
            )

    def positions(self) -> Iterator[Position]:
        """Iterate over every (row, col) in row-major order."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                yield row, col

    # ========================================================================
    # Safe Start
    # ========================================================================

    def mark_safe_start(self, row: int, col: int) -> None:
        """
        Mark the certified opening cell, clearing any previous mark.

        Raises:
            ValueError: If the cell is a mine.
        """
        cell = self.get_cell(row, col)
        if cell.is_mine:
            raise ValueError(f"Safe start ({row}, {col}) cannot be a mine")
        for other in self.cells():
            other.safe_start = False
        cell.safe_start = True

    def clear_safe_start(self) -> None:
        """Remove the safe start mark, if any."""
        for cell in self.cells():
            cell.safe_start = False

    @property
    def safe_start(self) -> Optional[Position]:
        """Position of the safe start, or None if not marked."""
        for row, col in self.positions():
            if self._grid[row][col].safe_start:
                return row, col
        return None

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def total_cells(self) -> int:
        return self.config.total_cells

    @property
    def safe_cell_count(self) -> int:
        """Number of cells that must be revealed to clear the field."""
        return self.total_cells - self.config.num_mines

    @property
    def revealed_count(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_revealed)

    @property
    def flagged_count(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_flagged)

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexError: If the position is outside the board.
        """
        self._check_position(row, col)
        return self._grid[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for line in self._grid:
            yield from line

    def mine_positions(self) -> List[Position]:
        """Positions of all mines in row-major order."""
        return [
            (row, col) for row, col in self.positions()
            if self._grid[row][col].is_mine
        ]

    def hidden_copy(self) -> "Board":
        """
        Copy of the mine layout with every cell hidden.

        Flags and the safe start are not carried over.
        """
        copy = Board(self.config)
        for row, col in self.positions():
            source = self._grid[row][col]
            target = copy._grid[row][col]
            target.is_mine = source.is_mine
            target.adjacent_mines = source.adjacent_mines
            target.state = CellState.HIDDEN
        return copy

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for ML agent.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                -3 = hidden safe start
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row, col in self.positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def render(self, show_mines: bool = False) -> str:
        """Render board as ASCII string, one line per row."""
        return "\n".join(
            " ".join(cell.to_char(show_mines) for cell in line)
            for line in self._grid
        )
