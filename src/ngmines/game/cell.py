"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation values for cells that are not revealed numbers
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_SAFE_START = -3
OBS_MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Revealed and flagged are two values of a single state, so a
    flagged cell can never be revealed at the same time.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
        safe_start: Whether this is the certified no-guess opening.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    safe_start: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def set_flag(self, value: bool) -> bool:
        """
        Set the flag to an explicit value.

        Returns:
            True if the cell is unrevealed and the flag now equals value.
        """
        if self.state == CellState.REVEALED:
            return False
        self.state = CellState.FLAGGED if value else CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden (neither revealed nor flagged)."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_numbered(self) -> bool:
        """Check if cell is a safe cell touching at least one mine."""
        return not self.is_mine and self.adjacent_mines > 0

    def to_observation(self) -> int:
        """
        Convert cell to observation value for ML agent.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Hidden cell marked as the safe start
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return OBS_SAFE_START if self.safe_start else OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        return self.adjacent_mines

    def to_char(self, show_mines: bool = False) -> str:
        """
        Single character used by the text renderer.

        Revealed cells show their count (blank for zero), flags show F,
        the safe start shows X and other hidden cells show a dot.
        """
        if self.is_revealed:
            if self.is_mine:
                return "*"
            return str(self.adjacent_mines) if self.adjacent_mines else " "
        if self.is_flagged:
            return "F"
        if show_mines and self.is_mine:
            return "*"
        if self.safe_start:
            return "X"
        return "."
