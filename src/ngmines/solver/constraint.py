"""
Constraint types used by the no-guess solver.
"""
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

Position = Tuple[int, int]


@dataclass(frozen=True)
class Constraint:
    """
    A constraint representing: sum of cells in 'cells' == mine_count.

    For example, if a revealed "2" has 3 hidden neighbors and 1 of its
    other neighbors is a known mine, the constraint is:
    cells={A, B, C}, mine_count=1
    """

    cells: FrozenSet[Position]
    mine_count: int

    @property
    def all_safe(self) -> bool:
        """No mines left among the cells."""
        return bool(self.cells) and self.mine_count == 0

    @property
    def all_mines(self) -> bool:
        """Every cell must be a mine."""
        return bool(self.cells) and self.mine_count == len(self.cells)

    def is_subset_of(self, other: "Constraint") -> bool:
        """Strict subset test on the cell sets."""
        return self.cells < other.cells

    def difference(self, other: "Constraint") -> Optional["Constraint"]:
        """
        Derive the constraint on other.cells - self.cells.

        Only defined when self is a strict subset of other.

        Example:
            A: {X, Y} has 1 mine
            B: {X, Y, Z} has 1 mine
            B - A: {Z} has 0 mines, so Z is safe
        """
        if not self.is_subset_of(other):
            return None
        return Constraint(
            cells=other.cells - self.cells,
            mine_count=other.mine_count - self.mine_count,
        )
