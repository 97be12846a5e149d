"""
Result types returned by the no-guess solver.

solve() returns either Found or NotSolvable. NotSolvable is an ordinary
outcome that tells the caller to regenerate, not an error.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, List, Tuple, Union

Position = Tuple[int, int]


class DeductionRule(Enum):
    """Rule that produced a deduction."""

    ALL_SAFE = auto()
    ALL_MINES = auto()
    SUBSET = auto()
    GLOBAL_COUNT = auto()


@dataclass(frozen=True)
class Deduction:
    """Cells proven safe or mined in one round of the simulation."""

    rule: DeductionRule
    safe: FrozenSet[Position] = frozenset()
    mines: FrozenSet[Position] = frozenset()


@dataclass(frozen=True)
class Found:
    """A no-guess opening exists at (row, col)."""

    row: int
    col: int

    @property
    def is_found(self) -> bool:
        return True

    @property
    def position(self) -> Position:
        return self.row, self.col


@dataclass(frozen=True)
class NotSolvable:
    """No candidate opening leads to a full deductive solution."""

    candidates_tried: int = 0

    @property
    def is_found(self) -> bool:
        return False


SolveResult = Union[Found, NotSolvable]


@dataclass
class SimulationResult:
    """
    Outcome of playing one opening by deduction alone.

    Attributes:
        opening: Cell that was opened first.
        solved: Whether every non-mine cell ended up revealed.
        revealed: Cells revealed by the simulation.
        mines: Cells the simulation proved to be mines.
        steps: Deductions in the order they were applied.
        opening_region: Cells revealed by the opening itself.
    """

    opening: Position
    solved: bool = False
    revealed: FrozenSet[Position] = frozenset()
    mines: FrozenSet[Position] = frozenset()
    steps: List[Deduction] = field(default_factory=list)
    opening_region: FrozenSet[Position] = frozenset()
