"""
No-guess solvability certifier.

Decides whether a board can be cleared from a given opening using
logical deduction alone. The simulation keeps its own knowledge (the
cells it has revealed and the mines it has proven) and uses the real
layout only to check each deduction and to drive cascades.

Deduction rules, tried in order of cost each round:
    1. All-safe: a constraint needing 0 mines makes its cells safe
    2. All-mine: a constraint needing as many mines as it has cells
    3. Subset elimination: A subset of B gives (B - A, B.mines - A.mines)
    4. Global count closure: compare the remaining mine total with
       what the frontier must contain
"""
import logging
import random
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set

from ..game.board import Board, Position
from ..game.reveal import reveal_cell
from .constraint import Constraint
from .result import (
    Deduction,
    DeductionRule,
    Found,
    NotSolvable,
    SimulationResult,
    SolveResult,
)

logger = logging.getLogger(__name__)


class DeductionError(RuntimeError):
    """A deduction contradicted the real layout (solver bug)."""


# ============================================================================
# No-Guess Solver
# ============================================================================

class NoGuessSolver:
    """
    Certifies boards as solvable without guessing.

    Candidate openings are the empty cells in row-major order (or,
    on boards without any empty cell, the numbered ones). Passing a
    seed shuffles the order reproducibly.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        use_subset_elimination: bool = True,
        use_global_count: bool = True,
    ) -> None:
        """
        Initialize the solver.

        Args:
            seed: Shuffle candidate openings with this seed; None keeps
                row-major order.
            use_subset_elimination: Enable rule 3.
            use_global_count: Enable rule 4.
        """
        self.seed = seed
        self.use_subset_elimination = use_subset_elimination
        self.use_global_count = use_global_count

    # ========================================================================
    # Public API
    # ========================================================================

    def solve(self, board: Board, mine_count: int) -> SolveResult:
        """
        Find an opening from which the whole board is deducible.

        Args:
            board: Board to certify. It is not modified.
            mine_count: Total mines on the board.

        Returns:
            Found(row, col) for the first working opening, otherwise
            NotSolvable.

        Raises:
            ValueError: If mine_count disagrees with the board.
        """
        actual = len(board.mine_positions())
        if mine_count != board.num_mines or mine_count != actual:
            raise ValueError(
                f"mine_count {mine_count} does not match the board "
                f"({actual} mines placed)"
            )

        tried = 0
        covered: Set[Position] = set()
        for opening in self._candidates(board):
            if opening in covered:
                continue
            tried += 1
            result = self.simulate(board, opening)
            if result.solved:
                logger.debug(
                    "Opening %s solves the board in %d steps",
                    opening, len(result.steps),
                )
                return Found(*opening)
            covered.update(result.opening_region)

        return NotSolvable(candidates_tried=tried)

    def simulate(self, board: Board, opening: Position) -> SimulationResult:
        """
        Play the board by deduction from a single opening.

        Args:
            board: Board whose layout is used; it is not modified.
            opening: (row, col) opened first.

        Returns:
            SimulationResult with the deductions applied and whether
            every non-mine cell was reached.
        """
        scratch = board.hidden_copy()
        if scratch.get_cell(*opening).is_mine:
            return SimulationResult(opening=opening)

        reveal_cell(scratch, *opening)
        opening_region = frozenset(self._revealed(scratch))
        mines: Set[Position] = set()
        steps: List[Deduction] = []

        while scratch.revealed_count < scratch.safe_cell_count:
            deductions = self._deduce(scratch, mines)
            if not deductions:
                break
            for deduction in deductions:
                self._apply(scratch, deduction, mines)
                steps.append(deduction)

        return SimulationResult(
            opening=opening,
            solved=scratch.revealed_count == scratch.safe_cell_count,
            revealed=frozenset(self._revealed(scratch)),
            mines=frozenset(mines),
            steps=steps,
            opening_region=opening_region,
        )

    # ========================================================================
    # Candidates
    # ========================================================================

    def _candidates(self, board: Board) -> List[Position]:
        """Openings to try, in a reproducible order."""
        safe = [
            (row, col) for row, col in board.positions()
            if not board.get_cell(row, col).is_mine
        ]
        empty = [p for p in safe if board.get_cell(*p).adjacent_mines == 0]
        candidates = empty or safe
        if self.seed is not None:
            random.Random(self.seed).shuffle(candidates)
        return candidates

    # ========================================================================
    # Knowledge
    # ========================================================================

    @staticmethod
    def _revealed(scratch: Board) -> Iterable[Position]:
        return (
            (row, col) for row, col in scratch.positions()
            if scratch.get_cell(row, col).is_revealed
        )

    def _frontier(self, scratch: Board, mines: Set[Position]) -> List[Constraint]:
        """
        Build constraints from revealed numbered cells.

        Each revealed number N with unknown neighbors creates a
        constraint: "exactly N - (known mine neighbors) of these
        unknown cells are mines".
        """
        constraints: Dict[Constraint, None] = {}
        for row, col in scratch.positions():
            cell = scratch.get_cell(row, col)
            if not cell.is_revealed or cell.adjacent_mines == 0:
                continue

            unknown = []
            known_mines = 0
            for neighbor in scratch.neighbors(row, col):
                if neighbor in mines:
                    known_mines += 1
                elif not scratch.get_cell(*neighbor).is_revealed:
                    unknown.append(neighbor)

            if unknown:
                constraint = Constraint(
                    cells=frozenset(unknown),
                    mine_count=cell.adjacent_mines - known_mines,
                )
                constraints[constraint] = None
        return list(constraints)

    def _unknown(self, scratch: Board, mines: Set[Position]) -> Set[Position]:
        """Hidden cells not yet proven to be mines."""
        return {
            (row, col) for row, col in scratch.positions()
            if not scratch.get_cell(row, col).is_revealed
            and (row, col) not in mines
        }

    # ========================================================================
    # Deduction Rules
    # ========================================================================

    def _deduce(self, scratch: Board, mines: Set[Position]) -> List[Deduction]:
        """Run the cheapest rule that proves anything this round."""
        constraints = self._frontier(scratch, mines)

        deductions = self._single_constraint_rules(constraints)
        if deductions:
            return deductions

        if self.use_subset_elimination:
            deduction = self._subset_elimination(constraints)
            if deduction is not None:
                return [deduction]

        if self.use_global_count:
            deduction = self._global_count(scratch, mines, constraints)
            if deduction is not None:
                return [deduction]

        return []

    @staticmethod
    def _single_constraint_rules(constraints: List[Constraint]) -> List[Deduction]:
        """Rules 1 and 2."""
        safe: Set[Position] = set()
        found_mines: Set[Position] = set()
        for constraint in constraints:
            if constraint.all_safe:
                safe.update(constraint.cells)
            elif constraint.all_mines:
                found_mines.update(constraint.cells)

        deductions = []
        if safe:
            deductions.append(Deduction(DeductionRule.ALL_SAFE, safe=frozenset(safe)))
        if found_mines:
            deductions.append(
                Deduction(DeductionRule.ALL_MINES, mines=frozenset(found_mines))
            )
        return deductions

    @staticmethod
    def _subset_elimination(constraints: List[Constraint]) -> Optional[Deduction]:
        """
        Rule 3: derive constraints from subset pairs.

        Example:
            A: {X, Y} has 1 mine
            B: {X, Y, Z} has 1 mine
            -> Z must be safe (B - A = {Z} has 0 mines)
        """
        by_cell: Dict[Position, List[int]] = defaultdict(list)
        for index, constraint in enumerate(constraints):
            for cell in constraint.cells:
                by_cell[cell].append(index)

        safe: Set[Position] = set()
        found_mines: Set[Position] = set()
        for index, smaller in enumerate(constraints):
            # Any superset of smaller must contain its first cell
            anchor = next(iter(smaller.cells))
            for other_index in by_cell[anchor]:
                if other_index == index:
                    continue
                derived = smaller.difference(constraints[other_index])
                if derived is None:
                    continue
                if derived.all_safe:
                    safe.update(derived.cells)
                elif derived.all_mines:
                    found_mines.update(derived.cells)

        if not safe and not found_mines:
            return None
        return Deduction(
            DeductionRule.SUBSET,
            safe=frozenset(safe),
            mines=frozenset(found_mines),
        )

    def _global_count(
        self,
        scratch: Board,
        mines: Set[Position],
        constraints: List[Constraint],
    ) -> Optional[Deduction]:
        """
        Rule 4: settle cells outside the frontier from the mine total.

        Pairwise disjoint constraints give a lower bound on the mines
        inside the frontier. If that bound uses up every remaining mine,
        cells outside the frontier are safe. If the disjoint constraints
        tile the frontier exactly, the bound is exact, and a remainder
        equal to the number of outside cells makes them all mines.
        """
        remaining = scratch.num_mines - len(mines)
        covered: Set[Position] = set()
        for constraint in constraints:
            covered.update(constraint.cells)
        uncovered = self._unknown(scratch, mines) - covered
        if not uncovered:
            return None

        chosen: Set[Position] = set()
        lower_bound = 0
        ordered = sorted(
            constraints, key=lambda c: (-c.mine_count, len(c.cells), sorted(c.cells))
        )
        for constraint in ordered:
            if constraint.cells.isdisjoint(chosen):
                chosen.update(constraint.cells)
                lower_bound += constraint.mine_count

        if remaining == lower_bound:
            return Deduction(DeductionRule.GLOBAL_COUNT, safe=frozenset(uncovered))
        if chosen == covered and remaining - lower_bound == len(uncovered):
            return Deduction(DeductionRule.GLOBAL_COUNT, mines=frozenset(uncovered))
        return None

    # ========================================================================
    # Applying Deductions
    # ========================================================================

    @staticmethod
    def _apply(scratch: Board, deduction: Deduction, mines: Set[Position]) -> None:
        """Check a deduction against the layout and update knowledge."""
        for position in sorted(deduction.mines):
            if not scratch.get_cell(*position).is_mine:
                raise DeductionError(
                    f"{deduction.rule.name} marked safe cell {position} as a mine"
                )
            mines.add(position)

        for position in sorted(deduction.safe):
            cell = scratch.get_cell(*position)
            if cell.is_mine:
                raise DeductionError(
                    f"{deduction.rule.name} marked mine {position} as safe"
                )
            reveal_cell(scratch, *position)
