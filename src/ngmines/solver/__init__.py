"""
No-guess solver module.

Certifies that a board can be cleared from an opening cell by
deduction alone.
"""
from .constraint import Constraint
from .result import (
    Deduction,
    DeductionRule,
    Found,
    NotSolvable,
    SimulationResult,
    SolveResult,
)
from .no_guess import NoGuessSolver, DeductionError

__all__ = [
    "Constraint",
    "Deduction",
    "DeductionRule",
    "Found",
    "NotSolvable",
    "SimulationResult",
    "SolveResult",
    "NoGuessSolver",
    "DeductionError",
]
