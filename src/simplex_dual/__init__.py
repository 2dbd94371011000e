"""Tableau simplex solver with Big-M, two-phase and duality support."""

from .duality import convert_to_dual, solve_dual
from .lp import simplex_solve, solve
from .schemas import Constraint, DualResult, LPProblem, Solution, SolveOptions

__all__ = [
    "solve",
    "simplex_solve",
    "convert_to_dual",
    "solve_dual",
    "Constraint",
    "LPProblem",
    "Solution",
    "SolveOptions",
    "DualResult",
]
