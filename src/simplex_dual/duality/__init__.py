"""Primal/dual transformation helpers."""

from .transform import (
    convert_to_dual,
    convert_to_primal_solution,
    dual_problem,
    solve_dual,
    solve_via_dual,
)
from .format import format_problem

__all__ = [
    "convert_to_dual",
    "convert_to_primal_solution",
    "dual_problem",
    "solve_dual",
    "solve_via_dual",
    "format_problem",
]
