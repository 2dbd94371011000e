"""Tableau simplex engine: standard, Big-M and two-phase strategies."""

from .simplex import simplex_solve, solve
from .tableau import build_tableau
from .pivot import pivot, select_entering_column, select_leaving_row

__all__ = [
    "simplex_solve",
    "solve",
    "build_tableau",
    "pivot",
    "select_entering_column",
    "select_leaving_row",
]
