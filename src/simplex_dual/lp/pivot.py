from typing import Optional, Sequence

import numpy as np

from ..schemas import PivotRule


def select_entering_column(
    tableau: np.ndarray,
    tol: float = 1e-9,
    rule: PivotRule = "dantzig",
) -> Optional[int]:
    """
    Pick the entering column from the objective row.

    Dantzig's rule takes the most negative reduced cost (first one on ties),
    Bland's rule the lowest-index negative one. ``None`` means the tableau is
    optimal.
    """

    objective = tableau[0, :-1]
    best_col: Optional[int] = None
    best_val = -tol
    for j, value in enumerate(objective):
        if value >= -tol:
            continue
        if rule == "bland":
            return j
        if value < best_val:
            best_val = value
            best_col = j
    return best_col


def select_leaving_row(
    tableau: np.ndarray,
    col: int,
    tol: float = 1e-9,
    rule: PivotRule = "dantzig",
    basis: Optional[Sequence[int]] = None,
) -> Optional[int]:
    """
    Minimum-ratio test on ``col``; returns a tableau row index (>= 1).

    Only rows with a strictly positive entry compete. Ties go to the first
    row, or under Bland's rule to the row whose basic column is smallest.
    ``None`` means the column is unbounded.
    """

    best_row: Optional[int] = None
    best_ratio = np.inf
    for i in range(1, tableau.shape[0]):
        entry = tableau[i, col]
        if entry <= tol:
            continue
        ratio = tableau[i, -1] / entry
        if best_row is None or ratio < best_ratio - tol:
            best_row, best_ratio = i, ratio
        elif rule == "bland" and basis is not None and abs(ratio - best_ratio) <= tol:
            if basis[i - 1] < basis[best_row - 1]:
                best_row, best_ratio = i, ratio
    return best_row


def pivot(tableau: np.ndarray, row: int, col: int) -> float:
    """
    Gauss-Jordan pivot on ``tableau[row, col]`` in place.

    Returns the pivot element. Afterwards ``col`` is a unit column with the 1
    in ``row``.
    """

    element = float(tableau[row, col])
    if element == 0.0:
        raise ValueError(f"Zero pivot element at row {row}, column {col}.")

    tableau[row] /= element
    factors = tableau[:, col].copy()
    factors[row] = 0.0
    tableau -= np.outer(factors, tableau[row])

    tableau[:, col] = 0.0
    tableau[row, col] = 1.0
    return element
