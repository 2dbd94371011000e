import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..schemas import LPProblem, ObjectiveKind, Relation, Strategy, TableauVariable, VariableKind

logger = logging.getLogger(__name__)

_FLIPPED: dict = {"<=": ">=", ">=": "<=", "=": "="}


@dataclass
class StandardTableau:
    """Mutable tableau state owned by a single solve call.

    Row 0 is the objective row, rows 1..m are constraints, the last column is
    the right-hand side. ``basis[i]`` is the column basic in row ``i + 1``.
    """

    tableau: np.ndarray
    basis: List[int]
    columns: List[TableauVariable]
    num_decision: int
    num_slack: int
    num_surplus: int
    num_artificial: int
    kind: ObjectiveKind
    costs: np.ndarray = field(repr=False)

    @property
    def num_rows(self) -> int:
        return self.tableau.shape[0] - 1

    @property
    def artificial_columns(self) -> List[int]:
        return [col.index for col in self.columns if col.kind is VariableKind.ARTIFICIAL]

    def basic_variables(self) -> List[TableauVariable]:
        return [self.columns[idx] for idx in self.basis]


def normalised_rows(problem: LPProblem) -> Tuple[np.ndarray, np.ndarray, List[Relation]]:
    """Return A, b and relations with every right-hand side made non-negative."""

    A = problem.rows()
    b = problem.rhs()
    relations: List[Relation] = [cons.relation for cons in problem.constraints]
    for i in range(len(relations)):
        if b[i] < 0:
            A[i] = -A[i]
            b[i] = -b[i]
            relations[i] = _FLIPPED[relations[i]]
    return A, b, relations


def needs_artificials(problem: LPProblem) -> bool:
    _, _, relations = normalised_rows(problem)
    return any(rel != "<=" for rel in relations)


def maximisation_costs(problem: LPProblem) -> np.ndarray:
    """Objective coefficients of the equivalent maximisation problem."""
    c = np.array(problem.objective, dtype=float)
    return c if problem.kind == "maximize" else -c


def check_big_m(problem: LPProblem, big_m: float) -> Optional[str]:
    """Warn when M does not dominate the problem data.

    A fixed M only works while it outweighs every cost it competes with; an
    M close to the data scale can return a wrong optimum or hide infeasibility.
    """

    scale = max(
        [abs(v) for v in problem.objective]
        + [abs(v) for cons in problem.constraints for v in cons.coefficients]
        + [abs(cons.rhs) for cons in problem.constraints]
        + [1.0]
    )
    if big_m < 1e3 * scale:
        return (
            f"Big-M value {big_m:g} is less than 1e3 times the largest problem "
            f"coefficient ({scale:g}); the Big-M result may be wrong."
        )
    return None


def build_tableau(problem: LPProblem, strategy: Strategy = "standard", big_m: float = 1e6) -> StandardTableau:
    """
    Build the initial canonical tableau for ``problem``.

    Columns are laid out decision | slack | surplus | artificial | RHS. Slack
    and artificial columns start basic. With ``strategy="big-m"`` the
    artificial columns carry the penalty M and row 0 is reduced so they read
    0, which keeps the start canonical.
    """

    A, b, relations = normalised_rows(problem)
    m, n = A.shape

    num_slack = sum(1 for rel in relations if rel == "<=")
    num_surplus = sum(1 for rel in relations if rel == ">=")
    num_artificial = sum(1 for rel in relations if rel != "<=")
    width = n + num_slack + num_surplus + num_artificial + 1

    columns: List[TableauVariable] = [
        TableauVariable(index=j, kind=VariableKind.DECISION, ordinal=j + 1) for j in range(n)
    ]
    extra: List[Optional[TableauVariable]] = [None] * (width - 1 - n)

    tableau = np.zeros((m + 1, width), dtype=float)
    basis: List[int] = []

    slack_idx = n
    surplus_idx = n + num_slack
    artificial_idx = n + num_slack + num_surplus

    def add_column(idx: int, kind: VariableKind, ordinal: int, row: int) -> None:
        extra[idx - n] = TableauVariable(index=idx, kind=kind, ordinal=ordinal, constraint=row)

    for i, rel in enumerate(relations):
        row = tableau[i + 1]
        row[:n] = A[i]
        row[-1] = b[i]
        if rel == "<=":
            row[slack_idx] = 1.0
            add_column(slack_idx, VariableKind.SLACK, slack_idx - n + 1, i)
            basis.append(slack_idx)
            slack_idx += 1
            continue
        if rel == ">=":
            row[surplus_idx] = -1.0
            add_column(surplus_idx, VariableKind.SURPLUS, surplus_idx - n - num_slack + 1, i)
            surplus_idx += 1
        row[artificial_idx] = 1.0
        add_column(
            artificial_idx,
            VariableKind.ARTIFICIAL,
            artificial_idx - n - num_slack - num_surplus + 1,
            i,
        )
        basis.append(artificial_idx)
        artificial_idx += 1

    columns.extend(col for col in extra if col is not None)

    costs = maximisation_costs(problem)
    tableau[0, :n] = -costs

    if strategy == "big-m" and num_artificial:
        first_art = n + num_slack + num_surplus
        tableau[0, first_art : first_art + num_artificial] = big_m
        for row_idx, col in enumerate(basis, start=1):
            if columns[col].kind is VariableKind.ARTIFICIAL:
                tableau[0] -= big_m * tableau[row_idx]

    logger.debug(
        "Built %s tableau: %d rows, %d decision, %d slack, %d surplus, %d artificial",
        strategy,
        m,
        n,
        num_slack,
        num_surplus,
        num_artificial,
    )

    return StandardTableau(
        tableau=tableau,
        basis=basis,
        columns=columns,
        num_decision=n,
        num_slack=num_slack,
        num_surplus=num_surplus,
        num_artificial=num_artificial,
        kind=problem.kind,
        costs=costs,
    )
