from typing import List

from ..schemas import Iteration, LPProblem, Solution, SolveOptions
from .phases import PhaseOutcome


def extract_solution(
    problem: LPProblem,
    outcome: PhaseOutcome,
    iterations: List[Iteration],
    opts: SolveOptions,
) -> Solution:
    """
    Read a terminal tableau into a Solution.

    The objective row's RHS holds the optimum of the maximisation form, so a
    minimisation result is its negation. Decision variables that are not
    basic are 0.
    """

    if outcome.status != "optimal":
        return Solution(
            status=outcome.status,
            strategy=outcome.strategy,
            objective_value=None,
            values=None,
            iterations=iterations,
            pivots=outcome.pivots,
            message=outcome.message or _DEFAULT_MESSAGES[outcome.status],
        )

    tableau = outcome.state.tableau
    objective = float(tableau[0, -1])
    if problem.kind == "minimize":
        objective = -objective
    if abs(objective) < opts.tol:
        objective = 0.0

    values = [0.0] * problem.num_variables
    for row_idx, col in enumerate(outcome.state.basis, start=1):
        if col < problem.num_variables:
            value = float(tableau[row_idx, -1])
            values[col] = 0.0 if abs(value) < opts.tol else value

    return Solution(
        status="optimal",
        strategy=outcome.strategy,
        objective_value=objective,
        values=values,
        iterations=iterations,
        pivots=outcome.pivots,
        message=outcome.message,
    )


_DEFAULT_MESSAGES = {
    "infeasible": "Infeasible.",
    "unbounded": "Unbounded.",
    "iteration_limit": "Hit iteration limit.",
}
