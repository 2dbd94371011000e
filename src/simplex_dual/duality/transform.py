import logging
from typing import List, Optional, Sequence

from ..lp.simplex import simplex_solve
from ..schemas import (
    Constraint,
    DualResult,
    LPProblem,
    ObjectiveKind,
    Solution,
    SolveOptions,
    VariableKind,
)

logger = logging.getLogger(__name__)

_CANONICAL_RELATION = {"maximize": "<=", "minimize": ">="}


def dual_problem(problem: LPProblem) -> LPProblem:
    """
    Dual of ``problem`` in the symmetric form.

    Primal right-hand sides become dual costs and column i of the primal
    constraint matrix becomes dual constraint i with right-hand side c_i.
    Every dual constraint gets the same relation, chosen by the primal
    objective kind alone, so the dual multipliers are taken as non-negative.
    """

    if not problem.constraints:
        raise ValueError("A problem without constraints has no dual variables.")

    canonical = _CANONICAL_RELATION[problem.kind]
    off_form = [idx + 1 for idx, cons in enumerate(problem.constraints) if cons.relation != canonical]
    if off_form:
        logger.warning(
            "Constraints %s are not '%s' for a %s problem; the dual assumes "
            "non-negative multipliers for them.",
            off_form,
            canonical,
            problem.kind,
        )

    A = problem.rows()
    relation = ">=" if problem.kind == "maximize" else "<="
    dual_constraints = [
        Constraint(coefficients=A[:, i].tolist(), relation=relation, rhs=problem.objective[i])
        for i in range(problem.num_variables)
    ]
    return LPProblem(
        objective=[cons.rhs for cons in problem.constraints],
        constraints=dual_constraints,
        kind="minimize" if problem.kind == "maximize" else "maximize",
    )


def convert_to_dual(
    objective: Sequence[float],
    constraints: Sequence[Constraint | dict],
    kind: ObjectiveKind = "maximize",
) -> LPProblem:
    primal = LPProblem(objective=list(objective), constraints=list(constraints), kind=kind)
    return dual_problem(primal)


def convert_to_primal_solution(
    dual_solution: Solution,
    primal_constraints: Sequence[Constraint],
    num_primal_variables: int,
    tol: float = 1e-9,
) -> Solution:
    """
    Map an optimal dual solution back onto the primal.

    Primal variable j pairs with the slack or surplus of dual constraint j.
    By complementary slackness it is 0 when that column is basic, otherwise
    its value is the column's entry in the final objective row. ``duals[i]``
    is dual variable y_i, read from the final basis for primal constraint i.
    """

    if dual_solution.status != "optimal":
        return _non_optimal_primal(dual_solution)

    final = dual_solution.iterations[-1]
    objective_row = final.tableau[0]
    basic_rows = {var.index: row for row, var in enumerate(final.basis, start=1)}

    values: List[float] = []
    for j in range(num_primal_variables):
        value = 0.0
        for col in final.columns:
            if col.constraint != j or col.kind not in (VariableKind.SLACK, VariableKind.SURPLUS):
                continue
            if col.index not in basic_rows:
                value = objective_row[col.index]
            break
        values.append(0.0 if abs(value) < tol else float(value))

    duals: List[float] = []
    for i in range(len(primal_constraints)):
        row = basic_rows.get(i)
        value = final.tableau[row][-1] if row is not None else 0.0
        duals.append(0.0 if abs(value) < tol else float(value))

    return Solution(
        status="optimal",
        strategy=dual_solution.strategy,
        objective_value=dual_solution.objective_value,
        values=values,
        duals=duals,
        iterations=dual_solution.iterations,
        pivots=dual_solution.pivots,
        message=dual_solution.message,
    )


def _non_optimal_primal(dual_solution: Solution) -> Solution:
    # weak duality: an unbounded dual leaves no feasible primal point
    status = dual_solution.status
    message = dual_solution.message
    if status == "unbounded":
        status, message = "infeasible", "Dual is unbounded, so the primal is infeasible."
    elif status == "infeasible":
        status, message = "unbounded", "Dual is infeasible, so the primal is unbounded or infeasible."
    return Solution(
        status=status,
        strategy=dual_solution.strategy,
        objective_value=None,
        values=None,
        iterations=dual_solution.iterations,
        pivots=dual_solution.pivots,
        message=message,
    )


def solve_via_dual(problem: LPProblem, opts: Optional[SolveOptions] = None) -> DualResult:
    """Solve ``problem`` through its dual; two-phase unless ``opts`` says otherwise."""

    opts = opts or SolveOptions(strategy="two-phase")
    dual = dual_problem(problem)
    dual_solution = simplex_solve(dual, opts)
    primal_solution = convert_to_primal_solution(
        dual_solution, problem.constraints, problem.num_variables, tol=opts.tol
    )
    logger.info(
        "Dual solve finished: %s, objective %s",
        primal_solution.status,
        primal_solution.objective_value,
    )
    return DualResult(primal_solution=primal_solution, dual_problem=dual, dual_solution=dual_solution)


def solve_dual(
    objective: Sequence[float],
    constraints: Sequence[Constraint | dict],
    kind: ObjectiveKind = "maximize",
    options: Optional[SolveOptions] = None,
) -> DualResult:
    primal = LPProblem(objective=list(objective), constraints=list(constraints), kind=kind)
    return solve_via_dual(primal, options)
