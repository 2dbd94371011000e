import logging
from typing import Optional, Sequence

from ..schemas import Constraint, LPProblem, ObjectiveKind, Solution, SolveOptions, Strategy
from .extract import extract_solution
from .phases import PhaseController
from .trace import IterationRecorder

logger = logging.getLogger(__name__)


def simplex_solve(problem: LPProblem, opts: Optional[SolveOptions] = None) -> Solution:
    """
    Tableau simplex with the strategy named in ``opts``.

    Every call owns its tableau, basis and iteration log, so concurrent or
    repeated solves never share state.
    """

    opts = opts or SolveOptions()
    recorder = IterationRecorder(enabled=opts.record_iterations)
    controller = PhaseController(opts, recorder)
    outcome = controller.run(problem)
    solution = extract_solution(problem, outcome, recorder.iterations, opts)
    logger.info(
        "Solved %s LP (%d vars, %d constraints) with %s: %s after %d pivots, objective %s",
        problem.kind,
        problem.num_variables,
        len(problem.constraints),
        solution.strategy,
        solution.status,
        solution.pivots,
        solution.objective_value,
    )
    return solution


def solve(
    objective: Sequence[float],
    constraints: Sequence[Constraint | dict],
    kind: ObjectiveKind = "maximize",
    strategy: Optional[Strategy] = None,
    options: Optional[SolveOptions] = None,
) -> Solution:
    """Build an LPProblem from plain data and solve it; ``strategy`` overrides ``options.strategy``."""

    problem = LPProblem(objective=list(objective), constraints=list(constraints), kind=kind)
    opts = options or SolveOptions()
    if strategy is not None:
        opts = SolveOptions.model_validate({**opts.model_dump(), "strategy": strategy})
    return simplex_solve(problem, opts)
