import random
from typing import List, Optional

from .schemas import Constraint, LPProblem


def generate_random_lp(num_vars: int, num_constraints: int, seed: Optional[int] = None) -> LPProblem:
    """Random ``maximize`` LP with positive data and ``<=`` rows: always feasible and bounded."""

    rng = random.Random(seed)
    constraints: List[Constraint] = []
    for _ in range(num_constraints):
        coefficients = [rng.uniform(0.5, 5.0) for _ in range(num_vars)]
        rhs = rng.uniform(num_vars * 2.0, num_vars * 6.0)
        constraints.append(Constraint(coefficients=coefficients, relation="<=", rhs=rhs))
    objective = [rng.uniform(1.0, 4.0) for _ in range(num_vars)]
    return LPProblem(objective=objective, constraints=constraints, kind="maximize")


def generate_covering_lp(num_vars: int, num_constraints: int, seed: Optional[int] = None) -> LPProblem:
    """Random ``minimize`` LP with ``>=`` rows (the dual shape of :func:`generate_random_lp`)."""

    rng = random.Random(seed)
    constraints = [
        Constraint(
            coefficients=[rng.uniform(0.5, 5.0) for _ in range(num_vars)],
            relation=">=",
            rhs=rng.uniform(1.0, 10.0),
        )
        for _ in range(num_constraints)
    ]
    objective = [rng.uniform(1.0, 4.0) for _ in range(num_vars)]
    return LPProblem(objective=objective, constraints=constraints, kind="minimize")
