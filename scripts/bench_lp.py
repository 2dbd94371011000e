#!/usr/bin/env python3
import json
import time
from pathlib import Path

from simplex_dual.duality import solve_via_dual
from simplex_dual.instances import generate_covering_lp, generate_random_lp
from simplex_dual.lp.simplex import simplex_solve
from simplex_dual.schemas import LPProblem, SolveOptions


def load_example(name: str) -> LPProblem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return LPProblem.model_validate(json.loads(path.read_text()))


def main() -> None:
    cases = [
        ("examples/production.json", load_example("production.json")),
        ("examples/diet.json", load_example("diet.json")),
    ]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_lp(6, 5, seed)))
        cases.append((f"covering-{seed}", generate_covering_lp(6, 5, seed)))

    print("name,method,status,objective,pivots,time_ms")
    for name, problem in cases:
        for strategy in ("standard", "big-m", "two-phase"):
            opts = SolveOptions(strategy=strategy, record_iterations=False)
            start = time.perf_counter()
            solution = simplex_solve(problem, opts)
            elapsed_ms = (time.perf_counter() - start) * 1000
            print(
                f"{name},{strategy},{solution.status},{solution.objective_value},{solution.pivots},{elapsed_ms:.2f}"
            )
        start = time.perf_counter()
        result = solve_via_dual(problem, SolveOptions(strategy="two-phase", record_iterations=False))
        elapsed_ms = (time.perf_counter() - start) * 1000
        primal = result.primal_solution
        print(f"{name},dual,{primal.status},{primal.objective_value},{primal.pivots},{elapsed_ms:.2f}")


if __name__ == "__main__":
    main()
