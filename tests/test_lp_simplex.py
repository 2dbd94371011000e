import json
from pathlib import Path

import numpy as np
import pytest
from pydantic import ValidationError

from simplex_dual import solve
from simplex_dual.instances import generate_covering_lp, generate_random_lp
from simplex_dual.lp.simplex import simplex_solve
from simplex_dual.schemas import Constraint, LPProblem, SolveOptions, VariableKind

STRATEGIES = ("standard", "big-m", "two-phase")


def load_example(name: str) -> LPProblem:
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", name).read_text())
    return LPProblem.model_validate(data)


def test_production_example_is_optimal():
    solution = simplex_solve(load_example("production.json"), SolveOptions())

    assert solution.status == "optimal"
    assert solution.feasible and solution.optimal and not solution.unbounded
    assert solution.objective_value == pytest.approx(36.0)
    assert solution.values == pytest.approx([2.0, 6.0])
    assert solution.pivots == 2


def test_all_le_problem_same_result_for_every_strategy():
    problem = load_example("production.json")
    results = [simplex_solve(problem, SolveOptions(strategy=s)) for s in STRATEGIES]

    for solution, strategy in zip(results, STRATEGIES):
        assert solution.strategy == strategy
        assert solution.objective_value == pytest.approx(36.0)
        assert solution.values == pytest.approx([2.0, 6.0])
        assert [it.tableau for it in solution.iterations] == [it.tableau for it in results[0].iterations]


@pytest.mark.parametrize("strategy", ["big-m", "two-phase"])
def test_diet_problem_with_artificials(strategy):
    solution = simplex_solve(load_example("diet.json"), SolveOptions(strategy=strategy))

    assert solution.status == "optimal"
    assert solution.objective_value == pytest.approx(9.6, rel=1e-6)
    assert solution.values == pytest.approx([0.8, 3.6], rel=1e-6)


def test_standard_strategy_switches_to_two_phase_when_artificials_needed(caplog):
    with caplog.at_level("WARNING", logger="simplex_dual"):
        solution = simplex_solve(load_example("diet.json"), SolveOptions(strategy="standard"))

    assert solution.strategy == "two-phase"
    assert solution.objective_value == pytest.approx(9.6, rel=1e-6)
    assert "two-phase" in caplog.text


def test_two_phase_reports_infeasible():
    solution = simplex_solve(load_example("infeasible.json"), SolveOptions(strategy="two-phase"))

    assert solution.status == "infeasible"
    assert solution.feasible is False
    assert solution.objective_value is None
    assert solution.values is None
    assert {it.phase for it in solution.iterations} == {1}


def test_big_m_reports_infeasible_when_artificial_stays_basic():
    solution = simplex_solve(load_example("infeasible.json"), SolveOptions(strategy="big-m"))

    assert solution.status == "infeasible"
    assert solution.values is None


@pytest.mark.parametrize("strategy", ["big-m", "two-phase"])
def test_infeasible_with_free_improving_column(strategy):
    # x2 appears in no row, so Big-M finds a ray while a2 is still basic at 3
    constraints = [
        {"coefficients": [1.0, 0.0], "relation": "<=", "rhs": 2.0},
        {"coefficients": [1.0, 0.0], "relation": ">=", "rhs": 5.0},
    ]
    solution = solve([0.0, 1.0], constraints, "maximize", strategy)

    assert solution.status == "infeasible"
    assert solution.feasible is False
    assert solution.unbounded is False
    assert solution.values is None


def test_solve_uses_strategy_from_options():
    constraints = [{"coefficients": [1.0], "relation": ">=", "rhs": 1.0}]
    solution = solve([1.0], constraints, "minimize", options=SolveOptions(strategy="big-m"))

    assert solution.strategy == "big-m"
    assert solution.objective_value == pytest.approx(1.0)


def test_explicit_strategy_overrides_options():
    constraints = [{"coefficients": [1.0], "relation": ">=", "rhs": 1.0}]
    solution = solve([1.0], constraints, "minimize", "two-phase", SolveOptions(strategy="big-m", max_iters=5))

    assert solution.strategy == "two-phase"
    assert solution.objective_value == pytest.approx(1.0)


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_unbounded_problem(strategy):
    solution = solve([1.0, 0.0], [{"coefficients": [1.0, -1.0], "relation": "<=", "rhs": 1.0}], "maximize", strategy)

    assert solution.unbounded is True
    assert solution.feasible is True
    assert solution.optimal is False
    assert solution.objective_value is None
    assert solution.values is None


def test_minimize_keeps_sign_of_negative_optimum():
    solution = solve([-1.0], [Constraint(coefficients=[1.0], relation="<=", rhs=3.0)], "minimize")

    assert solution.objective_value == pytest.approx(-3.0)
    assert solution.values == pytest.approx([3.0])


def test_minimize_positive_optimum():
    solution = solve([1.0, 1.0], [{"coefficients": [1.0, 1.0], "relation": ">=", "rhs": 4.0}], "minimize", "two-phase")

    assert solution.objective_value == pytest.approx(4.0)
    assert sum(solution.values) == pytest.approx(4.0)


@pytest.mark.parametrize("strategy", ["big-m", "two-phase"])
def test_equality_constraints(strategy):
    constraints = [
        {"coefficients": [1.0, 1.0], "relation": "==", "rhs": 4.0},
        {"coefficients": [1.0, -1.0], "relation": "=", "rhs": 0.0},
    ]
    solution = solve([1.0, 1.0], constraints, "minimize", strategy)

    assert solution.status == "optimal"
    assert solution.objective_value == pytest.approx(4.0)
    assert solution.values == pytest.approx([2.0, 2.0])


def test_redundant_equality_row_is_dropped_after_phase_one():
    constraints = [
        {"coefficients": [1.0, 1.0], "relation": "=", "rhs": 2.0},
        {"coefficients": [2.0, 2.0], "relation": "=", "rhs": 4.0},
    ]
    solution = solve([1.0, 0.0], constraints, "maximize", "two-phase")

    assert solution.status == "optimal"
    assert solution.objective_value == pytest.approx(2.0)
    assert solution.values == pytest.approx([2.0, 0.0])
    assert len(solution.iterations[-1].tableau) == 2


def test_iteration_limit_is_not_reported_as_optimal():
    solution = simplex_solve(load_example("production.json"), SolveOptions(max_iters=1))

    assert solution.status == "iteration_limit"
    assert solution.feasible is False
    assert solution.optimal is False
    assert solution.unbounded is False
    assert solution.objective_value is None
    assert solution.pivots == 1
    assert "iteration limit" in solution.message


def test_iterations_trace_pivots():
    solution = simplex_solve(load_example("production.json"), SolveOptions())
    first, second, third = solution.iterations

    assert first.entering is None and first.pivot_row is None and first.phase is None
    assert (second.entering, second.leaving) == ("x2", "s2")
    assert (second.pivot_row, second.pivot_col) == (2, 1)
    assert second.pivot_element == pytest.approx(2.0)
    assert (third.entering, third.leaving) == ("x1", "s3")
    assert third.pivot_element == pytest.approx(3.0)
    assert [var.label for var in third.basis] == ["s1", "x2", "x1"]
    assert first.tableau[0] == (-3.0, -5.0, 0.0, 0.0, 0.0, 0.0)


def test_two_phase_tags_iterations_with_phases():
    solution = simplex_solve(load_example("diet.json"), SolveOptions(strategy="two-phase"))
    phases = [it.phase for it in solution.iterations]

    assert phases[0] == 1
    assert phases[-1] == 2
    assert phases == sorted(phases)
    phase_two = [it for it in solution.iterations if it.phase == 2]
    for it in phase_two:
        assert all(col.kind is not VariableKind.ARTIFICIAL for col in it.columns)


def test_iterations_are_frozen():
    solution = simplex_solve(load_example("production.json"), SolveOptions())
    with pytest.raises(ValidationError):
        solution.iterations[0].entering = "x9"


def test_repeated_solves_do_not_share_state():
    problem = load_example("production.json")
    first = simplex_solve(problem, SolveOptions())
    second = simplex_solve(problem, SolveOptions())

    assert first.iterations == second.iterations
    assert first.iterations[0] is not second.iterations[0]


def test_bland_rule_reaches_same_optimum():
    solution = simplex_solve(load_example("production.json"), SolveOptions(pivot_rule="bland"))
    assert solution.objective_value == pytest.approx(36.0)
    assert solution.values == pytest.approx([2.0, 6.0])


def test_record_iterations_off_keeps_final_state_only():
    solution = simplex_solve(load_example("production.json"), SolveOptions(record_iterations=False))

    assert len(solution.iterations) == 1
    assert solution.pivots == 2
    assert solution.iterations[0].tableau[0][-1] == pytest.approx(36.0)


def test_small_big_m_is_reported():
    solution = simplex_solve(load_example("diet.json"), SolveOptions(strategy="big-m", big_m=10.0))
    assert "Big-M" in solution.message


@pytest.mark.parametrize("seed", range(5))
def test_random_values_are_non_negative(seed):
    for problem in (generate_random_lp(5, 4, seed), generate_covering_lp(4, 5, seed)):
        for strategy in STRATEGIES:
            solution = simplex_solve(problem, SolveOptions(strategy=strategy))
            assert solution.status == "optimal"
            assert min(solution.values) >= -1e-9
            A, b = problem.rows(), problem.rhs()
            x = np.array(solution.values)
            if problem.kind == "maximize":
                assert np.all(A @ x <= b + 1e-6)
            else:
                assert np.all(A @ x >= b - 1e-6)
            assert float(np.dot(problem.objective, x)) == pytest.approx(solution.objective_value, rel=1e-6)


def test_matches_scipy_highs():
    linprog = pytest.importorskip("scipy.optimize").linprog
    for seed in range(4):
        problem = generate_random_lp(6, 5, seed)
        ours = simplex_solve(problem, SolveOptions())
        ref = linprog(-np.array(problem.objective), A_ub=problem.rows(), b_ub=problem.rhs(), method="highs")
        assert ref.success
        assert ours.objective_value == pytest.approx(-ref.fun, rel=1e-6)


def test_constraint_longer_than_objective_is_rejected():
    with pytest.raises(ValidationError):
        LPProblem(objective=[1.0], constraints=[Constraint(coefficients=[1.0, 2.0], relation="<=", rhs=3.0)])


def test_empty_objective_is_rejected():
    with pytest.raises(ValueError):
        LPProblem(objective=[], constraints=[])


def test_missing_rhs_defaults_to_zero():
    cons = Constraint.model_validate({"coefficients": [1.0], "relation": "≥"})
    assert cons.rhs == 0.0
    assert cons.relation == ">="


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValidationError):
        solve([1.0], [{"coefficients": [1.0], "relation": "<=", "rhs": 1.0}], "maximize", "simplex-x")
