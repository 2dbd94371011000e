import numpy as np
import pytest

from simplex_dual.lp.pivot import pivot, select_entering_column, select_leaving_row
from simplex_dual.lp.tableau import build_tableau
from simplex_dual.schemas import Constraint, LPProblem


def make_production_lp() -> LPProblem:
    return LPProblem(
        objective=[3.0, 5.0],
        kind="maximize",
        constraints=[
            Constraint(coefficients=[1.0, 0.0], relation="<=", rhs=4.0),
            Constraint(coefficients=[0.0, 2.0], relation="<=", rhs=12.0),
            Constraint(coefficients=[3.0, 2.0], relation="<=", rhs=18.0),
        ],
    )


def test_entering_column_is_most_negative():
    tableau = build_tableau(make_production_lp()).tableau
    assert select_entering_column(tableau) == 1


def test_entering_column_ties_go_to_first():
    tableau = np.array([[-5.0, -5.0, 0.0], [1.0, 1.0, 4.0]])
    assert select_entering_column(tableau) == 0


def test_entering_column_none_when_optimal():
    tableau = np.array([[0.0, 2.0, 0.0, 36.0], [1.0, 1.0, 1.0, 4.0]])
    assert select_entering_column(tableau) is None


def test_entering_column_ignores_rhs_cell():
    tableau = np.array([[1.0, 0.0, -7.0], [1.0, 1.0, 4.0]])
    assert select_entering_column(tableau) is None


def test_bland_rule_takes_lowest_negative_index():
    tableau = np.array([[0.0, -1.0, -5.0, 0.0], [1.0, 1.0, 1.0, 4.0]])
    assert select_entering_column(tableau, rule="bland") == 1
    assert select_entering_column(tableau, rule="dantzig") == 2


def test_leaving_row_minimum_ratio():
    tableau = build_tableau(make_production_lp()).tableau
    # ratios on x2: row 2 -> 12/2 = 6, row 3 -> 18/2 = 9, row 1 has entry 0
    assert select_leaving_row(tableau, 1) == 2


def test_leaving_row_ties_go_to_first():
    tableau = np.array(
        [
            [-1.0, 0.0, 0.0, 0.0],
            [1.0, 1.0, 0.0, 2.0],
            [2.0, 0.0, 1.0, 4.0],
        ]
    )
    assert select_leaving_row(tableau, 0) == 1


def test_leaving_row_none_when_unbounded():
    tableau = np.array(
        [
            [0.0, -1.0, 1.0, 1.0],
            [1.0, -1.0, 1.0, 1.0],
        ]
    )
    assert select_leaving_row(tableau, 1) is None


def test_pivot_makes_unit_column():
    state = build_tableau(make_production_lp())
    element = pivot(state.tableau, 2, 1)

    assert element == pytest.approx(2.0)
    column = state.tableau[:, 1]
    assert column[2] == pytest.approx(1.0)
    assert np.allclose(np.delete(column, 2), 0.0, atol=1e-12)
    assert state.tableau[0, -1] == pytest.approx(30.0)
    assert state.tableau[3].tolist() == pytest.approx([3.0, 0.0, 0.0, -1.0, 1.0, 6.0])


def test_pivot_invariant_holds_on_random_tableau():
    rng = np.random.default_rng(7)
    tableau = rng.uniform(-5.0, 5.0, size=(5, 8))
    tableau[3, 4] = 2.5
    pivot(tableau, 3, 4)

    expected = np.zeros(5)
    expected[3] = 1.0
    assert np.allclose(tableau[:, 4], expected, atol=1e-12)


def test_pivot_rejects_zero_element():
    tableau = np.array([[-1.0, 0.0], [0.0, 1.0]])
    with pytest.raises(ValueError):
        pivot(tableau, 1, 0)
