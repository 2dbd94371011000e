from typing import List, Sequence

from ..schemas import LPProblem

_RELATION_SYMBOLS = {"<=": "≤", "=": "=", ">=": "≥"}


def _fmt_number(value: float) -> str:
    if abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    return f"{value:g}"


def format_expression(coefficients: Sequence[float], symbol: str = "x") -> str:
    parts: List[str] = []
    for idx, coef in enumerate(coefficients):
        term = f"{_fmt_number(abs(coef))}{symbol}{idx + 1}"
        if idx == 0:
            parts.append(f"-{term}" if coef < 0 else term)
        else:
            parts.append(f"{'-' if coef < 0 else '+'} {term}")
    return " ".join(parts)


def format_problem(problem: LPProblem, symbol: str = "x") -> str:
    """Plain-text rendering, e.g. for showing a derived dual problem."""

    lines = [f"{problem.kind.capitalize()} Z = {format_expression(problem.objective, symbol)}"]
    if problem.constraints:
        lines.extend(["", "Subject to:"])
        A = problem.rows()
        for row, cons in zip(A, problem.constraints):
            lines.append(
                f"{format_expression(row, symbol)} {_RELATION_SYMBOLS[cons.relation]} {_fmt_number(cons.rhs)}"
            )
    bounds = ", ".join(f"{symbol}{idx + 1} ≥ 0" for idx in range(problem.num_variables))
    lines.extend(["", f"With {bounds}"])
    return "\n".join(lines)
