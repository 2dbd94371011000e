import os

from mcp.server.fastmcp import FastMCP

from .duality import dual_problem, format_problem, solve_via_dual
from .lp.simplex import simplex_solve
from .logging_config import setup_logging
from .schemas import LPProblem, SolveOptions

mcp = FastMCP("Simplex Dual")


@mcp.tool()
def solve_linear_program(problem: LPProblem, options: SolveOptions | None = None) -> dict:
    "Solve an LP with the tableau simplex (standard, big-m or two-phase) and return the solution with its iterations."
    opts = options or SolveOptions()
    return simplex_solve(problem, opts).model_dump(mode="json")


@mcp.tool()
def convert_problem_to_dual(problem: LPProblem) -> dict:
    "Return the dual LP as JSON together with a plain-text rendering."
    dual = dual_problem(problem)
    return {"dual_problem": dual.model_dump(mode="json"), "text": format_problem(dual, symbol="y")}


@mcp.tool()
def solve_via_dual_problem(problem: LPProblem, options: SolveOptions | None = None) -> dict:
    "Solve an LP through its dual and map the dual optimum back to primal values."
    return solve_via_dual(problem, options).model_dump(mode="json")


def main() -> None:
    setup_logging(os.environ.get("SIMPLEX_DUAL_LOG_LEVEL", "INFO"))
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
