from mcp.server.fastmcp import FastMCP

from .infeasibility import DiagnosisCascade, explain, summarize
from .model import optimize
from .schemas import AnalyzerOptions, LPModel, SolveOptions
from .solvers import get_solver

mcp = FastMCP("MCP Model Analyzer")


@mcp.tool()
def solve_model(model: LPModel, solver: str = "highs", options: SolveOptions | None = None) -> dict:
    "Solve an LP/MILP and return the solution dict."
    opts = options or SolveOptions(silent=True)
    return get_solver(solver).solve(model, opts).model_dump()


@mcp.tool()
def analyze_infeasibility(
    model: LPModel,
    solver: str | None = "highs",
    solve_first: bool = True,
    options: AnalyzerOptions | None = None,
    verbose: bool = False,
) -> dict:
    "Explain infeasibility: bound conflicts, impossible constraint ranges, or one IIS."
    opts = options or AnalyzerOptions()
    backend = get_solver(solver) if solver is not None else None
    if backend is not None and solve_first and model.status is None:
        optimize(model, backend, opts.solver_options)
    result = DiagnosisCascade(opts).run(model, backend)
    report = result.model_dump()
    report["status"] = model.status
    report["summary"] = summarize(result, verbose=verbose)
    return report


@mcp.tool()
def explain_issue_type(kind: str) -> str:
    "Describe what an issue kind means and how to fix it."
    return explain(kind, verbose=True)


if __name__ == "__main__":
    mcp.run()
