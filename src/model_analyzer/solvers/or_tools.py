from __future__ import annotations

from typing import Any, Dict, Optional

from ..exceptions import SolverUnavailableError
from ..schemas import LPModel, LPSolution, SolveOptions
from .base import empty_solution, solve_bounds


class OrToolsSolver:
    """OR-Tools ``pywraplp`` back end (CBC for MILPs and GLOP for LPs by default)."""

    name = "ortools"

    def __init__(self, backend: Optional[str] = None, silent: bool = False) -> None:
        self.backend = backend
        self.silent = silent

    def solve(self, model: LPModel, options: Optional[SolveOptions] = None) -> LPSolution:
        try:
            from ortools.linear_solver import pywraplp
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise SolverUnavailableError("ortools is not installed") from exc

        opts = options or SolveOptions(silent=self.silent)
        backend = self.backend or ("CBC" if model.is_mip() else "GLOP")
        solver = pywraplp.Solver.CreateSolver(backend)
        if solver is None:
            raise SolverUnavailableError(f"Failed to create OR-Tools {backend} solver")
        if self.silent or opts.silent:
            solver.SuppressOutput()
        else:
            solver.EnableOutput()
        if opts.time_limit is not None:
            solver.SetTimeLimit(int(opts.time_limit * 1000))

        bounds = solve_bounds(model)
        variables: Dict[str, Any] = {}
        for var, (lb, ub) in zip(model.variables, bounds):
            if lb is not None and ub is not None and lb > ub:
                return empty_solution(
                    "infeasible", f"Variable {var.name} has inconsistent bounds {lb}>{ub}"
                )
            low = lb if lb is not None else -solver.infinity()
            high = ub if ub is not None else solver.infinity()
            if var.is_integer or var.is_binary:
                variables[var.name] = solver.IntVar(low, high, var.name)
            else:
                variables[var.name] = solver.NumVar(low, high, var.name)

        for cons in model.constraints:
            lhs = solver.Sum(term.coef * variables[term.var] for term in cons.lhs.terms) + cons.lhs.constant
            if cons.cmp == "<=":
                solver.Add(lhs <= cons.rhs, cons.name)
            elif cons.cmp == ">=":
                solver.Add(lhs >= cons.rhs, cons.name)
            elif cons.cmp == "==":
                solver.Add(lhs == cons.rhs, cons.name)
            else:
                solver.Add(lhs >= cons.lower, f"{cons.name}__lo")
                solver.Add(lhs <= cons.rhs, f"{cons.name}__hi")

        objective = solver.Sum(term.coef * variables[term.var] for term in model.objective.terms) + model.objective.constant
        if model.sense == "max":
            solver.Maximize(objective)
        else:
            solver.Minimize(objective)

        result_status = solver.Solve()
        status_map = {
            pywraplp.Solver.OPTIMAL: "optimal",
            pywraplp.Solver.FEASIBLE: "almost_optimal",
            pywraplp.Solver.INFEASIBLE: "infeasible",
            pywraplp.Solver.UNBOUNDED: "unbounded",
            pywraplp.Solver.ABNORMAL: "error",
            pywraplp.Solver.NOT_SOLVED: "iteration_limit",
        }
        status = status_map.get(result_status, "error")
        iterations = solver.iterations() if hasattr(solver, "iterations") else 0

        if status not in ("optimal", "almost_optimal"):
            return empty_solution(status, f"OR-Tools returned status {status}", iterations)

        return LPSolution(
            status=status,
            objective_value=solver.Objective().Value(),
            x={name: variables[name].solution_value() for name in variables},
            iterations=iterations,
            message=f"Solved via OR-Tools {backend}",
        )
