from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, linprog, milp

from ..schemas import LPModel, LPSolution, SolveOptions
from .base import empty_solution, solve_bounds

logger = logging.getLogger(__name__)


class HighsSolver:
    """LP/MILP back end on top of the HiGHS solvers bundled with scipy."""

    name = "highs"

    def __init__(self, silent: bool = False) -> None:
        self.silent = silent

    def solve(self, model: LPModel, options: Optional[SolveOptions] = None) -> LPSolution:
        opts = options or SolveOptions(silent=self.silent)
        bounds = solve_bounds(model)
        for var, (lb, ub) in zip(model.variables, bounds):
            if lb is not None and ub is not None and lb > ub:
                return empty_solution(
                    "infeasible", f"Variable {var.name} has inconsistent bounds {lb}>{ub}"
                )

        c, constant = _build_objective(model)
        rows, row_lo, row_hi = _build_rows(model)
        sense_factor = 1.0 if model.sense == "min" else -1.0
        disp = not (self.silent or opts.silent)

        if model.is_mip():
            res = _solve_milp(model, c * sense_factor, rows, row_lo, row_hi, bounds, opts, disp)
            iterations = 0
        else:
            res = _solve_linprog(c * sense_factor, rows, row_lo, row_hi, bounds, opts, disp)
            iterations = int(getattr(res, "nit", 0) or 0)

        status = _map_status(res.status)
        if status != "optimal" or res.x is None:
            logger.debug("HiGHS finished with status %s: %s", status, res.message)
            return empty_solution(status, res.message or "", iterations)

        values = _map_variables(model, res.x)
        objective = float(res.fun * sense_factor + constant)
        return LPSolution(
            status="optimal",
            objective_value=objective,
            x=values,
            iterations=iterations,
            message=res.message or "",
        )


def _solve_linprog(c, rows, row_lo, row_hi, bounds, opts: SolveOptions, disp: bool):
    A_ub, b_ub, A_eq, b_eq = _split_rows(rows, row_lo, row_hi, len(c))
    options: Dict[str, object] = {"maxiter": opts.max_iters, "disp": disp}
    if opts.time_limit is not None:
        options["time_limit"] = opts.time_limit
    return linprog(
        c,
        A_ub=A_ub if A_ub.size else None,
        b_ub=b_ub if b_ub.size else None,
        A_eq=A_eq if A_eq.size else None,
        b_eq=b_eq if b_eq.size else None,
        bounds=bounds,
        method="highs",
        options=options,
    )


def _solve_milp(model: LPModel, c, rows, row_lo, row_hi, bounds, opts: SolveOptions, disp: bool):
    integrality = np.array(
        [1 if (var.is_integer or var.is_binary) else 0 for var in model.variables]
    )
    lb = np.array([-np.inf if low is None else low for low, _ in bounds], dtype=float)
    ub = np.array([np.inf if high is None else high for _, high in bounds], dtype=float)
    constraints = []
    if rows.shape[0]:
        constraints.append(LinearConstraint(rows, row_lo, row_hi))
    options: Dict[str, object] = {"disp": disp}
    if opts.time_limit is not None:
        options["time_limit"] = opts.time_limit
    return milp(
        c,
        integrality=integrality,
        bounds=Bounds(lb, ub),
        constraints=constraints,
        options=options,
    )


def _build_objective(model: LPModel) -> Tuple[np.ndarray, float]:
    c = np.zeros(len(model.variables))
    name_to_idx = model.variable_index()
    for term in model.objective.terms:
        c[name_to_idx[term.var]] += term.coef
    return c, model.objective.constant


def _build_rows(model: LPModel) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Every constraint as ``row_lo <= A x <= row_hi`` with the constant moved right."""

    n = len(model.variables)
    name_to_idx = model.variable_index()
    rows: List[List[float]] = []
    row_lo: List[float] = []
    row_hi: List[float] = []

    for cons in model.constraints:
        row = [0.0] * n
        for term in cons.lhs.terms:
            row[name_to_idx[term.var]] += term.coef
        shift = cons.lhs.constant
        if cons.cmp == "<=":
            lo, hi = -np.inf, cons.rhs - shift
        elif cons.cmp == ">=":
            lo, hi = cons.rhs - shift, np.inf
        elif cons.cmp == "==":
            lo, hi = cons.rhs - shift, cons.rhs - shift
        else:
            lo, hi = cons.lower - shift, cons.rhs - shift
        rows.append(row)
        row_lo.append(lo)
        row_hi.append(hi)

    return (
        np.array(rows, dtype=float) if rows else np.empty((0, n)),
        np.array(row_lo, dtype=float),
        np.array(row_hi, dtype=float),
    )


def _split_rows(
    rows: np.ndarray, row_lo: np.ndarray, row_hi: np.ndarray, n: int
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    A_ub: List[np.ndarray] = []
    b_ub: List[float] = []
    A_eq: List[np.ndarray] = []
    b_eq: List[float] = []
    for row, lo, hi in zip(rows, row_lo, row_hi):
        if lo == hi:
            A_eq.append(row)
            b_eq.append(hi)
            continue
        if np.isfinite(hi):
            A_ub.append(row)
            b_ub.append(hi)
        if np.isfinite(lo):
            A_ub.append(-row)
            b_ub.append(-lo)
    return (
        np.array(A_ub, dtype=float) if A_ub else np.empty((0, n)),
        np.array(b_ub, dtype=float) if b_ub else np.empty(0),
        np.array(A_eq, dtype=float) if A_eq else np.empty((0, n)),
        np.array(b_eq, dtype=float) if b_eq else np.empty(0),
    )


def _map_variables(model: LPModel, values: np.ndarray) -> Dict[str, float]:
    return {var.name: float(value) for var, value in zip(model.variables, values)}


def _map_status(code: int) -> str:
    mapping = {
        0: "optimal",
        1: "iteration_limit",
        2: "infeasible",
        3: "unbounded",
    }
    return mapping.get(code, "error")
