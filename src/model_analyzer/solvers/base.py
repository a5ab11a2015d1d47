from __future__ import annotations

import math
from typing import FrozenSet, List, Optional, Protocol, Tuple

from ..model import check_references, effective_bounds
from ..schemas import LPModel, LPSolution, SolveOptions

OPTIMAL_STATUSES: FrozenSet[str] = frozenset({"optimal", "almost_optimal"})
INFEASIBLE_STATUSES: FrozenSet[str] = frozenset({"infeasible", "almost_infeasible"})


class Solver(Protocol):
    name: str
    silent: bool

    def solve(self, model: LPModel, options: Optional[SolveOptions] = None) -> LPSolution:
        ...


def solve_bounds(model: LPModel) -> List[Tuple[float | None, float | None]]:
    """Bounds as handed to a back end: fixed values win, binaries are clipped to [0, 1]."""

    check_references(model)
    bounds: List[Tuple[float | None, float | None]] = []
    for var in model.variables:
        if var.fixed is not None:
            lb, ub = var.fixed, var.fixed
        else:
            lb, ub = effective_bounds(var)
        if var.is_binary:
            lb = max(lb, 0.0)
            ub = min(ub, 1.0)
        bounds.append((None if math.isinf(lb) else lb, None if math.isinf(ub) else ub))
    return bounds


def empty_solution(status: str, message: str = "", iterations: int = 0) -> LPSolution:
    return LPSolution(
        status=status,
        objective_value=None,
        x=None,
        iterations=iterations,
        message=message,
    )
