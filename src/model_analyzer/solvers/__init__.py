"""Solver back ends used to (re-)optimize models during the analysis."""

from __future__ import annotations

from typing import Callable, Dict, Union

from ..exceptions import SolverUnavailableError
from .base import INFEASIBLE_STATUSES, OPTIMAL_STATUSES, Solver
from .highs import HighsSolver
from .or_tools import OrToolsSolver

_REGISTRY: Dict[str, Callable[[], Solver]] = {
    "highs": HighsSolver,
    "ortools": OrToolsSolver,
    "cbc": lambda: OrToolsSolver(backend="CBC"),
    "scip": lambda: OrToolsSolver(backend="SCIP"),
    "glop": lambda: OrToolsSolver(backend="GLOP"),
}


def get_solver(solver: Union[str, Solver]) -> Solver:
    """Return ``solver`` itself, or a fresh instance when given a registry name."""

    if not isinstance(solver, str):
        return solver
    try:
        factory = _REGISTRY[solver.lower()]
    except KeyError as exc:
        known = ", ".join(sorted(_REGISTRY))
        raise SolverUnavailableError(f"Unknown solver '{solver}' (expected one of: {known}).") from exc
    return factory()


__all__ = [
    "HighsSolver",
    "INFEASIBLE_STATUSES",
    "OPTIMAL_STATUSES",
    "OrToolsSolver",
    "Solver",
    "get_solver",
]
