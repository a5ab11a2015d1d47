"""Operations on :class:`LPModel` used by the analyzers.

The IIS search works on a private copy of the caller's model and edits it in
place: rows get elastic slack columns, slacks get fixed and released, and the
copy is re-solved many times. Everything it needs from the model container
lives here so that the search itself only talks in names.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .exceptions import InvalidModelError, ModelAnalyzerError
from .schemas import LinearExpr, LinearTerm, LPModel, LPSolution, SolveOptions, Variable

if TYPE_CHECKING:  # pragma: no cover
    from .solvers.base import Solver

SlackTerms = List[Tuple[str, float]]


class ReferenceMap:
    """Bidirectional constraint mapping between an original model and its copy."""

    def __init__(self, pairs: List[Tuple[str, str]]):
        self._to_copy: Dict[str, str] = {}
        self._to_original: Dict[str, str] = {}
        for original, copied in pairs:
            self._to_copy[original] = copied
            self._to_original[copied] = original

    def to_copy(self, original: str) -> str:
        return self._to_copy[original]

    def to_original(self, copied: str) -> Optional[str]:
        return self._to_original.get(copied)

    def __contains__(self, original: str) -> bool:
        return original in self._to_copy

    def __len__(self) -> int:
        return len(self._to_copy)


def effective_bounds(var: Variable) -> Tuple[float, float]:
    """Lower/upper bound of ``var``, falling back to its fixed value, then to +-inf."""

    if var.lb is not None:
        lb = var.lb
    elif var.fixed is not None:
        lb = var.fixed
    else:
        lb = -math.inf
    if var.ub is not None:
        ub = var.ub
    elif var.fixed is not None:
        ub = var.fixed
    else:
        ub = math.inf
    return lb, ub


def check_references(model: LPModel) -> None:
    names = model.variable_index()
    for term in model.objective.terms:
        if term.var not in names:
            raise InvalidModelError(f"Objective references unknown variable '{term.var}'.")
    for cons in model.constraints:
        for term in cons.lhs.terms:
            if term.var not in names:
                raise InvalidModelError(
                    f"Constraint '{cons.name}' references unknown variable '{term.var}'."
                )


def copy_model(model: LPModel) -> Tuple[LPModel, ReferenceMap]:
    new_model = model.model_copy(deep=True)
    pairs = [(orig.name, new.name) for orig, new in zip(model.constraints, new_model.constraints)]
    return new_model, ReferenceMap(pairs)


def get_variable(model: LPModel, name: str) -> Variable:
    for var in model.variables:
        if var.name == name:
            return var
    raise InvalidModelError(f"Unknown variable '{name}'.")


def add_variable(model: LPModel, base_name: str, lb: float | None = None, ub: float | None = None) -> str:
    existing = set(model.variable_index())
    name = base_name
    suffix = 1
    while name in existing:
        name = f"{base_name}_{suffix}"
        suffix += 1
    model.variables.append(Variable(name=name, lb=lb, ub=ub))
    return name


def relax_with_penalty(model: LPModel, penalty: float = 1.0) -> Dict[str, SlackTerms]:
    """Make every row elastic and replace the objective by the total slack penalty.

    ``<=`` rows receive ``-s``, ``>=`` rows ``+s`` and two-sided rows
    ``+s_pos - s_neg``; all slacks are non-negative. Returns the slack terms
    added to each row, keyed by constraint name in model order.
    """

    added: Dict[str, SlackTerms] = {}
    penalty_terms: List[LinearTerm] = []
    for cons in model.constraints:
        if cons.cmp == "<=":
            slack = add_variable(model, f"{cons.name}__slack_lo", lb=0.0)
            terms = [(slack, -1.0)]
        elif cons.cmp == ">=":
            slack = add_variable(model, f"{cons.name}__slack_up", lb=0.0)
            terms = [(slack, 1.0)]
        else:
            pos = add_variable(model, f"{cons.name}__slack_up", lb=0.0)
            neg = add_variable(model, f"{cons.name}__slack_lo", lb=0.0)
            terms = [(pos, 1.0), (neg, -1.0)]
        for slack, coef in terms:
            cons.lhs.terms.append(LinearTerm(var=slack, coef=coef))
            penalty_terms.append(LinearTerm(var=slack, coef=penalty))
        added[cons.name] = terms

    model.sense = "min"
    model.objective = LinearExpr(terms=penalty_terms, constant=0.0)
    model.status = None
    model.values = None
    return added


def fix_variable(model: LPModel, name: str, value: float) -> None:
    """Fix ``name`` to ``value``, dropping any bounds it had."""

    var = get_variable(model, name)
    var.lb = None
    var.ub = None
    var.fixed = value


def unfix_variable(model: LPModel, name: str) -> None:
    var = get_variable(model, name)
    if var.fixed is None:
        raise ModelAnalyzerError(f"Variable '{name}' is not fixed.")
    var.fixed = None


def is_fixed(model: LPModel, name: str) -> bool:
    return get_variable(model, name).fixed is not None


def has_lower_bound(model: LPModel, name: str) -> bool:
    return get_variable(model, name).lb is not None


def set_lower_bound(model: LPModel, name: str, value: float) -> None:
    get_variable(model, name).lb = value


def set_upper_bound(model: LPModel, name: str, value: float) -> None:
    get_variable(model, name).ub = value


def optimize(model: LPModel, solver: "Solver", options: Optional[SolveOptions] = None) -> LPSolution:
    """Solve ``model`` in place: the status and values are stored on the model."""

    solution = solver.solve(model, options or SolveOptions(silent=solver.silent))
    model.status = solution.status
    model.values = dict(solution.x) if solution.x is not None else None
    return solution


def value(model: LPModel, name: str) -> float:
    if model.values is None:
        raise ModelAnalyzerError(
            f"No primal values available for '{name}' (last status: {model.status})."
        )
    try:
        return model.values[name]
    except KeyError as exc:
        raise InvalidModelError(f"Unknown variable '{name}'.") from exc
