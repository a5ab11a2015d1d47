from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

Sense = Literal["min", "max"]
Cmp = Literal["<=", ">=", "==", "between"]
SolveStatus = Literal[
    "optimal",
    "almost_optimal",
    "infeasible",
    "almost_infeasible",
    "unbounded",
    "iteration_limit",
    "error",
]


class Variable(BaseModel):
    name: str
    lb: float | None = None
    ub: float | None = None
    fixed: float | None = None
    is_integer: bool = False
    is_binary: bool = False

    @model_validator(mode="after")
    def _check_fixed(self) -> "Variable":
        if self.fixed is not None and (self.lb is not None or self.ub is not None):
            raise ValueError(f"Variable '{self.name}' is fixed and cannot also carry bounds.")
        return self


class LinearTerm(BaseModel):
    var: str
    coef: float


class LinearExpr(BaseModel):
    terms: List[LinearTerm] = Field(default_factory=list)
    constant: float = 0.0


class Constraint(BaseModel):
    """A scalar linear row ``lhs cmp rhs``.

    ``between`` is the two-sided row ``lower <= lhs <= rhs``.
    """

    name: str
    lhs: LinearExpr
    cmp: Cmp
    rhs: float
    lower: float | None = None

    @model_validator(mode="after")
    def _check_between(self) -> "Constraint":
        if self.cmp == "between" and self.lower is None:
            raise ValueError(f"Constraint '{self.name}' uses 'between' without a lower value.")
        return self


class LPModel(BaseModel):
    name: str = "problem"
    sense: Sense = "min"
    objective: LinearExpr = Field(default_factory=LinearExpr)
    variables: List[Variable]
    constraints: List[Constraint] = Field(default_factory=list)
    status: Optional[SolveStatus] = None
    values: Dict[str, float] | None = None

    @model_validator(mode="after")
    def _check_names(self) -> "LPModel":
        seen = set()
        for var in self.variables:
            if var.name in seen:
                raise ValueError(f"Duplicate variable name '{var.name}'.")
            seen.add(var.name)
        seen = set()
        for cons in self.constraints:
            if cons.name in seen:
                raise ValueError(f"Duplicate constraint name '{cons.name}'.")
            seen.add(cons.name)
        return self

    def variable_index(self) -> Dict[str, int]:
        return {var.name: idx for idx, var in enumerate(self.variables)}

    def is_mip(self) -> bool:
        return any(var.is_integer or var.is_binary for var in self.variables)


class SolveOptions(BaseModel):
    max_iters: int = 10_000
    tol: float = 1e-9
    time_limit: float | None = None
    silent: bool = False


class AnalyzerOptions(BaseModel):
    penalty: float = 1.0
    tolerance: float = 1e-5
    solver_options: SolveOptions = Field(default_factory=lambda: SolveOptions(silent=True))


class LPSolution(BaseModel):
    status: SolveStatus
    objective_value: Optional[float]
    x: Dict[str, float] | None
    iterations: int = 0
    message: str = ""
