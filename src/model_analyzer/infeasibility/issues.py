from __future__ import annotations

from typing import Annotated, List, Literal, Union, get_args

from pydantic import BaseModel, Field

IssueKind = Literal[
    "infeasible_bounds",
    "infeasible_integrality",
    "infeasible_constraint_range",
    "irreducible_infeasible_subset",
]

ISSUE_KINDS: tuple = get_args(IssueKind)


class EqualTo(BaseModel):
    type: Literal["EqualTo"] = "EqualTo"
    value: float

    def __str__(self) -> str:
        return f"EqualTo({self.value})"


class LessThan(BaseModel):
    type: Literal["LessThan"] = "LessThan"
    upper: float

    def __str__(self) -> str:
        return f"LessThan({self.upper})"


class GreaterThan(BaseModel):
    type: Literal["GreaterThan"] = "GreaterThan"
    lower: float

    def __str__(self) -> str:
        return f"GreaterThan({self.lower})"


TargetSet = Annotated[Union[EqualTo, LessThan, GreaterThan], Field(discriminator="type")]


class InfeasibleBounds(BaseModel):
    kind: Literal["infeasible_bounds"] = "infeasible_bounds"
    variable: str
    lb: float
    ub: float


class InfeasibleIntegrality(BaseModel):
    kind: Literal["infeasible_integrality"] = "infeasible_integrality"
    variable: str
    lb: float
    ub: float
    set: Literal["Integer", "Binary"]


class InfeasibleConstraintRange(BaseModel):
    """``[lb, ub]`` is the achievable range of the row, which misses ``set``."""

    kind: Literal["infeasible_constraint_range"] = "infeasible_constraint_range"
    constraint: str
    lb: float
    ub: float
    set: TargetSet


class IrreducibleInfeasibleSubset(BaseModel):
    kind: Literal["irreducible_infeasible_subset"] = "irreducible_infeasible_subset"
    constraints: List[str]


Issue = Annotated[
    Union[
        InfeasibleBounds,
        InfeasibleIntegrality,
        InfeasibleConstraintRange,
        IrreducibleInfeasibleSubset,
    ],
    Field(discriminator="kind"),
]


class DiagnosisResult(BaseModel):
    infeasible_bounds: List[InfeasibleBounds] = Field(default_factory=list)
    infeasible_integrality: List[InfeasibleIntegrality] = Field(default_factory=list)
    constraint_range: List[InfeasibleConstraintRange] = Field(default_factory=list)
    iis: List[IrreducibleInfeasibleSubset] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)

    def add(self, issue: Issue) -> None:
        if issue.kind == "infeasible_bounds":
            self.infeasible_bounds.append(issue)
        elif issue.kind == "infeasible_integrality":
            self.infeasible_integrality.append(issue)
        elif issue.kind == "infeasible_constraint_range":
            self.constraint_range.append(issue)
        elif issue.kind == "irreducible_infeasible_subset":
            self.iis.append(issue)
        else:
            raise ValueError(f"Unknown issue kind '{issue.kind}'.")

    def extend(self, issues: List[Issue]) -> None:
        for issue in issues:
            self.add(issue)

    def list_of_issues(self, kind: str) -> List[Issue]:
        lists = {
            "infeasible_bounds": self.infeasible_bounds,
            "infeasible_integrality": self.infeasible_integrality,
            "infeasible_constraint_range": self.constraint_range,
            "irreducible_infeasible_subset": self.iis,
        }
        if kind not in lists:
            raise ValueError(f"Unknown issue kind '{kind}'.")
        return list(lists[kind])

    def list_of_issue_types(self) -> List[str]:
        return [kind for kind in ISSUE_KINDS if self.list_of_issues(kind)]

    @property
    def issue_count(self) -> int:
        return (
            len(self.infeasible_bounds)
            + len(self.infeasible_integrality)
            + len(self.constraint_range)
            + len(self.iis)
        )

    @property
    def is_clean(self) -> bool:
        return self.issue_count == 0

    def __str__(self) -> str:
        return f"Infeasibility analysis found {self.issue_count} issues"
