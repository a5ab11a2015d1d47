from __future__ import annotations

from typing import Dict, List, Optional

from .issues import ISSUE_KINDS, DiagnosisResult, Issue

DEFAULT_MAX_ISSUES = 10

TITLES: Dict[str, str] = {
    "infeasible_bounds": "InfeasibleBounds",
    "infeasible_integrality": "InfeasibleIntegrality",
    "infeasible_constraint_range": "InfeasibleConstraintRange",
    "irreducible_infeasible_subset": "IrreducibleInfeasibleSubset",
}

_WHAT: Dict[str, str] = {
    "infeasible_bounds": (
        "A `InfeasibleBounds` issue is identified when a variable has a lower "
        "bound that is greater than its upper bound."
    ),
    "infeasible_integrality": (
        "A `InfeasibleIntegrality` issue is identified when a variable has an "
        "integrality constraint and the bounds do not allow for any integer "
        "value to be feasible."
    ),
    "infeasible_constraint_range": (
        "A `InfeasibleConstraintRange` issue is identified when, given the "
        "variable bounds, a constraint cannot be satisfied. This analysis only "
        "considers one constraint at a time and the bounds of the variables "
        "involved in it."
    ),
    "irreducible_infeasible_subset": (
        "An `IrreducibleInfeasibleSubset` issue is identified when a subset of "
        "constraints cannot be satisfied simultaneously, while removing any one "
        "of them makes the rest satisfiable."
    ),
}

_HOW: Dict[str, str] = {
    "infeasible_bounds": "Fix one or both of the bounds.",
    "infeasible_integrality": "Fix one or both of the bounds or remove the integrality constraint.",
    "infeasible_constraint_range": "Fix the bounds of the variables or the constraint.",
    "irreducible_infeasible_subset": "Fix the constraints in question.",
}

_WHY = (
    "This can be a sign of a mistake in the model formulation. This error "
    "will lead to infeasibility in the optimization problem."
)


def explain(kind: str, verbose: bool = True) -> str:
    """Describe an issue kind: a title, or What / Why / How to fix when verbose."""

    if kind not in TITLES:
        raise ValueError(f"Unknown issue kind '{kind}'.")
    title = TITLES[kind]
    if not verbose:
        return f"# {title}"
    return (
        f"# `{title}`\n\n"
        f"## What\n\n{_WHAT[kind]}\n\n"
        f"## Why\n\n{_WHY}\n\n"
        f"## How to fix\n\n{_HOW[kind]}\n\n"
        "## More information\n\nNo extra information for this issue.\n"
    )


def summarize_issue(issue: Issue, verbose: bool = True) -> str:
    if issue.kind == "infeasible_bounds":
        if verbose:
            return f"Variable: {issue.variable} with lower bound {issue.lb} and upper bound {issue.ub}"
        return f"{issue.variable} : {issue.lb} !<= {issue.ub}"
    if issue.kind == "infeasible_integrality":
        if verbose:
            return (
                f"Variable: {issue.variable} with lower bound {issue.lb} and upper bound "
                f"{issue.ub} and integrality constraint: {issue.set}"
            )
        return f"{issue.variable} : [{issue.lb}; {issue.ub}], {issue.set}"
    if issue.kind == "infeasible_constraint_range":
        if verbose:
            return (
                f"Constraint: {issue.constraint} with computed lower bound {issue.lb} "
                f"and computed upper bound {issue.ub} and set: {issue.set}"
            )
        return f"{issue.constraint} : [{issue.lb}; {issue.ub}], !in {issue.set}"
    names = ", ".join(issue.constraints)
    if verbose:
        return f"Irreducible Infeasible Subset: {names}"
    return f"IIS: {names}"


def summarize_issues(
    kind: str,
    issues: List[Issue],
    verbose: bool = True,
    max_issues: Optional[int] = None,
) -> str:
    lines = [explain(kind, verbose=verbose), "", "## Number of issues", ""]
    lines.append(f"Found {len(issues)} issues")
    lines.extend(["", "## List of issues", ""])
    shown = issues if max_issues is None else issues[:max_issues]
    for issue in shown:
        lines.append(f" * {summarize_issue(issue, verbose=verbose)}")
    return "\n".join(lines) + "\n"


def summarize(
    result: DiagnosisResult,
    verbose: bool = True,
    max_issues: int = DEFAULT_MAX_ISSUES,
) -> str:
    """Markdown report of every non-empty issue kind in ``result``."""

    parts = ["## Infeasibility Analysis\n"]
    for kind in ISSUE_KINDS:
        issues = result.list_of_issues(kind)
        if not issues:
            continue
        parts.append("")
        parts.append(summarize_issues(kind, issues, verbose=verbose, max_issues=max_issues))
    for note in result.notes:
        parts.append(f"\nNote: {note}\n")
    return "\n".join(parts)
