import pytest

from model_analyzer.infeasibility.issues import (
    ISSUE_KINDS,
    DiagnosisResult,
    InfeasibleBounds,
    InfeasibleConstraintRange,
    InfeasibleIntegrality,
    IrreducibleInfeasibleSubset,
    LessThan,
)
from model_analyzer.infeasibility.summarize import explain, summarize, summarize_issue


def test_terse_issue_lines():
    assert summarize_issue(InfeasibleBounds(variable="y", lb=2.0, ub=1.0), verbose=False) == "y : 2.0 !<= 1.0"
    assert (
        summarize_issue(InfeasibleIntegrality(variable="y", lb=2.2, ub=2.9, set="Integer"), verbose=False)
        == "y : [2.2; 2.9], Integer"
    )
    assert (
        summarize_issue(
            InfeasibleConstraintRange(constraint="c", lb=11.0, ub=22.0, set=LessThan(upper=1.0)),
            verbose=False,
        )
        == "c : [11.0; 22.0], !in LessThan(1.0)"
    )
    assert summarize_issue(IrreducibleInfeasibleSubset(constraints=["c1", "c2"]), verbose=False) == "IIS: c1, c2"


def test_verbose_issue_line():
    line = summarize_issue(InfeasibleBounds(variable="y", lb=2.0, ub=1.0))
    assert line == "Variable: y with lower bound 2.0 and upper bound 1.0"


def test_explain_sections():
    text = explain("infeasible_bounds")
    for header in ("# `InfeasibleBounds`", "## What", "## Why", "## How to fix"):
        assert header in text
    assert explain("irreducible_infeasible_subset", verbose=False) == "# IrreducibleInfeasibleSubset"
    with pytest.raises(ValueError):
        explain("nope")


def test_summarize_limits_listed_issues():
    result = DiagnosisResult()
    for idx in range(5):
        result.add(InfeasibleBounds(variable=f"x{idx}", lb=1.0, ub=0.0))
    text = summarize(result, verbose=False, max_issues=2)

    assert text.startswith("## Infeasibility Analysis")
    assert "Found 5 issues" in text
    assert " * x1 : 1.0 !<= 0.0" in text
    assert "x2" not in text


def test_summarize_includes_notes():
    result = DiagnosisResult(notes=["IIS skipped"])
    assert "Note: IIS skipped" in summarize(result)


def test_every_issue_kind_has_a_list_and_an_explanation():
    result = DiagnosisResult()
    assert ISSUE_KINDS == (
        "infeasible_bounds",
        "infeasible_integrality",
        "infeasible_constraint_range",
        "irreducible_infeasible_subset",
    )
    for kind in ISSUE_KINDS:
        assert result.list_of_issues(kind) == []
        assert explain(kind, verbose=False).startswith("# ")
