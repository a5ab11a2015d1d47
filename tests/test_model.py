import pytest

from model_analyzer.exceptions import InvalidModelError, ModelAnalyzerError
from model_analyzer.model import (
    check_references,
    copy_model,
    fix_variable,
    get_variable,
    has_lower_bound,
    optimize,
    relax_with_penalty,
    set_upper_bound,
    unfix_variable,
    value,
)
from model_analyzer.schemas import Constraint, LinearExpr, LinearTerm, LPModel, Variable
from model_analyzer.solvers import HighsSolver


def make_model() -> LPModel:
    def row(name, cmp, rhs, lower=None):
        return Constraint(
            name=name,
            lhs=LinearExpr(terms=[LinearTerm(var="x", coef=1.0), LinearTerm(var="y", coef=1.0)]),
            cmp=cmp,
            rhs=rhs,
            lower=lower,
        )

    return LPModel(
        name="elastic",
        sense="max",
        objective=LinearExpr(terms=[LinearTerm(var="x", coef=1.0)]),
        variables=[Variable(name="x", lb=0.0, ub=10.0), Variable(name="y", lb=0.0, ub=20.0)],
        constraints=[
            row("le", "<=", 1.0),
            row("ge", ">=", 2.0),
            row("eq", "==", 3.0),
            row("band", "between", 5.0, lower=4.0),
        ],
    )


def test_copy_is_independent_and_mapped():
    model = make_model()
    copied, reference_map = copy_model(model)

    copied.constraints[0].rhs = 99.0
    copied.variables[0].ub = 1.0
    assert model.constraints[0].rhs == 1.0
    assert model.variables[0].ub == 10.0
    assert len(reference_map) == 4
    assert reference_map.to_copy("ge") == "ge"
    assert reference_map.to_original("eq") == "eq"
    assert reference_map.to_original("x") is None


def test_relax_with_penalty_adds_signed_slacks():
    model = make_model()
    slacks = relax_with_penalty(model, penalty=2.0)

    assert list(slacks) == ["le", "ge", "eq", "band"]
    assert [coef for _, coef in slacks["le"]] == [-1.0]
    assert [coef for _, coef in slacks["ge"]] == [1.0]
    assert [coef for _, coef in slacks["eq"]] == [1.0, -1.0]
    assert [coef for _, coef in slacks["band"]] == [1.0, -1.0]

    slack_names = [name for terms in slacks.values() for name, _ in terms]
    assert len(set(slack_names)) == 6
    for name in slack_names:
        var = get_variable(model, name)
        assert var.lb == 0.0 and var.ub is None
    assert model.sense == "min"
    assert {term.var: term.coef for term in model.objective.terms} == {name: 2.0 for name in slack_names}
    assert model.constraints[0].lhs.terms[-1].var == slacks["le"][0][0]


def test_slack_names_do_not_clash_with_existing_variables():
    model = make_model()
    model.variables.append(Variable(name="le__slack_lo"))
    slacks = relax_with_penalty(model)
    assert slacks["le"][0][0] == "le__slack_lo_1"


def test_fix_and_unfix_variable():
    model = make_model()
    assert has_lower_bound(model, "x")
    fix_variable(model, "x", 0.0)
    var = get_variable(model, "x")
    assert (var.lb, var.ub, var.fixed) == (None, None, 0.0)
    assert not has_lower_bound(model, "x")

    unfix_variable(model, "x")
    assert var.fixed is None
    set_upper_bound(model, "x", 0.0)
    assert var.ub == 0.0
    with pytest.raises(ModelAnalyzerError):
        unfix_variable(model, "x")


def test_optimize_stores_status_and_values():
    model = make_model()
    model.constraints = model.constraints[:1]
    optimize(model, HighsSolver(silent=True))

    assert model.status == "optimal"
    assert value(model, "x") == pytest.approx(1.0)
    with pytest.raises(InvalidModelError):
        value(model, "nope")


def test_value_before_solve_raises():
    with pytest.raises(ModelAnalyzerError):
        value(make_model(), "x")


def test_unknown_variable_in_constraint_is_rejected():
    model = make_model()
    model.constraints[0].lhs.terms.append(LinearTerm(var="ghost", coef=1.0))
    with pytest.raises(InvalidModelError):
        check_references(model)


def test_duplicate_names_are_rejected():
    with pytest.raises(ValueError):
        LPModel(variables=[Variable(name="x"), Variable(name="x")])


def test_between_requires_lower():
    with pytest.raises(ValueError):
        Constraint(name="c", lhs=LinearExpr(), cmp="between", rhs=1.0)


@pytest.mark.parametrize("bounds", [{"lb": 5.0}, {"ub": 1.0}, {"lb": 0.0, "ub": 4.0}])
def test_fixed_variable_cannot_carry_bounds(bounds):
    with pytest.raises(ValueError):
        Variable(name="x", fixed=3.0, **bounds)
