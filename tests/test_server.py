import json
from pathlib import Path

from model_analyzer.schemas import LPModel
from model_analyzer.server import analyze_infeasibility, explain_issue_type, solve_model


def load_example(name: str) -> LPModel:
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", name).read_text())
    return LPModel.model_validate(data)


def test_solve_model_tool():
    report = solve_model(load_example("iis_lp.json"))
    assert report["status"] == "infeasible"


def test_analyze_tool_solves_first_and_finds_iis():
    report = analyze_infeasibility(load_example("iis_lp.json"))
    assert report["status"] == "infeasible"
    assert report["iis"] == [{"kind": "irreducible_infeasible_subset", "constraints": ["c1", "c2"]}]
    assert "IIS: c1, c2" in report["summary"]


def test_analyze_tool_without_solver():
    report = analyze_infeasibility(load_example("range_lp.json"), solver=None)
    assert report["status"] is None
    assert report["constraint_range"][0]["constraint"] == "c"


def test_explain_tool():
    assert "## How to fix" in explain_issue_type("infeasible_integrality")
