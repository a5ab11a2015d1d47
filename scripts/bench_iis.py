#!/usr/bin/env python3
import json
import time
from pathlib import Path

from model_analyzer import HighsSolver, LPModel, analyze
from model_analyzer.model import optimize
from scripts.generate_instances import generate_infeasible_lp


def load_example(name: str) -> LPModel:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return LPModel.model_validate(json.loads(path.read_text()))


def main() -> None:
    solver = HighsSolver(silent=True)
    cases = [("examples/iis_lp.json", load_example("iis_lp.json"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_infeasible_lp(5, 8, 1, seed)))

    print("name,status,issue_types,iis_size,time_ms")
    for name, model in cases:
        start = time.perf_counter()
        optimize(model, solver)
        result = analyze(model, solver)
        elapsed_ms = (time.perf_counter() - start) * 1000
        iis_size = len(result.iis[0].constraints) if result.iis else 0
        print(
            f"{name},{model.status},{'|'.join(result.list_of_issue_types())},{iis_size},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
