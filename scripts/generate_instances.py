#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import List, Optional

from model_analyzer.schemas import LPModel, Variable, Constraint, LinearExpr, LinearTerm


def generate_infeasible_lp(
    num_vars: int, num_constraints: int, num_conflicts: int = 1, seed: Optional[int] = None
) -> LPModel:
    """Random packing LP plus ``num_conflicts`` covering rows it cannot satisfy.

    Variables are only bounded below, so the bound and range layers stay clean
    and the infeasibility is left to the IIS search.
    """

    rng = random.Random(seed)
    variables = [Variable(name=f"x{i}", lb=0.0) for i in range(num_vars)]
    constraints: List[Constraint] = []
    for j in range(num_constraints):
        terms = [
            LinearTerm(var=f"x{i}", coef=rng.uniform(0.5, 5.0))
            for i in range(num_vars)
        ]
        rhs = rng.uniform(num_vars * 2.0, num_vars * 6.0)
        constraints.append(
            Constraint(
                name=f"c{j}",
                lhs=LinearExpr(terms=terms, constant=0.0),
                cmp="<=",
                rhs=rhs,
            )
        )
    for k in range(num_conflicts):
        # every packing row caps sum(x) below 12 * num_vars
        terms = [LinearTerm(var=f"x{i}", coef=1.0) for i in range(num_vars)]
        constraints.append(
            Constraint(
                name=f"conflict{k}",
                lhs=LinearExpr(terms=terms, constant=0.0),
                cmp=">=",
                rhs=num_vars * rng.uniform(15.0, 25.0),
            )
        )
    objective = LinearExpr(
        terms=[LinearTerm(var=f"x{i}", coef=rng.uniform(1.0, 4.0)) for i in range(num_vars)],
        constant=0.0,
    )
    return LPModel(
        name="random-infeasible-lp",
        sense="min",
        objective=objective,
        variables=variables,
        constraints=constraints,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random infeasible LP instances.")
    parser.add_argument("--vars", type=int, default=3, help="Number of variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of packing constraints")
    parser.add_argument("--conflicts", type=int, default=1, help="Number of conflicting covering constraints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    instances = [
        generate_infeasible_lp(args.vars, args.constraints, args.conflicts, (args.seed or 0) + idx)
        for idx in range(args.count)
    ]
    payload = [instance.model_dump() for instance in instances]

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
