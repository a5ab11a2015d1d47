from __future__ import annotations

import logging
from typing import Optional, Union

from ..model import check_references
from ..schemas import AnalyzerOptions, LPModel
from ..solvers import Solver, get_solver
from .bounds import BoundConsistencyChecker
from .iis import IISResolver
from .issues import DiagnosisResult, IrreducibleInfeasibleSubset
from .ranges import RangeConsistencyChecker

logger = logging.getLogger(__name__)

NO_SOLVER_NOTE = "IIS resolver cannot continue because no solver is provided"
NOT_INFEASIBLE_NOTE = "IIS resolver cannot continue because the model is found to be {status} by the solver"


class DiagnosisCascade:
    """Runs the three infeasibility layers, cheapest first.

    The first layer that reports anything ends the run, so a result only ever
    carries one kind of cause:

    1. bound consistency of each variable;
    2. range consistency of each scalar linear row given the variable bounds;
    3. one IIS, found by re-solving an elastic copy with ``solver``.
    """

    def __init__(
        self,
        options: Optional[AnalyzerOptions] = None,
        bounds: Optional[BoundConsistencyChecker] = None,
        ranges: Optional[RangeConsistencyChecker] = None,
        resolver: Optional[IISResolver] = None,
    ) -> None:
        self.options = options or AnalyzerOptions()
        self.bounds = bounds or BoundConsistencyChecker()
        self.ranges = ranges or RangeConsistencyChecker()
        self.resolver = resolver or IISResolver(self.options)

    def run(self, model: LPModel, solver: Union[Solver, str, None] = None) -> DiagnosisResult:
        check_references(model)
        result = DiagnosisResult()

        issues, intervals = self.bounds.check(model.variables)
        if issues:
            result.extend(issues)
            logger.info("Bound consistency found %d issues; stopping", len(issues))
            return result

        issues = self.ranges.check(model.constraints, intervals)
        if issues:
            result.extend(issues)
            logger.info("Range consistency found %d issues; stopping", len(issues))
            return result

        if solver is None:
            logger.info(NO_SOLVER_NOTE)
            result.notes.append(NO_SOLVER_NOTE)
            return result

        iis = self.resolver.find_one_iis(model, get_solver(solver))
        if iis is None:
            result.notes.append(NOT_INFEASIBLE_NOTE.format(status=model.status or "not solved"))
        else:
            result.add(IrreducibleInfeasibleSubset(constraints=iis))
        return result


def analyze(
    model: LPModel,
    solver: Union[Solver, str, None] = None,
    options: Optional[AnalyzerOptions] = None,
) -> DiagnosisResult:
    """Shortcut for ``DiagnosisCascade(options).run(model, solver)``."""

    return DiagnosisCascade(options).run(model, solver)
