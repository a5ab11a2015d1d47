from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Tuple

from ..model import effective_bounds
from ..schemas import Variable
from .interval import Interval
from .issues import InfeasibleBounds, InfeasibleIntegrality, Issue

logger = logging.getLogger(__name__)


class BoundConsistencyChecker:
    """First layer: bounds and integrality of each variable on its own."""

    def check(self, variables: Iterable[Variable]) -> Tuple[List[Issue], Dict[str, Interval]]:
        issues: List[Issue] = []
        intervals: Dict[str, Interval] = {}
        for var in variables:
            lb, ub = effective_bounds(var)
            # Heuristic "no integer in [lb, ub]" test; misses some closed-boundary cases.
            if var.is_integer and ub - lb < 1 and math.ceil(ub) == math.ceil(lb):
                issues.append(InfeasibleIntegrality(variable=var.name, lb=lb, ub=ub, set="Integer"))
            if var.is_binary and lb > 0 and ub < 1:
                issues.append(InfeasibleIntegrality(variable=var.name, lb=lb, ub=ub, set="Binary"))
            if lb > ub:
                issues.append(InfeasibleBounds(variable=var.name, lb=lb, ub=ub))
            else:
                intervals[var.name] = Interval(lb, ub)
        logger.debug("Bound consistency: %d issues", len(issues))
        return issues, intervals
