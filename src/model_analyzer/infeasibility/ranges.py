from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional

from ..schemas import Constraint
from .interval import Interval, evaluate_affine
from .issues import EqualTo, GreaterThan, InfeasibleConstraintRange, Issue, LessThan, TargetSet

logger = logging.getLogger(__name__)


def target_set(cons: Constraint) -> Optional[TargetSet]:
    """The scalar set of ``cons``, or ``None`` for rows this layer does not handle."""

    if cons.cmp == "==":
        return EqualTo(value=cons.rhs)
    if cons.cmp == "<=":
        return LessThan(upper=cons.rhs)
    if cons.cmp == ">=":
        return GreaterThan(lower=cons.rhs)
    return None


def misses_target(achievable: Interval, target: TargetSet) -> bool:
    if isinstance(target, EqualTo):
        return achievable.lo > target.value or achievable.hi < target.value
    if isinstance(target, LessThan):
        return achievable.lo > target.upper
    return achievable.hi < target.lower


class RangeConsistencyChecker:
    """Second layer: can each row reach its right-hand side given the variable intervals?

    Only valid once every variable has a non-empty interval, i.e. after a clean
    bound consistency pass.
    """

    def check(self, constraints: Iterable[Constraint], intervals: Mapping[str, Interval]) -> List[Issue]:
        issues: List[Issue] = []
        for cons in constraints:
            target = target_set(cons)
            if target is None:
                continue
            achievable = evaluate_affine(cons.lhs, intervals)
            if misses_target(achievable, target):
                issues.append(
                    InfeasibleConstraintRange(
                        constraint=cons.name,
                        lb=achievable.lo,
                        ub=achievable.hi,
                        set=target,
                    )
                )
        logger.debug("Range consistency: %d issues", len(issues))
        return issues
