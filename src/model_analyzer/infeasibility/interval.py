from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from ..exceptions import InvalidModelError
from ..schemas import LinearExpr


@dataclass(frozen=True)
class Interval:
    """Closed range ``[lo, hi]``.

    ``lo > hi`` is allowed; such an interval is empty and is how inconsistent
    bounds show up.
    """

    lo: float
    hi: float

    @property
    def is_empty(self) -> bool:
        return self.lo > self.hi

    def contains(self, value: float) -> bool:
        return self.lo <= value <= self.hi

    def scale(self, coef: float) -> "Interval":
        if coef == 0:
            # 0 * inf would be nan
            return Interval(0.0, 0.0)
        if coef > 0:
            return Interval(coef * self.lo, coef * self.hi)
        return Interval(coef * self.hi, coef * self.lo)

    def shift(self, constant: float) -> "Interval":
        return Interval(self.lo + constant, self.hi + constant)

    def __add__(self, other: "Interval") -> "Interval":
        return Interval(self.lo + other.lo, self.hi + other.hi)

    def __mul__(self, coef: float) -> "Interval":
        return self.scale(coef)

    __rmul__ = __mul__


def interval_sum(intervals: Iterable[Interval]) -> Interval:
    total = Interval(0.0, 0.0)
    for item in intervals:
        total = total + item
    return total


def evaluate_affine(expr: LinearExpr, intervals: Mapping[str, Interval]) -> Interval:
    """Range of ``expr`` when every variable moves independently inside its interval."""

    terms = []
    for term in expr.terms:
        if term.var not in intervals:
            raise InvalidModelError(f"No interval known for variable '{term.var}'.")
        terms.append(intervals[term.var].scale(term.coef))
    return interval_sum(terms).shift(expr.constant)
