"""Cascading infeasibility diagnosis: bounds, constraint ranges, then one IIS."""

from .bounds import BoundConsistencyChecker
from .cascade import DiagnosisCascade, analyze
from .iis import IISResolver
from .interval import Interval, evaluate_affine, interval_sum
from .issues import (
    DiagnosisResult,
    EqualTo,
    GreaterThan,
    InfeasibleBounds,
    InfeasibleConstraintRange,
    InfeasibleIntegrality,
    IrreducibleInfeasibleSubset,
    LessThan,
)
from .ranges import RangeConsistencyChecker
from .summarize import explain, summarize

__all__ = [
    "BoundConsistencyChecker",
    "DiagnosisCascade",
    "DiagnosisResult",
    "EqualTo",
    "GreaterThan",
    "IISResolver",
    "InfeasibleBounds",
    "InfeasibleConstraintRange",
    "InfeasibleIntegrality",
    "Interval",
    "IrreducibleInfeasibleSubset",
    "LessThan",
    "RangeConsistencyChecker",
    "analyze",
    "evaluate_affine",
    "explain",
    "interval_sum",
    "summarize",
]
