import math

import numpy as np
import pytest

from model_analyzer.exceptions import InvalidModelError
from model_analyzer.infeasibility.interval import Interval, evaluate_affine, interval_sum
from model_analyzer.schemas import LinearExpr, LinearTerm


def test_scale_flips_bounds_for_negative_coefficients():
    assert Interval(1.0, 3.0).scale(2.0) == Interval(2.0, 6.0)
    assert Interval(1.0, 3.0).scale(-2.0) == Interval(-6.0, -2.0)
    assert -1.0 * Interval(-1.0, 4.0) == Interval(-4.0, 1.0)


def test_zero_coefficient_on_unbounded_interval():
    assert Interval(-math.inf, math.inf).scale(0.0) == Interval(0.0, 0.0)


def test_add_shift_and_sum():
    total = interval_sum([Interval(1.0, 2.0), Interval(-3.0, 5.0), Interval(0.5, 0.5)])
    assert total == Interval(-1.5, 7.5)
    assert (Interval(1.0, 2.0) + Interval(3.0, 4.0)).shift(-1.0) == Interval(3.0, 5.0)
    assert interval_sum([]) == Interval(0.0, 0.0)


def test_empty_interval_is_representable():
    interval = Interval(2.0, 1.0)
    assert interval.is_empty
    assert not interval.contains(1.5)
    assert not Interval(1.0, 1.0).is_empty


def test_evaluate_affine_matches_worked_example():
    expr = LinearExpr(terms=[LinearTerm(var="x", coef=1.0), LinearTerm(var="y", coef=1.0)])
    intervals = {"x": Interval(10.0, 11.0), "y": Interval(1.0, 11.0)}
    assert evaluate_affine(expr, intervals) == Interval(11.0, 22.0)


def test_evaluate_affine_with_constant_and_negative_terms():
    expr = LinearExpr(
        terms=[LinearTerm(var="x", coef=3.0), LinearTerm(var="y", coef=-2.0)],
        constant=4.0,
    )
    intervals = {"x": Interval(0.0, 1.0), "y": Interval(-1.0, 2.0)}
    assert evaluate_affine(expr, intervals) == Interval(0.0, 9.0)


def test_evaluate_affine_unknown_variable():
    expr = LinearExpr(terms=[LinearTerm(var="missing", coef=1.0)])
    with pytest.raises(InvalidModelError):
        evaluate_affine(expr, {})


def test_evaluated_values_stay_inside_achievable_interval():
    rng = np.random.default_rng(7)
    names = [f"x{i}" for i in range(6)]
    for _ in range(50):
        lows = rng.uniform(-10.0, 10.0, size=len(names))
        widths = rng.uniform(0.0, 5.0, size=len(names))
        intervals = {name: Interval(lo, lo + w) for name, lo, w in zip(names, lows, widths)}
        coefs = rng.uniform(-4.0, 4.0, size=len(names))
        constant = float(rng.uniform(-3.0, 3.0))
        expr = LinearExpr(
            terms=[LinearTerm(var=name, coef=float(c)) for name, c in zip(names, coefs)],
            constant=constant,
        )
        achievable = evaluate_affine(expr, intervals)
        for _ in range(20):
            point = {name: rng.uniform(iv.lo, iv.hi) for name, iv in intervals.items()}
            value = sum(float(c) * point[name] for name, c in zip(names, coefs)) + constant
            assert achievable.lo - 1e-9 <= value <= achievable.hi + 1e-9
