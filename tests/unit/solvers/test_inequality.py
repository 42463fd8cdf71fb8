"""Tests for solving ``expr > 0``."""

import pytest

from symkit.entity import Power, Quotient
from symkit.errors import UnsupportedShapeError
from symkit.numbers import Integer, Rational, Real
from symkit.sets import EMPTY, Interval, Union
from symkit.solvers.inequality import solve_inequality

I = Integer.create
ZERO, ONE, TWO, THREE = Integer.ZERO, Integer.ONE, I(2), I(3)
NEG_INF, POS_INF = Real.NEGATIVE_INFINITY, Real.POSITIVE_INFINITY


class TestLinear:
    def test_positive_slope(self, x):
        assert solve_inequality(x - THREE, x) == Interval(THREE, POS_INF)

    def test_negative_slope(self, x):
        assert solve_inequality(-x - THREE, x) == Interval(NEG_INF, I(-3))

    def test_fractional_root(self, x):
        assert solve_inequality(TWO * x - ONE, x) == Interval(ONE / TWO, POS_INF)

    def test_symbolic_slope_is_treated_as_positive(self, x, y):
        assert solve_inequality(y * x - ONE, x) == Interval(Quotient(ONE, y), POS_INF)


class TestQuadratic:
    def test_upward_parabola(self, x):
        result = solve_inequality((x - ONE) * (x - TWO), x)
        assert result == Union(Interval(NEG_INF, ONE), Interval(TWO, POS_INF))

    def test_downward_parabola(self, x):
        result = solve_inequality(-((x - ONE) * (x - TWO)), x)
        assert result == Interval(ONE, TWO)

    def test_no_real_roots_gives_empty(self, x):
        # holds for every x, but non-real roots yield nothing
        assert solve_inequality(x * x + ONE, x) is EMPTY

    def test_double_root(self, x):
        result = solve_inequality((x - ONE) * (x - ONE), x)
        assert result == Union(Interval(NEG_INF, ONE), Interval(ONE, POS_INF))

    def test_downward_double_root_is_empty(self, x):
        assert solve_inequality(-((x - ONE) * (x - ONE)), x) is EMPTY


class TestCancellation:
    def test_linear_after_cancellation(self, x):
        result = solve_inequality((x + ONE) * (x + ONE) - x * x, x)
        assert result == Interval(Rational.create(-1, 2), POS_INF)


class TestUnsupported:
    def test_cubic(self, x):
        with pytest.raises(UnsupportedShapeError):
            solve_inequality(Power(x, THREE) - ONE, x)

    def test_constant(self, x):
        with pytest.raises(UnsupportedShapeError):
            solve_inequality(ONE, x)

    def test_unsupported_is_not_implemented(self, x):
        with pytest.raises(NotImplementedError) as info:
            solve_inequality(x * x * x, x)
        assert info.value.expr == x * x * x
