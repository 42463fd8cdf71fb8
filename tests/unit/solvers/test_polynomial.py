"""Tests for polynomial recognition and closed-form roots."""

from symkit.entity import Difference, Power, Product, Quotient, Sum, sin
from symkit.numbers import Complex, Integer, Real
from symkit.solvers.polynomial import (
    is_non_real,
    polynomial_coefficients,
    polynomial_from_coefficients,
    solve_linear,
    solve_quadratic,
    sort_reals_and_non_reals,
    try_get_poly_linear,
    try_get_poly_quadratic,
)

I = Integer.create
ZERO, ONE, TWO, THREE = Integer.ZERO, Integer.ONE, I(2), I(3)
MINUS_ONE, IMAG = Integer.MINUS_ONE, Complex.IMAGINARY_ONE


class TestCoefficients:
    def test_quadratic(self, x):
        expr = x * x + TWO * x + ONE
        assert polynomial_coefficients(expr, x) == {2: ONE, 1: TWO, 0: ONE}

    def test_product_of_linear_factors(self, x):
        expr = (x - ONE) * (x - TWO)
        assert polynomial_coefficients(expr, x) == {2: ONE, 1: I(-3), 0: TWO}

    def test_degree_limit(self, x):
        assert polynomial_coefficients(x * x * x, x) is None
        assert polynomial_coefficients(Power(x, THREE), x) is None
        assert polynomial_coefficients(Power(x, THREE), x, max_degree=3) == {3: ONE}

    def test_not_a_polynomial(self, x):
        assert polynomial_coefficients(sin(x), x) is None
        assert polynomial_coefficients(ONE / x, x) is None
        assert polynomial_coefficients(Power(x, I(-1)), x) is None

    def test_division_by_constant(self, x):
        assert polynomial_coefficients(x / TWO, x) == {1: ONE / TWO}

    def test_symbolic_coefficients(self, x, y):
        assert polynomial_coefficients(y * x + y, x) == {1: y, 0: y}

    def test_zero_coefficients_dropped(self, x):
        assert polynomial_coefficients(x - x + ONE, x) == {0: ONE}
        assert polynomial_coefficients(x - x, x) == {}

    def test_try_get_linear(self, x):
        assert try_get_poly_linear(TWO * x + THREE, x) == (TWO, THREE)
        assert try_get_poly_linear(x, x) == (ONE, ZERO)
        assert try_get_poly_linear(x * x, x) is None
        assert try_get_poly_linear(THREE, x) is None

    def test_try_get_quadratic(self, x):
        assert try_get_poly_quadratic(x * x - ONE, x) == (ONE, ZERO, MINUS_ONE)
        assert try_get_poly_quadratic(TWO * x, x) is None

    def test_cancelling_higher_terms(self, x):
        expr = (x + ONE) * (x + ONE) - x * x
        assert polynomial_coefficients(expr, x, 1) == {1: TWO, 0: ONE}
        assert try_get_poly_linear(expr, x) == (TWO, ONE)

    def test_cancelling_cubic_is_quadratic(self, x):
        expr = x * x * x + x * x - Power(x, THREE)
        assert try_get_poly_quadratic(expr, x) == (ONE, ZERO, ZERO)

    def test_surviving_high_degree_is_rejected(self, x):
        expr = (x + ONE) * (x + ONE) * (x + ONE) - x * x
        assert try_get_poly_quadratic(expr, x) is None


class TestRoots:
    def test_linear(self, y):
        assert solve_linear(TWO, I(-4)) == (TWO,)
        assert solve_linear(THREE, ONE) == (I(-1) / THREE,)
        assert solve_linear(y, ONE) == (Quotient(MINUS_ONE, y),)

    def test_quadratic_distinct_roots(self):
        assert solve_quadratic(ONE, I(-3), TWO) == (ONE, TWO)

    def test_quadratic_double_root(self):
        assert solve_quadratic(ONE, I(-2), ONE) == (ONE, ONE)

    def test_quadratic_complex_roots(self):
        assert solve_quadratic(ONE, ZERO, ONE) == (Complex.create(ZERO, MINUS_ONE), IMAG)

    def test_quadratic_irrational_roots(self):
        low, high = solve_quadratic(ONE, ZERO, I(-2))
        assert isinstance(low, Real) and isinstance(high, Real)
        assert low == -high
        assert abs(high * high - TWO) < Real.create(1e-30)

    def test_quadratic_symbolic(self, y):
        low, high = solve_quadratic(ONE, ZERO, y)
        assert low.contains(y) and high.contains(y)
        assert low != high


class TestHelpers:
    def test_is_non_real(self, x):
        assert is_non_real(IMAG)
        assert not is_non_real(ONE)
        assert not is_non_real(x)

    def test_sort_reals_first(self, x):
        roots = [TWO, x, ONE, IMAG]
        assert sort_reals_and_non_reals(roots) == [ONE, TWO, x, IMAG]

    def test_polynomial_from_coefficients(self, x):
        rebuilt = polynomial_from_coefficients({2: ONE, 1: I(-3), 0: TWO}, x)
        assert rebuilt == Sum(Difference(Power(x, TWO), Product(THREE, x)), TWO)
        assert str(rebuilt) == "x ^ 2 - 3 * x + 2"

    def test_polynomial_from_coefficients_edge_cases(self, x):
        assert polynomial_from_coefficients({}, x) is ZERO
        assert polynomial_from_coefficients({1: TWO}, x) == Product(TWO, x)
        assert polynomial_from_coefficients({2: MINUS_ONE}, x) == Product(
            MINUS_ONE, Power(x, TWO)
        )
        assert polynomial_from_coefficients({0: MINUS_ONE, 2: ONE}, x) == Difference(
            Power(x, TWO), ONE
        )
