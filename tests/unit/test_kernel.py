"""End-to-end checks through the top-level ``symkit`` namespace."""

import pytest

import symkit
from symkit import (
    Integer,
    Interval,
    Real,
    SymkitConfiguration,
    Union,
    UnsupportedShapeError,
    configure,
    get_precision,
    phi,
)
from symkit.sets import to_set

ONE, TWO, THREE = Integer.ONE, Integer.create(2), Integer.create(3)



def test_version():
    assert symkit.__version__ == "0.1.0"


@pytest.mark.integration
def test_quadratic_inequality_from_factors(x):
    statement = ((x - ONE) * (x - TWO)).greater(Integer.ZERO)
    result = statement.solve(x)
    assert result == Union(
        Interval(Real.NEGATIVE_INFINITY, ONE), Interval(TWO, Real.POSITIVE_INFINITY)
    )
    assert str(result) == "(-oo, 1) \\/ (2, +oo)"


@pytest.mark.integration
def test_expand_then_solve(x):
    expanded = ((x - ONE) * (x - THREE)).expand()
    assert expanded.solve_equation(x) == to_set([ONE, THREE])


@pytest.mark.integration
def test_cubic_is_unsupported_not_empty(x):
    statement = (x * x * x - ONE).greater(Integer.ZERO)
    with pytest.raises(UnsupportedShapeError):
        statement.solve(x)


@pytest.mark.integration
def test_totient_simplifies():
    assert phi(Integer.create(97)).simplify() == Integer.create(96)


def test_configure_applies_precision_and_rules(x):
    config = SymkitConfiguration.defaults()
    config.set("precision", 25)
    config.set("rules", [{"name": "SumWithZero", "is_activated": False, "config": {}}])
    configure(config)
    assert get_precision() == 25
    assert (x + Integer.ZERO).simplify() == x + Integer.ZERO
