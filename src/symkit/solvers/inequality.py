"""Solve ``expr > 0`` for linear and quadratic ``expr``."""

from __future__ import annotations

from symkit.base import Entity
from symkit.core import SymkitLogger, getLogger
from symkit.entity import Variable
from symkit.errors import UnsupportedShapeError
from symkit.numbers import Number, Real
from symkit.sets import EMPTY, Interval, Set, union
from symkit.solvers.polynomial import (
    is_non_real,
    solve_linear,
    solve_quadratic,
    sort_reals_and_non_reals,
    try_get_poly_linear,
    try_get_poly_quadratic,
)

logger = getLogger(__name__)

NEGATIVE_INFINITY = Real.NEGATIVE_INFINITY
POSITIVE_INFINITY = Real.POSITIVE_INFINITY


def _is_negative(a: Entity) -> bool:
    """Only a real negative Number counts; symbolic leading coefficients do not."""
    return isinstance(a, Number) and a.is_real and a.is_negative


def solve_inequality(expr: Entity, x: Variable) -> Set:
    """Solution set of ``expr > 0`` over the reals.

    A quadratic with non-real roots yields ``EMPTY`` even when the parabola
    is positive everywhere.

    Raises:
        UnsupportedShapeError: ``expr`` is neither linear nor quadratic in ``x``.
    """
    with SymkitLogger.phase("inequality"):
        linear = try_get_poly_linear(expr, x)
        if linear is not None:
            a, b = linear
            (root,) = solve_linear(a, b)
            logger.debug("linear: a=%s, b=%s, root=%s", a, b, root)
            if is_non_real(root):
                return EMPTY
            if _is_negative(a):
                return Interval(NEGATIVE_INFINITY, root)
            return Interval(root, POSITIVE_INFINITY)

        quadratic = try_get_poly_quadratic(expr, x)
        if quadratic is not None:
            a, b, c = quadratic
            roots = solve_quadratic(a, b, c)
            logger.debug("quadratic: a=%s, b=%s, c=%s, roots=%s", a, b, c, roots)
            if any(is_non_real(root) for root in roots):
                return EMPTY
            first, second = sort_reals_and_non_reals(roots)
            if _is_negative(a):
                # a double root leaves no point strictly above zero
                if first == second:
                    return EMPTY
                return Interval(first, second)
            return union(
                Interval(NEGATIVE_INFINITY, first),
                Interval(second, POSITIVE_INFINITY),
            )

        raise UnsupportedShapeError(
            f"Inequality {expr} > 0 is not linear or quadratic in {x}", expr
        )


__all__ = ["solve_inequality"]
