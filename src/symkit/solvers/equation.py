"""Solve equations ``expr = 0`` and boolean statements for a variable."""

from __future__ import annotations

from symkit.base import Entity
from symkit.core import SymkitLogger, getLogger
from symkit.entity import (
    And,
    BooleanConstant,
    Equals,
    Greater,
    GreaterOrEqual,
    Less,
    LessOrEqual,
    Or,
    Power,
    Product,
    Quotient,
    Variable,
)
from symkit.errors import CannotEvalError, UnsupportedShapeError
from symkit.numbers import Integer, Number
from symkit.sets import (
    ALL_REALS,
    EMPTY,
    FiniteSet,
    Set,
    intersection,
    to_set,
    union,
)
from symkit.solvers.inequality import solve_inequality
from symkit.solvers.polynomial import (
    solve_linear,
    solve_quadratic,
    try_get_poly_linear,
    try_get_poly_quadratic,
)

logger = getLogger(__name__)


def solve_equation(expr: Entity, x: Variable) -> Set:
    """Roots of ``expr = 0`` in ``x``, complex roots included.

    Raises:
        UnsupportedShapeError: no solver handles the shape of ``expr``.
    """
    with SymkitLogger.phase("equation"):
        return _solve_equation(expr.simplify(), x)


def _solve_equation(expr: Entity, x: Variable) -> Set:
    if not expr.contains(x):
        return _solve_constant(expr)

    linear = try_get_poly_linear(expr, x)
    if linear is not None:
        return to_set(solve_linear(*linear))

    quadratic = try_get_poly_quadratic(expr, x)
    if quadratic is not None:
        return to_set(solve_quadratic(*quadratic))

    if isinstance(expr, Product):
        logger.debug("splitting product %s", expr)
        return union(_solve_equation(expr.left, x), _solve_equation(expr.right, x))

    if (
        isinstance(expr, Power)
        and isinstance(expr.exponent, Integer)
        and expr.exponent.is_positive
    ):
        return _solve_equation(expr.base, x)

    if isinstance(expr, Quotient):
        return _exclude_poles(_solve_equation(expr.left, x), expr.right, x)

    raise UnsupportedShapeError(f"Cannot solve {expr} = 0 for {x}", expr)


def _solve_constant(expr: Entity) -> Set:
    if not expr.evaluable_numerical:
        raise UnsupportedShapeError(f"Cannot decide whether {expr} is zero", expr)
    try:
        value = expr.eval_numerical()
    except (CannotEvalError, ZeroDivisionError) as e:
        raise UnsupportedShapeError(f"Cannot decide whether {expr} is zero", expr) from e
    return ALL_REALS if value.is_zero else EMPTY


def _exclude_poles(roots: Set, denominator: Entity, x: Variable) -> Set:
    """Drop roots at which the denominator vanishes."""
    if not isinstance(roots, FiniteSet):
        return roots
    kept = []
    for root in roots:
        value = denominator.substitute(x, root).simplify()
        if isinstance(value, Number) and value.is_zero:
            logger.debug("dropping root %s: denominator vanishes", root)
            continue
        kept.append(root)
    return to_set(kept)


def _real_roots(roots: Set) -> Set:
    if not isinstance(roots, FiniteSet):
        return roots
    kept = [r for r in roots if not (isinstance(r, Number) and not r.is_real)]
    return to_set(kept)


def solve(statement: Entity, x: Variable) -> Set:
    """Values of ``x`` for which ``statement`` holds.

    Raises:
        UnsupportedShapeError: for ``Not`` and shapes the solvers do not handle.
    """
    if isinstance(statement, BooleanConstant):
        return ALL_REALS if statement.value else EMPTY
    if isinstance(statement, Equals):
        return solve_equation(statement.left - statement.right, x)
    if isinstance(statement, Greater):
        return solve_inequality(statement.left - statement.right, x)
    if isinstance(statement, Less):
        return solve_inequality(statement.right - statement.left, x)
    if isinstance(statement, GreaterOrEqual):
        difference = statement.left - statement.right
        return union(
            solve_inequality(difference, x), _real_roots(solve_equation(difference, x))
        )
    if isinstance(statement, LessOrEqual):
        difference = statement.right - statement.left
        return union(
            solve_inequality(difference, x), _real_roots(solve_equation(difference, x))
        )
    if isinstance(statement, And):
        return intersection(solve(statement.left, x), solve(statement.right, x))
    if isinstance(statement, Or):
        return union(solve(statement.left, x), solve(statement.right, x))
    raise UnsupportedShapeError(f"Cannot solve statement {statement} for {x}", statement)


__all__ = ["solve", "solve_equation"]
