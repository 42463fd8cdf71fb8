"""Recognize low-degree polynomials and solve them in closed form.

``polynomial_coefficients`` reads an expression as ``sum(c_k * x^k)`` where
every ``c_k`` is free of ``x``. Coefficients may be symbolic; they are
simplified before being returned and zero coefficients are dropped.
"""

from __future__ import annotations

from typing import Iterable, Optional

from symkit.base import Entity
from symkit.core import getLogger
from symkit.entity import Difference, Power, Product, Quotient, Sum, Variable, sqrt
from symkit.numbers import Complex, Integer, Number, sqrt_number

logger = getLogger(__name__)

Coefficients = dict[int, Entity]

TWO = Integer.create(2)
FOUR = Integer.create(4)

# terms are collected up to this degree before like terms cancel
MAX_COLLECTED_DEGREE = 10


def _add_into(acc: Coefficients, degree: int, coefficient: Entity) -> None:
    acc[degree] = acc[degree] + coefficient if degree in acc else coefficient


def _collect(expr: Entity, x: Variable, limit: int) -> Optional[Coefficients]:
    if not expr.contains(x):
        return {0: expr}
    if expr == x:
        return {1: Integer.ONE}

    if isinstance(expr, (Sum, Difference)):
        left = _collect(expr.left, x, limit)
        right = _collect(expr.right, x, limit)
        if left is None or right is None:
            return None
        result = dict(left)
        for degree, coefficient in right.items():
            if isinstance(expr, Difference):
                coefficient = -coefficient
            _add_into(result, degree, coefficient)
        return result

    if isinstance(expr, Product):
        left = _collect(expr.left, x, limit)
        right = _collect(expr.right, x, limit)
        if left is None or right is None:
            return None
        return _convolve(left, right, limit)

    if isinstance(expr, Quotient):
        if expr.right.contains(x):
            return None
        numerator = _collect(expr.left, x, limit)
        if numerator is None:
            return None
        return {d: c / expr.right for d, c in numerator.items()}

    if isinstance(expr, Power):
        exponent = expr.exponent
        if not isinstance(exponent, Integer) or exponent.is_negative:
            return None
        if exponent.value > limit:
            return None
        base = _collect(expr.base, x, limit)
        if base is None:
            return None
        result: Optional[Coefficients] = {0: Integer.ONE}
        for _ in range(exponent.value):
            result = _convolve(result, base, limit)
            if result is None:
                return None
        return result

    return None


def _convolve(
    left: Coefficients, right: Coefficients, limit: int
) -> Optional[Coefficients]:
    result: Coefficients = {}
    for da, ca in left.items():
        for db, cb in right.items():
            if da + db > limit and not (_is_zero(ca) or _is_zero(cb)):
                return None
            _add_into(result, da + db, ca * cb)
    return result


def _is_zero(e: Entity) -> bool:
    return isinstance(e, Number) and e.is_zero


def polynomial_coefficients(
    expr: Entity, x: Variable, max_degree: int = 2
) -> Optional[Coefficients]:
    """Coefficients by degree, or ``None`` if ``expr`` is not a polynomial in
    ``x`` of degree at most ``max_degree``.

    The degree is checked after like terms are combined, so ``(x+1)^2 - x^2``
    is linear.
    """
    terms = _collect(expr, x, max(max_degree, MAX_COLLECTED_DEGREE))
    if terms is None:
        if logger.debug_on:
            logger.debug("%s is not a polynomial of degree <= %d in %s", expr, max_degree, x)
        return None
    result: Coefficients = {}
    for degree, coefficient in terms.items():
        coefficient = coefficient.simplify()
        if not _is_zero(coefficient):
            result[degree] = coefficient
    if result and max(result) > max_degree:
        return None
    return result


def try_get_poly_linear(expr: Entity, x: Variable) -> Optional[tuple[Entity, Entity]]:
    """``(a, b)`` with ``expr == a*x + b`` and ``a`` not literally zero."""
    coefficients = polynomial_coefficients(expr, x, 1)
    if coefficients is None or 1 not in coefficients:
        return None
    return coefficients[1], coefficients.get(0, Integer.ZERO)


def try_get_poly_quadratic(
    expr: Entity, x: Variable
) -> Optional[tuple[Entity, Entity, Entity]]:
    """``(a, b, c)`` with ``expr == a*x^2 + b*x + c`` and ``a`` not literally zero."""
    coefficients = polynomial_coefficients(expr, x, 2)
    if coefficients is None or 2 not in coefficients:
        return None
    return (
        coefficients[2],
        coefficients.get(1, Integer.ZERO),
        coefficients.get(0, Integer.ZERO),
    )


def solve_linear(a: Entity, b: Entity) -> tuple[Entity]:
    return ((-b / a).simplify(),)


def solve_quadratic(a: Entity, b: Entity, c: Entity) -> tuple[Entity, Entity]:
    """Both roots of ``a*x^2 + b*x + c`` over the complex numbers.

    Numeric coefficients give numeric roots (exact when the discriminant is
    a perfect square, complex when it is negative). Symbolic coefficients
    give ``(-b -+ sqrt(b^2 - 4ac)) / 2a`` trees.
    """
    if all(isinstance(v, Number) for v in (a, b, c)):
        discriminant = b * b - FOUR * a * c
        root = sqrt_number(discriminant)
        two_a = TWO * a
        return ((-b - root) / two_a, (-b + root) / two_a)

    root = sqrt(b * b - FOUR * a * c)
    two_a = TWO * a
    return (
        ((-b - root) / two_a).simplify(),
        ((-b + root) / two_a).simplify(),
    )


def is_non_real(value: Entity) -> bool:
    return isinstance(value, Complex)


def sort_reals_and_non_reals(roots: Iterable[Entity]) -> list[Entity]:
    """Real numeric roots ascending, followed by everything else in input order."""
    roots = list(roots)
    reals = sorted(r for r in roots if isinstance(r, Number) and r.is_real)
    others = [r for r in roots if not (isinstance(r, Number) and r.is_real)]
    return reals + others


def polynomial_from_coefficients(coefficients: Coefficients, x: Variable) -> Entity:
    """Rebuild ``c_n*x^n + ... + c_0`` from the highest degree down."""
    result: Optional[Entity] = None
    for degree in sorted(coefficients, reverse=True):
        coefficient = coefficients[degree]
        subtract = (
            result is not None
            and isinstance(coefficient, Number)
            and coefficient.is_negative
        )
        if subtract:
            coefficient = -coefficient
        if degree == 0:
            term = coefficient
        else:
            power = x if degree == 1 else Power(x, Integer.create(degree))
            term = power if coefficient == Integer.ONE else coefficient * power
        if result is None:
            result = term
        elif subtract:
            result = result - term
        else:
            result = result + term
    return result if result is not None else Integer.ZERO


__all__ = [
    "Coefficients",
    "is_non_real",
    "polynomial_coefficients",
    "polynomial_from_coefficients",
    "solve_linear",
    "solve_quadratic",
    "sort_reals_and_non_reals",
    "try_get_poly_linear",
    "try_get_poly_quadratic",
]
