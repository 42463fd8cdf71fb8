"""Differentiation, expansion and factorization."""

from __future__ import annotations

from symkit.base import Entity
from symkit.core import SymkitLogger, getLogger
from symkit.entity import (
    Difference,
    Function,
    Power,
    Product,
    Quotient,
    Sum,
    Variable,
    cos,
    ln,
    sin,
    sqrt,
)
from symkit.errors import UnsupportedShapeError
from symkit.numbers import Integer, Number
from symkit.solvers.polynomial import (
    polynomial_coefficients,
    polynomial_from_coefficients,
    solve_linear,
    solve_quadratic,
)

logger = getLogger(__name__)

ZERO = Integer.ZERO
ONE = Integer.ONE
TWO = Integer.create(2)

# distribution of (a + b)^n stops above this exponent
MAX_EXPANSION_POWER = 10


# =========================================================================
# derive
# =========================================================================


def derive(expr: Entity, x: Variable) -> Entity:
    """d(expr)/dx, simplified.

    Raises:
        UnsupportedShapeError: the tree contains a function without a known
            derivative, a boolean or a set.
    """
    with SymkitLogger.phase("derive"):
        return _derive(expr, x).simplify()


def _derive(expr: Entity, x: Variable) -> Entity:
    if not expr.contains(x):
        return ZERO
    if expr == x:
        return ONE
    if isinstance(expr, Sum):
        return _derive(expr.left, x) + _derive(expr.right, x)
    if isinstance(expr, Difference):
        return _derive(expr.left, x) - _derive(expr.right, x)
    if isinstance(expr, Product):
        u, v = expr.left, expr.right
        return _derive(u, x) * v + u * _derive(v, x)
    if isinstance(expr, Quotient):
        u, v = expr.left, expr.right
        return (_derive(u, x) * v - u * _derive(v, x)) / Power(v, TWO)
    if isinstance(expr, Power):
        return _derive_power(expr, x)
    if isinstance(expr, Function) and len(expr.args) == 1:
        return _derive_function(expr, x)
    raise UnsupportedShapeError(f"Cannot differentiate {expr}", expr)


def _derive_power(expr: Power, x: Variable) -> Entity:
    u, n = expr.base, expr.exponent
    if not n.contains(x):
        # d(u^n) = n * u^(n-1) * u'
        return n * Power(u, n - ONE) * _derive(u, x)
    if not u.contains(x):
        # d(a^v) = a^v * ln(a) * v'
        return expr * ln(u) * _derive(n, x)
    # d(u^v) = u^v * (v' * ln(u) + v * u' / u)
    return expr * (_derive(n, x) * ln(u) + n * _derive(u, x) / u)


def _derive_function(expr: Function, x: Variable) -> Entity:
    (u,) = expr.args
    du = _derive(u, x)
    name = expr.name
    if name == "sin":
        outer = cos(u)
    elif name == "cos":
        outer = -sin(u)
    elif name == "tan":
        outer = ONE / Power(cos(u), TWO)
    elif name == "exp":
        outer = expr
    elif name == "ln":
        outer = ONE / u
    elif name == "sqrt":
        outer = ONE / (TWO * sqrt(u))
    elif name == "abs":
        outer = u / expr
    else:
        raise UnsupportedShapeError(f"No derivative known for {name}", expr)
    return outer * du


# =========================================================================
# expand
# =========================================================================


def _terms(expr: Entity) -> list[Entity]:
    """Additive terms of ``expr`` with subtraction folded into the signs."""
    if isinstance(expr, Sum):
        return _terms(expr.left) + _terms(expr.right)
    if isinstance(expr, Difference):
        return _terms(expr.left) + [-t for t in _terms(expr.right)]
    return [expr]


def _rebuild(terms: list[Entity]) -> Entity:
    result = terms[0]
    for term in terms[1:]:
        result = result + term
    return result


def _distribute(node: Entity) -> Entity:
    if isinstance(node, Product):
        left, right = _terms(node.left), _terms(node.right)
        if len(left) == 1 and len(right) == 1:
            return node
        return _rebuild([a * b for a in left for b in right])
    if (
        isinstance(node, Power)
        and isinstance(node.exponent, Integer)
        and 2 <= node.exponent.value <= MAX_EXPANSION_POWER
        and len(_terms(node.base)) > 1
    ):
        result = node.base
        for _ in range(node.exponent.value - 1):
            result = _distribute(Product(result, node.base))
        return result
    return node


def expand(expr: Entity) -> Entity:
    """Distribute products over sums and expand small integer powers.

    A univariate polynomial comes back in canonical descending-degree form.
    """
    with SymkitLogger.phase("expand"):
        expanded = expr.transform(_distribute).simplify()
        variables = expanded.free_variables
        if len(variables) == 1:
            (x,) = variables
            coefficients = polynomial_coefficients(
                expanded, x, max_degree=MAX_EXPANSION_POWER
            )
            if coefficients is not None:
                return polynomial_from_coefficients(coefficients, x)
        return expanded


# =========================================================================
# factorize
# =========================================================================


def _linear_factor(x: Variable, root: Entity) -> Entity:
    if isinstance(root, Number) and root.is_zero:
        return x
    return (x - root).simplify()


def factorize(expr: Entity) -> Entity:
    """Factor a univariate polynomial of degree <= 2 with real numeric roots.

    ``a*x^2 + b*x + c`` becomes ``a * (x - r1) * (x - r2)``, a linear
    polynomial becomes ``a * (x - r)``. Anything else is returned simplified.
    """
    simplified = expr.simplify()
    variables = simplified.free_variables
    if len(variables) != 1:
        return simplified
    (x,) = variables
    coefficients = polynomial_coefficients(simplified, x, 2)
    if not coefficients or max(coefficients) == 0:
        return simplified
    if not all(isinstance(c, Number) and c.is_real for c in coefficients.values()):
        return simplified

    degree = max(coefficients)
    a = coefficients[degree]
    if degree == 1:
        roots = list(solve_linear(a, coefficients.get(0, ZERO)))
    elif _has_real_roots(coefficients):
        b, c = coefficients.get(1, ZERO), coefficients.get(0, ZERO)
        roots = sorted(solve_quadratic(a, b, c))
    else:
        return simplified

    result: Entity = _linear_factor(x, roots[0])
    for root in roots[1:]:
        result = result * _linear_factor(x, root)
    if a != ONE:
        result = a * result
    logger.debug("factorized %s as %s", expr, result)
    return result


def _has_real_roots(coefficients: dict[int, Entity]) -> bool:
    a = coefficients[2]
    b = coefficients.get(1, ZERO)
    c = coefficients.get(0, ZERO)
    discriminant = b * b - Integer.create(4) * a * c
    return not discriminant.is_negative  # type: ignore[attr-defined]


__all__ = ["derive", "expand", "factorize"]
