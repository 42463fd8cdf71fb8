"""symkit.solvers - closed-form solving and calculus over entity trees.

- polynomial: coefficient extraction, linear/quadratic roots
- inequality: ``expr > 0`` for linear and quadratic ``expr``
- equation: ``expr = 0`` and boolean statements
- calculus: derive, expand, factorize
"""

from .calculus import derive, expand, factorize
from .equation import solve, solve_equation
from .inequality import solve_inequality
from .polynomial import (
    is_non_real,
    polynomial_coefficients,
    polynomial_from_coefficients,
    solve_linear,
    solve_quadratic,
    sort_reals_and_non_reals,
    try_get_poly_linear,
    try_get_poly_quadratic,
)

__all__ = [
    "derive",
    "expand",
    "factorize",
    "is_non_real",
    "polynomial_coefficients",
    "polynomial_from_coefficients",
    "solve",
    "solve_equation",
    "solve_inequality",
    "solve_linear",
    "solve_quadratic",
    "sort_reals_and_non_reals",
    "try_get_poly_linear",
    "try_get_poly_quadratic",
]
