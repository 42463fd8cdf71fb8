"""symkit - a symbolic algebra kernel.

Expressions are immutable trees of :class:`~symkit.base.Entity` nodes built
with ordinary Python operators::

    from symkit import Integer, Variable

    x = Variable("x")
    expr = (x - Integer.create(1)) * (x - Integer.create(2))
    expr.expand()                       # x ^ 2 - 3 * x + 2
    expr.greater(Integer.ZERO).solve(x) # (-oo, 1) \\/ (2, +oo)
"""

__version__ = "0.1.0"

from symkit.base import Entity, Priority
from symkit.core import SymkitConfiguration, configure_loggers, getLogger
from symkit.entity import (
    And,
    BooleanConstant,
    Difference,
    Equals,
    Function,
    Greater,
    GreaterOrEqual,
    Less,
    LessOrEqual,
    Not,
    Or,
    Power,
    Product,
    Quotient,
    Sum,
    Variable,
    absolute,
    cos,
    exp,
    ln,
    phi,
    sin,
    sqrt,
    tan,
)
from symkit.errors import (
    CannotEvalError,
    SymkitException,
    SymkitZ3Exception,
    UnsupportedShapeError,
)
from symkit.numbers import (
    Complex,
    Integer,
    Number,
    Rational,
    Real,
    create_number,
    get_precision,
    set_precision,
)
from symkit.sets import (
    ALL_REALS,
    EMPTY,
    EmptySet,
    FiniteSet,
    Intersection,
    Interval,
    Set,
    Union,
    intersection,
    union,
)
from symkit.solvers import (
    derive,
    expand,
    factorize,
    solve,
    solve_equation,
    solve_inequality,
)

logger = getLogger(__name__)


def configure(config: SymkitConfiguration) -> None:
    """Apply a configuration to the running kernel.

    Sets the Real precision and rebuilds the default simplifier so that the
    pass budget and the disabled rules take effect.
    """
    from symkit.rewrite.simplifier import Simplifier, set_default_simplifier

    set_precision(config.precision)
    set_default_simplifier(Simplifier(config=config))
    logger.debug(
        "Configured precision=%d, max_passes=%d", config.precision, config.max_passes
    )


__all__ = [
    "ALL_REALS",
    "And",
    "BooleanConstant",
    "CannotEvalError",
    "Complex",
    "Difference",
    "EMPTY",
    "EmptySet",
    "Entity",
    "Equals",
    "FiniteSet",
    "Function",
    "Greater",
    "GreaterOrEqual",
    "Integer",
    "Intersection",
    "Interval",
    "Less",
    "LessOrEqual",
    "Not",
    "Number",
    "Or",
    "Power",
    "Priority",
    "Product",
    "Quotient",
    "Rational",
    "Real",
    "Set",
    "Sum",
    "SymkitConfiguration",
    "SymkitException",
    "SymkitZ3Exception",
    "Union",
    "UnsupportedShapeError",
    "Variable",
    "absolute",
    "configure",
    "configure_loggers",
    "cos",
    "create_number",
    "derive",
    "exp",
    "expand",
    "factorize",
    "get_precision",
    "intersection",
    "ln",
    "phi",
    "set_precision",
    "sin",
    "solve",
    "solve_equation",
    "solve_inequality",
    "sqrt",
    "tan",
    "union",
]
