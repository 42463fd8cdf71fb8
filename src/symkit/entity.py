"""Expression nodes: variables, arithmetic, functions and boolean statements.

All nodes are frozen dataclasses deriving from :class:`symkit.base.Entity`.
Binary nodes expose ``left``/``right`` (``base``/``exponent`` for powers);
``with_children`` rebuilds a node of the same variant over new operands.

This module also holds the two evaluators, :func:`eval_numerical` and
:func:`eval_boolean`, since they dispatch over exactly these node types.
"""

from __future__ import annotations

import dataclasses
import operator
from typing import Callable

from symkit.base import Entity, Priority, parenthesize
from symkit.errors import CannotEvalError
from symkit.numbers import Integer, Number, apply_mpmath, sqrt_number


@dataclasses.dataclass(frozen=True, slots=True)
class Variable(Entity):
    name: str

    @property
    def children(self) -> tuple[Entity, ...]:
        return ()

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return self

    def __str__(self) -> str:
        return self.name


class _Binary(Entity):
    """Shared plumbing for two-operand nodes."""

    __slots__ = ()

    SYMBOL = "?"
    PRIORITY = Priority.LEAF

    @property
    def children(self) -> tuple[Entity, ...]:
        return (self.left, self.right)  # type: ignore[attr-defined]

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        left, right = children
        return type(self)(left, right)

    @property
    def priority(self) -> Priority:
        return self.PRIORITY

    def __str__(self) -> str:
        left = parenthesize(self.left, self.PRIORITY)  # type: ignore[attr-defined]
        right = parenthesize(self.right, self.PRIORITY, right_side=True)  # type: ignore[attr-defined]
        return f"{left} {self.SYMBOL} {right}"


# =========================================================================
# Arithmetic
# =========================================================================


@dataclasses.dataclass(frozen=True, slots=True)
class Sum(_Binary):
    left: Entity
    right: Entity

    SYMBOL = "+"
    PRIORITY = Priority.SUM


@dataclasses.dataclass(frozen=True, slots=True)
class Difference(_Binary):
    left: Entity
    right: Entity

    SYMBOL = "-"
    PRIORITY = Priority.SUM


@dataclasses.dataclass(frozen=True, slots=True)
class Product(_Binary):
    left: Entity
    right: Entity

    SYMBOL = "*"
    PRIORITY = Priority.MUL


@dataclasses.dataclass(frozen=True, slots=True)
class Quotient(_Binary):
    left: Entity
    right: Entity

    SYMBOL = "/"
    PRIORITY = Priority.MUL


@dataclasses.dataclass(frozen=True, slots=True)
class Power(Entity):
    base: Entity
    exponent: Entity

    @property
    def children(self) -> tuple[Entity, ...]:
        return (self.base, self.exponent)

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        base, exponent = children
        return Power(base, exponent)

    @property
    def priority(self) -> Priority:
        return Priority.POW

    def __str__(self) -> str:
        # right-associative: a ^ b ^ c == a ^ (b ^ c)
        base = parenthesize(self.base, Priority.POW, right_side=True)
        exponent = parenthesize(self.exponent, Priority.POW)
        return f"{base} ^ {exponent}"


KNOWN_FUNCTIONS = frozenset({"phi", "sin", "cos", "tan", "exp", "ln", "abs", "sqrt"})


@dataclasses.dataclass(frozen=True, slots=True)
class Function(Entity):
    """A named function applied to a tuple of arguments."""

    name: str
    args: tuple[Entity, ...]

    @property
    def children(self) -> tuple[Entity, ...]:
        return self.args

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return Function(self.name, tuple(children))

    @property
    def priority(self) -> Priority:
        return Priority.FUNC

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(a) for a in self.args)})"


def phi(arg: Entity) -> Function:
    return Function("phi", (arg,))


def sin(arg: Entity) -> Function:
    return Function("sin", (arg,))


def cos(arg: Entity) -> Function:
    return Function("cos", (arg,))


def tan(arg: Entity) -> Function:
    return Function("tan", (arg,))


def exp(arg: Entity) -> Function:
    return Function("exp", (arg,))


def ln(arg: Entity) -> Function:
    return Function("ln", (arg,))


def absolute(arg: Entity) -> Function:
    return Function("abs", (arg,))


def sqrt(arg: Entity) -> Function:
    return Function("sqrt", (arg,))


# =========================================================================
# Boolean statements
# =========================================================================


class Boolean(Entity):
    """A statement; ``&``, ``|`` and ``~`` build And, Or and Not."""

    __slots__ = ()

    def __and__(self, other: Boolean) -> Boolean:
        if not isinstance(other, Boolean):
            return NotImplemented
        return And(self, other)

    def __or__(self, other: Boolean) -> Boolean:
        if not isinstance(other, Boolean):
            return NotImplemented
        return Or(self, other)

    def __invert__(self) -> Boolean:
        return Not(self)


@dataclasses.dataclass(frozen=True, slots=True)
class BooleanConstant(Boolean):
    value: bool

    @classmethod
    def create(cls, value: bool) -> BooleanConstant:
        return cls.TRUE if value else cls.FALSE

    @property
    def children(self) -> tuple[Entity, ...]:
        return ()

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return self

    def __bool__(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


BooleanConstant.TRUE = BooleanConstant(True)
BooleanConstant.FALSE = BooleanConstant(False)


@dataclasses.dataclass(frozen=True, slots=True)
class Not(Boolean):
    operand: Entity

    @property
    def children(self) -> tuple[Entity, ...]:
        return (self.operand,)

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        (operand,) = children
        return Not(operand)

    @property
    def priority(self) -> Priority:
        return Priority.NOT

    def __str__(self) -> str:
        return f"not {parenthesize(self.operand, Priority.NOT)}"


class _BinaryBoolean(_Binary, Boolean):
    __slots__ = ()


@dataclasses.dataclass(frozen=True, slots=True)
class And(_BinaryBoolean):
    left: Entity
    right: Entity

    SYMBOL = "and"
    PRIORITY = Priority.AND


@dataclasses.dataclass(frozen=True, slots=True)
class Or(_BinaryBoolean):
    left: Entity
    right: Entity

    SYMBOL = "or"
    PRIORITY = Priority.OR


@dataclasses.dataclass(frozen=True, slots=True)
class Equals(_BinaryBoolean):
    left: Entity
    right: Entity

    SYMBOL = "="
    PRIORITY = Priority.COMPARISON


@dataclasses.dataclass(frozen=True, slots=True)
class Greater(_BinaryBoolean):
    left: Entity
    right: Entity

    SYMBOL = ">"
    PRIORITY = Priority.COMPARISON


@dataclasses.dataclass(frozen=True, slots=True)
class GreaterOrEqual(_BinaryBoolean):
    left: Entity
    right: Entity

    SYMBOL = ">="
    PRIORITY = Priority.COMPARISON


@dataclasses.dataclass(frozen=True, slots=True)
class Less(_BinaryBoolean):
    left: Entity
    right: Entity

    SYMBOL = "<"
    PRIORITY = Priority.COMPARISON


@dataclasses.dataclass(frozen=True, slots=True)
class LessOrEqual(_BinaryBoolean):
    left: Entity
    right: Entity

    SYMBOL = "<="
    PRIORITY = Priority.COMPARISON


# =========================================================================
# Evaluation
# =========================================================================

ARITHMETIC_OPERATORS: dict[type, Callable[[Number, Number], Entity]] = {
    Sum: operator.add,
    Difference: operator.sub,
    Product: operator.mul,
    Quotient: operator.truediv,
    Power: operator.pow,
}

ORDER_OPERATORS: dict[type, Callable[[Number, Number], bool]] = {
    Greater: operator.gt,
    GreaterOrEqual: operator.ge,
    Less: operator.lt,
    LessOrEqual: operator.le,
}

_MPMATH_FUNCTIONS = {
    "sin": "sin",
    "cos": "cos",
    "tan": "tan",
    "exp": "exp",
    "ln": "log",
}


def evaluate_function(name: str, args: tuple[Number, ...]) -> Number:
    """Apply a known function to numeric arguments."""
    if name not in KNOWN_FUNCTIONS:
        raise CannotEvalError(f"unknown function {name!r}")
    if len(args) != 1:
        raise CannotEvalError(f"{name} takes exactly one argument, got {len(args)}")
    (arg,) = args
    if name == "phi":
        if not isinstance(arg, Integer):
            raise CannotEvalError(f"phi is defined on integers only, got {arg}")
        return arg.phi()
    if name == "abs":
        return abs(arg)
    if name == "sqrt":
        return sqrt_number(arg)
    return apply_mpmath(_MPMATH_FUNCTIONS[name], arg)


def eval_numerical(expr: Entity) -> Number:
    if isinstance(expr, Number):
        return expr
    op = ARITHMETIC_OPERATORS.get(type(expr))
    if op is not None:
        left, right = expr.children
        return op(eval_numerical(left), eval_numerical(right))  # type: ignore[return-value]
    if isinstance(expr, Function):
        return evaluate_function(
            expr.name, tuple(eval_numerical(arg) for arg in expr.args)
        )
    raise CannotEvalError(f"cannot evaluate {expr} to a number", expr)


def eval_boolean(expr: Entity) -> BooleanConstant:
    if isinstance(expr, BooleanConstant):
        return expr
    if isinstance(expr, Not):
        return BooleanConstant.create(not eval_boolean(expr.operand).value)
    if isinstance(expr, And):
        return BooleanConstant.create(
            eval_boolean(expr.left).value and eval_boolean(expr.right).value
        )
    if isinstance(expr, Or):
        return BooleanConstant.create(
            eval_boolean(expr.left).value or eval_boolean(expr.right).value
        )
    if isinstance(expr, Equals):
        return BooleanConstant.create(
            eval_numerical(expr.left) == eval_numerical(expr.right)
        )
    compare = ORDER_OPERATORS.get(type(expr))
    if compare is not None:
        left = eval_numerical(expr.left)  # type: ignore[attr-defined]
        right = eval_numerical(expr.right)  # type: ignore[attr-defined]
        if not (left.is_real and right.is_real):
            raise CannotEvalError(f"cannot order complex values in {expr}", expr)
        return BooleanConstant.create(compare(left, right))
    raise CannotEvalError(f"cannot evaluate {expr} to a boolean", expr)


_NUMERIC_NODES = (Number, Sum, Difference, Product, Quotient, Power)


def is_evaluable_numerical(expr: Entity) -> bool:
    for node in expr.walk():
        if isinstance(node, Function):
            if node.name not in KNOWN_FUNCTIONS:
                return False
        elif not isinstance(node, _NUMERIC_NODES):
            return False
    return True


def is_evaluable_boolean(expr: Entity) -> bool:
    if isinstance(expr, BooleanConstant):
        return True
    if isinstance(expr, (Not, And, Or)):
        return all(is_evaluable_boolean(child) for child in expr.children)
    if isinstance(expr, Equals) or type(expr) in ORDER_OPERATORS:
        return all(is_evaluable_numerical(child) for child in expr.children)
    return False


__all__ = [
    "And",
    "Boolean",
    "BooleanConstant",
    "Difference",
    "Equals",
    "Function",
    "Greater",
    "GreaterOrEqual",
    "KNOWN_FUNCTIONS",
    "Less",
    "LessOrEqual",
    "Not",
    "Or",
    "Power",
    "Product",
    "Quotient",
    "Sum",
    "Variable",
    "absolute",
    "cos",
    "eval_boolean",
    "eval_numerical",
    "evaluate_function",
    "exp",
    "is_evaluable_boolean",
    "is_evaluable_numerical",
    "ln",
    "phi",
    "sin",
    "sqrt",
    "tan",
]
