"""Root of the expression tree.

Every node, from a plain Integer to an Interval of solutions, derives from
:class:`Entity`. Nodes are frozen dataclasses: equality is structural, hashing
follows equality, and subtrees can be shared between parents freely since
nothing is ever mutated after construction.

The arithmetic operators defined here only *assemble* structure. ``a + b``
produces a ``Sum`` node; evaluation happens in the simplifier or in
``eval_numerical``. Numbers override the operators so that arithmetic between
two numbers stays arithmetic (see :mod:`symkit.numbers`).

Python scalars are never coerced implicitly: ``x + 1`` raises ``TypeError``;
write ``x + Integer.create(1)`` or ``x + create_number(1)``.
"""

from __future__ import annotations

import abc
import enum
from typing import TYPE_CHECKING, Callable, Iterator

if TYPE_CHECKING:
    from symkit.entity import BooleanConstant, Variable
    from symkit.numbers import Number
    from symkit.sets import Set


class Priority(enum.IntEnum):
    """Binding strength of a node; higher binds tighter.

    Renderers compare a child's priority with its parent's to decide where
    parentheses go.
    """

    UNION = 2
    INTERSECTION = 4
    OR = 10
    AND = 12
    NOT = 14
    COMPARISON = 16
    SUM = 20
    MUL = 40
    POW = 60
    FUNC = 80
    LEAF = 100


class Entity(abc.ABC):
    """An immutable expression node."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def children(self) -> tuple[Entity, ...]:
        """Direct sub-expressions, left to right."""
        ...

    @abc.abstractmethod
    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        """Return a node of the same variant and attributes over new children."""
        ...

    @property
    def priority(self) -> Priority:
        return Priority.LEAF

    # =========================================================================
    # Construction operators (never evaluate)
    # =========================================================================

    def __add__(self, other: Entity) -> Entity:
        if not isinstance(other, Entity):
            return NotImplemented
        from symkit.entity import Sum

        return Sum(self, other)

    def __sub__(self, other: Entity) -> Entity:
        if not isinstance(other, Entity):
            return NotImplemented
        from symkit.entity import Difference

        return Difference(self, other)

    def __mul__(self, other: Entity) -> Entity:
        if not isinstance(other, Entity):
            return NotImplemented
        from symkit.entity import Product

        return Product(self, other)

    def __truediv__(self, other: Entity) -> Entity:
        if not isinstance(other, Entity):
            return NotImplemented
        from symkit.entity import Quotient

        return Quotient(self, other)

    def __pow__(self, other: Entity) -> Entity:
        if not isinstance(other, Entity):
            return NotImplemented
        from symkit.entity import Power

        return Power(self, other)

    def __neg__(self) -> Entity:
        from symkit.entity import Product
        from symkit.numbers import Integer

        return Product(Integer.MINUS_ONE, self)

    def __pos__(self) -> Entity:
        return self

    # Boolean builders. ``==`` stays structural equality.
    def equals(self, other: Entity) -> Entity:
        from symkit.entity import Equals

        return Equals(self, other)

    def greater(self, other: Entity) -> Entity:
        from symkit.entity import Greater

        return Greater(self, other)

    def greater_or_equal(self, other: Entity) -> Entity:
        from symkit.entity import GreaterOrEqual

        return GreaterOrEqual(self, other)

    def less(self, other: Entity) -> Entity:
        from symkit.entity import Less

        return Less(self, other)

    def less_or_equal(self, other: Entity) -> Entity:
        from symkit.entity import LessOrEqual

        return LessOrEqual(self, other)

    # =========================================================================
    # Read-only traversal
    # =========================================================================

    def walk(self) -> Iterator[Entity]:
        """Pre-order iteration over this node and all of its descendants."""
        stack: list[Entity] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def contains(self, node: Entity) -> bool:
        """True if ``node`` occurs as a subtree (structural comparison)."""
        return any(sub == node for sub in self.walk())

    @property
    def free_variables(self) -> frozenset[Variable]:
        from symkit.entity import Variable

        return frozenset(n for n in self.walk() if isinstance(n, Variable))

    def transform(self, fn: Callable[[Entity], Entity]) -> Entity:
        """Rebuild the tree bottom-up, applying ``fn`` to every node.

        Unchanged subtrees are returned as the identical objects, so callers
        can detect "nothing happened" with ``is``.
        """
        children = self.children
        if children:
            new_children = tuple(child.transform(fn) for child in children)
            if any(new is not old for new, old in zip(new_children, children)):
                node = self.with_children(new_children)
            else:
                node = self
        else:
            node = self
        return fn(node)

    def substitute(self, variable: Entity, value: Entity) -> Entity:
        """Replace every occurrence of ``variable`` by ``value``."""
        return self.transform(lambda node: value if node == variable else node)

    # =========================================================================
    # Orchestration over the solver and rewrite components
    # =========================================================================

    def simplify(self) -> Entity:
        from symkit.rewrite.simplifier import simplify

        return simplify(self)

    @property
    def evaluable_numerical(self) -> bool:
        from symkit.entity import is_evaluable_numerical

        return is_evaluable_numerical(self)

    @property
    def evaluable_boolean(self) -> bool:
        from symkit.entity import is_evaluable_boolean

        return is_evaluable_boolean(self)

    def eval_numerical(self) -> Number:
        """Collapse into a Number.

        Raises:
            CannotEvalError: free variables, booleans or sets are present.
        """
        from symkit.entity import eval_numerical

        return eval_numerical(self)

    def eval_boolean(self) -> BooleanConstant:
        """Collapse into a BooleanConstant.

        Raises:
            CannotEvalError: the tree is not a closed boolean statement.
        """
        from symkit.entity import eval_boolean

        return eval_boolean(self)

    def expand(self) -> Entity:
        from symkit.solvers.calculus import expand

        return expand(self)

    def factorize(self) -> Entity:
        from symkit.solvers.calculus import factorize

        return factorize(self)

    def derive(self, variable: Variable) -> Entity:
        from symkit.solvers.calculus import derive

        return derive(self, variable)

    def solve_equation(self, variable: Variable) -> Set:
        """Solve ``self = 0`` for ``variable``."""
        from symkit.solvers.equation import solve_equation

        return solve_equation(self, variable)

    def solve(self, variable: Variable) -> Set:
        """Solve a boolean statement (equality, comparison, and/or) for ``variable``."""
        from symkit.solvers.equation import solve

        return solve(self, variable)


def parenthesize(child: Entity, parent: Priority, right_side: bool = False) -> str:
    """Render ``child`` inside a parent of priority ``parent``."""
    text = str(child)
    if child.priority < parent or (right_side and child.priority == parent):
        return f"({text})"
    return text


__all__ = ["Entity", "Priority", "parenthesize"]
