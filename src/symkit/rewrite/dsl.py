"""Pattern language for rewrite rules.

Patterns are ordinary entity trees that may contain wildcards. Since every
wildcard is itself an :class:`~symkit.base.Entity`, patterns are written with
the same operators as expressions::

    x = Wild("x")
    PATTERN = x + Integer.ZERO
    REPLACEMENT = x

Matching is purely structural. A wildcard name that occurs twice in a
pattern must bind structurally equal subtrees both times.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, Optional

from symkit.base import Entity
from symkit.numbers import Integer, Number

Bindings = Dict[str, Entity]


@dataclasses.dataclass(frozen=True, slots=True)
class Wild(Entity):
    """Matches any subtree."""

    name: str

    @property
    def children(self) -> tuple[Entity, ...]:
        return ()

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return self

    def accepts(self, node: Entity) -> bool:
        return True

    def __str__(self) -> str:
        return f"?{self.name}"


@dataclasses.dataclass(frozen=True, slots=True)
class WildInteger(Wild):
    """Matches an Integer leaf only."""

    def accepts(self, node: Entity) -> bool:
        return isinstance(node, Integer)


@dataclasses.dataclass(frozen=True, slots=True)
class WildNumber(Wild):
    """Matches any Number leaf."""

    def accepts(self, node: Entity) -> bool:
        return isinstance(node, Number)


@dataclasses.dataclass(frozen=True, slots=True)
class DynamicConst(Entity):
    """A replacement leaf computed from the bindings at rewrite time.

    Example:
        >>> REPLACEMENT = DynamicConst("phi_n", lambda ctx: ctx["n"].phi())
    """

    name: str
    compute: Callable[[Bindings], Entity] = dataclasses.field(compare=False)

    @property
    def children(self) -> tuple[Entity, ...]:
        return ()

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return self

    def __str__(self) -> str:
        return self.name


def match(
    pattern: Entity, node: Entity, bindings: Optional[Bindings] = None
) -> Optional[Bindings]:
    """Match ``node`` against ``pattern``.

    Returns the wildcard bindings on success, ``None`` otherwise.
    """
    bindings = {} if bindings is None else bindings
    if isinstance(pattern, Wild):
        if not pattern.accepts(node):
            return None
        bound = bindings.get(pattern.name)
        if bound is None:
            bindings[pattern.name] = node
            return bindings
        return bindings if bound == node else None

    if type(pattern) is not type(node):
        return None
    pattern_children, node_children = pattern.children, node.children
    if not pattern_children:
        return bindings if pattern == node else None
    if len(pattern_children) != len(node_children):
        return None
    # non-child attributes (function name, interval flags) must agree
    if pattern.with_children(node_children) != node:
        return None
    for p_child, n_child in zip(pattern_children, node_children):
        if match(p_child, n_child, bindings) is None:
            return None
    return bindings


def instantiate(template: Entity, bindings: Bindings) -> Entity:
    """Substitute bindings into ``template``. Never evaluates."""
    if isinstance(template, Wild):
        return bindings[template.name]
    if isinstance(template, DynamicConst):
        return template.compute(bindings)
    children = template.children
    if not children:
        return template
    return template.with_children(
        tuple(instantiate(child, bindings) for child in children)
    )


def wildcard_names(pattern: Entity) -> list[str]:
    """Names of the wildcards in ``pattern``, in first-occurrence order."""
    names: list[str] = []
    for node in pattern.walk():
        if isinstance(node, Wild) and node.name not in names:
            names.append(node.name)
    return names


class ConstraintPredicate:
    """Factories for guard predicates over match bindings.

    Each factory returns ``check(bindings) -> bool``. Predicates that have a
    real-arithmetic meaning also carry a ``_to_z3`` hook so rule verification
    can assume them.

    Example:
        >>> from symkit.rewrite.dsl import when
        >>> CONSTRAINTS = [when.is_prime("p")]
    """

    @staticmethod
    def is_prime(var: str):
        def check(ctx):
            node = ctx.get(var)
            return isinstance(node, Integer) and node.is_prime

        return check

    @staticmethod
    def is_integer(var: str):
        def check(ctx):
            return isinstance(ctx.get(var), Integer)

        return check

    @staticmethod
    def is_positive(var: str):
        def check(ctx):
            node = ctx.get(var)
            return isinstance(node, Number) and node.is_positive

        def to_z3(z3_vars):
            if var not in z3_vars:
                return None
            return z3_vars[var] > 0

        check._to_z3 = to_z3
        return check

    @staticmethod
    def is_negative(var: str):
        def check(ctx):
            node = ctx.get(var)
            return isinstance(node, Number) and node.is_negative

        def to_z3(z3_vars):
            if var not in z3_vars:
                return None
            return z3_vars[var] < 0

        check._to_z3 = to_z3
        return check

    @staticmethod
    def is_nonzero(var: str):
        """Holds unless the bound subtree is literally the number zero.

        Symbolic subtrees are assumed non-zero.
        """

        def check(ctx):
            if var not in ctx:
                return False
            node = ctx[var]
            return not (isinstance(node, Number) and node.is_zero)

        def to_z3(z3_vars):
            if var not in z3_vars:
                return None
            return z3_vars[var] != 0

        check._to_z3 = to_z3
        return check

    @staticmethod
    def is_not_number(var: str):
        def check(ctx):
            return var in ctx and not isinstance(ctx[var], Number)

        return check

    @staticmethod
    def satisfies(var: str, predicate: Callable[[Any], bool]):
        """Run an arbitrary predicate on the bound subtree.

        Example:
            >>> CONSTRAINTS = [when.satisfies("n", lambda n: n.value % 2 == 0)]
        """

        def check(ctx):
            if var not in ctx:
                return False
            return bool(predicate(ctx[var]))

        return check


# Singleton instance for constraint predicates
when = ConstraintPredicate()


__all__ = [
    "Bindings",
    "ConstraintPredicate",
    "DynamicConst",
    "Wild",
    "WildInteger",
    "WildNumber",
    "instantiate",
    "match",
    "wildcard_names",
    "when",
]
