"""Fixpoint simplifier.

Each pass walks the tree bottom-up. At every node it first folds constants
(numeric arithmetic, exact function values, closed boolean statements,
numeric set algebra), then tries the registered rewrite rules at that node
until none applies. Passes repeat until the tree stops changing or the
configured pass budget runs out.

Folding only replaces a node when the result is exact, or when an operand
was already inexact: ``2 ^ (1/2)`` and ``sin(1)`` stay symbolic, while
``2 ^ 10``, ``sqrt(9)`` and ``sin(0)`` fold.
"""

from __future__ import annotations

import operator
from typing import Iterable, Optional

from symkit.base import Entity
from symkit.core import RewriteStatistics, SymkitConfiguration, SymkitLogger, getLogger
from symkit.entity import (
    KNOWN_FUNCTIONS,
    Boolean,
    BooleanConstant,
    Difference,
    Function,
    Power,
    Product,
    Quotient,
    Sum,
    evaluate_function,
)
from symkit.errors import CannotEvalError
from symkit.numbers import Number
from symkit.rewrite.rules import RewriteRule
from symkit.sets import Intersection, Union, intersection, union

logger = getLogger(__name__)

_FOLDABLE = {
    Sum: operator.add,
    Difference: operator.sub,
    Product: operator.mul,
    Quotient: operator.truediv,
}


def _fold_power(node: Power) -> Entity:
    base, exponent = node.base, node.exponent
    if not (isinstance(base, Number) and isinstance(exponent, Number)):
        return node
    try:
        result = base**exponent
    except ZeroDivisionError:
        return node
    if result.is_exact or not (base.is_exact and exponent.is_exact):
        return result
    return node


def _fold_function(node: Function) -> Entity:
    # phi is left to the number theory rules
    if node.name not in KNOWN_FUNCTIONS or node.name == "phi":
        return node
    if not all(isinstance(arg, Number) for arg in node.args):
        return node
    try:
        result = evaluate_function(node.name, node.args)  # type: ignore[arg-type]
    except (CannotEvalError, ZeroDivisionError, ValueError):
        return node
    if result.is_exact or not all(arg.is_exact for arg in node.args):  # type: ignore[attr-defined]
        return result
    return node


def fold_constants(node: Entity) -> Entity:
    """Evaluate ``node`` at its root if its operands allow it.

    Returns ``node`` itself when nothing can be folded; a division by zero
    is left in place rather than raised.
    """
    op = _FOLDABLE.get(type(node))
    if op is not None:
        left, right = node.children
        if isinstance(left, Number) and isinstance(right, Number):
            try:
                return op(left, right)
            except ZeroDivisionError:
                return node
        return node
    if isinstance(node, Power):
        return _fold_power(node)
    if isinstance(node, Function):
        return _fold_function(node)
    if isinstance(node, Boolean) and not isinstance(node, BooleanConstant):
        if node.evaluable_boolean:
            try:
                return node.eval_boolean()
            except (CannotEvalError, ZeroDivisionError):
                return node
        return node
    if isinstance(node, (Union, Intersection)):
        combine = union if isinstance(node, Union) else intersection
        result = combine(node.left, node.right)
        return node if result == node else result
    return node


class Simplifier:
    """Applies constant folding and rewrite rules up to a fixpoint.

    Rules default to every registered :class:`RewriteRule` minus those the
    configuration switches off.
    """

    def __init__(
        self,
        rules: Optional[Iterable[RewriteRule]] = None,
        config: Optional[SymkitConfiguration] = None,
        max_passes: Optional[int] = None,
    ):
        self.config = config if config is not None else SymkitConfiguration.defaults()
        self.max_passes = max_passes if max_passes is not None else self.config.max_passes
        if rules is None:
            disabled = self.config.disabled_rules()
            rules = [
                rule
                for rule in RewriteRule.instantiate_all()
                if rule.name.lower() not in disabled
            ]
            for name in sorted(disabled):
                if RewriteRule.find(name) is None:
                    logger.warning("Configuration disables unknown rule %s", name)
                else:
                    logger.debug("Rule %s disabled by configuration", name)
        self.rules: list[RewriteRule] = list(rules)
        self.stats = RewriteStatistics()

    def simplify(self, entity: Entity) -> Entity:
        with SymkitLogger.phase("simplify"):
            current = entity
            for _ in range(self.max_passes):
                self.stats.record_pass()
                rewritten = current.transform(self._rewrite_node)
                if rewritten == current:
                    return current
                current = rewritten
            logger.info(
                "No fixpoint for %s after %d passes; returning %s",
                entity,
                self.max_passes,
                current,
            )
            self.stats.report()
            return current

    def _rewrite_node(self, node: Entity) -> Entity:
        for _ in range(self.max_passes):
            folded = fold_constants(node)
            if folded is not node:
                self.stats.record_fold()
                node = folded
                continue
            for rule in self.rules:
                result = rule.apply(node)
                if result is not node:
                    self.stats.record_rule_fired(rule.name)
                    if logger.debug_on:
                        logger.debug("%s: %s => %s", rule.name, node, result)
                    node = result
                    break
            else:
                return node
        return node


_default_simplifier: Optional[Simplifier] = None


def get_default_simplifier() -> Simplifier:
    global _default_simplifier
    if _default_simplifier is None:
        _default_simplifier = Simplifier()
    return _default_simplifier


def set_default_simplifier(simplifier: Optional[Simplifier]) -> None:
    """Install the simplifier behind ``Entity.simplify``; ``None`` resets it."""
    global _default_simplifier
    _default_simplifier = simplifier


def simplify(entity: Entity) -> Entity:
    return get_default_simplifier().simplify(entity)


__all__ = [
    "Simplifier",
    "fold_constants",
    "get_default_simplifier",
    "set_default_simplifier",
    "simplify",
]
