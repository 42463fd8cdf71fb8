"""Declarative rewrite rules.

A rule is a class with a ``PATTERN``, a ``REPLACEMENT`` and optional guard
``CONSTRAINTS``. Subclasses register themselves through
:class:`~symkit.core.registry.Registrant`, so importing a rule module is
enough to make its rules available to :meth:`RewriteRule.instantiate_all`.

Usage:
    from symkit.rewrite.backends.z3 import verify_rule
    for rule in RewriteRule.instantiate_all():
        verify_rule(rule)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Self

from symkit.base import Entity
from symkit.core import getLogger
from symkit.core.registry import Registrant
from symkit.rewrite.dsl import Bindings, instantiate, match

logger = getLogger(__name__)


class RewriteRule(Registrant):
    """A guarded, verifiable rewrite ``PATTERN -> REPLACEMENT``.

    Class Variables:
        PATTERN: Entity tree with wildcards to match.
        REPLACEMENT: Entity tree with the same wildcards (and possibly
                     DynamicConst leaves) to build on a match.
        CONSTRAINTS: Guards over the bindings; every one must hold.
        SKIP_VERIFICATION: Set for rules z3 cannot express (number theory,
                           non-integer powers, dynamic constants).
        KNOWN_INCORRECT: Set for rules that are expected to fail proof.

    Example:
        >>> from symkit.numbers import Integer
        >>> from symkit.rewrite.dsl import Wild
        >>> x = Wild("x")
        >>> class SumWithZero(RewriteRule):
        ...     PATTERN = x + Integer.ZERO
        ...     REPLACEMENT = x
    """

    CONSTRAINTS: List = []
    DESCRIPTION: str = "No description"
    KNOWN_INCORRECT: bool = False
    SKIP_VERIFICATION: bool = False

    @classmethod
    def resolve_lazy_rules(cls) -> None:
        """Force load all lazily registered rules into the main registry."""
        for name in list(cls.lazy_registry.keys()):
            try:
                cls.get(name)
                logger.debug("Lazily resolved rule: %s", name)
            except Exception as e:
                logger.error("Failed to resolve lazy rule '%s': %s", name, e)

    @classmethod
    def instantiate_all(cls) -> List[Self]:
        """Resolve lazy rules and instantiate every registered rule.

        Classes without a pattern (intermediate bases in tests, for
        instance) are skipped.
        """
        cls.resolve_lazy_rules()

        instances: List[Self] = []
        for rule_cls in cls.registry.values():
            if isabstract(rule_cls):
                logger.debug("Skipping abstract class: %s", rule_cls.__name__)
                continue
            if not any("_pattern" in vars(base) for base in rule_cls.__mro__):
                logger.debug("Skipping class without pattern: %s", rule_cls.__name__)
                continue
            instances.append(rule_cls())
        return instances

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if isinstance(cls.__dict__.get("PATTERN"), Entity):
            cls._pattern = cls.__dict__["PATTERN"]
        if isinstance(cls.__dict__.get("REPLACEMENT"), Entity):
            cls._replacement = cls.__dict__["REPLACEMENT"]

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def description(self) -> str:
        return getattr(self.__class__, "DESCRIPTION", "No description")

    @property
    def pattern(self) -> Optional[Entity]:
        for cls in type(self).__mro__:
            if "_pattern" in vars(cls):
                return cls._pattern
        return None

    @property
    def replacement(self) -> Optional[Entity]:
        for cls in type(self).__mro__:
            if "_replacement" in vars(cls):
                return cls._replacement
        return None

    # =========================================================================
    # Matching
    # =========================================================================

    def match(self, node: Entity) -> Optional[Bindings]:
        """Bindings for ``node`` if the pattern matches and every guard holds."""
        bindings = match(self.pattern, node)
        if bindings is None:
            return None
        if not self.check_runtime_constraints(bindings):
            return None
        return bindings

    def apply(self, node: Entity) -> Entity:
        """Rewrite ``node`` at its root; returns ``node`` itself on no match."""
        bindings = self.match(node)
        if bindings is None:
            return node
        return instantiate(self.replacement, bindings)

    def check_runtime_constraints(self, bindings: Dict[str, Any]) -> bool:
        if not self.CONSTRAINTS:
            return True
        for constraint in self.CONSTRAINTS:
            try:
                if not constraint(bindings):
                    return False
            except (KeyError, AttributeError, TypeError) as e:
                logger.debug("Constraint check failed for %s: %s", self.name, e)
                return False
        return True

    # =========================================================================
    # Z3 constraint generation
    # =========================================================================

    def get_constraints(self, z3_vars: Dict[str, Any]) -> List:
        """z3 assumptions derived from the guards that carry a ``_to_z3`` hook."""
        constraints = []
        for constraint in self.CONSTRAINTS:
            to_z3 = getattr(constraint, "_to_z3", None)
            if to_z3 is None:
                continue
            expr = to_z3(z3_vars)
            if expr is not None:
                constraints.append(expr)
        return constraints

    def __repr__(self) -> str:
        return f"<{self.name}: {self.pattern} => {self.replacement}>"


def isabstract(cls) -> bool:
    return bool(getattr(cls, "__abstractmethods__", None))
