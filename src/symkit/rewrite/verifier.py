"""Backend-agnostic verification of rewrites.

Backends live in :mod:`symkit.rewrite.backends`; this module defines the
protocol they implement and a functional entry point for one-off checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Protocol, runtime_checkable

from symkit.base import Entity
from symkit.core import getLogger
from symkit.entity import Variable
from symkit.rewrite.dsl import Wild

logger = getLogger(__name__)


@dataclass
class VerificationOptions:
    """Options handed to a verification engine.

    Attributes:
        timeout_ms: Solver timeout in milliseconds (0 = no timeout).
        extra: Additional engine-specific options.
    """

    timeout_ms: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)


DEFAULT_OPTIONS = VerificationOptions()


@runtime_checkable
class VerificationEngine(Protocol):
    """Interface every verification backend implements."""

    def create_variables(
        self, var_names: set[str], options: VerificationOptions = DEFAULT_OPTIONS
    ) -> Dict[str, Any]: ...

    def prove_equivalence(
        self,
        pattern: Entity,
        replacement: Entity,
        variables: Dict[str, Any] | None = None,
        constraints: List[Any] | None = None,
        options: VerificationOptions = DEFAULT_OPTIONS,
    ) -> tuple[bool, Dict[str, str] | None]: ...


def get_default_engine() -> VerificationEngine:
    """Get the default verification engine (Z3).

    Raises:
        SymkitZ3Exception: If Z3 is not installed.
    """
    from symkit.rewrite.backends.z3 import Z3VerificationEngine

    return Z3VerificationEngine()


def verify_transformation(
    pattern: Entity,
    replacement: Entity,
    constraints: List[Any] | None = None,
    options: VerificationOptions | None = None,
    engine: VerificationEngine | None = None,
) -> tuple[bool, dict[str, str] | None]:
    """Check that rewriting ``pattern`` into ``replacement`` preserves value.

    Example:
        >>> from symkit.entity import Variable
        >>> from symkit.numbers import Integer
        >>> x = Variable("x")
        >>> is_valid, _ = verify_transformation(x - x, Integer.ZERO)
    """
    if options is None:
        options = DEFAULT_OPTIONS
    if engine is None:
        engine = get_default_engine()

    var_names: set[str] = set()
    _collect_var_names(pattern, var_names)
    _collect_var_names(replacement, var_names)
    solver_vars = engine.create_variables(var_names, options)

    return engine.prove_equivalence(
        pattern,
        replacement,
        variables=solver_vars,
        constraints=constraints,
        options=options,
    )


def verify_rules(rules: Iterable[Any] | None = None) -> dict[str, bool]:
    """Run :func:`~symkit.rewrite.backends.z3.verify_rule` over a rule set.

    Defaults to every registered rule. A failing proof raises.
    """
    from symkit.rewrite.backends.z3 import verify_rule
    from symkit.rewrite.rules import RewriteRule

    if rules is None:
        rules = RewriteRule.instantiate_all()
    results = {}
    for rule in rules:
        results[rule.name] = verify_rule(rule)
    logger.info("Verified %d rules", len(results))
    return results


def _collect_var_names(expr: Entity, var_names: set) -> None:
    for node in expr.walk():
        if isinstance(node, (Wild, Variable)):
            var_names.add(node.name)


__all__ = [
    "DEFAULT_OPTIONS",
    "VerificationEngine",
    "VerificationOptions",
    "get_default_engine",
    "verify_rules",
    "verify_transformation",
]
