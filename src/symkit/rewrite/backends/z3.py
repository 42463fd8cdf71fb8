"""Z3 backend: proves rewrite rules over the reals.

A rule is sound when ``PATTERN != REPLACEMENT`` is unsatisfiable under the
z3 form of its guards. Wildcards become ``z3.Real`` constants; Integer and
Rational literals become exact rational values. Non-integer powers, inexact
reals and functions other than plain arithmetic have no translation, which
is why rules using them carry ``SKIP_VERIFICATION``.

Example:
    from symkit.entity import Variable
    from symkit.rewrite.backends.z3 import prove_equivalence

    x = Variable("x")
    is_equiv, _ = prove_equivalence(x + x, Integer.create(2) * x)
"""

from __future__ import annotations

import typing
from typing import Any, Dict

from symkit.base import Entity
from symkit.core import getLogger
from symkit.entity import Difference, Power, Product, Quotient, Sum, Variable
from symkit.errors import SymkitZ3Exception
from symkit.numbers import Integer, Rational
from symkit.rewrite.dsl import Wild, wildcard_names

logger = getLogger(__name__)
proof_logger = getLogger("symkit.z3")

try:
    import z3

    Z3_INSTALLED = True
except ImportError:
    logger.info("Z3 features disabled. Install z3-solver to enable them")
    Z3_INSTALLED = False

if typing.TYPE_CHECKING:
    from symkit.rewrite.rules import RewriteRule
    from symkit.rewrite.verifier import VerificationOptions


# =============================================================================
# Z3VerificationEngine - Implements VerificationEngine protocol
# =============================================================================


class Z3VerificationEngine:
    """Z3 implementation of the VerificationEngine protocol."""

    def __init__(self):
        if not Z3_INSTALLED:
            raise SymkitZ3Exception(
                "Z3 is not installed. Install z3-solver to use Z3VerificationEngine."
            )

    def create_variables(
        self, var_names: set[str], options: "VerificationOptions | None" = None
    ) -> Dict[str, Any]:
        return create_z3_variables(var_names)

    def prove_equivalence(
        self,
        pattern: Entity,
        replacement: Entity,
        variables: Dict[str, Any] | None = None,
        constraints: list[Any] | None = None,
        options: "VerificationOptions | None" = None,
    ) -> tuple[bool, Dict[str, str] | None]:
        timeout_ms = options.timeout_ms if options else 0
        return prove_equivalence(
            pattern,
            replacement,
            z3_vars=variables,
            constraints=constraints,
            timeout_ms=timeout_ms,
        )


# =============================================================================
# Z3VerificationVisitor - Converts entity trees to Z3
# =============================================================================


class Z3VerificationVisitor:
    """Converts an entity tree into a z3 real-valued expression.

    Variables and wildcards map to ``z3.Real`` constants, shared through
    ``var_map`` so that pattern and replacement talk about the same values.
    """

    def __init__(self, var_map: dict[str, Any] | None = None):
        if not Z3_INSTALLED:
            raise SymkitZ3Exception(
                "Z3 is not installed. Install z3-solver to use Z3VerificationVisitor."
            )
        self.var_map: dict[str, Any] = var_map if var_map is not None else {}

    def _variable(self, name: str):
        if name not in self.var_map:
            self.var_map[name] = z3.Real(name)
        return self.var_map[name]

    def visit(self, expr: Entity):
        """Return the z3 form of ``expr``.

        Raises:
            ValueError: ``expr`` uses a construct with no real-arithmetic form.
        """
        if expr is None:
            raise ValueError("Cannot visit None expression")

        match expr:
            case Wild(name=name) | Variable(name=name):
                return self._variable(name)
            case Integer(value=value):
                return z3.RealVal(value)
            case Rational(value=value):
                return z3.Q(value.numerator, value.denominator)
            case Sum(left=left, right=right):
                return self.visit(left) + self.visit(right)
            case Difference(left=left, right=right):
                return self.visit(left) - self.visit(right)
            case Product(left=left, right=right):
                return self.visit(left) * self.visit(right)
            case Quotient(left=left, right=right):
                return self.visit(left) / self.visit(right)
            case Power(base=base, exponent=Integer(value=n)):
                return self._visit_integer_power(base, n)
            case _:
                raise ValueError(f"No z3 translation for {type(expr).__name__}: {expr}")

    def _visit_integer_power(self, base: Entity, n: int):
        if n == 0:
            return z3.RealVal(1)
        z3_base = self.visit(base)
        result = z3_base
        for _ in range(abs(n) - 1):
            result = result * z3_base
        if n < 0:
            return 1 / result
        return result

    def get_variables(self) -> dict[str, Any]:
        return self.var_map.copy()


# =============================================================================
# prove_equivalence / verify_rule
# =============================================================================


def create_z3_variables(var_names: set[str]) -> dict[str, Any]:
    if not Z3_INSTALLED:
        raise SymkitZ3Exception("Z3 is not installed")
    return {name: z3.Real(name) for name in sorted(var_names)}


def _counterexample(model, variables: dict[str, Any]) -> dict[str, str]:
    return {
        name: str(model.eval(var, model_completion=True))
        for name, var in variables.items()
    }


def prove_equivalence(
    pattern: Entity,
    replacement: Entity,
    z3_vars: dict[str, Any] | None = None,
    constraints: list[Any] | None = None,
    timeout_ms: int = 0,
) -> tuple[bool, dict[str, str] | None]:
    """Prove that two entity trees agree for every real assignment.

    Returns:
        ``(True, None)`` when proven; ``(False, counterexample)`` when z3
        finds an assignment that separates them; ``(False, None)`` when the
        trees cannot be translated or z3 answers unknown.
    """
    if not Z3_INSTALLED:
        raise SymkitZ3Exception("Z3 is not installed. Install z3-solver to prove equivalence.")

    visitor = Z3VerificationVisitor(var_map=z3_vars)
    try:
        pattern_z3 = visitor.visit(pattern)
        replacement_z3 = visitor.visit(replacement)
    except ValueError as e:
        logger.debug("Cannot translate to z3: %s", e)
        return False, None

    solver = z3.Solver()
    if timeout_ms > 0:
        solver.set("timeout", timeout_ms)
    for constraint in constraints or []:
        solver.add(constraint)
    solver.add(pattern_z3 != replacement_z3)
    proof_logger.info(solver.sexpr())
    result = solver.check()

    if result == z3.unsat:
        return True, None
    if result == z3.sat:
        return False, _counterexample(solver.model(), visitor.get_variables())
    return False, None


def verify_rule(rule: "RewriteRule") -> bool:
    """Verify that a rule's pattern is equivalent to its replacement.

    Returns:
        True if the rule is proven correct or opts out of verification.

    Raises:
        AssertionError: the proof fails and the rule is not marked
            ``KNOWN_INCORRECT``; the message carries a counterexample.
    """
    if not Z3_INSTALLED:
        raise SymkitZ3Exception(
            f"Cannot verify rule {getattr(rule, 'name', 'unknown')}: Z3 is not installed."
        )
    rule_name = getattr(rule, "name", rule.__class__.__name__)

    if getattr(rule, "SKIP_VERIFICATION", False):
        logger.debug("Skipping verification for %s: SKIP_VERIFICATION=True", rule_name)
        return True

    pattern, replacement = rule.pattern, rule.replacement
    if pattern is None or replacement is None:
        logger.debug("Skipping verification for %s: no pattern", rule_name)
        return True

    names = set(wildcard_names(pattern)) | set(wildcard_names(replacement))
    z3_vars = create_z3_variables(names)
    constraints = rule.get_constraints(z3_vars)

    proof_logger.info("; %s", rule_name)
    is_equiv, counterexample = prove_equivalence(
        pattern, replacement, z3_vars=z3_vars, constraints=constraints
    )
    if is_equiv:
        logger.debug("Rule %s verified successfully", rule_name)
        return True
    if getattr(rule, "KNOWN_INCORRECT", False):
        logger.info("Rule %s is known to be incorrect", rule_name)
        return False

    msg = (
        f"\n--- VERIFICATION FAILED ---\n"
        f"Rule:        {rule_name}\n"
        f"Description: {getattr(rule, 'description', 'No description')}\n"
        f"Identity:    {pattern} => {replacement}\n"
    )
    if counterexample:
        msg += f"Counterexample: {counterexample}\n"
    if constraints:
        msg += f"Constraints were: {constraints}\n"
    msg += (
        "This rule does NOT preserve semantics and should not be used.\n"
        "Please fix the pattern, replacement, or constraints."
    )
    raise AssertionError(msg)


__all__ = [
    "Z3_INSTALLED",
    "Z3VerificationEngine",
    "Z3VerificationVisitor",
    "create_z3_variables",
    "prove_equivalence",
    "verify_rule",
]
