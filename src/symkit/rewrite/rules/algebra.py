"""Algebraic identities applied by the simplifier.

Every rule here except the ones marked ``SKIP_VERIFICATION`` is proved over
the reals by :func:`symkit.rewrite.backends.z3.verify_rule`.
"""

from symkit.entity import Power
from symkit.numbers import Integer
from symkit.rewrite.dsl import Wild, WildNumber, when
from symkit.rewrite.rules._base import RewriteRule

x = Wild("x")
c = WildNumber("c")
c1 = WildNumber("c1")
c2 = WildNumber("c2")

ZERO = Integer.ZERO
ONE = Integer.ONE
TWO = Integer.create(2)
MINUS_ONE = Integer.MINUS_ONE


# --- additive identities ---------------------------------------------------


class SumWithZero(RewriteRule):
    PATTERN = x + ZERO
    REPLACEMENT = x
    DESCRIPTION = "x + 0 => x"


class ZeroPlusSum(RewriteRule):
    PATTERN = ZERO + x
    REPLACEMENT = x
    DESCRIPTION = "0 + x => x"


class DifferenceWithZero(RewriteRule):
    PATTERN = x - ZERO
    REPLACEMENT = x
    DESCRIPTION = "x - 0 => x"


class ZeroMinusDifference(RewriteRule):
    PATTERN = ZERO - x
    REPLACEMENT = MINUS_ONE * x
    DESCRIPTION = "0 - x => -1 * x"


class DifferenceOfSelf(RewriteRule):
    PATTERN = x - x
    REPLACEMENT = ZERO
    DESCRIPTION = "x - x => 0"


class SumOfSelf(RewriteRule):
    PATTERN = x + x
    REPLACEMENT = TWO * x
    DESCRIPTION = "x + x => 2 * x"


class SubtractNegativeNumber(RewriteRule):
    PATTERN = x - c
    REPLACEMENT = x + MINUS_ONE * c
    CONSTRAINTS = [when.is_negative("c")]
    DESCRIPTION = "x - (-c) => x + c"


class AddNegativeNumber(RewriteRule):
    PATTERN = x + c
    REPLACEMENT = x - MINUS_ONE * c
    CONSTRAINTS = [when.is_negative("c")]
    DESCRIPTION = "x + (-c) => x - c"


# --- multiplicative identities ---------------------------------------------


class ProductWithOne(RewriteRule):
    PATTERN = x * ONE
    REPLACEMENT = x
    DESCRIPTION = "x * 1 => x"


class OneTimesProduct(RewriteRule):
    PATTERN = ONE * x
    REPLACEMENT = x
    DESCRIPTION = "1 * x => x"


class ProductWithZero(RewriteRule):
    PATTERN = x * ZERO
    REPLACEMENT = ZERO
    DESCRIPTION = "x * 0 => 0"


class ZeroTimesProduct(RewriteRule):
    PATTERN = ZERO * x
    REPLACEMENT = ZERO
    DESCRIPTION = "0 * x => 0"


class NumberAfterProduct(RewriteRule):
    """Moves a numeric factor to the front so coefficients line up."""

    PATTERN = x * c
    REPLACEMENT = c * x
    CONSTRAINTS = [when.is_not_number("x")]
    DESCRIPTION = "x * c => c * x"


class NestedNumericProduct(RewriteRule):
    PATTERN = c1 * (c2 * x)
    REPLACEMENT = (c1 * c2) * x
    DESCRIPTION = "c1 * (c2 * x) => (c1 * c2) * x"


class DoubleNegation(RewriteRule):
    PATTERN = MINUS_ONE * (MINUS_ONE * x)
    REPLACEMENT = x
    DESCRIPTION = "-(-x) => x"


class QuotientByOne(RewriteRule):
    PATTERN = x / ONE
    REPLACEMENT = x
    DESCRIPTION = "x / 1 => x"


class QuotientOfSelf(RewriteRule):
    PATTERN = x / x
    REPLACEMENT = ONE
    CONSTRAINTS = [when.is_nonzero("x")]
    DESCRIPTION = "x / x => 1 for non-zero x"


class ZeroQuotient(RewriteRule):
    PATTERN = ZERO / x
    REPLACEMENT = ZERO
    CONSTRAINTS = [when.is_nonzero("x")]
    DESCRIPTION = "0 / x => 0 for non-zero x"


# --- powers ----------------------------------------------------------------


class PowerOfOne(RewriteRule):
    PATTERN = Power(x, ONE)
    REPLACEMENT = x
    DESCRIPTION = "x ^ 1 => x"


class PowerOfZero(RewriteRule):
    PATTERN = Power(x, ZERO)
    REPLACEMENT = ONE
    CONSTRAINTS = [when.is_nonzero("x")]
    DESCRIPTION = "x ^ 0 => 1 for non-zero x"


class OneToPower(RewriteRule):
    PATTERN = Power(ONE, x)
    REPLACEMENT = ONE
    DESCRIPTION = "1 ^ x => 1"
    SKIP_VERIFICATION = True


class ProductOfSelf(RewriteRule):
    PATTERN = x * x
    REPLACEMENT = Power(x, TWO)
    CONSTRAINTS = [when.is_not_number("x")]
    DESCRIPTION = "x * x => x ^ 2"
