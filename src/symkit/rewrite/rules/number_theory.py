"""Rules for Euler's totient ``phi``."""

from symkit.entity import Power, phi
from symkit.numbers import Integer
from symkit.rewrite.dsl import DynamicConst, Wild, WildInteger, when
from symkit.rewrite.rules._base import RewriteRule

p = WildInteger("p")
k = Wild("k")
n = WildInteger("n")

ONE = Integer.ONE


class PhiOfPrimePower(RewriteRule):
    """phi(p^k) => p^(k-1) * (p-1) for a prime p.

    Holds for symbolic k as well, which is what makes it useful before the
    power is folded away.
    """

    PATTERN = phi(Power(p, k))
    REPLACEMENT = Power(p, k - ONE) * (p - ONE)
    CONSTRAINTS = [when.is_prime("p")]
    DESCRIPTION = "Totient of a prime power"
    SKIP_VERIFICATION = True


class PhiOfPrime(RewriteRule):
    PATTERN = phi(p)
    REPLACEMENT = p - ONE
    CONSTRAINTS = [when.is_prime("p")]
    DESCRIPTION = "Totient of a prime"
    SKIP_VERIFICATION = True


class PhiOfInteger(RewriteRule):
    """phi(n) => the totient value for any integer literal (0 when n <= 0)."""

    PATTERN = phi(n)
    REPLACEMENT = DynamicConst("phi_n", lambda ctx: ctx["n"].phi())
    CONSTRAINTS = [when.satisfies("n", lambda value: not value.is_prime)]
    DESCRIPTION = "Totient of an integer literal"
    SKIP_VERIFICATION = True
