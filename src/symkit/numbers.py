"""Numeric tower: Integer, Rational, Real, Complex.

Each level embeds in the next. Arithmetic widens both operands to the higher
level, computes there, and narrows the result back to the lowest level that
holds it exactly:

* a Rational with denominator 1 becomes an Integer,
* a finite, integral Real becomes an Integer,
* a Complex with a zero imaginary part becomes its real part.

Consequently a ``Complex`` instance is always genuinely non-real, and two
numbers of equal value always compare equal structurally.

Integers and rationals are exact (``int`` and :class:`fractions.Fraction`).
Reals are :mod:`mpmath` floats drawn from a private context so that the
precision knob does not leak into other users of the global ``mpmath.mp``.
"""

from __future__ import annotations

import dataclasses
import enum
import math
import re
from fractions import Fraction
from typing import Any, Iterator

from mpmath.ctx_mp import MPContext

from symkit.base import Entity, Priority
from symkit.core.config import ConfigConstants

_mp = MPContext()
_mp.dps = ConfigConstants.DEFAULT_PRECISION

_INTEGER_LITERAL = re.compile(r"-?[0-9]+")


def set_precision(digits: int) -> None:
    """Set the number of decimal digits carried by Real arithmetic."""
    if digits < 1:
        raise ValueError(f"precision must be positive, got {digits}")
    _mp.dps = int(digits)


def get_precision() -> int:
    return _mp.dps


class Level(enum.IntEnum):
    INTEGER = 0
    RATIONAL = 1
    REAL = 2
    COMPLEX = 3


class Number(Entity):
    """A numeric leaf. Arithmetic between two Numbers computes a Number."""

    __slots__ = ()

    LEVEL = Level.INTEGER

    @property
    def children(self) -> tuple[Entity, ...]:
        return ()

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return self

    @property
    def priority(self) -> Priority:
        return Priority.MUL if self.is_negative else Priority.LEAF

    @property
    def is_real(self) -> bool:
        return True

    @property
    def is_integer(self) -> bool:
        return self.LEVEL == Level.INTEGER

    @property
    def is_exact(self) -> bool:
        return True

    @property
    def is_zero(self) -> bool:
        return self.value == 0  # type: ignore[attr-defined]

    @property
    def is_negative(self) -> bool:
        return self.value < 0  # type: ignore[attr-defined]

    @property
    def is_positive(self) -> bool:
        return self.value > 0  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Arithmetic; a non-number operand falls back to node construction
    # ------------------------------------------------------------------
    def __add__(self, other: Entity) -> Entity:
        if isinstance(other, Number):
            return _add(self, other)
        return Entity.__add__(self, other)

    def __sub__(self, other: Entity) -> Entity:
        if isinstance(other, Number):
            return _add(self, _negate(other))
        return Entity.__sub__(self, other)

    def __mul__(self, other: Entity) -> Entity:
        if isinstance(other, Number):
            return _mul(self, other)
        return Entity.__mul__(self, other)

    def __truediv__(self, other: Entity) -> Entity:
        if isinstance(other, Number):
            return _div(self, other)
        return Entity.__truediv__(self, other)

    def __pow__(self, other: Entity) -> Entity:
        if isinstance(other, Number):
            return _pow(self, other)
        return Entity.__pow__(self, other)

    def __mod__(self, other: Number) -> Number:
        if not isinstance(other, Number):
            return NotImplemented
        return _mod(self, other)

    def __neg__(self) -> Number:
        return _negate(self)

    def __abs__(self) -> Number:
        return _abs(self)

    # ------------------------------------------------------------------
    # Ordering (real numbers only)
    # ------------------------------------------------------------------
    def __lt__(self, other: Number) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        x, y = _ordered(self, other)
        return x < y

    def __le__(self, other: Number) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        x, y = _ordered(self, other)
        return x <= y

    def __gt__(self, other: Number) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        x, y = _ordered(self, other)
        return x > y

    def __ge__(self, other: Number) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        x, y = _ordered(self, other)
        return x >= y


@dataclasses.dataclass(frozen=True, slots=True)
class Integer(Number):
    value: int

    LEVEL = Level.INTEGER

    @classmethod
    def create(cls, value: int) -> Integer:
        """Build an Integer, reusing the canonical 0, 1 and -1 instances."""
        value = int(value)
        if value == 0:
            return cls.ZERO
        if value == 1:
            return cls.ONE
        if value == -1:
            return cls.MINUS_ONE
        return cls(value)

    @classmethod
    def try_parse(cls, text: str) -> Integer | None:
        """Parse an optional minus sign followed by ASCII digits; anything else is ``None``."""
        if not isinstance(text, str) or not _INTEGER_LITERAL.fullmatch(text):
            return None
        return cls.create(int(text))

    def factorize(self) -> Iterator[tuple[Integer, Integer]]:
        """Yield ``(prime, power)`` pairs in ascending prime order.

        Numbers below 2 have no factorization and yield nothing.
        """
        n = self.value
        if n < 2:
            return
        p = 2
        while p * p <= n:
            if n % p == 0:
                power = 0
                while n % p == 0:
                    n //= p
                    power += 1
                yield Integer.create(p), Integer.create(power)
            p += 1 if p == 2 else 2
        if n > 1:
            yield Integer.create(n), Integer.ONE

    def count_divisors(self) -> Integer:
        count = 1
        for _, power in self.factorize():
            count *= power.value + 1
        return Integer.create(count)

    @property
    def is_prime(self) -> bool:
        return self.count_divisors().value == 2

    def phi(self) -> Integer:
        """Euler's totient; 0 for non-positive values."""
        n = self.value
        if n <= 0:
            return Integer.ZERO
        result = n
        for prime, _ in self.factorize():
            result = result // prime.value * (prime.value - 1)
        return Integer.create(result)

    def __str__(self) -> str:
        return str(self.value)


@dataclasses.dataclass(frozen=True, slots=True)
class Rational(Number):
    value: Fraction

    LEVEL = Level.RATIONAL

    @classmethod
    def create(cls, numerator: int | Fraction, denominator: int = 1) -> Number:
        value = Fraction(numerator, denominator)
        if value.denominator == 1:
            return Integer.create(value.numerator)
        return cls(value)

    @property
    def priority(self) -> Priority:
        return Priority.MUL

    @property
    def numerator(self) -> Integer:
        return Integer.create(self.value.numerator)

    @property
    def denominator(self) -> Integer:
        return Integer.create(self.value.denominator)

    def __str__(self) -> str:
        return f"{self.value.numerator}/{self.value.denominator}"


@dataclasses.dataclass(frozen=True, slots=True)
class Real(Number):
    value: Any

    LEVEL = Level.REAL

    @classmethod
    def create(cls, value: Any) -> Number:
        value = _mp.mpf(value)
        if _mp.isfinite(value) and _mp.isint(value):
            return Integer.create(int(value))
        return cls(value)

    @property
    def is_exact(self) -> bool:
        return False

    @property
    def is_finite(self) -> bool:
        return bool(_mp.isfinite(self.value))

    @property
    def is_nan(self) -> bool:
        return bool(_mp.isnan(self.value))

    def __str__(self) -> str:
        if self.is_nan:
            return "NaN"
        if _mp.isinf(self.value):
            return "+oo" if self.value > 0 else "-oo"
        return _mp.nstr(self.value, 15)


@dataclasses.dataclass(frozen=True, slots=True)
class Complex(Number):
    """A number with a non-zero imaginary part; both parts are real Numbers."""

    real: Number
    imaginary: Number

    LEVEL = Level.COMPLEX

    @classmethod
    def create(cls, real: Number, imaginary: Number) -> Number:
        if not (real.is_real and imaginary.is_real):
            raise TypeError("Complex parts must be real numbers")
        if imaginary.is_zero:
            return real
        return cls(real, imaginary)

    @property
    def priority(self) -> Priority:
        return Priority.SUM

    @property
    def is_real(self) -> bool:
        return False

    @property
    def is_exact(self) -> bool:
        return self.real.is_exact and self.imaginary.is_exact

    @property
    def is_zero(self) -> bool:
        return False

    @property
    def is_negative(self) -> bool:
        return False

    @property
    def is_positive(self) -> bool:
        return False

    def conjugate(self) -> Complex:
        return Complex(self.real, _negate(self.imaginary))

    def __str__(self) -> str:
        imaginary = self.imaginary
        if imaginary == Integer.ONE:
            im_text = "i"
        elif imaginary == Integer.MINUS_ONE:
            im_text = "-i"
        else:
            im_text = f"{imaginary}i"
        if self.real.is_zero:
            return im_text
        if imaginary.is_negative:
            return f"{self.real} - {im_text.lstrip('-')}"
        return f"{self.real} + {im_text}"


Integer.ZERO = Integer(0)
Integer.ONE = Integer(1)
Integer.MINUS_ONE = Integer(-1)

Real.POSITIVE_INFINITY = Real(_mp.inf)
Real.NEGATIVE_INFINITY = Real(-_mp.inf)
Real.NAN = Real(_mp.nan)

Complex.IMAGINARY_ONE = Complex(Integer.ZERO, Integer.ONE)


# =========================================================================
# Conversions
# =========================================================================


def create_number(value: Any) -> Number:
    """Explicitly convert a Python or mpmath scalar into a Number."""
    if isinstance(value, Number):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(value, int):
        return Integer.create(value)
    if isinstance(value, Fraction):
        return Rational.create(value)
    try:
        converted = _mp.convert(value)
    except (TypeError, ValueError) as e:
        raise TypeError(f"cannot convert {value!r} to a Number") from e
    return from_mpmath(converted)


def to_mpmath(n: Number) -> Any:
    if isinstance(n, Complex):
        return _mp.mpc(_mpf(n.real), _mpf(n.imaginary))
    return _mpf(n)


def from_mpmath(value: Any) -> Number:
    if isinstance(value, _mp.mpc):
        return Complex.create(Real.create(value.real), Real.create(value.imag))
    return Real.create(value)


def apply_mpmath(name: str, n: Number) -> Number:
    """Evaluate the mpmath function ``name`` at ``n``."""
    return from_mpmath(getattr(_mp, name)(to_mpmath(n)))


def sqrt_number(n: Number) -> Number:
    """Principal square root; exact whenever the radicand is a perfect square."""
    if isinstance(n, Integer):
        if n.value < 0:
            return Complex.create(Integer.ZERO, sqrt_number(Integer.create(-n.value)))
        root = math.isqrt(n.value)
        if root * root == n.value:
            return Integer.create(root)
        return Real.create(_mp.sqrt(n.value))
    if isinstance(n, Rational):
        if n.value < 0:
            return Complex.create(Integer.ZERO, sqrt_number(Rational.create(-n.value)))
        num, den = n.value.numerator, n.value.denominator
        num_root, den_root = math.isqrt(num), math.isqrt(den)
        if num_root * num_root == num and den_root * den_root == den:
            return Rational.create(num_root, den_root)
        return Real.create(_mp.sqrt(_mpf(n)))
    return from_mpmath(_mp.sqrt(to_mpmath(n)))


# =========================================================================
# Arithmetic kernels
# =========================================================================


def _fraction(n: Number) -> Fraction:
    return Fraction(n.value)  # type: ignore[attr-defined]


def _mpf(n: Number) -> Any:
    if isinstance(n, Rational):
        return _mp.mpf(n.value.numerator) / n.value.denominator
    if isinstance(n, Complex):
        raise TypeError("complex number has no real value")
    return _mp.mpf(n.value)  # type: ignore[attr-defined]


def _parts(n: Number) -> tuple[Number, Number]:
    if isinstance(n, Complex):
        return n.real, n.imaginary
    return n, Integer.ZERO


def _level(a: Number, b: Number) -> Level:
    return max(a.LEVEL, b.LEVEL)


def _negate(a: Number) -> Number:
    if isinstance(a, Integer):
        return Integer.create(-a.value)
    if isinstance(a, Rational):
        return Rational.create(-a.value)
    if isinstance(a, Real):
        return Real.create(-a.value)
    return Complex.create(_negate(a.real), _negate(a.imaginary))


def _add(a: Number, b: Number) -> Number:
    level = _level(a, b)
    if level == Level.INTEGER:
        return Integer.create(a.value + b.value)  # type: ignore[attr-defined]
    if level == Level.RATIONAL:
        return Rational.create(_fraction(a) + _fraction(b))
    if level == Level.REAL:
        return Real.create(_mpf(a) + _mpf(b))
    ar, ai = _parts(a)
    br, bi = _parts(b)
    return Complex.create(_add(ar, br), _add(ai, bi))


def _mul(a: Number, b: Number) -> Number:
    level = _level(a, b)
    if level == Level.INTEGER:
        return Integer.create(a.value * b.value)  # type: ignore[attr-defined]
    if level == Level.RATIONAL:
        return Rational.create(_fraction(a) * _fraction(b))
    if level == Level.REAL:
        return Real.create(_mpf(a) * _mpf(b))
    ar, ai = _parts(a)
    br, bi = _parts(b)
    return Complex.create(
        _add(_mul(ar, br), _negate(_mul(ai, bi))),
        _add(_mul(ar, bi), _mul(ai, br)),
    )


def _div(a: Number, b: Number) -> Number:
    if b.is_zero:
        raise ZeroDivisionError(f"division of {a} by zero")
    level = _level(a, b)
    if level <= Level.RATIONAL:
        return Rational.create(_fraction(a) / _fraction(b))
    if level == Level.REAL:
        return Real.create(_mpf(a) / _mpf(b))
    ar, ai = _parts(a)
    br, bi = _parts(b)
    denominator = _add(_mul(br, br), _mul(bi, bi))
    return Complex.create(
        _div(_add(_mul(ar, br), _mul(ai, bi)), denominator),
        _div(_add(_mul(ai, br), _negate(_mul(ar, bi))), denominator),
    )


def _mod(a: Number, b: Number) -> Number:
    level = _level(a, b)
    if level == Level.COMPLEX:
        raise TypeError("modulo is not defined for complex numbers")
    if b.is_zero:
        raise ZeroDivisionError(f"{a} modulo zero")
    if level == Level.INTEGER:
        return Integer.create(a.value % b.value)  # type: ignore[attr-defined]
    if level == Level.RATIONAL:
        return Rational.create(_fraction(a) % _fraction(b))
    x, y = _mpf(a), _mpf(b)
    return Real.create(x - y * _mp.floor(x / y))


def _pow_integer(base: Number, exponent: int) -> Number:
    if exponent < 0:
        if base.is_zero:
            raise ZeroDivisionError("zero raised to a negative power")
        return _div(Integer.ONE, _pow_integer(base, -exponent))
    if isinstance(base, Integer):
        return Integer.create(base.value**exponent)
    if isinstance(base, Rational):
        return Rational.create(base.value**exponent)
    if isinstance(base, Real):
        return Real.create(base.value**exponent)
    result: Number = Integer.ONE
    square = base
    while exponent:
        if exponent & 1:
            result = _mul(result, square)
        square = _mul(square, square)
        exponent >>= 1
    return result


def _pow(base: Number, exponent: Number) -> Number:
    if isinstance(exponent, Integer):
        return _pow_integer(base, exponent.value)
    if (
        isinstance(exponent, Rational)
        and exponent.value.denominator == 2
        and base.is_real
    ):
        return _pow_integer(sqrt_number(base), exponent.value.numerator)
    if base.is_zero and exponent.is_real:
        if exponent.is_positive:
            return Integer.ZERO
        raise ZeroDivisionError("zero raised to a non-positive power")
    return from_mpmath(_mp.power(to_mpmath(base), to_mpmath(exponent)))


def _abs(a: Number) -> Number:
    if isinstance(a, Integer):
        return Integer.create(abs(a.value))
    if isinstance(a, Rational):
        return Rational.create(abs(a.value))
    if isinstance(a, Real):
        return Real.create(abs(a.value))
    return sqrt_number(_add(_mul(a.real, a.real), _mul(a.imaginary, a.imaginary)))


def _ordered(a: Number, b: Number) -> tuple[Any, Any]:
    level = _level(a, b)
    if level == Level.COMPLEX:
        raise TypeError("complex numbers are not ordered")
    if level == Level.INTEGER:
        return a.value, b.value  # type: ignore[attr-defined]
    if level == Level.RATIONAL:
        return _fraction(a), _fraction(b)
    return _mpf(a), _mpf(b)


__all__ = [
    "Complex",
    "Integer",
    "Level",
    "Number",
    "Rational",
    "Real",
    "apply_mpmath",
    "create_number",
    "from_mpmath",
    "get_precision",
    "set_precision",
    "sqrt_number",
    "to_mpmath",
]
