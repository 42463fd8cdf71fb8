"""Tests for wildcard matching, instantiation and guard predicates."""

from symkit.entity import Product, Sum, cos, sin
from symkit.numbers import Integer, Rational
from symkit.rewrite.dsl import (
    DynamicConst,
    Wild,
    WildInteger,
    WildNumber,
    instantiate,
    match,
    when,
    wildcard_names,
)

X, Y = Wild("x"), Wild("y")
ZERO, ONE, TWO = Integer.ZERO, Integer.ONE, Integer.create(2)


class TestMatch:
    def test_binds_wildcard(self, x):
        assert match(X + ZERO, x + ZERO) == {"x": x}

    def test_binds_whole_subtree(self, x, y):
        assert match(X * TWO, (x + y) * TWO) == {"x": x + y}

    def test_leaf_mismatch(self, x):
        assert match(X + ZERO, x + ONE) is None

    def test_variant_mismatch(self, x):
        assert match(X + ZERO, x - ZERO) is None

    def test_repeated_wildcard_must_agree(self, x, y):
        assert match(X - X, y - y) == {"x": y}
        assert match(X - X, y - x) is None

    def test_function_names_must_agree(self, x):
        assert match(sin(X), sin(x)) == {"x": x}
        assert match(sin(X), cos(x)) is None

    def test_typed_wildcards(self, x):
        n, c = WildInteger("n"), WildNumber("c")
        assert match(n, TWO) == {"n": TWO}
        assert match(n, Rational.create(1, 2)) is None
        assert match(c, Rational.create(1, 2)) == {"c": Rational.create(1, 2)}
        assert match(c, x) is None

    def test_existing_bindings_are_honoured(self, x, y):
        assert match(X, y, {"x": x}) is None
        assert match(X + Y, x + y, {"x": x}) == {"x": x, "y": y}


class TestInstantiate:
    def test_substitutes_without_evaluating(self, y):
        assert instantiate(X * TWO, {"x": ONE}) == Product(ONE, TWO)
        assert instantiate(X + X, {"x": y}) == Sum(y, y)

    def test_dynamic_const(self):
        template = DynamicConst("double", lambda ctx: ctx["n"] * TWO)
        assert instantiate(template + ONE, {"n": Integer.create(5)}) == Sum(
            Integer.create(10), ONE
        )

    def test_wildcard_names_in_order(self):
        assert wildcard_names(X + Y * X) == ["x", "y"]
        assert wildcard_names(ONE + TWO) == []

    def test_str(self):
        assert str(X + ONE) == "?x + 1"


class TestPredicates:
    def test_is_prime(self, x):
        check = when.is_prime("p")
        assert check({"p": Integer.create(7)})
        assert not check({"p": Integer.create(8)})
        assert not check({"p": x})
        assert not check({})

    def test_is_integer(self):
        check = when.is_integer("n")
        assert check({"n": TWO})
        assert not check({"n": Rational.create(1, 2)})

    def test_sign_predicates(self, x):
        assert when.is_positive("c")({"c": TWO})
        assert not when.is_positive("c")({"c": x})
        assert when.is_negative("c")({"c": Integer.MINUS_ONE})
        assert not when.is_negative("c")({"c": ZERO})

    def test_is_nonzero_treats_symbols_as_nonzero(self, x):
        check = when.is_nonzero("x")
        assert check({"x": x})
        assert check({"x": TWO})
        assert not check({"x": ZERO})
        assert not check({})

    def test_is_not_number(self, x):
        check = when.is_not_number("x")
        assert check({"x": x})
        assert not check({"x": TWO})

    def test_satisfies(self):
        even = when.satisfies("n", lambda n: n.value % 2 == 0)
        assert even({"n": TWO})
        assert not even({"n": ONE})
        assert not even({})

    def test_z3_hooks(self):
        assert hasattr(when.is_positive("c"), "_to_z3")
        assert hasattr(when.is_nonzero("x"), "_to_z3")
        assert not hasattr(when.is_prime("p"), "_to_z3")
        assert when.is_positive("c")._to_z3({}) is None
