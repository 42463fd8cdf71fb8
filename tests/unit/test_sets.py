"""Tests for sets: identities, eager numeric normalization and membership."""

import pytest

from symkit.errors import CannotEvalError
from symkit.numbers import Complex, Integer, Rational, Real
from symkit.sets import (
    ALL_REALS,
    EMPTY,
    FiniteSet,
    Intersection,
    Interval,
    Set,
    Union,
    intersect,
    intersection,
    to_set,
    union,
    unite,
)

I = Integer.create
ZERO, ONE, TWO, THREE = Integer.ZERO, Integer.ONE, I(2), I(3)
NEG_INF, POS_INF = Real.NEGATIVE_INFINITY, Real.POSITIVE_INFINITY


class TestFiniteSet:
    def test_duplicates_are_removed(self):
        s = FiniteSet((ONE, ONE, TWO))
        assert len(s) == 2
        assert list(s) == [ONE, TWO]

    def test_equality_ignores_order(self):
        assert to_set([ONE, TWO]) == to_set([TWO, ONE])
        assert hash(to_set([ONE, TWO])) == hash(to_set([TWO, ONE]))

    def test_contains_value(self, x):
        assert to_set([ONE, TWO]).contains_value(TWO)
        assert not to_set([ONE, TWO]).contains_value(THREE)
        assert to_set([x]).contains_value(x)
        with pytest.raises(CannotEvalError):
            to_set([x]).contains_value(ONE)

    def test_no_elements_is_empty(self):
        assert to_set([]) is EMPTY
        assert to_set(iter(())) is EMPTY

    def test_set_without_membership_cannot_be_built(self):
        class Bare(Set):
            @property
            def children(self):
                return ()

            def with_children(self, children):
                return self

        with pytest.raises(TypeError):
            Bare()


class TestIdentities:
    def test_empty_is_neutral_for_union(self):
        s = Interval(ZERO, ONE)
        assert union(EMPTY, s) is s
        assert union(s, EMPTY) is s

    def test_empty_absorbs_intersection(self):
        assert intersection(EMPTY, Interval(ZERO, ONE)) is EMPTY
        assert intersection(to_set([ONE]), EMPTY) is EMPTY

    def test_idempotence(self, x):
        s = to_set([x])
        assert union(s, s) is s
        assert intersection(s, s) is s

    def test_operators(self):
        a, b = Interval(ZERO, TWO), Interval(ONE, THREE)
        assert a | b == union(a, b)
        assert a & b == intersection(a, b)

    def test_unite_and_intersect(self):
        assert unite([]) is EMPTY
        assert intersect([]) is EMPTY
        assert unite([to_set([ONE]), to_set([TWO])]) == to_set([ONE, TWO])
        assert intersect([Interval(ZERO, THREE), Interval(ONE, I(5))]) == Interval(
            ONE, THREE
        )


class TestNumericUnion:
    def test_overlapping_intervals_merge(self):
        assert union(Interval(ZERO, TWO), Interval(ONE, THREE)) == Interval(ZERO, THREE)

    def test_open_endpoints_do_not_merge(self):
        result = union(Interval(ZERO, ONE), Interval(ONE, TWO))
        assert result == Union(Interval(ZERO, ONE), Interval(ONE, TWO))

    def test_closed_endpoint_merges(self):
        result = union(Interval(ZERO, ONE, right_closed=True), Interval(ONE, TWO))
        assert result == Interval(ZERO, TWO)

    def test_point_closes_endpoint(self):
        result = union(Interval(ZERO, ONE), to_set([ONE]))
        assert result == Interval(ZERO, ONE, right_closed=True)

    def test_point_bridges_gap(self):
        gap = union(Interval(ZERO, ONE), Interval(ONE, TWO))
        assert union(gap, to_set([ONE])) == Interval(ZERO, TWO)

    def test_inner_point_absorbed(self):
        assert union(Interval(ZERO, TWO), to_set([ONE])) == Interval(ZERO, TWO)

    def test_outer_point_kept_last(self):
        result = union(to_set([I(5)]), Interval(ZERO, ONE))
        assert result == Union(Interval(ZERO, ONE), to_set([I(5)]))
        assert str(result) == "(0, 1) \\/ {5}"

    def test_pieces_sorted(self):
        result = union(Interval(TWO, THREE), Interval(ZERO, ONE))
        assert result == Union(Interval(ZERO, ONE), Interval(TWO, THREE))

    def test_halves_make_the_real_line(self):
        assert union(Interval(NEG_INF, ONE), Interval(ZERO, POS_INF)) == ALL_REALS

    def test_symbolic_pieces_stay_lazy(self, x):
        result = union(to_set([x]), Interval(ZERO, ONE))
        assert result == Union(to_set([x]), Interval(ZERO, ONE))

    def test_symbolic_finite_sets_concatenate(self, x, y):
        assert union(to_set([x]), to_set([y])) == to_set([x, y])


class TestNumericIntersection:
    def test_overlap(self):
        assert intersection(Interval(ZERO, TWO), Interval(ONE, THREE)) == Interval(
            ONE, TWO
        )

    def test_disjoint(self):
        assert intersection(Interval(ZERO, ONE), Interval(TWO, THREE)) is EMPTY

    def test_touching_closed_endpoints(self):
        result = intersection(
            Interval(ZERO, ONE, right_closed=True), Interval(ONE, TWO, left_closed=True)
        )
        assert result == to_set([ONE])

    def test_touching_open_endpoints(self):
        assert intersection(Interval(ZERO, ONE), Interval(ONE, TWO)) is EMPTY

    def test_finite_set_filtered(self):
        result = intersection(to_set([ZERO, I(5)]), Interval(ZERO, ONE, left_closed=True))
        assert result == to_set([ZERO])

    def test_distributes_over_union(self):
        pieces = union(Interval(ZERO, ONE), Interval(TWO, THREE))
        result = intersection(pieces, Interval(Rational.create(1, 2), Rational.create(5, 2)))
        assert result == Union(
            Interval(Rational.create(1, 2), ONE), Interval(TWO, Rational.create(5, 2))
        )

    def test_numeric_points_against_symbolic_set(self, x):
        result = intersection(to_set([ONE, TWO]), Interval(x, I(5)))
        assert result == Intersection(to_set([ONE, TWO]), Interval(x, I(5)))

    def test_symbolic_points_stay_lazy(self, x):
        result = intersection(to_set([ONE, x]), Interval(ZERO, TWO))
        assert isinstance(result, Intersection)


class TestInterval:
    def test_contains_value(self):
        iv = Interval(ZERO, ONE)
        assert iv.contains_value(Rational.create(1, 2))
        assert not iv.contains_value(ONE)
        assert Interval(ZERO, ONE, right_closed=True).contains_value(ONE)
        assert not iv.contains_value(Complex.IMAGINARY_ONE)
        assert ALL_REALS.contains_value(I(10**9))

    def test_symbolic_bounds_raise(self, x):
        with pytest.raises(CannotEvalError):
            Interval(x, ONE).contains_value(ZERO)

    def test_str(self):
        assert str(Interval(ZERO, ONE, left_closed=True)) == "[0, 1)"
        assert str(ALL_REALS) == "(-oo, +oo)"
        assert str(EMPTY) == "{}"

    def test_with_children_keeps_flags(self, x):
        iv = Interval(ZERO, ONE, True, False)
        assert iv.with_children((x, ONE)) == Interval(x, ONE, True, False)

    def test_union_membership(self):
        s = union(Interval(ZERO, ONE), to_set([I(5)]))
        assert s.contains_value(I(5))
        assert not s.contains_value(TWO)
