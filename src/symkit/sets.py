"""Sets of entities: the value type of every solver.

``union`` and ``intersection`` are the factories to use. They apply the
Empty identity/absorption rules and, whenever every piece involved is a
numeric Interval or a FiniteSet of real numbers, normalize eagerly: overlapping
intervals merge, points inside an interval are absorbed, points on an open
endpoint close it. Anything symbolic stays as a lazy Union/Intersection node.
"""

from __future__ import annotations

import abc
import dataclasses
import functools
from typing import Iterable, Iterator

from symkit.base import Entity, Priority, parenthesize
from symkit.errors import CannotEvalError
from symkit.numbers import Number, Real


class Set(Entity):
    __slots__ = ()

    @abc.abstractmethod
    def contains_value(self, value: Entity) -> bool:
        """Membership test.

        Raises:
            CannotEvalError: membership depends on symbolic bounds or elements.
        """

    def __or__(self, other: Set) -> Set:
        if not isinstance(other, Set):
            return NotImplemented
        return union(self, other)

    def __and__(self, other: Set) -> Set:
        if not isinstance(other, Set):
            return NotImplemented
        return intersection(self, other)


@dataclasses.dataclass(frozen=True, slots=True)
class EmptySet(Set):
    @property
    def children(self) -> tuple[Entity, ...]:
        return ()

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return self

    def contains_value(self, value: Entity) -> bool:
        return False

    def __str__(self) -> str:
        return "{}"


EMPTY = EmptySet()


@dataclasses.dataclass(frozen=True, slots=True, eq=False)
class FiniteSet(Set):
    """Distinct elements; order is kept for display but ignored by equality."""

    elements: tuple[Entity, ...]

    def __post_init__(self):
        unique: list[Entity] = []
        seen: set[Entity] = set()
        for element in self.elements:
            if element not in seen:
                seen.add(element)
                unique.append(element)
        object.__setattr__(self, "elements", tuple(unique))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FiniteSet):
            return NotImplemented
        return frozenset(self.elements) == frozenset(other.elements)

    def __hash__(self) -> int:
        return hash(frozenset(self.elements))

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def children(self) -> tuple[Entity, ...]:
        return self.elements

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        return FiniteSet(tuple(children))

    def contains_value(self, value: Entity) -> bool:
        if value in self.elements:
            return True
        if isinstance(value, Number) and all(
            isinstance(e, Number) for e in self.elements
        ):
            return False
        raise CannotEvalError(f"cannot decide whether {value} is in {self}", self)

    def __str__(self) -> str:
        return "{" + ", ".join(str(e) for e in self.elements) + "}"


@dataclasses.dataclass(frozen=True, slots=True)
class Interval(Set):
    left: Entity
    right: Entity
    left_closed: bool = False
    right_closed: bool = False

    @property
    def children(self) -> tuple[Entity, ...]:
        return (self.left, self.right)

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        left, right = children
        return Interval(left, right, self.left_closed, self.right_closed)

    @property
    def is_numeric(self) -> bool:
        return _is_real_number(self.left) and _is_real_number(self.right)

    def contains_value(self, value: Entity) -> bool:
        if isinstance(value, Number) and not value.is_real:
            return False
        if not (self.is_numeric and _is_real_number(value)):
            raise CannotEvalError(f"cannot decide whether {value} is in {self}", self)
        if value < self.left or (value == self.left and not self.left_closed):
            return False
        if value > self.right or (value == self.right and not self.right_closed):
            return False
        return True

    def __str__(self) -> str:
        opening = "[" if self.left_closed else "("
        closing = "]" if self.right_closed else ")"
        return f"{opening}{self.left}, {self.right}{closing}"


@dataclasses.dataclass(frozen=True, slots=True)
class Union(Set):
    left: Set
    right: Set

    @property
    def children(self) -> tuple[Entity, ...]:
        return (self.left, self.right)

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        left, right = children
        return Union(left, right)

    @property
    def priority(self) -> Priority:
        return Priority.UNION

    def contains_value(self, value: Entity) -> bool:
        return self.left.contains_value(value) or self.right.contains_value(value)

    def __str__(self) -> str:
        left = parenthesize(self.left, Priority.UNION)
        right = parenthesize(self.right, Priority.UNION)
        return f"{left} \\/ {right}"


@dataclasses.dataclass(frozen=True, slots=True)
class Intersection(Set):
    left: Set
    right: Set

    @property
    def children(self) -> tuple[Entity, ...]:
        return (self.left, self.right)

    def with_children(self, children: tuple[Entity, ...]) -> Entity:
        left, right = children
        return Intersection(left, right)

    @property
    def priority(self) -> Priority:
        return Priority.INTERSECTION

    def contains_value(self, value: Entity) -> bool:
        return self.left.contains_value(value) and self.right.contains_value(value)

    def __str__(self) -> str:
        left = parenthesize(self.left, Priority.INTERSECTION)
        right = parenthesize(self.right, Priority.INTERSECTION)
        return f"{left} /\\ {right}"


ALL_REALS = Interval(Real.NEGATIVE_INFINITY, Real.POSITIVE_INFINITY)


# =========================================================================
# Factories
# =========================================================================


def to_set(elements: Iterable[Entity]) -> Set:
    """FiniteSet of ``elements``; no elements at all give ``EMPTY``."""
    elements = tuple(elements)
    return FiniteSet(elements) if elements else EMPTY


def union(a: Set, b: Set) -> Set:
    if isinstance(a, EmptySet):
        return b
    if isinstance(b, EmptySet):
        return a
    if a == b:
        return a
    pieces = _pieces(a, Union) + _pieces(b, Union)
    if all(_is_numeric_piece(piece) for piece in pieces):
        return _normalize(pieces)
    if isinstance(a, FiniteSet) and isinstance(b, FiniteSet):
        return FiniteSet(a.elements + b.elements)
    return Union(a, b)


def intersection(a: Set, b: Set) -> Set:
    if isinstance(a, EmptySet) or isinstance(b, EmptySet):
        return EMPTY
    if a == b:
        return a
    left_pieces, right_pieces = _pieces(a, Union), _pieces(b, Union)
    if all(_is_numeric_piece(p) for p in left_pieces + right_pieces):
        return _normalize(
            [_intersect_pieces(x, y) for x in left_pieces for y in right_pieces]
        )
    for finite, other in ((a, b), (b, a)):
        if isinstance(finite, FiniteSet) and all(
            isinstance(e, Number) for e in finite.elements
        ):
            try:
                kept = [e for e in finite.elements if other.contains_value(e)]
            except CannotEvalError:
                break
            return FiniteSet(tuple(kept)) if kept else EMPTY
    return Intersection(a, b)


def unite(sets: Iterable[Set]) -> Set:
    return functools.reduce(union, sets, EMPTY)


def intersect(sets: Iterable[Set]) -> Set:
    sets = list(sets)
    if not sets:
        return EMPTY
    return functools.reduce(intersection, sets)


# =========================================================================
# Numeric normalization
# =========================================================================


def _is_real_number(e: Entity) -> bool:
    return isinstance(e, Number) and e.is_real


def _is_numeric_piece(s: Set) -> bool:
    if isinstance(s, EmptySet):
        return True
    if isinstance(s, Interval):
        return s.is_numeric
    if isinstance(s, FiniteSet):
        return all(_is_real_number(e) for e in s.elements)
    return False


def _pieces(s: Set, kind: type) -> list[Set]:
    if isinstance(s, kind):
        return _pieces(s.left, kind) + _pieces(s.right, kind)  # type: ignore[attr-defined]
    return [s]


def _is_empty_interval(iv: Interval) -> bool:
    if iv.left > iv.right:
        return True
    return iv.left == iv.right and not (iv.left_closed and iv.right_closed)


def _touches(a: Interval, b: Interval) -> bool:
    """True if ``b`` (which starts no earlier than ``a``) overlaps or abuts ``a``."""
    if b.left < a.right:
        return True
    return b.left == a.right and (a.right_closed or b.left_closed)


def _hull(a: Interval, b: Interval) -> Interval:
    left_closed = a.left_closed or (a.left == b.left and b.left_closed)
    if b.right > a.right:
        right, right_closed = b.right, b.right_closed
    elif b.right == a.right:
        right, right_closed = a.right, a.right_closed or b.right_closed
    else:
        right, right_closed = a.right, a.right_closed
    return Interval(a.left, right, left_closed, right_closed)


def _merge_intervals(intervals: list[Interval]) -> list[Interval]:
    ordered = sorted(
        (iv for iv in intervals if not _is_empty_interval(iv)),
        key=lambda iv: (iv.left, not iv.left_closed),
    )
    merged: list[Interval] = []
    for iv in ordered:
        if merged and _touches(merged[-1], iv):
            merged[-1] = _hull(merged[-1], iv)
        else:
            merged.append(iv)
    return merged


def _absorb(intervals: list[Interval], point: Entity) -> bool:
    for i, iv in enumerate(intervals):
        if iv.contains_value(point):
            return True
        if point == iv.left:
            intervals[i] = Interval(iv.left, iv.right, True, iv.right_closed)
            return True
        if point == iv.right:
            intervals[i] = Interval(iv.left, iv.right, iv.left_closed, True)
            return True
    return False


def _normalize(pieces: list[Set]) -> Set:
    intervals: list[Interval] = []
    points: list[Entity] = []
    for piece in pieces:
        if isinstance(piece, Interval):
            intervals.append(piece)
        elif isinstance(piece, FiniteSet):
            points.extend(piece.elements)
    intervals = _merge_intervals(intervals)
    leftover = [p for p in FiniteSet(tuple(points)) if not _absorb(intervals, p)]
    # closing an endpoint can make neighbours abut
    intervals = _merge_intervals(intervals)
    result: list[Set] = list(intervals)
    if leftover:
        result.append(FiniteSet(tuple(sorted(leftover))))
    if not result:
        return EMPTY
    return functools.reduce(Union, result)


def _intersect_pieces(a: Set, b: Set) -> Set:
    if isinstance(a, EmptySet) or isinstance(b, EmptySet):
        return EMPTY
    if isinstance(a, Interval) and isinstance(b, Interval):
        return _clip(a, b)
    if isinstance(a, FiniteSet):
        return FiniteSet(tuple(e for e in a.elements if b.contains_value(e)))
    return FiniteSet(tuple(e for e in b.elements if a.contains_value(e)))  # type: ignore[attr-defined]


def _clip(a: Interval, b: Interval) -> Set:
    if a.left > b.left:
        left, left_closed = a.left, a.left_closed
    elif b.left > a.left:
        left, left_closed = b.left, b.left_closed
    else:
        left, left_closed = a.left, a.left_closed and b.left_closed
    if a.right < b.right:
        right, right_closed = a.right, a.right_closed
    elif b.right < a.right:
        right, right_closed = b.right, b.right_closed
    else:
        right, right_closed = a.right, a.right_closed and b.right_closed
    if left > right:
        return EMPTY
    if left == right:
        return FiniteSet((left,)) if left_closed and right_closed else EMPTY
    return Interval(left, right, left_closed, right_closed)


__all__ = [
    "ALL_REALS",
    "EMPTY",
    "EmptySet",
    "FiniteSet",
    "Intersection",
    "Interval",
    "Set",
    "Union",
    "intersect",
    "intersection",
    "to_set",
    "union",
    "unite",
]
