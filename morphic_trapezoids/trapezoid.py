"""Trapezoid type algebra, trapezoid predicates and the chain factory."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, Generic, Iterable, Optional, Tuple, TypeVar

from .geometry import LineSegment, Point, Vector
from .numbers import ExactScalar

S = TypeVar("S", bound=ExactScalar)


class TrapezoidType(IntEnum):
    """Orientation labels of a chain trapezoid.

    ``compose`` reads the static table below. Every type composed with its
    inverse gives ``ZERO`` except ``THREE``, whose row maps ``FOUR`` to ``ONE``.
    """

    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5

    def compose(self, other: TrapezoidType) -> TrapezoidType:
        return COMPOSITION_TABLE[self][other]

    def inverse(self) -> TrapezoidType:
        return INVERSES[self]


_T = TrapezoidType

COMPOSITION_TABLE: Tuple[Tuple[TrapezoidType, ...], ...] = (
    (_T.ZERO, _T.ONE, _T.TWO, _T.THREE, _T.FOUR, _T.FIVE),
    (_T.ONE, _T.ZERO, _T.THREE, _T.TWO, _T.FIVE, _T.FOUR),
    (_T.TWO, _T.THREE, _T.FIVE, _T.FOUR, _T.ONE, _T.ZERO),
    (_T.THREE, _T.TWO, _T.FOUR, _T.FIVE, _T.ONE, _T.ZERO),
    (_T.FOUR, _T.FIVE, _T.ONE, _T.ZERO, _T.TWO, _T.THREE),
    (_T.FIVE, _T.FOUR, _T.ZERO, _T.ONE, _T.THREE, _T.TWO),
)

INVERSES: Tuple[TrapezoidType, ...] = (_T.ZERO, _T.ONE, _T.FIVE, _T.FOUR, _T.THREE, _T.TWO)

# Symbol of the generating alphabet -> orientation of its trapezoid.
SYMBOL_TO_TYPE: Tuple[TrapezoidType, ...] = (
    _T.ZERO, _T.TWO, _T.FIVE, _T.ONE, _T.THREE, _T.FOUR,
    _T.ONE, _T.THREE, _T.FOUR, _T.ZERO, _T.TWO, _T.FIVE,
)


class Trapezoid(Generic[S]):
    """Convex quadrilateral with vertices ``p0..p3`` and sides ``p0p1, p1p2, p2p3, p3p0``."""

    __slots__ = ("vertices", "sides")

    def __init__(self, p0: Point[S], p1: Point[S], p2: Point[S], p3: Point[S]) -> None:
        self.vertices: Tuple[Point[S], ...] = (p0, p1, p2, p3)
        self.sides: Tuple[LineSegment[S], ...] = (
            LineSegment(p0, p1),
            LineSegment(p1, p2),
            LineSegment(p2, p3),
            LineSegment(p3, p0),
        )

    def distance_sq(self, point: Point[S]) -> S:
        """Squared distance from ``point`` to the boundary."""
        return _extreme((side.distance_sq(point) for side in self.sides), lowest=True)

    def max_distance_sq(self, other: Trapezoid[S]) -> S:
        # The farthest pair of points is always a pair of vertices.
        return _extreme(
            (p1.distance_sq(p2) for p1 in self.vertices for p2 in other.vertices),
            lowest=False,
        )

    def min_distance_sq(self, other: Trapezoid[S]) -> S:
        """Smallest squared distance between two trapezoids whose interiors do not overlap."""
        candidates = [side.distance_sq(p) for p in self.vertices for side in other.sides]
        candidates.extend(side.distance_sq(p) for p in other.vertices for side in self.sides)
        return _extreme(candidates, lowest=True)

    def intersects_infinite_line(self, line_point1: Point[S], line_point2: Point[S]) -> bool:
        if line_point1 == line_point2:
            raise ValueError("Equal points do not define a unique line")
        return any(side.intersects_infinite_line(line_point1, line_point2) for side in self.sides)

    def intersects_semi_infinite_line(self, line_point1: Point[S], line_point2: Point[S]) -> bool:
        if line_point1 == line_point2:
            raise ValueError("Equal points do not define a unique ray")
        return any(side.intersects_semi_infinite_line(line_point1, line_point2) for side in self.sides)

    def contains(self, point: Point[S]) -> bool:
        """True iff ``point`` is inside the trapezoid or on its boundary."""
        seen_positive = seen_negative = False
        for side in self.sides:
            sign = Vector.between(side.p1, side.p2).cross(Vector.between(side.p1, point)).compare_to_zero()
            seen_positive = seen_positive or sign > 0
            seen_negative = seen_negative or sign < 0
            if seen_positive and seen_negative:
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trapezoid):
            return NotImplemented
        return self.vertices == other.vertices

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "Trapezoid(" + ", ".join(str(v) for v in self.vertices) + ")"


def _extreme(values: Iterable[S], lowest: bool) -> S:
    best: Optional[S] = None
    for value in values:
        if best is None:
            best = value
            continue
        order = value.compare(best)
        if (lowest and order < 0) or (not lowest and order > 0):
            best = value
    if best is None:
        raise ValueError("No candidate distances")
    return best


# Offsets of vertices 1..3 from the start vertex, as (dx, dy) constant names.
# "-" negates the constant; None stands for zero.
_Offset = Tuple[Optional[str], Optional[str]]

_TYPE_OFFSETS: Dict[TrapezoidType, Tuple[_Offset, _Offset, _Offset]] = {
    _T.ZERO: (("one", "rt3"), ("five", "rt3"), ("six", None)),
    _T.ONE: (("one", "-rt3"), ("five", "-rt3"), ("six", None)),
    _T.TWO: (("-two", None), ("-four", "two_rt3"), ("-three", "three_rt3")),
    _T.THREE: (("one", "rt3"), ("-one", "three_rt3"), ("-three", "three_rt3")),
    _T.FOUR: (("-two", None), ("-four", "-two_rt3"), ("-three", "-three_rt3")),
    _T.FIVE: (("one", "-rt3"), ("-one", "-three_rt3"), ("-three", "-three_rt3")),
}


def _shift(value: S, constant: Optional[str]) -> S:
    if constant is None:
        return value
    negate = constant.startswith("-")
    make: Callable[[], S] = getattr(value, constant.lstrip("-"))
    return value.subtract(make()) if negate else value.add(make())


def make_sequence_trapezoid(trapezoid_type: TrapezoidType, start_point: Point[S]) -> Trapezoid[S]:
    """Build the trapezoid of ``trapezoid_type`` whose vertex 0 is ``start_point``.

    The base has length 6, the top 4 and the legs 2.  Vertex 3 is the exit
    point, where the next trapezoid of a chain starts.
    """
    vertices = [start_point]
    for dx, dy in _TYPE_OFFSETS[TrapezoidType(trapezoid_type)]:
        vertices.append(Point(_shift(start_point.x, dx), _shift(start_point.y, dy)))
    return Trapezoid(*vertices)
