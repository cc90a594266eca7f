"""Angular orderings around a sweep pivot.

Both orderings rotate counter-clockwise.  Points are ranked first by which
half-plane of the horizontal through the pivot they fall in, then by the
sign of the cross product, and finally by distance to the pivot.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable, Generic, List, Sequence, TypeVar

from .geometry import Point, Vector
from .numbers import ExactScalar

S = TypeVar("S", bound=ExactScalar)


@dataclass(frozen=True)
class SweepEvent(Generic[S]):
    """Vertex at which the rotating line starts (enter) or stops crossing a trapezoid."""

    point: Point[S]
    trapezoid_index: int
    is_enter: bool


def _check_not_pivot(pivot: Point[S], *points: Point[S]) -> None:
    for point in points:
        if point == pivot:
            raise ValueError(f"Cannot order the pivot {pivot} against itself")


def _half_plane_order(pivot: Point[S], p1: Point[S], p2: Point[S], start_right: bool) -> int:
    if start_right:
        first1 = p1.y.compare(pivot.y) >= 0
        first2 = p2.y.compare(pivot.y) >= 0
    else:
        first1 = p1.y.compare(pivot.y) <= 0
        first2 = p2.y.compare(pivot.y) <= 0
    if first1 and not first2:
        return -1
    if first2 and not first1:
        return 1
    return 0


def _horizontal_order(pivot: Point[S], p1: Point[S], p2: Point[S], start_right: bool) -> int:
    right1 = p1.x.compare(pivot.x) > 0
    right2 = p2.x.compare(pivot.x) > 0
    if right1 == right2:
        return 0
    if start_right:
        return -1 if right1 else 1
    return 1 if right1 else -1


def _nearer_first(pivot: Point[S], p1: Point[S], p2: Point[S]) -> int:
    return pivot.distance_sq(p1).compare(pivot.distance_sq(p2))


class AngularComparator(Generic[S]):
    """Three-way comparison of points by sweep angle around ``pivot``.

    With ``start_right`` the sweep begins on the positive x ray, otherwise
    on the negative x ray.
    """

    def __init__(self, pivot: Point[S], start_right: bool = True) -> None:
        self.pivot = pivot
        self.start_right = start_right

    def __call__(self, p1: Point[S], p2: Point[S]) -> int:
        pivot = self.pivot
        _check_not_pivot(pivot, p1, p2)
        order = _half_plane_order(pivot, p1, p2, self.start_right)
        if order:
            return order
        if p1.y == pivot.y and p2.y == pivot.y:
            return _horizontal_order(pivot, p1, p2, self.start_right) or _nearer_first(pivot, p1, p2)
        side = Vector.between(pivot, p1).cross(Vector.between(pivot, p2)).compare_to_zero()
        if side == 0:
            return _nearer_first(pivot, p1, p2)
        return -side

    def sorted(self, points: Sequence[Point[S]]) -> List[Point[S]]:
        return sorted(points, key=cmp_to_key(self))


def _enter_first(e1: SweepEvent[S], e2: SweepEvent[S]) -> int:
    if e1.is_enter and not e2.is_enter:
        return -1
    if e2.is_enter and not e1.is_enter:
        return 1
    return 0


def compare_events(pivot: Point[S], e1: SweepEvent[S], e2: SweepEvent[S]) -> int:
    """Order sweep events starting from the positive x ray.

    Events at the same angle put enters before exits, then nearer points first.
    """
    p1, p2 = e1.point, e2.point
    _check_not_pivot(pivot, p1, p2)
    order = _half_plane_order(pivot, p1, p2, True)
    if order:
        return order
    if p1.y == pivot.y and p2.y == pivot.y:
        return (
            _horizontal_order(pivot, p1, p2, True)
            or _enter_first(e1, e2)
            or _nearer_first(pivot, p1, p2)
        )
    side = Vector.between(pivot, p1).cross(Vector.between(pivot, p2)).compare_to_zero()
    if side == 0:
        return _enter_first(e1, e2) or _nearer_first(pivot, p1, p2)
    return -side


def event_sort_key(pivot: Point[S]) -> Callable[[SweepEvent[S]], object]:
    return cmp_to_key(lambda e1, e2: compare_events(pivot, e1, e2))
