"""Points, vectors and line segments over any :class:`ExactScalar` family."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .numbers import ExactScalar

S = TypeVar("S", bound=ExactScalar)


@dataclass(frozen=True)
class Point(Generic[S]):
    x: S
    y: S

    def distance_sq(self, other: Point[S]) -> S:
        dx = self.x.subtract(other.x)
        dy = self.y.subtract(other.y)
        return dx.multiply(dx).add(dy.multiply(dy))

    def translate(self, dx: S, dy: S) -> Point[S]:
        return Point(self.x.add(dx), self.y.add(dy))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Vector(Generic[S]):
    x: S
    y: S

    @classmethod
    def between(cls, start: Point[S], end: Point[S]) -> Vector[S]:
        return cls(end.x.subtract(start.x), end.y.subtract(start.y))

    def add(self, other: Vector[S]) -> Vector[S]:
        return Vector(self.x.add(other.x), self.y.add(other.y))

    def subtract(self, other: Vector[S]) -> Vector[S]:
        return Vector(self.x.subtract(other.x), self.y.subtract(other.y))

    def additive_inverse(self) -> Vector[S]:
        return Vector(self.x.additive_inverse(), self.y.additive_inverse())

    def scale(self, factor: S) -> Vector[S]:
        return Vector(self.x.multiply(factor), self.y.multiply(factor))

    def cross(self, other: Vector[S]) -> S:
        return self.x.multiply(other.y).subtract(self.y.multiply(other.x))

    def dot(self, other: Vector[S]) -> S:
        return self.x.multiply(other.x).add(self.y.multiply(other.y))

    def perpendicular(self) -> Vector[S]:
        """Rotate clockwise by a right angle."""
        return Vector(self.y, self.x.additive_inverse())

    def __str__(self) -> str:
        return f"<{self.x}, {self.y}>"


@dataclass(frozen=True)
class LineSegment(Generic[S]):
    p1: Point[S]
    p2: Point[S]

    def distance_sq(self, point: Point[S]) -> S:
        """Squared distance from ``point`` to the closest point of the segment.

        When the perpendicular foot lies on the segment the point-to-line
        formula is used, otherwise the nearer endpoint decides.
        """
        if self.has_between(point):
            p1, p2 = self.p1, self.p2
            dx = p2.x.subtract(p1.x)
            dy = p2.y.subtract(p1.y)
            total = (
                dy.multiply(point.x)
                .subtract(dx.multiply(point.y))
                .add(p2.x.multiply(p1.y).subtract(p1.x.multiply(p2.y)))
            )
            return total.multiply(total).divide(dx.multiply(dx).add(dy.multiply(dy)))
        first = point.distance_sq(self.p1)
        second = point.distance_sq(self.p2)
        return first if first.compare(second) < 0 else second

    def has_between(self, point: Point[S]) -> bool:
        """True iff ``point`` lies on or between the perpendiculars through the endpoints."""
        forward = Vector.between(self.p1, self.p2)
        if not _same_side(forward, forward.perpendicular(), Vector.between(self.p1, point)):
            return False
        backward = forward.additive_inverse()
        return _same_side(backward, backward.perpendicular(), Vector.between(self.p2, point))

    def intersects_infinite_line(self, line_point1: Point[S], line_point2: Point[S]) -> bool:
        line_vector = Vector.between(line_point1, line_point2)
        side1 = line_vector.cross(Vector.between(line_point1, self.p1)).compare_to_zero()
        side2 = line_vector.cross(Vector.between(line_point1, self.p2)).compare_to_zero()
        return side1 == 0 or side2 == 0 or side1 != side2

    def intersects_semi_infinite_line(self, line_point1: Point[S], line_point2: Point[S]) -> bool:
        """True iff the segment meets the ray from ``line_point1`` through ``line_point2``."""
        if not self.intersects_infinite_line(line_point1, line_point2):
            return False
        line_vector = Vector.between(line_point1, line_point2)
        v1 = Vector.between(line_point1, self.p1)
        v2 = Vector.between(line_point1, self.p2)
        orientation = v1.cross(v2).compare_to_zero()
        if orientation == 0:
            # The segment is collinear with the ray's origin.
            if self.has_between(line_point1):
                return True
            return line_vector.dot(v1).compare_to_zero() >= 0
        if orientation < 0:
            v1 = v2
        turn = v1.cross(line_vector).compare_to_zero()
        if turn > 0:
            return True
        if turn == 0:
            return line_vector.dot(v1).compare_to_zero() > 0
        return False

    def __str__(self) -> str:
        return f"[{self.p1}, {self.p2}]"


def _same_side(axis: Vector[S], split: Vector[S], probe: Vector[S]) -> bool:
    reference = split.cross(axis).compare_to_zero()
    side = split.cross(probe).compare_to_zero()
    return side == 0 or side == reference
