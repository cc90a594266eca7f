"""Capability set shared by every scalar family.

Geometry and sequence code is written once against :class:`ExactScalar`.
A family implements the arithmetic, the ordering, ``whole`` and ``rt3``;
the remaining trapezoid constants are derived here from those two.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

S = TypeVar("S", bound="ExactScalar")


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def addition_will_overflow(a: int, b: int) -> bool:
    return not fits_int64(a + b)


def multiplication_will_overflow(a: int, b: int) -> bool:
    return not fits_int64(a * b)


class ExactScalar(ABC):
    __slots__ = ()

    @abstractmethod
    def add(self: S, other: S) -> S: ...

    @abstractmethod
    def subtract(self: S, other: S) -> S: ...

    @abstractmethod
    def multiply(self: S, other: S) -> S: ...

    @abstractmethod
    def divide(self: S, other: S) -> S: ...

    @abstractmethod
    def additive_inverse(self: S) -> S: ...

    @abstractmethod
    def common_divisor(self: S, other: S) -> S: ...

    @abstractmethod
    def compare(self: S, other: S) -> int:
        """Return -1, 0 or 1 as ``self`` is below, equal to or above ``other``."""

    @abstractmethod
    def compare_to_zero(self) -> int: ...

    @abstractmethod
    def to_double(self) -> float: ...

    @abstractmethod
    def whole(self: S, value: int) -> S:
        """Return the integer ``value`` in this scalar's family."""

    @abstractmethod
    def rt3(self: S) -> S: ...

    def zero(self: S) -> S:
        return self.whole(0)

    def one(self: S) -> S:
        return self.whole(1)

    def two(self: S) -> S:
        return self.whole(2)

    def three(self: S) -> S:
        return self.whole(3)

    def four(self: S) -> S:
        return self.whole(4)

    def five(self: S) -> S:
        return self.whole(5)

    def six(self: S) -> S:
        return self.whole(6)

    def two_rt3(self: S) -> S:
        return self.rt3().multiply(self.two())

    def three_rt3(self: S) -> S:
        return self.rt3().multiply(self.three())

    def __add__(self: S, other: S) -> S:
        return self.add(other)

    def __sub__(self: S, other: S) -> S:
        return self.subtract(other)

    def __mul__(self: S, other: S) -> S:
        return self.multiply(other)

    def __truediv__(self: S, other: S) -> S:
        return self.divide(other)

    def __neg__(self: S) -> S:
        return self.additive_inverse()

    def __lt__(self: S, other: S) -> bool:
        return self.compare(other) < 0

    def __le__(self: S, other: S) -> bool:
        return self.compare(other) <= 0

    def __gt__(self: S, other: S) -> bool:
        return self.compare(other) > 0

    def __ge__(self: S, other: S) -> bool:
        return self.compare(other) >= 0

    def __float__(self) -> float:
        return self.to_double()
