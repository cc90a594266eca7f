from __future__ import annotations

from dataclasses import dataclass
from math import gcd

from ..errors import DivisionByZeroError, DivisionError, ScalarOverflowError
from .base import (
    ExactScalar,
    addition_will_overflow,
    fits_int64,
    multiplication_will_overflow,
)


@dataclass(frozen=True)
class BoundedInt(ExactScalar):
    """Integer confined to the signed 64-bit range.

    Every operation checks that its result is representable before building
    it and raises :class:`ScalarOverflowError` otherwise.
    """

    value: int

    def __post_init__(self) -> None:
        if not fits_int64(self.value):
            raise ScalarOverflowError(f"{self.value} does not fit in 64 bits")

    def add(self, other: BoundedInt) -> BoundedInt:
        if addition_will_overflow(self.value, other.value):
            raise ScalarOverflowError(f"Addition will overflow: {self} + {other}")
        return BoundedInt(self.value + other.value)

    def subtract(self, other: BoundedInt) -> BoundedInt:
        if addition_will_overflow(self.value, -other.value):
            raise ScalarOverflowError(f"Subtraction will overflow: {self} - {other}")
        return BoundedInt(self.value - other.value)

    def multiply(self, other: BoundedInt) -> BoundedInt:
        if multiplication_will_overflow(self.value, other.value):
            raise ScalarOverflowError(f"Multiplication will overflow: {self} * {other}")
        return BoundedInt(self.value * other.value)

    def divide(self, other: BoundedInt) -> BoundedInt:
        if other.value == 0:
            raise DivisionByZeroError(f"Division of {self} by zero")
        quotient = abs(self.value) // abs(other.value)
        if (self.value < 0) != (other.value < 0):
            quotient = -quotient
        if not fits_int64(quotient):
            raise ScalarOverflowError(f"Division will overflow: {self} / {other}")
        if quotient * other.value != self.value:
            raise DivisionError(f"Non-integer division of {self} by {other}")
        return BoundedInt(quotient)

    def additive_inverse(self) -> BoundedInt:
        if not fits_int64(-self.value):
            raise ScalarOverflowError(f"Additive inverse will overflow: {self}")
        return BoundedInt(-self.value)

    def common_divisor(self, other: BoundedInt) -> BoundedInt:
        if self.value == 0 and other.value == 0:
            return BoundedInt(1)
        divisor = gcd(self.value, other.value)
        if not fits_int64(divisor):
            raise ScalarOverflowError(f"Common divisor of {self} and {other} overflows")
        return BoundedInt(divisor)

    def compare(self, other: BoundedInt) -> int:
        return (self.value > other.value) - (self.value < other.value)

    def compare_to_zero(self) -> int:
        return (self.value > 0) - (self.value < 0)

    def to_double(self) -> float:
        return float(self.value)

    def whole(self, value: int) -> BoundedInt:
        return BoundedInt(value)

    def rt3(self) -> BoundedInt:
        raise ValueError("sqrt(3) has no bounded-integer representation")

    def __str__(self) -> str:
        return str(self.value)
