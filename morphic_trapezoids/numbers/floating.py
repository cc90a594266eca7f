from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import DivisionByZeroError
from .base import ExactScalar

EPS = 1e-11


@dataclass(frozen=True, eq=False)
class FloatScalar(ExactScalar):
    """Double-precision scalar for drawing; comparisons are approximate."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def add(self, other: FloatScalar) -> FloatScalar:
        return FloatScalar(self.value + other.value)

    def subtract(self, other: FloatScalar) -> FloatScalar:
        return FloatScalar(self.value - other.value)

    def multiply(self, other: FloatScalar) -> FloatScalar:
        return FloatScalar(self.value * other.value)

    def divide(self, other: FloatScalar) -> FloatScalar:
        if other.value == 0.0:
            raise DivisionByZeroError(f"Division of {self} by zero")
        return FloatScalar(self.value / other.value)

    def additive_inverse(self) -> FloatScalar:
        return FloatScalar(-self.value)

    def common_divisor(self, other: FloatScalar) -> FloatScalar:
        if self.value.is_integer() and other.value.is_integer():
            divisor = math.gcd(int(self.value), int(other.value))
            return FloatScalar(float(divisor or 1))
        return self.one()

    def compare(self, other: FloatScalar) -> int:
        return (self.value > other.value) - (self.value < other.value)

    def compare_to_zero(self) -> int:
        return (self.value > 0) - (self.value < 0)

    def to_double(self) -> float:
        return self.value

    def whole(self, value: int) -> FloatScalar:
        return FloatScalar(float(value))

    def rt3(self) -> FloatScalar:
        return FloatScalar(math.sqrt(3))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FloatScalar):
            return NotImplemented
        return abs(self.value - other.value) < EPS

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return repr(self.value)
