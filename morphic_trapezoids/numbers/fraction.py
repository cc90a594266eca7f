from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..errors import DivisionByZeroError
from .base import ExactScalar

T = TypeVar("T", bound=ExactScalar)


@dataclass(frozen=True, eq=False)
class ExactFraction(ExactScalar, Generic[T]):
    """Quotient of two scalars of one family, kept normalized.

    After construction the denominator is positive and numerator and
    denominator share no common divisor beyond the family's unit.
    """

    numerator: T
    denominator: T

    def __post_init__(self) -> None:
        numerator, denominator = self.numerator, self.denominator
        sign = denominator.compare_to_zero()
        if sign == 0:
            raise DivisionByZeroError(f"Fraction {numerator} / {denominator} has a zero denominator")
        if sign < 0:
            numerator = numerator.additive_inverse()
            denominator = denominator.additive_inverse()
        divisor = numerator.common_divisor(denominator)
        if divisor != divisor.one():
            numerator = numerator.divide(divisor)
            denominator = denominator.divide(divisor)
        object.__setattr__(self, "numerator", numerator)
        object.__setattr__(self, "denominator", denominator)

    def normalized(self) -> ExactFraction[T]:
        return ExactFraction(self.numerator, self.denominator)

    def add(self, other: ExactFraction[T]) -> ExactFraction[T]:
        return ExactFraction(
            self.numerator.multiply(other.denominator).add(other.numerator.multiply(self.denominator)),
            self.denominator.multiply(other.denominator),
        )

    def subtract(self, other: ExactFraction[T]) -> ExactFraction[T]:
        return ExactFraction(
            self.numerator.multiply(other.denominator).subtract(other.numerator.multiply(self.denominator)),
            self.denominator.multiply(other.denominator),
        )

    def multiply(self, other: ExactFraction[T]) -> ExactFraction[T]:
        return ExactFraction(
            self.numerator.multiply(other.numerator),
            self.denominator.multiply(other.denominator),
        )

    def divide(self, other: ExactFraction[T]) -> ExactFraction[T]:
        if other.compare_to_zero() == 0:
            raise DivisionByZeroError(f"Division of {self} by zero")
        return self.multiply(other.reciprocal())

    def reciprocal(self) -> ExactFraction[T]:
        return ExactFraction(self.denominator, self.numerator)

    def additive_inverse(self) -> ExactFraction[T]:
        return ExactFraction(self.numerator.additive_inverse(), self.denominator)

    def common_divisor(self, other: ExactFraction[T]) -> ExactFraction[T]:
        # Every nonzero fraction divides every other one, so the unit is canonical.
        return self.one()

    def compare(self, other: ExactFraction[T]) -> int:
        return self.numerator.multiply(other.denominator).compare(
            self.denominator.multiply(other.numerator)
        )

    def compare_to_zero(self) -> int:
        return self.numerator.compare_to_zero()

    def to_double(self) -> float:
        return self.numerator.to_double() / self.denominator.to_double()

    def whole(self, value: int) -> ExactFraction[T]:
        return ExactFraction(self.numerator.whole(value), self.numerator.one())

    def rt3(self) -> ExactFraction[T]:
        return ExactFraction(self.numerator.rt3(), self.numerator.one())

    def two_rt3(self) -> ExactFraction[T]:
        return ExactFraction(self.numerator.two_rt3(), self.numerator.one())

    def three_rt3(self) -> ExactFraction[T]:
        return ExactFraction(self.numerator.three_rt3(), self.numerator.one())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExactFraction):
            return NotImplemented
        return self.numerator.multiply(other.denominator) == self.denominator.multiply(other.numerator)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        if self.denominator == self.denominator.one():
            return str(self.numerator)
        return f"{self.numerator} / {self.denominator}"
