"""Exact elements ``a + b*sqrt(3)`` with 64-bit integer coefficients."""

from __future__ import annotations

import math
from dataclasses import dataclass
from math import gcd
from typing import TYPE_CHECKING, Optional

from ..errors import DivisionByZeroError, DivisionError, InsufficientPrecisionError, ScalarOverflowError
from .base import ExactScalar, fits_int64

if TYPE_CHECKING:
    from .fraction import ExactFraction

# Rational brackets with UNDER < sqrt(3) < OVER.
RT3_OVER_NUMERATOR = 262087
RT3_OVER_DENOMINATOR = 151316
RT3_UNDER_NUMERATOR = 716035
RT3_UNDER_DENOMINATOR = 413403

_RT = 3


def _checked(value: int, operation: str) -> int:
    if not fits_int64(value):
        raise ScalarOverflowError(f"{operation} overflow or underflow: {value}")
    return value


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True)
class QuadraticInt(ExactScalar):
    ones: int
    rt3_coeff: int

    def __post_init__(self) -> None:
        _checked(self.ones, "Construction")
        _checked(self.rt3_coeff, "Construction")

    def add(self, other: QuadraticInt) -> QuadraticInt:
        return QuadraticInt(
            _checked(self.ones + other.ones, "Addition"),
            _checked(self.rt3_coeff + other.rt3_coeff, "Addition"),
        )

    def subtract(self, other: QuadraticInt) -> QuadraticInt:
        return QuadraticInt(
            _checked(self.ones - other.ones, "Subtraction"),
            _checked(self.rt3_coeff - other.rt3_coeff, "Subtraction"),
        )

    def additive_inverse(self) -> QuadraticInt:
        return QuadraticInt(
            _checked(-self.ones, "Additive inverse"),
            _checked(-self.rt3_coeff, "Additive inverse"),
        )

    def multiply(self, other: QuadraticInt) -> QuadraticInt:
        a, b = self.ones, self.rt3_coeff
        c, d = other.ones, other.rt3_coeff
        ac = _checked(a * c, "Multiplication")
        bd = _checked(b * d, "Multiplication")
        rt_bd = _checked(_RT * bd, "Multiplication")
        ad = _checked(a * d, "Multiplication")
        bc = _checked(b * c, "Multiplication")
        return QuadraticInt(
            _checked(ac + rt_bd, "Multiplication"),
            _checked(ad + bc, "Multiplication"),
        )

    def divide(self, other: QuadraticInt) -> QuadraticInt:
        """Exact quotient; raises :class:`DivisionError` when the quotient has non-integer coefficients."""
        c, d = other.ones, other.rt3_coeff
        if c == 0 and d == 0:
            raise DivisionByZeroError(f"Division of {self} by zero")
        if d == 0:
            result = QuadraticInt(_truncated_div(self.ones, c), _truncated_div(self.rt3_coeff, c))
        elif self.ones == 0 and self.rt3_coeff == 0:
            result = self
        else:
            a, b = self.ones, self.rt3_coeff
            denominator = _checked(
                _checked(c * c, "Division") - _checked(_RT * _checked(d * d, "Division"), "Division"),
                "Division",
            )
            ones_numerator = _checked(
                _checked(a * c, "Division") - _checked(_RT * _checked(b * d, "Division"), "Division"),
                "Division",
            )
            rt3_numerator = _checked(
                _checked(b * c, "Division") - _checked(a * d, "Division"),
                "Division",
            )
            result = QuadraticInt(
                _truncated_div(ones_numerator, denominator),
                _truncated_div(rt3_numerator, denominator),
            )
        if result.multiply(other) != self:
            raise DivisionError(f"Non-integer division of {self} by {other}")
        return result

    def common_divisor(self, other: QuadraticInt) -> QuadraticInt:
        """Integer gcd of all four coefficients, or one when both values are zero."""
        divisor = gcd(gcd(self.ones, self.rt3_coeff), gcd(other.ones, other.rt3_coeff))
        if divisor == 0:
            return self.one()
        return QuadraticInt(_checked(divisor, "Common divisor"), 0)

    def compare(self, other: QuadraticInt) -> int:
        if self.ones == other.ones and self.rt3_coeff == other.rt3_coeff:
            return 0
        return _sign_of(self.ones - other.ones, self.rt3_coeff - other.rt3_coeff, self, other)

    def compare_to_zero(self) -> int:
        if self.ones == 0 and self.rt3_coeff == 0:
            return 0
        return _sign_of(self.ones, self.rt3_coeff, self, None)

    def to_double(self) -> float:
        return self.ones + math.sqrt(3) * self.rt3_coeff

    def lower(self) -> ExactFraction:
        """Rational lower bound of this value built from the sqrt(3) brackets."""
        return self._bracket(below=True)

    def upper(self) -> ExactFraction:
        return self._bracket(below=False)

    def _bracket(self, below: bool) -> ExactFraction:
        from .bounded import BoundedInt
        from .fraction import ExactFraction

        # A negative sqrt(3) coefficient flips which bracket bounds from below.
        use_under = below == (self.rt3_coeff >= 0)
        if use_under:
            numerator, denominator = RT3_UNDER_NUMERATOR, RT3_UNDER_DENOMINATOR
        else:
            numerator, denominator = RT3_OVER_NUMERATOR, RT3_OVER_DENOMINATOR
        rt3_part = ExactFraction(
            BoundedInt(self.rt3_coeff).multiply(BoundedInt(numerator)),
            BoundedInt(denominator),
        )
        return rt3_part.add(ExactFraction(BoundedInt(self.ones), BoundedInt(1)))

    def whole(self, value: int) -> QuadraticInt:
        return QuadraticInt(value, 0)

    def rt3(self) -> QuadraticInt:
        return QuadraticInt(0, 1)

    def two_rt3(self) -> QuadraticInt:
        return QuadraticInt(0, 2)

    def three_rt3(self) -> QuadraticInt:
        return QuadraticInt(0, 3)

    def __str__(self) -> str:
        return f"{self.ones} + {self.rt3_coeff} * sqrt(3)"


def _truncated_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


def _sign_of(p: int, q: int, left: QuadraticInt, right: Optional[QuadraticInt]) -> int:
    """Sign of ``p + q*sqrt(3)`` decided with the rational brackets alone."""
    if q == 0:
        return _sign(p)
    if p == 0:
        return _sign(q)
    if _sign(p) == _sign(q):
        return _sign(p)
    if q > 0:
        low = p * RT3_UNDER_DENOMINATOR + q * RT3_UNDER_NUMERATOR
        high = p * RT3_OVER_DENOMINATOR + q * RT3_OVER_NUMERATOR
    else:
        low = p * RT3_OVER_DENOMINATOR + q * RT3_OVER_NUMERATOR
        high = p * RT3_UNDER_DENOMINATOR + q * RT3_UNDER_NUMERATOR
    # Both bounds have positive denominators, so their numerators carry the sign.
    if high < 0:
        return -1
    if low > 0:
        return 1
    target = "zero" if right is None else str(right)
    raise InsufficientPrecisionError(
        "The rational over and under approximations of sqrt(3) are not "
        f"sufficiently precise to compare {left} and {target}"
    )
