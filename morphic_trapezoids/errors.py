"""Exception taxonomy shared by the numeric tower and the sequence engines."""

from __future__ import annotations


class ExactArithmeticError(ArithmeticError):
    """Base class for failures of an exact scalar operation."""


class ScalarOverflowError(ExactArithmeticError, OverflowError):
    """Raised when a bounded-integer result would leave the signed 64-bit range."""


class DivisionError(ExactArithmeticError):
    """Raised when a quotient is not exact in the dividend's scalar family."""


class DivisionByZeroError(DivisionError, ZeroDivisionError):
    pass


class InsufficientPrecisionError(ExactArithmeticError):
    """Raised when the sqrt(3) brackets cannot order two quadratic integers."""


class SequenceTooShortError(RuntimeError):
    """Raised when a base-case scan window does not contain every expected subword."""


class IndexOutOfRangeError(IndexError):
    pass
