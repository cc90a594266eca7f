"""Scalar families used by the geometry layer."""

from .base import (
    INT64_MAX,
    INT64_MIN,
    ExactScalar,
    addition_will_overflow,
    multiplication_will_overflow,
)
from .bounded import BoundedInt
from .floating import FloatScalar
from .fraction import ExactFraction
from .quadratic import QuadraticInt

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "BoundedInt",
    "ExactFraction",
    "ExactScalar",
    "FloatScalar",
    "QuadraticInt",
    "addition_will_overflow",
    "multiplication_will_overflow",
]
