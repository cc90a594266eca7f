import math

import pytest

from morphic_trapezoids import (
    BoundedInt,
    DivisionByZeroError,
    DivisionError,
    ExactFraction,
    FloatScalar,
    InsufficientPrecisionError,
    QuadraticInt,
    ScalarOverflowError,
)
from morphic_trapezoids.numbers import (
    INT64_MAX,
    INT64_MIN,
    addition_will_overflow,
    multiplication_will_overflow,
)
from morphic_trapezoids.numbers.quadratic import (
    RT3_OVER_DENOMINATOR,
    RT3_OVER_NUMERATOR,
    RT3_UNDER_DENOMINATOR,
    RT3_UNDER_NUMERATOR,
)


def _frac(numerator, denominator):
    return ExactFraction(BoundedInt(numerator), BoundedInt(denominator))


def test_int64_helpers():
    assert addition_will_overflow(INT64_MAX, 1)
    assert addition_will_overflow(INT64_MIN, -1)
    assert not addition_will_overflow(INT64_MAX, -1)
    assert not multiplication_will_overflow(2 ** 31, 2 ** 31)
    assert multiplication_will_overflow(2 ** 32, 2 ** 32)


def test_bounded_int_arithmetic():
    assert BoundedInt(7).add(BoundedInt(-3)) == BoundedInt(4)
    assert BoundedInt(7) - BoundedInt(10) == BoundedInt(-3)
    assert BoundedInt(-6) * BoundedInt(7) == BoundedInt(-42)
    assert BoundedInt(-6).divide(BoundedInt(3)) == BoundedInt(-2)
    assert BoundedInt(5).compare(BoundedInt(9)) == -1
    assert BoundedInt(0).compare_to_zero() == 0
    assert BoundedInt(0).common_divisor(BoundedInt(0)) == BoundedInt(1)
    assert BoundedInt(-12).common_divisor(BoundedInt(18)) == BoundedInt(6)
    assert str(BoundedInt(-5)) == "-5"


@pytest.mark.parametrize(
    "operation",
    [
        lambda: BoundedInt(INT64_MAX).add(BoundedInt(1)),
        lambda: BoundedInt(INT64_MIN).subtract(BoundedInt(1)),
        lambda: BoundedInt(2 ** 32).multiply(BoundedInt(2 ** 32)),
        lambda: BoundedInt(INT64_MIN).additive_inverse(),
        lambda: BoundedInt(INT64_MIN).divide(BoundedInt(-1)),
        lambda: BoundedInt(INT64_MAX + 1),
    ],
)
def test_bounded_int_overflow(operation):
    with pytest.raises(ScalarOverflowError):
        operation()


def test_bounded_int_overflow_is_an_overflow_error():
    with pytest.raises(OverflowError):
        BoundedInt(INT64_MAX).multiply(BoundedInt(2))


def test_bounded_int_division_errors():
    with pytest.raises(DivisionError):
        BoundedInt(7).divide(BoundedInt(2))
    with pytest.raises(DivisionByZeroError):
        BoundedInt(7).divide(BoundedInt(0))
    with pytest.raises(ZeroDivisionError):
        BoundedInt(7) / BoundedInt(0)


def test_bounded_int_has_no_rt3():
    with pytest.raises(ValueError):
        BoundedInt(1).rt3()


def test_quadratic_arithmetic():
    a = QuadraticInt(1, 2)
    b = QuadraticInt(3, 4)
    assert a + b == QuadraticInt(4, 6)
    assert a - b == QuadraticInt(-2, -2)
    assert a * b == QuadraticInt(27, 10)
    assert -a == QuadraticInt(-1, -2)
    assert QuadraticInt(27, 10).divide(b) == a
    assert QuadraticInt(6, 4).divide(QuadraticInt(2, 0)) == QuadraticInt(3, 2)
    assert QuadraticInt(0, 0).divide(b) == QuadraticInt(0, 0)


def test_quadratic_constants():
    zero = QuadraticInt(0, 0)
    assert zero.six() == QuadraticInt(6, 0)
    assert zero.rt3() == QuadraticInt(0, 1)
    assert zero.two_rt3() == QuadraticInt(0, 2)
    assert zero.three_rt3() == QuadraticInt(0, 3)
    assert zero.rt3() * zero.rt3() == QuadraticInt(3, 0)
    assert str(QuadraticInt(1, -2)) == "1 + -2 * sqrt(3)"
    assert QuadraticInt(2, 1).to_double() == pytest.approx(2 + math.sqrt(3))


def test_quadratic_inexact_division():
    with pytest.raises(DivisionError):
        QuadraticInt(1, 0).divide(QuadraticInt(2, 0))
    with pytest.raises(DivisionError):
        QuadraticInt(1, 0).divide(QuadraticInt(1, 1))
    with pytest.raises(DivisionByZeroError):
        QuadraticInt(1, 0).divide(QuadraticInt(0, 0))


def test_quadratic_overflow():
    with pytest.raises(ScalarOverflowError):
        QuadraticInt(2 ** 62, 0).add(QuadraticInt(2 ** 62, 0))
    with pytest.raises(ScalarOverflowError):
        QuadraticInt(0, 2 ** 32).multiply(QuadraticInt(0, 2 ** 31))


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (QuadraticInt(2, 0), QuadraticInt(0, 1), 1),
        (QuadraticInt(1, 0), QuadraticInt(0, 1), -1),
        (QuadraticInt(0, 1), QuadraticInt(0, 1), 0),
        (QuadraticInt(7, -4), QuadraticInt(0, 0), 1),
        (QuadraticInt(-7, 4), QuadraticInt(0, 0), -1),
        (QuadraticInt(97, 0), QuadraticInt(0, 56), 1),
        (QuadraticInt(1351, -780), QuadraticInt(0, 0), 1),
        (QuadraticInt(-5, -1), QuadraticInt(-6, 0), -1),
    ],
)
def test_quadratic_compare(left, right, expected):
    assert left.compare(right) == expected
    assert right.compare(left) == -expected


def test_quadratic_compare_needs_tighter_brackets():
    # The mediant of the two brackets lies strictly between them.
    ones = RT3_UNDER_NUMERATOR + RT3_OVER_NUMERATOR
    rt3 = RT3_UNDER_DENOMINATOR + RT3_OVER_DENOMINATOR
    with pytest.raises(InsufficientPrecisionError):
        QuadraticInt(ones, 0).compare(QuadraticInt(0, rt3))
    with pytest.raises(InsufficientPrecisionError):
        QuadraticInt(ones, -rt3).compare_to_zero()


def test_quadratic_brackets():
    rt3 = QuadraticInt(0, 1)
    assert rt3.lower().to_double() < math.sqrt(3) < rt3.upper().to_double()
    assert rt3.lower().compare(rt3.upper()) < 0
    negative = QuadraticInt(2, -1)
    assert negative.lower().to_double() < negative.to_double() < negative.upper().to_double()


def test_quadratic_common_divisor():
    assert QuadraticInt(6, 4).common_divisor(QuadraticInt(10, 0)) == QuadraticInt(2, 0)
    assert QuadraticInt(0, 0).common_divisor(QuadraticInt(0, 0)) == QuadraticInt(1, 0)


def test_fraction_normalization():
    half = _frac(2, 4)
    assert half.numerator == BoundedInt(1)
    assert half.denominator == BoundedInt(2)
    negative = _frac(1, -2)
    assert negative.numerator == BoundedInt(-1)
    assert negative.denominator == BoundedInt(2)
    zero = _frac(0, -5)
    assert zero.numerator == BoundedInt(0)
    assert zero.denominator == BoundedInt(1)


def test_fraction_arithmetic():
    assert _frac(1, 2) + _frac(1, 3) == _frac(5, 6)
    assert _frac(1, 2) - _frac(1, 3) == _frac(1, 6)
    assert _frac(2, 3) * _frac(3, 4) == _frac(1, 2)
    assert _frac(2, 3) / _frac(4, 9) == _frac(3, 2)
    assert _frac(2, 3).reciprocal() == _frac(3, 2)
    assert _frac(1, 2) == _frac(2, 4)
    assert _frac(1, 3) < _frac(1, 2)
    assert _frac(-1, 3).compare_to_zero() == -1
    assert str(_frac(3, 1)) == "3"
    assert str(_frac(1, 2)) == "1 / 2"
    assert _frac(1, 2).whole(4) == _frac(8, 2)


def test_fraction_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        _frac(1, 0)
    with pytest.raises(DivisionByZeroError):
        _frac(1, 2).divide(_frac(0, 3))


def test_fraction_over_quadratic_integers():
    one = QuadraticInt(1, 0)
    rt3 = ExactFraction(QuadraticInt(0, 1), one)
    assert rt3 * rt3 == ExactFraction(QuadraticInt(3, 0), one)
    assert rt3.rt3() == rt3
    # 1 / (2 + sqrt(3)) == 2 - sqrt(3)
    inverse = ExactFraction(one, QuadraticInt(2, 1))
    assert inverse == ExactFraction(QuadraticInt(2, -1), one)
    assert inverse.to_double() == pytest.approx(2 - math.sqrt(3))


def test_float_scalar():
    assert FloatScalar(0.1) + FloatScalar(0.2) == FloatScalar(0.3)
    assert FloatScalar(6).common_divisor(FloatScalar(4)) == FloatScalar(2)
    assert FloatScalar(0.5).common_divisor(FloatScalar(4)) == FloatScalar(1)
    assert FloatScalar(1).rt3().to_double() == pytest.approx(math.sqrt(3))
    assert FloatScalar(-2.0).compare_to_zero() == -1
    assert FloatScalar(3).compare(FloatScalar(2)) == 1


def test_float_division_by_zero():
    assert FloatScalar(3).divide(FloatScalar(2)) == FloatScalar(1.5)
    with pytest.raises(DivisionByZeroError):
        FloatScalar(1).divide(FloatScalar(0))
    with pytest.raises(ZeroDivisionError):
        FloatScalar(1) / FloatScalar(0.0)


FRACTION_CASES = [
    (_frac(1, 2), _frac(1, 3)),
    (_frac(-7, 4), _frac(5, 6)),
    (_frac(0, 9), _frac(-3, 8)),
    (_frac(12, -18), _frac(12, 18)),
    (ExactFraction(QuadraticInt(2, 1), QuadraticInt(3, 0)), ExactFraction(QuadraticInt(0, -1), QuadraticInt(2, 0))),
]


@pytest.mark.parametrize("a, b", FRACTION_CASES)
def test_fraction_add_then_subtract_restores_value(a, b):
    assert a.add(b).subtract(b) == a


@pytest.mark.parametrize("a", [a for a, _ in FRACTION_CASES])
def test_fraction_normalized_is_idempotent(a):
    once = a.normalized()
    twice = once.normalized()
    assert (twice.numerator, twice.denominator) == (once.numerator, once.denominator)


@pytest.mark.parametrize(
    "numerator, denominator, factor",
    [(1, 2, 3), (-5, 7, 4), (0, 3, -2), (9, -6, 5), (4, 4, -1)],
)
def test_fraction_scaling_both_terms_keeps_value(numerator, denominator, factor):
    assert _frac(numerator, denominator) == _frac(numerator * factor, denominator * factor)


@pytest.mark.parametrize(
    "x, y",
    [
        (QuadraticInt(3, 2), QuadraticInt(-1, 5)),
        (QuadraticInt(0, 0), QuadraticInt(7, -7)),
        (QuadraticInt(-2 ** 40, 3), QuadraticInt(2 ** 40, -2 ** 20)),
    ],
)
def test_quadratic_add_then_subtract_restores_value(x, y):
    assert x.add(y).subtract(y) == x
