from .config import SequenceConfig, get_sequence_config, set_sequence_config
from .errors import (
    DivisionByZeroError,
    DivisionError,
    ExactArithmeticError,
    IndexOutOfRangeError,
    InsufficientPrecisionError,
    ScalarOverflowError,
    SequenceTooShortError,
)
from .numbers import BoundedInt, ExactFraction, ExactScalar, FloatScalar, QuadraticInt
from .geometry import LineSegment, Point, Vector
from .ordering import AngularComparator, SweepEvent, compare_events
from .trapezoid import SYMBOL_TO_TYPE, Trapezoid, TrapezoidType, make_sequence_trapezoid
from .symbols import MORPHISM, VECTOR_MAP, Interval, SymbolSequence
from .segment_tree import LazySegmentTree
from .sequence import (
    DistanceSqIndexRatio,
    TrapezoidIntersectionPair,
    TrapezoidSequence,
    make_zero_point,
)
from .render import chain_segments, draw_trapezoids

__all__ = [
    'SequenceConfig',
    'get_sequence_config',
    'set_sequence_config',
    'DivisionByZeroError',
    'DivisionError',
    'ExactArithmeticError',
    'IndexOutOfRangeError',
    'InsufficientPrecisionError',
    'ScalarOverflowError',
    'SequenceTooShortError',
    'BoundedInt',
    'ExactFraction',
    'ExactScalar',
    'FloatScalar',
    'QuadraticInt',
    'LineSegment',
    'Point',
    'Vector',
    'AngularComparator',
    'SweepEvent',
    'compare_events',
    'SYMBOL_TO_TYPE',
    'Trapezoid',
    'TrapezoidType',
    'make_sequence_trapezoid',
    'MORPHISM',
    'VECTOR_MAP',
    'Interval',
    'SymbolSequence',
    'LazySegmentTree',
    'DistanceSqIndexRatio',
    'TrapezoidIntersectionPair',
    'TrapezoidSequence',
    'make_zero_point',
    'chain_segments',
    'draw_trapezoids',
]
