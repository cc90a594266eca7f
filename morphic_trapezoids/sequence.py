"""Trapezoid chains built from the symbol sequence, and the queries over them.

The chain places trapezoid ``i + 1`` at the exit vertex of trapezoid ``i``.
Two collinearity counters are provided: a direct ``O(n k^2)`` scan and a
radial sweep that pivots on every vertex and tracks pierced trapezoids in a
:class:`~morphic_trapezoids.segment_tree.LazySegmentTree`.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Generic, List, Optional, Set, Tuple, TypeVar

from .config import SequenceConfig, get_sequence_config
from .errors import IndexOutOfRangeError
from .geometry import Point
from .logging_utils import apply_debug_logging
from .numbers import ExactFraction, ExactScalar, FloatScalar, QuadraticInt
from .ordering import AngularComparator, SweepEvent, event_sort_key
from .segment_tree import LazySegmentTree
from .symbols import Interval, SymbolSequence, merge_new_windows
from .trapezoid import (
    COMPOSITION_TABLE,
    INVERSES,
    SYMBOL_TO_TYPE,
    Trapezoid,
    TrapezoidType,
    make_sequence_trapezoid,
)

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=ExactScalar)

FAMILIES = ("quadratic", "fraction", "float")


def make_zero_point(family: str) -> Point:
    """Origin in one of the named scalar families."""
    if family == "quadratic":
        zero: ExactScalar = QuadraticInt(0, 0)
    elif family == "fraction":
        zero = ExactFraction(QuadraticInt(0, 0), QuadraticInt(1, 0))
    elif family == "float":
        zero = FloatScalar(0.0)
    else:
        raise ValueError(f"Unknown scalar family {family!r}; expected one of {', '.join(FAMILIES)}")
    return Point(zero, zero)


@dataclass(frozen=True)
class TrapezoidIntersectionPair(Generic[S]):
    """Best line found by the radial sweep: it passes through ``point1`` and ``point2``."""

    count: int
    index1: int
    index2: int
    point1: Point[S]
    point2: Point[S]


@dataclass(frozen=True)
class DistanceSqIndexRatio(Generic[S]):
    """``sqrt(distance_sq) / index_gap``, or its reciprocal when ``inverse`` is set."""

    distance_sq: S
    index_gap: int
    inverse: bool

    def compare(self, other: DistanceSqIndexRatio[S]) -> int:
        if self.inverse != other.inverse:
            raise ValueError("Cannot compare an inverse ratio with a non-inverse ratio")
        gap1 = self.distance_sq.whole(self.index_gap)
        gap2 = other.distance_sq.whole(other.index_gap)
        # Squared and cross-multiplied so that no square root or division is needed.
        if self.inverse:
            return other.distance_sq.multiply(gap1).multiply(gap1).compare(
                self.distance_sq.multiply(gap2).multiply(gap2)
            )
        return self.distance_sq.multiply(gap2).multiply(gap2).compare(
            other.distance_sq.multiply(gap1).multiply(gap1)
        )

    def __str__(self) -> str:
        if self.inverse:
            return f"{self.index_gap} / sqrt({self.distance_sq})"
        return f"sqrt({self.distance_sq}) / {self.index_gap}"


class TrapezoidSequence(Generic[S]):
    """Chain of ``count`` trapezoids starting at ``start_point``."""

    def __init__(self, count: int, start_point: Point[S], config: Optional[SequenceConfig] = None) -> None:
        self.config = config or get_sequence_config()
        self.start_point = start_point
        self.symbol_sequence = SymbolSequence(count, config=self.config)
        self._types: List[TrapezoidType] = []
        self._trapezoids: List[Trapezoid[S]] = []
        self._normalized: Optional[Tuple[bytes, ...]] = None
        self._rebuild_types()
        self._rebuild_chain()

    @classmethod
    def create(
        cls, count: int, family: Optional[str] = None, config: Optional[SequenceConfig] = None
    ) -> TrapezoidSequence:
        config = config or get_sequence_config()
        return cls(count, make_zero_point(family or config.default_family), config=config)

    def __len__(self) -> int:
        return len(self._trapezoids)

    @property
    def trapezoids(self) -> Tuple[Trapezoid[S], ...]:
        return tuple(self._trapezoids)

    @property
    def types(self) -> Tuple[TrapezoidType, ...]:
        return tuple(self._types)

    # -- construction -------------------------------------------------

    def _rebuild_types(self) -> None:
        self._types = [SYMBOL_TO_TYPE[symbol] for symbol in self.symbol_sequence.symbols()]

    def _rebuild_chain(self) -> None:
        self._trapezoids = _build_chain(self._types, self.start_point)

    def _extend_types(self, length: int) -> None:
        self.symbol_sequence.extend(length)
        if len(self.symbol_sequence) != len(self._types):
            self._rebuild_types()

    def _extend_chain(self, length: int) -> None:
        self._extend_types(length)
        built = len(self._trapezoids)
        if built == len(self._types):
            return
        # Symbols are prefix-stable, so the built trapezoids stay valid.
        end = self._trapezoids[-1].vertices[3] if built else self.start_point
        self._trapezoids.extend(_build_chain(self._types[built:], end))

    # -- relative positioning ------------------------------------------

    def _normalized_rows(self) -> Tuple[bytes, ...]:
        """Row ``n`` holds every type composed with ``n``, as ASCII digits."""
        if self._normalized is None or len(self._normalized[0]) != len(self._types):
            self._normalized = tuple(
                bytes(ord("0") + COMPOSITION_TABLE[t][n] for t in self._types) for n in TrapezoidType
            )
        return self._normalized

    def positioning_canonical_string(self, start: int, length: int) -> str:
        """Types of ``length`` trapezoids from ``start``, each composed with the inverse of the first.

        Equal strings mean the two runs have the same relative orientations.
        """
        self._extend_types(start + length)
        row = self._normalized_rows()[self._types[start].inverse()]
        return row[start : start + length].decode("ascii")

    def _relative_positioning_flags(self, length: int) -> List[bool]:
        _check_positive(length)
        upper = self.symbol_sequence.index_of_last_new_subword(length) + length
        self._extend_types(upper + length)
        rows = self._normalized_rows()
        types = self._types
        seen: Set[bytes] = set()
        flags = []
        for i in range(upper):
            canonical = rows[INVERSES[types[i]]][i : i + length]
            flags.append(canonical not in seen)
            seen.add(canonical)
        return flags

    def index_of_last_new_relative_positioning(self, length: int) -> int:
        last_new = 0
        for i, is_new in enumerate(self._relative_positioning_flags(length)):
            if is_new:
                last_new = i
        return last_new

    def collinear_search_intervals(self, length: int) -> List[Interval]:
        """Index spans that hold every distinct relative positioning of ``length`` trapezoids."""
        return merge_new_windows(self._relative_positioning_flags(length), length)

    # -- distances -----------------------------------------------------

    def _check_pair(self, index1: int, index2: int) -> Tuple[Trapezoid[S], Trapezoid[S]]:
        if index1 < 0 or index2 < 0:
            raise ValueError(f"Trapezoid indices must be non-negative, got {index1} and {index2}")
        if index1 >= len(self._trapezoids) or index2 >= len(self._trapezoids):
            raise IndexOutOfRangeError(
                f"Trapezoid index out of range: {index1}, {index2} (chain has {len(self._trapezoids)})"
            )
        return self._trapezoids[index1], self._trapezoids[index2]

    def get_min_distance_sq(self, index1: int, index2: int) -> S:
        trap1, trap2 = self._check_pair(index1, index2)
        return trap1.min_distance_sq(trap2)

    def get_max_distance_sq(self, index1: int, index2: int) -> S:
        trap1, trap2 = self._check_pair(index1, index2)
        return trap1.max_distance_sq(trap2)

    def get_bounds(self) -> Tuple[S, S, S, S]:
        """``(x_min, y_min, x_max, y_max)`` over every vertex of the chain."""
        if not self._trapezoids:
            raise ValueError("An empty chain has no bounds")
        first = self._trapezoids[0].vertices[0]
        x_min = x_max = first.x
        y_min = y_max = first.y
        for trapezoid in self._trapezoids:
            for point in trapezoid.vertices:
                if point.x.compare(x_min) < 0:
                    x_min = point.x
                if point.x.compare(x_max) > 0:
                    x_max = point.x
                if point.y.compare(y_min) < 0:
                    y_min = point.y
                if point.y.compare(y_max) > 0:
                    y_max = point.y
        return x_min, y_min, x_max, y_max

    # -- collinearity --------------------------------------------------

    def count_collinear(self, min_index: int, max_index: int, max_index_gap: int) -> int:
        """Most trapezoids in ``[min_index, max_index]`` pierced by one line, at most ``max_index_gap`` apart.

        Every candidate line passes through a vertex of two trapezoids.
        """
        _check_range(min_index, max_index)
        self._extend_chain(max_index + 1)
        traps = self._trapezoids
        # A line through any vertex pierces that vertex's own trapezoid.
        best = 1
        for lo in range(min_index, max_index):
            hi_bound = min(lo + max_index_gap, max_index)
            for hi in range(lo + 1, hi_bound + 1):
                first = max(min_index, hi - max_index_gap, 0)
                last = min(len(traps) - 1, lo + max_index_gap, max_index)
                for p1 in traps[lo].vertices:
                    for p2 in traps[hi].vertices:
                        if p1 == p2:
                            continue
                        pierced: Deque[int] = deque()
                        for index in range(first, last + 1):
                            if traps[index].intersects_infinite_line(p1, p2):
                                pierced.append(index)
                            while pierced and pierced[-1] - pierced[0] > max_index_gap:
                                pierced.popleft()
                            best = max(best, len(pierced))
        return best

    def radial_sweep_count_collinear(
        self, min_index: int, max_index: int, max_index_gap: int
    ) -> TrapezoidIntersectionPair[S]:
        """Same count as :meth:`count_collinear`, found by sweeping a line around every vertex.

        The trapezoids of the range are rebuilt from ``start_point`` at
        ``min_index``, so the returned points are relative to that origin.
        """
        _check_range(min_index, max_index)
        if max_index + 1 > len(self._types):
            self._extend_types(max(2 * max_index, max_index + 1))
        window: List[Trapezoid[S]] = _build_chain(self._types[min_index : max_index + 1], self.start_point)
        interval = self.config.sweep_progress_interval

        best: Optional[TrapezoidIntersectionPair[S]] = None
        for pivot_index in range(min_index, max_index + 1):
            if interval and pivot_index % interval == 0:
                logger.info("Considering vertices in trapezoid %d as pivots", pivot_index)
            vertices = window[pivot_index - min_index].vertices
            # Vertex 0 is the previous trapezoid's exit vertex.
            if pivot_index != min_index:
                vertices = vertices[1:]
            for pivot in vertices:
                candidate = self._sweep_pivot(window, min_index, max_index, max_index_gap, pivot_index, pivot)
                if best is None or candidate.count > best.count:
                    best = candidate
        assert best is not None
        return best

    def _sweep_pivot(
        self,
        window: List[Trapezoid[S]],
        min_index: int,
        max_index: int,
        max_index_gap: int,
        pivot_index: int,
        pivot: Point[S],
    ) -> TrapezoidIntersectionPair[S]:
        tree = LazySegmentTree(min_index, max_index + max_index_gap)
        query_hi = max_index + max_index_gap
        current = 0
        ray_point = Point(pivot.x.add(pivot.x.one()), pivot.y)
        from_right = AngularComparator(pivot, start_right=True)
        from_left = AngularComparator(pivot, start_right=False)
        events: List[SweepEvent[S]] = []

        first = max(pivot_index - max_index_gap, min_index)
        last = min(pivot_index + max_index_gap, max_index)
        for index in range(first, last + 1):
            trapezoid = window[index - min_index]
            if trapezoid.contains(pivot):
                # Every line through the pivot pierces this trapezoid.
                tree.update(index, index + max_index_gap, 1)
                current = max(current, tree.max(0, query_hi))
                continue
            ordered = from_right.sorted(trapezoid.vertices)
            # Trapezoids lying on or above the starting ray are not crossed by it.
            if trapezoid.intersects_semi_infinite_line(pivot, ray_point) and (
                ordered[0].y.compare(pivot.y) != 0 or ordered[-1].y.compare(pivot.y) <= 0
            ):
                ordered = from_left.sorted(trapezoid.vertices)
                tree.update(index, index + max_index_gap, 1)
                current = max(current, tree.max(0, query_hi))
            events.append(SweepEvent(ordered[0], index, True))
            events.append(SweepEvent(ordered[-1], index, False))

        events.sort(key=event_sort_key(pivot))
        if events:
            result = TrapezoidIntersectionPair(current, pivot_index, events[0].trapezoid_index, pivot, events[0].point)
        else:
            result = TrapezoidIntersectionPair(current, pivot_index, pivot_index, pivot, pivot)
        for event in events:
            if event.is_enter:
                tree.update(event.trapezoid_index, event.trapezoid_index + max_index_gap, 1)
                current = max(current, tree.max(0, query_hi))
                if current > result.count:
                    result = TrapezoidIntersectionPair(current, pivot_index, event.trapezoid_index, pivot, event.point)
            else:
                tree.update(event.trapezoid_index, event.trapezoid_index + max_index_gap, -1)
        return result

    def best_collinear_over_intervals(self, max_index_gap: int) -> TrapezoidIntersectionPair[S]:
        """Run the radial sweep over every search interval and keep the largest count."""
        intervals = self.collinear_search_intervals(max_index_gap)
        logger.info("Intervals to search: %s", ", ".join(str(i) for i in intervals))
        best: Optional[TrapezoidIntersectionPair[S]] = None
        for interval in intervals:
            candidate = self.radial_sweep_count_collinear(interval.lo, interval.hi, max_index_gap)
            if best is None or candidate.count > best.count:
                best = candidate
        assert best is not None
        return best

    # -- distance bounds -----------------------------------------------

    def _lo_distance_sq(self, min_index: int, max_index: int, gap: int) -> S:
        """Smallest squared distance between trapezoids ``gap`` or ``gap + 1`` apart."""
        lowest: Optional[S] = None
        for index in range(min_index, max_index + 1):
            for other in (index + gap, index + gap + 1):
                distance = self.get_min_distance_sq(index, other)
                if lowest is None or distance.compare(lowest) < 0:
                    lowest = distance
        assert lowest is not None
        return lowest

    def _hi_distance_sq(self, min_index: int, max_index: int, gap: int) -> S:
        highest: Optional[S] = None
        for index in range(min_index, max_index + 1):
            for other in (index + gap, index + gap + 1):
                distance = self.get_max_distance_sq(index, other)
                if highest is None or distance.compare(highest) > 0:
                    highest = distance
        assert highest is not None
        return highest

    def _prepare_bounds(self, gap_min: int, gap_max: int, start_index: int, end_index: int) -> None:
        _check_range(start_index, end_index)
        if gap_min < 0 or gap_max < gap_min:
            raise ValueError(f"Invalid gap range [{gap_min}, {gap_max}]")
        if len(self._trapezoids) <= end_index + gap_max + 1:
            self._extend_chain(end_index + gap_max + 2)

    def _max_lo_ratio(self, gap_min: int, gap_max: int, start_index: int, end_index: int) -> DistanceSqIndexRatio[S]:
        best: Optional[DistanceSqIndexRatio[S]] = None
        for gap in range(gap_min, gap_max + 1):
            logger.info("Considering gap %d in range [%d,%d]", gap, gap_min, gap_max)
            ratio = DistanceSqIndexRatio(self._lo_distance_sq(start_index, end_index, gap), gap + 1, True)
            if best is None or best.compare(ratio) < 0:
                best = ratio
        assert best is not None
        return best

    def _max_hi_ratio(self, gap_min: int, gap_max: int, start_index: int, end_index: int) -> DistanceSqIndexRatio[S]:
        best: Optional[DistanceSqIndexRatio[S]] = None
        for gap in range(gap_min, gap_max + 1):
            logger.info("Considering gap %d in range [%d,%d]", gap, gap_min, gap_max)
            ratio = DistanceSqIndexRatio(self._hi_distance_sq(start_index, end_index, gap), gap, False)
            if best is None or best.compare(ratio) < 0:
                best = ratio
        assert best is not None
        return best

    def assert_bounded_ratio(self, gap_min: int, gap_max: int, start_index: int, end_index: int, bound: S) -> bool:
        """True iff (largest distance / gap) over (gap + 1 / smallest distance) stays below ``bound``.

        Compares ``hi / lo < (bound * hi_gap / lo_gap)^2`` with the squares
        cleared of denominators.
        """
        self._prepare_bounds(gap_min, gap_max, start_index, end_index)
        lo = self._max_lo_ratio(gap_min, gap_max, start_index, end_index)
        hi = self._max_hi_ratio(gap_min, gap_max, start_index, end_index)
        logger.info("maxLoDistanceRatio: %s", lo)
        logger.info("maxHiDistanceRatio: %s", hi)
        lo_gap = bound.whole(lo.index_gap)
        rhs_root = bound.multiply(bound.whole(hi.index_gap))
        return hi.distance_sq.multiply(lo_gap).multiply(lo_gap).compare(
            rhs_root.multiply(rhs_root).multiply(lo.distance_sq)
        ) < 0

    def assert_bounded_max_distance(
        self, gap_min: int, gap_max: int, start_index: int, end_index: int, bound: S
    ) -> bool:
        """True iff every largest distance divided by its index gap is below ``bound``."""
        self._prepare_bounds(gap_min, gap_max, start_index, end_index)
        hi = self._max_hi_ratio(gap_min, gap_max, start_index, end_index)
        logger.info("maxHiDistanceRatio: %s", hi)
        rhs_root = bound.multiply(bound.whole(hi.index_gap))
        return hi.distance_sq.compare(rhs_root.multiply(rhs_root)) < 0

    def assert_bounded_min_distance(
        self, gap_min: int, gap_max: int, start_index: int, end_index: int, bound: S
    ) -> bool:
        """True iff (gap + 1) divided by every smallest distance is below ``bound``."""
        self._prepare_bounds(gap_min, gap_max, start_index, end_index)
        lo = self._max_lo_ratio(gap_min, gap_max, start_index, end_index)
        logger.info("maxLoDistanceRatio: %s", lo)
        lhs_root = bound.whole(lo.index_gap)
        return lhs_root.multiply(lhs_root).compare(lo.distance_sq.multiply(bound.multiply(bound))) < 0


def _build_chain(types: List[TrapezoidType], start_point: Point[S]) -> List[Trapezoid[S]]:
    trapezoids: List[Trapezoid[S]] = []
    point = start_point
    for trapezoid_type in types:
        trapezoid = make_sequence_trapezoid(trapezoid_type, point)
        trapezoids.append(trapezoid)
        point = trapezoid.vertices[3]
    return trapezoids


def _check_positive(length: int) -> None:
    if length <= 0:
        raise ValueError(f"Length must be positive, got {length}")


def _check_range(min_index: int, max_index: int) -> None:
    if min_index < 0 or max_index < min_index:
        raise ValueError(f"Invalid index range [{min_index}, {max_index}]")


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"DistanceSqIndexRatio", "TrapezoidIntersectionPair", "TrapezoidSequence.positioning_canonical_string"},
)
