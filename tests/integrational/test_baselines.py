"""Expensive regression checks; run with ``pytest --run-slow``."""

from __future__ import annotations

import pytest

from morphic_trapezoids import Interval, SymbolSequence, TrapezoidSequence

pytestmark = pytest.mark.slow

# Index spans holding every distinct relative positioning of 2401 trapezoids.
INTERVALS_2401 = [
    Interval(0, 14061),
    Interval(16809, 30868),
    Interval(67229, 76831),
    Interval(76833, 83689),
    Interval(184879, 194480),
    Interval(194482, 201339),
    Interval(504212, 518270),
    Interval(1327757, 1341814),
]


@pytest.fixture(scope="module")
def chain2401():
    return TrapezoidSequence.create(2, "quadratic")


def test_last_new_subword_of_length_2401():
    assert SymbolSequence(1000).index_of_last_new_subword(2401) == 1339414


def test_search_intervals_for_2401(chain2401):
    assert chain2401.collinear_search_intervals(2401) == INTERVALS_2401


def test_relative_positionings_for_2401_end_with_last_new_subword(chain2401):
    last_new = chain2401.index_of_last_new_relative_positioning(2401)
    assert 0 < last_new <= 1339414


def test_wide_gap_collinearity_on_49_chain():
    chain = TrapezoidSequence.create(49, "fraction")
    assert chain.count_collinear(0, 48, 13) == 10
    assert chain.radial_sweep_count_collinear(0, 48, 13).count == 10


def test_radial_sweep_on_6002_chain():
    chain = TrapezoidSequence.create(6002, "fraction")
    assert chain.radial_sweep_count_collinear(0, 345, 343).count == 62
