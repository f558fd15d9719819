"""Tests for rounding and statistics helpers."""

import pytest

from netscanner.config import FAILURE_SENTINEL_MS
from netscanner.models import LatencyStats
from netscanner.stats import compute_stats, mean_of_successes, round_half_up, round_ms


class TestRounding:
    def test_halves_round_up(self):
        assert round_ms(12.5) == 13
        assert round_ms(0.5) == 1
        assert round_ms(2.4) == 2

    def test_ndigits(self):
        assert round_half_up(3.14159, 2) == pytest.approx(3.14)
        assert round_half_up(2.675, 1) == pytest.approx(2.7)


class TestMeanOfSuccesses:
    def test_ignores_failures(self):
        assert mean_of_successes([30, FAILURE_SENTINEL_MS, 120]) == 75

    def test_all_failed_is_sentinel(self):
        assert mean_of_successes([FAILURE_SENTINEL_MS] * 3) == FAILURE_SENTINEL_MS

    def test_empty_is_sentinel(self):
        assert mean_of_successes([]) == FAILURE_SENTINEL_MS

    def test_rounds_half_up(self):
        assert mean_of_successes([10, 11]) == 11


class TestComputeStats:
    def test_basic(self):
        stats = compute_stats([30, 10, 20])
        assert stats.min == 10
        assert stats.max == 30
        assert stats.avg == 20
        assert stats.median == 20
        assert stats.spread == 20

    def test_single_value(self):
        stats = compute_stats([42])
        assert stats.median == 42
        assert stats.stdev == 0.0
        assert stats.spread == 0

    def test_empty(self):
        assert compute_stats([]) == LatencyStats()
