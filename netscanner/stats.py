"""Rounding and statistical helpers for latency samples."""

from __future__ import annotations

import math
from typing import Sequence

from netscanner.config import FAILURE_SENTINEL_MS
from netscanner.models import LatencyStats


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for non-negative values.

    Python's built-in ``round`` uses banker's rounding (``round(12.5) == 12``),
    which would make progress and score values differ from the usual
    arithmetic convention.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_ms(value: float) -> int:
    return int(round_half_up(value))


def mean_of_successes(samples: Sequence[int]) -> int:
    """Average the non-sentinel samples; sentinel if every sample failed."""
    valid = [s for s in samples if s < FAILURE_SENTINEL_MS]
    if not valid:
        return FAILURE_SENTINEL_MS
    return round_ms(sum(valid) / len(valid))


def compute_stats(values: Sequence[float]) -> LatencyStats:
    """Compute statistical summary from a list of values."""
    if not values:
        return LatencyStats()

    sorted_vals = sorted(values)
    n = len(sorted_vals)

    avg = sum(sorted_vals) / n
    median = _percentile(sorted_vals, 50)

    variance = sum((v - avg) ** 2 for v in sorted_vals) / n if n > 1 else 0.0
    stdev = math.sqrt(variance)

    return LatencyStats(
        min=sorted_vals[0],
        max=sorted_vals[-1],
        avg=round(avg, 2),
        median=round(median, 2),
        stdev=round(stdev, 2),
        spread=sorted_vals[-1] - sorted_vals[0],
    )


def _percentile(sorted_vals: list[float], pct: float) -> float:
    """Compute the given percentile from pre-sorted values."""
    n = len(sorted_vals)
    if n == 1:
        return sorted_vals[0]
    k = (pct / 100) * (n - 1)
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return sorted_vals[int(k)]
    return sorted_vals[f] * (c - k) + sorted_vals[c] * (k - f)
