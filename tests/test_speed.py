"""Tests for the speed test."""

from __future__ import annotations

import pytest

from netscanner.config import PING_TIMEOUT
from netscanner.speed import mbps, measure_ping, run_speed_test
from netscanner.stats import round_half_up


def test_mbps():
    assert mbps(1024 * 1024, 8.0) == 1.0
    assert mbps(3 * 1024 * 1024, 2.0) == 12.0
    assert mbps(1024, 0) == 0.0


@pytest.mark.asyncio
async def test_failed_ping_counts_as_penalty(fake_prober):
    prober = fake_prober(request_timings=[20, None, 30, 40, 50])
    assert await measure_ping(prober) == [20, 999, 30, 40, 50]


@pytest.mark.asyncio
async def test_ping_requests_use_ping_timeout(fake_prober):
    prober = fake_prober(request_timings=[20, 20, 20, 20, 20])
    await measure_ping(prober)
    assert prober.request_timeouts == [PING_TIMEOUT] * 5


@pytest.mark.asyncio
async def test_speed_result(fake_prober):
    prober = fake_prober(request_timings=[20, 24, 22, 30, 20], fetch_bytes=512 * 1024)

    result = await run_speed_test(prober)

    assert result.ping_samples == [20, 24, 22, 30, 20]
    assert result.ping_ms == 23
    assert result.jitter_ms == 10
    assert result.bytes_downloaded == 9 * 512 * 1024
    assert result.download_mbps > 0
    assert result.upload_mbps == round_half_up(result.download_mbps * 0.3, 2)


@pytest.mark.asyncio
async def test_nothing_downloaded(fake_prober):
    result = await run_speed_test(fake_prober())
    assert result.bytes_downloaded == 0
    assert result.download_mbps == 0.0
    assert result.upload_mbps == 0.0
    assert result.ping_ms == 999
