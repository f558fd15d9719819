"""Rough throughput test.

Ping and jitter come from repeated empty-response requests.  Download
speed is measured by fetching a few public CDN assets.  Upload is never
measured: it is estimated as a fixed fraction of the download speed.
"""

from __future__ import annotations

import asyncio
import logging
import time

from netscanner.config import (
    DOWNLOAD_TIMEOUT,
    PING_TIMEOUT,
    SPEED_DOWNLOAD_ROUNDS,
    SPEED_DOWNLOAD_URLS,
    SPEED_PING_FAILURE_MS,
    SPEED_PING_SAMPLES,
    SPEED_PING_URL,
    UPLOAD_ESTIMATE_RATIO,
)
from netscanner.engine import Prober, _cache_busted
from netscanner.models import SpeedResult
from netscanner.stats import compute_stats, round_half_up, round_ms

logger = logging.getLogger(__name__)


async def measure_ping(prober: Prober, samples: int = SPEED_PING_SAMPLES) -> list[int]:
    """Sequential requests to the ping URL; failures count as a fixed penalty."""
    values = []
    for _ in range(samples):
        elapsed = await prober.timed_request(SPEED_PING_URL, PING_TIMEOUT)
        values.append(SPEED_PING_FAILURE_MS if elapsed is None else elapsed)
    return values


async def measure_download(prober: Prober, rounds: int = SPEED_DOWNLOAD_ROUNDS) -> tuple[int, float]:
    """Fetch the download assets in concurrent rounds.

    Each round downloads one asset once per URL slot in parallel.
    Returns ``(total_bytes, seconds)``.
    """
    total_bytes = 0
    t0 = time.perf_counter()
    for rnd in range(rounds):
        url = SPEED_DOWNLOAD_URLS[rnd % len(SPEED_DOWNLOAD_URLS)]
        sizes = await asyncio.gather(*(
            prober.fetch_size(_cache_busted(url, f"{time.time_ns()}{rnd}{slot}"), DOWNLOAD_TIMEOUT)
            for slot in range(len(SPEED_DOWNLOAD_URLS))
        ))
        total_bytes += sum(sizes)
    return total_bytes, time.perf_counter() - t0


def mbps(total_bytes: int, seconds: float) -> float:
    if seconds <= 0:
        return 0.0
    return round_half_up(total_bytes * 8 / seconds / 1024 / 1024, 2)


async def run_speed_test(prober: Prober) -> SpeedResult:
    logger.info("Starting speed test")

    pings = await measure_ping(prober)
    stats = compute_stats(pings)

    logger.info("Testing download speed")
    total_bytes, seconds = await measure_download(prober)
    download = mbps(total_bytes, seconds)

    result = SpeedResult(
        download_mbps=download,
        upload_mbps=round_half_up(download * UPLOAD_ESTIMATE_RATIO, 2),
        ping_ms=round_ms(stats.avg) if pings else 0,
        jitter_ms=round_ms(stats.spread),
        ping_samples=pings,
        ping_stats=stats,
        bytes_downloaded=total_bytes,
    )
    logger.info(
        "Speed: down %.2f Mbps, up %.2f Mbps (estimated), ping %dms",
        result.download_mbps, result.upload_mbps, result.ping_ms,
    )
    return result
