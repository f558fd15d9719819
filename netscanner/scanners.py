"""Category scanners.

Each scanner takes its catalog slice, runs it through ``run_batch`` with
the appropriate probe, and post-processes the outcomes (rating, status,
ordering).  Scanners return results; storing them is the caller's job.
Every scanner returns one entry per catalog target, even when every
probe fails.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from netscanner.catalog import get_catalog, port_catalog
from netscanner.catalog.protocols import RECOMMENDATIONS
from netscanner.config import (
    PORT_CLOSED_BELOW_MS,
    PORT_OPEN_BELOW_MS,
    PROTOCOL_SUPPORTED_BELOW_MS,
)
from netscanner.engine import BatchProgress, Prober, run_batch
from netscanner.models import (
    ConnectAttempt,
    PortDef,
    PortEntry,
    ProbeOutcome,
    ProbeTarget,
    ScanConfig,
    ScanEntry,
)
from netscanner.rating import classify
from netscanner.stats import round_ms

logger = logging.getLogger(__name__)

PING_SORT_KEYS = ["latency", "country", "region"]


def _entry(outcome: ProbeOutcome, status: str, recommendation: Optional[str] = None) -> ScanEntry:
    return ScanEntry(
        target=outcome.target,
        elapsed_ms=outcome.elapsed_ms,
        succeeded=outcome.succeeded,
        rating=classify(outcome.elapsed_ms),
        status=status,
        attempts=list(outcome.attempts),
        recommendation=recommendation,
    )


def sort_by_latency(entries: Iterable[ScanEntry]) -> list[ScanEntry]:
    """Ascending by elapsed time; stable, so equal timings keep catalog order."""
    return sorted(entries, key=lambda e: e.elapsed_ms)


# ---------------------------------------------------------------------------
# Path latency
# ---------------------------------------------------------------------------

async def scan_ping(
    prober: Prober,
    config: ScanConfig | None = None,
    targets: Sequence[ProbeTarget] | None = None,
    progress_callback: BatchProgress | None = None,
) -> list[ScanEntry]:
    """Probe every waypoint several times and rank them by mean latency."""
    config = config or ScanConfig()
    targets = list(targets) if targets is not None else get_catalog("ping")
    logger.info("Starting global ping test across %d waypoints", len(targets))

    async def _probe(t: ProbeTarget) -> ProbeOutcome:
        return await prober.probe_repeated(t, config.ping_timeout, config.ping_attempts)

    outcomes = await run_batch(targets, _probe, config.ping_batch_size, progress_callback)
    entries = sort_by_latency(
        _entry(o, "reachable" if o.succeeded else "unreachable") for o in outcomes
    )

    if entries:
        best = entries[0]
        logger.info("Best location: %s - %dms", best.name, best.elapsed_ms)
    return entries


def sort_ping(entries: Sequence[ScanEntry], key: str = "latency") -> list[ScanEntry]:
    """Re-order already computed ping results without probing again.

    ``latency`` sorts ascending by elapsed time; ``country`` and ``region``
    sort alphabetically (case-insensitive), keeping latency order within
    equal names.
    """
    if key == "latency":
        return sort_by_latency(entries)
    if key == "country":
        return sorted(entries, key=lambda e: e.target.country.casefold())
    if key == "region":
        return sorted(entries, key=lambda e: e.target.region.casefold())
    raise ValueError(f"Unknown sort key: {key!r}. Available: {PING_SORT_KEYS}")


def filter_ping(entries: Sequence[ScanEntry], query: str) -> list[ScanEntry]:
    """Keep entries whose country, city or region contains *query*."""
    needle = query.strip().casefold()
    if not needle:
        return list(entries)
    return [
        e for e in entries
        if needle in e.target.country.casefold()
        or needle in e.target.city.casefold()
        or needle in e.target.region.casefold()
    ]


# ---------------------------------------------------------------------------
# Name resolution
# ---------------------------------------------------------------------------

async def scan_dns(
    prober: Prober,
    config: ScanConfig | None = None,
    targets: Sequence[ProbeTarget] | None = None,
    progress_callback: BatchProgress | None = None,
) -> list[ScanEntry]:
    """Time each DNS service's query endpoint, fastest first."""
    config = config or ScanConfig()
    targets = list(targets) if targets is not None else get_catalog("dns")
    logger.info("Testing %d DNS services", len(targets))

    async def _probe(t: ProbeTarget) -> ProbeOutcome:
        return await prober.probe(t, config.latency_timeout)

    outcomes = await run_batch(targets, _probe, config.batch_size, progress_callback)
    entries = sort_by_latency(
        _entry(o, "reachable" if o.succeeded else "unreachable") for o in outcomes
    )

    if entries:
        logger.info("Best DNS: %s (%dms)", entries[0].name, entries[0].elapsed_ms)
    return entries


# ---------------------------------------------------------------------------
# Content delivery and tunnels
# ---------------------------------------------------------------------------

async def _scan_accessibility(
    prober: Prober,
    targets: Sequence[ProbeTarget],
    config: ScanConfig,
    progress_callback: BatchProgress | None,
) -> list[ScanEntry]:
    async def _probe(t: ProbeTarget) -> ProbeOutcome:
        return await prober.probe(t, config.latency_timeout)

    outcomes = await run_batch(targets, _probe, config.batch_size, progress_callback)
    return sort_by_latency(
        _entry(o, "Accessible" if o.succeeded else "Blocked") for o in outcomes
    )


async def scan_cdn(
    prober: Prober,
    config: ScanConfig | None = None,
    cdn_targets: Sequence[ProbeTarget] | None = None,
    tunnel_targets: Sequence[ProbeTarget] | None = None,
    progress_callback: BatchProgress | None = None,
) -> tuple[list[ScanEntry], list[ScanEntry]]:
    """Check CDN providers, then tunnel services; returns ``(cdn, tunnels)``."""
    config = config or ScanConfig()
    cdn_targets = list(cdn_targets) if cdn_targets is not None else get_catalog("cdn")
    tunnel_targets = list(tunnel_targets) if tunnel_targets is not None else get_catalog("tunnels")
    logger.info("Testing %d CDN providers and %d tunnel services", len(cdn_targets), len(tunnel_targets))

    total = len(cdn_targets) + len(tunnel_targets)

    def _scaled(offset: int, size: int) -> BatchProgress | None:
        # Report both catalogs as one 0-100 sequence
        if progress_callback is None or total == 0:
            return progress_callback
        return lambda pct: progress_callback(round_ms((offset + size * pct / 100) / total * 100))

    cdn = await _scan_accessibility(
        prober, cdn_targets, config, _scaled(0, len(cdn_targets)),
    )
    tunnels = await _scan_accessibility(
        prober, tunnel_targets, config, _scaled(len(cdn_targets), len(tunnel_targets)),
    )

    if cdn:
        logger.info("Best CDN: %s (%dms)", cdn[0].name, cdn[0].elapsed_ms)
    return cdn, tunnels


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------

def classify_port(attempt: ConnectAttempt) -> str:
    """Infer port state from connection timing alone.

    This is a heuristic, not a SYN/ACK scan: the probe host accepts
    connections on every port, so a quick connect means nothing on the
    path blocks the port, a near-instant failure means an active refusal,
    and a failure near the timeout means packets were silently dropped.

    ============  ==========================  ==========
    connected     elapsed                     status
    ============  ==========================  ==========
    yes           < 2500 ms                   open
    yes           >= 2500 ms                  filtered
    no            < 100 ms                    closed
    no            >= 2500 ms                  filtered
    no            otherwise                   closed
    ============  ==========================  ==========
    """
    if attempt.connected:
        return "open" if attempt.elapsed_ms < PORT_OPEN_BELOW_MS else "filtered"
    if attempt.elapsed_ms < PORT_CLOSED_BELOW_MS:
        return "closed"
    if attempt.elapsed_ms >= PORT_OPEN_BELOW_MS:
        return "filtered"
    return "closed"


async def scan_ports(
    prober: Prober,
    scan_type: str = "all",
    config: ScanConfig | None = None,
    targets: Sequence[PortDef] | None = None,
    progress_callback: BatchProgress | None = None,
) -> list[PortEntry]:
    """Attempt a connection per port; results stay in catalog order."""
    config = config or ScanConfig()
    targets = list(targets) if targets is not None else port_catalog(scan_type)
    logger.info("Starting port scan (%s): %d ports", scan_type, len(targets))

    async def _probe(t: PortDef) -> ConnectAttempt:
        return await prober.connect(t, config.port_timeout)

    attempts = await run_batch(targets, _probe, config.port_batch_size, progress_callback)
    entries = [
        PortEntry(
            target=a.target,
            elapsed_ms=a.elapsed_ms,
            connected=a.connected,
            status=classify_port(a),
        )
        for a in attempts
    ]

    open_count = sum(1 for e in entries if e.status == "open")
    logger.info(
        "Port scan complete: %d open, %d closed/filtered",
        open_count, len(entries) - open_count,
    )
    return entries


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------

def protocol_status(outcome: ProbeOutcome) -> str:
    if not outcome.succeeded:
        return "blocked"
    if outcome.elapsed_ms < PROTOCOL_SUPPORTED_BELOW_MS:
        return "supported"
    return "partial"


async def scan_protocols(
    prober: Prober,
    config: ScanConfig | None = None,
    targets: Sequence[ProbeTarget] | None = None,
    progress_callback: BatchProgress | None = None,
) -> list[ScanEntry]:
    """Probe each protocol's test endpoint; results stay in catalog order."""
    config = config or ScanConfig()
    targets = list(targets) if targets is not None else get_catalog("protocols")
    logger.info("Testing %d protocols", len(targets))

    async def _probe(t: ProbeTarget) -> ProbeOutcome:
        return await prober.probe(t, config.latency_timeout)

    outcomes = await run_batch(targets, _probe, config.batch_size, progress_callback)
    entries = []
    for o in outcomes:
        status = protocol_status(o)
        entries.append(_entry(o, status, RECOMMENDATIONS[status]))

    supported = sum(1 for e in entries if e.status == "supported")
    logger.info(
        "Protocol test done: %d supported, %d limited/blocked",
        supported, len(entries) - supported,
    )
    return entries
