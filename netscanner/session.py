"""Scan orchestration.

``ScanSession`` is the single owner of a run's ``SessionState``.  Each
``run_*`` method invokes one category scanner, replaces that category's
slice of the state wholesale and tells the observer about it.  The
session also satisfies the aggregator's ``CategoryRunner`` protocol, so
VPN advice can fill in missing prerequisites through it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from netscanner.advisor import aggregate
from netscanner.config import FULL_SCAN_START_PERCENT, FULL_SCAN_STEPS
from netscanner.engine import BatchProgress, Prober
from netscanner.location import get_connection_info
from netscanner.models import (
    ConnectionInfo,
    PortEntry,
    ScanConfig,
    ScanEntry,
    SessionState,
    SpeedResult,
    VpnRecommendation,
)
from netscanner.scanners import (
    filter_ping,
    scan_cdn,
    scan_dns,
    scan_ping,
    scan_ports,
    scan_protocols,
    sort_ping,
)
from netscanner.speed import run_speed_test

logger = logging.getLogger(__name__)

# Categories a caller can request by name ("tunnels" is scanned with "cdn")
SESSION_CATEGORIES = ["connection", "ping", "dns", "cdn", "tunnels", "ports", "protocols", "vpn", "speed"]


class ScanObserver:
    """Receives progress notifications from a ``ScanSession``.

    Subclass and override what you need; the defaults do nothing.
    """

    def on_progress(self, category: str, percent: int) -> None:
        pass

    def on_category_done(self, category: str) -> None:
        pass


class ScanSession:
    """Runs category scans and keeps their most recent results."""

    def __init__(
        self,
        prober: Prober,
        config: Optional[ScanConfig] = None,
        observer: Optional[ScanObserver] = None,
        geo_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.prober = prober
        self.config = config or ScanConfig()
        self.observer = observer or ScanObserver()
        self.geo_client = geo_client
        self.state = SessionState()
        self.is_scanning = False

    def _progress(self, category: str) -> BatchProgress:
        return lambda pct: self.observer.on_progress(category, pct)

    def _done(self, category: str) -> None:
        self.observer.on_category_done(category)

    # ---- Single categories ----

    async def run_connection(self) -> ConnectionInfo:
        self.state.connection = await get_connection_info(client=self.geo_client)
        self._done("connection")
        return self.state.connection

    async def run_ping(self) -> list[ScanEntry]:
        entries = await scan_ping(self.prober, self.config, progress_callback=self._progress("ping"))
        # kept in latency order; ping_view applies the requested sort
        self.state.ping = entries
        self._done("ping")
        return self.state.ping

    def ping_view(self) -> list[ScanEntry]:
        """Ping results as the user asked to see them: filtered, then sorted."""
        return sort_ping(filter_ping(self.state.ping, self.config.ping_filter), self.config.ping_sort)

    async def run_dns(self) -> list[ScanEntry]:
        self.state.dns = await scan_dns(self.prober, self.config, progress_callback=self._progress("dns"))
        self._done("dns")
        return self.state.dns

    async def run_cdn(self) -> tuple[list[ScanEntry], list[ScanEntry]]:
        cdn, tunnels = await scan_cdn(self.prober, self.config, progress_callback=self._progress("cdn"))
        self.state.cdn = cdn
        self.state.tunnels = tunnels
        self._done("cdn")
        return cdn, tunnels

    async def run_ports(self, scan_type: Optional[str] = None) -> list[PortEntry]:
        scan_type = scan_type or self.config.port_scan_type
        self.state.ports = await scan_ports(
            self.prober, scan_type, self.config, progress_callback=self._progress("ports"),
        )
        self._done("ports")
        return self.state.ports

    async def run_protocols(self) -> list[ScanEntry]:
        self.state.protocols = await scan_protocols(
            self.prober, self.config, progress_callback=self._progress("protocols"),
        )
        self._done("protocols")
        return self.state.protocols

    async def generate_vpn_advice(self) -> VpnRecommendation:
        self.state.vpn = await aggregate(self.state, self)
        self._done("vpn")
        return self.state.vpn

    async def run_speed(self) -> SpeedResult:
        self.state.speed = await run_speed_test(self.prober)
        self._done("speed")
        return self.state.speed

    async def run_category(self, category: str) -> None:
        """Run one category by name."""
        runners = {
            "connection": self.run_connection,
            "ping": self.run_ping,
            "dns": self.run_dns,
            "cdn": self.run_cdn,
            "tunnels": self.run_cdn,
            "ports": self.run_ports,
            "protocols": self.run_protocols,
            "vpn": self.generate_vpn_advice,
            "speed": self.run_speed,
        }
        runner = runners.get(category)
        if runner is None:
            raise ValueError(f"Unknown category: {category!r}. Available: {SESSION_CATEGORIES}")
        await runner()

    async def run_categories(self, categories: list[str]) -> SessionState:
        """Run the named categories in order; each result lands in ``state``."""
        self.state.timestamp = _now()
        seen = set()
        for category in categories:
            # cdn and tunnels share one scan
            key = "cdn" if category == "tunnels" else category
            if key in seen:
                continue
            seen.add(key)
            await self.run_category(category)
        return self.state

    # ---- Full scan ----

    def _skipped(self, step: str) -> bool:
        if step == "connection":
            return self.config.no_geo
        if step == "speed":
            return not self.config.include_speed
        return False

    async def full_scan(self) -> SessionState:
        """Run every category in sequence.

        A failing step is logged and the scan moves on.  Only one full
        scan may run at a time; a second call while one is in progress
        returns the current state untouched.
        """
        if self.is_scanning:
            logger.warning("A full scan is already running")
            return self.state

        self.is_scanning = True
        try:
            self.state.timestamp = _now()
            self.observer.on_progress("full", FULL_SCAN_START_PERCENT)
            logger.info("Starting full network scan")

            for step, percent in FULL_SCAN_STEPS:
                if not self._skipped(step):
                    try:
                        await self.run_category(step)
                    except Exception:
                        logger.exception("%s scan failed", step)
                self.observer.on_progress("full", percent)

            logger.info("Full scan complete")
        finally:
            self.is_scanning = False
        self._done("full")
        return self.state


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
