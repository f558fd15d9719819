"""Shared fixtures: scripted probers and small target factories."""

from __future__ import annotations

from typing import Optional, Union

import pytest

from netscanner.config import FAILURE_SENTINEL_MS
from netscanner.models import (
    ConnectAttempt,
    PortDef,
    ProbeOutcome,
    ProtocolDef,
    Waypoint,
)
from netscanner.stats import mean_of_successes

# A scripted timing is either one value for every attempt, a list of
# per-attempt values, or None for a failure.  Failures use the sentinel.
Timing = Union[int, list, None]


class FakeProber:
    """Drop-in for ``Prober`` that never touches the network."""

    def __init__(
        self,
        timings: Optional[dict[str, Timing]] = None,
        connects: Optional[dict[int, tuple[int, bool]]] = None,
        default: Timing = None,
        default_connect: tuple[int, bool] = (3000, False),
        request_timings: Optional[list[Optional[int]]] = None,
        fetch_bytes: int = 0,
    ) -> None:
        self.timings = timings or {}
        self.connects = connects or {}
        self.default = default
        self.default_connect = default_connect
        self.request_timings = list(request_timings or [])
        self.fetch_bytes = fetch_bytes
        self.probed: list[str] = []
        self.request_timeouts: list[float] = []

    def _samples(self, key: str, attempts: int) -> list[int]:
        timing = self.timings.get(key, self.default)
        if not isinstance(timing, list):
            timing = [timing] * attempts
        return [FAILURE_SENTINEL_MS if t is None else t for t in timing]

    async def probe(self, target, timeout: float = 0) -> ProbeOutcome:
        self.probed.append(target.key)
        elapsed = self._samples(target.key, 1)[0]
        return ProbeOutcome(target, elapsed, elapsed < FAILURE_SENTINEL_MS, [elapsed])

    async def probe_repeated(self, target, timeout: float = 0, attempts: int = 3) -> ProbeOutcome:
        self.probed.append(target.key)
        samples = self._samples(target.key, attempts)
        mean = mean_of_successes(samples)
        return ProbeOutcome(target, mean, mean < FAILURE_SENTINEL_MS, samples)

    async def connect(self, target: PortDef, timeout: float = 0) -> ConnectAttempt:
        self.probed.append(target.key)
        elapsed, connected = self.connects.get(target.port, self.default_connect)
        return ConnectAttempt(target, elapsed, connected)

    async def timed_request(self, url, timeout: float) -> Optional[int]:
        self.request_timeouts.append(timeout)
        if self.request_timings:
            return self.request_timings.pop(0)
        return None

    async def fetch_size(self, url, timeout: float) -> int:
        return self.fetch_bytes


def make_waypoint(country: str, city: str, region: str = "Europe", code: str = "XX") -> Waypoint:
    return Waypoint(
        country=country,
        country_code=code,
        city=city,
        region=region,
        flag="🏳",
        endpoint=f"https://{city.lower().replace(' ', '-')}.example/generate_204",
    )


def make_protocol(name: str) -> ProtocolDef:
    return ProtocolDef(
        name=name,
        kind="VPN",
        default_port=443,
        encryption="TLS 1.3",
        speed="Fast",
        security="High",
        endpoint=f"https://{name.lower()}.example/",
        description=f"{name} test protocol",
    )


@pytest.fixture
def fake_prober():
    """Factory for ``FakeProber`` instances."""
    return FakeProber


@pytest.fixture
def waypoints():
    return [
        make_waypoint("Germany", "Frankfurt", code="DE"),
        make_waypoint("Japan", "Tokyo", region="Asia", code="JP"),
        make_waypoint("Brazil", "Sao Paulo", region="South America", code="BR"),
    ]
