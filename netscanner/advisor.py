"""VPN recommendation aggregator.

Combines the path-latency, protocol and port results of a session into a
ranked provider list, a set of configuration templates and a summary.

The provider speed score is *not* measured: it is estimated from the
provider's position in the priority-ordered catalog
(``max(0, 100 - 5 * rank)``).  Measured data only feeds the locations
and the summary.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from netscanner.catalog.providers import CONFIG_TEMPLATES, VPN_PROVIDERS
from netscanner.config import DEFAULT_BEST_PROTOCOL
from netscanner.models import (
    ConfigTemplate,
    PortEntry,
    RecommendationEntry,
    RecommendationSummary,
    ScanEntry,
    SessionState,
    VpnProvider,
    VpnRecommendation,
    Waypoint,
)
from netscanner.scanners import sort_by_latency
from netscanner.stats import round_ms

logger = logging.getLogger(__name__)

MAX_BEST_LOCATIONS = 10


class CategoryRunner(Protocol):
    """Runs a category scan and stores its result in the session state."""

    async def run_ping(self) -> list[ScanEntry]: ...

    async def run_protocols(self) -> list[ScanEntry]: ...

    async def run_ports(self, scan_type: str = "all") -> list[PortEntry]: ...


def speed_score(rank_index: int) -> int:
    return max(0, 100 - 5 * rank_index)


def overall_score(speed: int, security_stars: int) -> int:
    return round_ms(speed * 0.8 + security_stars * 4)


def best_locations(ping: Sequence[ScanEntry], limit: int = MAX_BEST_LOCATIONS) -> list[ScanEntry]:
    """Reachable waypoints, fastest first, regardless of how *ping* is currently sorted."""
    return sort_by_latency(e for e in ping if e.succeeded)[:limit]


def _location_parts(entry: Optional[ScanEntry]) -> tuple[str, str]:
    if entry is None or not isinstance(entry.target, Waypoint):
        return "Unknown", "Unknown"
    return entry.target.country, entry.target.city


def score_providers(
    locations: Sequence[ScanEntry],
    providers: Sequence[VpnProvider] = VPN_PROVIDERS,
) -> list[RecommendationEntry]:
    """Score each provider and sort descending by overall score.

    ``sorted`` is stable, so ties keep catalog order.
    """
    country, city = _location_parts(locations[0] if locations else None)
    best_location = f"{country} ({city})"

    scored = []
    for rank, provider in enumerate(providers):
        speed = speed_score(rank)
        scored.append(RecommendationEntry(
            provider_name=provider.name,
            best_protocol=provider.best_protocol,
            security_strength=provider.security_stars,
            best_location=best_location,
            speed_score=speed,
            overall_score=overall_score(speed, provider.security_stars),
            features=provider.features,
            kind=provider.kind,
        ))

    return sorted(scored, key=lambda r: r.overall_score, reverse=True)


def build_configs(locations: Sequence[ScanEntry]) -> list[ConfigTemplate]:
    """Pair each template with one of the best measured locations.

    A template asking for the n-th best location falls back to the best
    one when fewer than n+1 locations were reachable.
    """
    best = locations[0] if locations else None

    configs = []
    for name, badge, loc_index, fixed in CONFIG_TEMPLATES:
        entry = locations[loc_index] if loc_index < len(locations) else best
        country, city = _location_parts(entry)

        details: dict[str, str] = {}
        for key, value in fixed.items():
            details[key] = value
            if key == "encryption":
                details["location"] = country
                details["server"] = city
        configs.append(ConfigTemplate(name=name, badge=badge, details=details))
    return configs


def recommend(
    ping: Sequence[ScanEntry],
    protocols: Sequence[ScanEntry],
    ports: Sequence[PortEntry],
) -> VpnRecommendation:
    """Build the recommendation from already collected results.

    Pure and deterministic: the same inputs always give the same
    ordering and scores.
    """
    locations = best_locations(ping)
    supported = [p for p in protocols if p.status == "supported"]

    summary = RecommendationSummary(
        best_location=locations[0] if locations else None,
        best_protocol=supported[0].name if supported else DEFAULT_BEST_PROTOCOL,
        open_vpn_port_count=sum(1 for p in ports if p.status == "open"),
        total_providers_considered=len(VPN_PROVIDERS),
    )

    return VpnRecommendation(
        providers=score_providers(locations),
        configs=build_configs(locations),
        summary=summary,
    )


async def aggregate(state: SessionState, runner: CategoryRunner) -> VpnRecommendation:
    """Recommend from *state*, first running any missing prerequisite scan.

    Path-latency, protocol and (VPN-group) port results are required; an
    empty result counts as missing.  *runner* stores what it scans in
    *state* before aggregation proceeds.
    """
    logger.info("Generating VPN recommendations")

    if not state.ping:
        logger.info("No ping results yet; running path-latency scan")
        await runner.run_ping()
    if not state.protocols:
        logger.info("No protocol results yet; running protocol scan")
        await runner.run_protocols()
    if not state.ports:
        logger.info("No port results yet; running VPN port scan")
        await runner.run_ports("vpn")

    result = recommend(state.ping, state.protocols, state.ports)
    logger.info("VPN analysis complete: top pick %s", result.providers[0].provider_name)
    return result
