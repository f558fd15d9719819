"""Tests for the category scanners."""

from __future__ import annotations

import pytest

from conftest import make_protocol, make_waypoint
from netscanner.catalog import get_catalog, port_catalog
from netscanner.config import FAILURE_SENTINEL_MS
from netscanner.models import ConnectAttempt, PortDef, ProbeOutcome, RatingTier, ScanConfig
from netscanner.scanners import (
    _entry,
    classify_port,
    filter_ping,
    scan_cdn,
    scan_dns,
    scan_ping,
    scan_ports,
    scan_protocols,
    sort_ping,
)


class TestPing:
    @pytest.mark.asyncio
    async def test_sorted_with_ratings_and_status(self, fake_prober, waypoints):
        frankfurt, tokyo, sao_paulo = waypoints
        prober = fake_prober(timings={
            frankfurt.key: 30,
            tokyo.key: None,
            sao_paulo.key: 120,
        })

        entries = await scan_ping(prober, targets=waypoints)

        assert [e.target for e in entries] == [frankfurt, sao_paulo, tokyo]
        assert [e.elapsed_ms for e in entries] == [30, 120, FAILURE_SENTINEL_MS]
        assert [e.rating.tier for e in entries] == [RatingTier.EXCELLENT, RatingTier.FAIR, RatingTier.BAD]
        assert [e.rating.stars for e in entries] == [5, 3, 1]
        assert [e.status for e in entries] == ["reachable", "reachable", "unreachable"]

    @pytest.mark.asyncio
    async def test_records_raw_attempts(self, fake_prober, waypoints):
        prober = fake_prober(timings={waypoints[0].key: [40, None, 60]})
        entries = await scan_ping(prober, targets=waypoints[:1])
        assert entries[0].attempts == [40, FAILURE_SENTINEL_MS, 60]
        assert entries[0].elapsed_ms == 50

    @pytest.mark.asyncio
    async def test_full_catalog_total_failure(self, fake_prober):
        entries = await scan_ping(fake_prober())
        catalog = get_catalog("ping")
        assert len(entries) == len(catalog)
        assert {e.target.key for e in entries} == {t.key for t in catalog}
        assert all(e.rating.tier == RatingTier.BAD for e in entries)
        assert all(e.status == "unreachable" for e in entries)

    @pytest.mark.asyncio
    async def test_progress_forwarded(self, fake_prober):
        seen = []
        config = ScanConfig(ping_batch_size=6)
        targets = [make_waypoint("Country", f"City {i}") for i in range(12)]
        await scan_ping(fake_prober(default=10), config, targets, seen.append)
        assert seen == [50, 100]


class TestPingViews:
    def _entries(self):
        rows = [
            (make_waypoint("Japan", "Tokyo", region="Asia"), 150),
            (make_waypoint("germany", "Berlin", region="Europe"), 20),
            (make_waypoint("Brazil", "Sao Paulo", region="South America"), 90),
        ]
        return [_entry(ProbeOutcome(t, ms, True, [ms]), "reachable") for t, ms in rows]

    def test_sort_by_country_case_insensitive(self):
        entries = sort_ping(self._entries(), "country")
        assert [e.target.country for e in entries] == ["Brazil", "germany", "Japan"]

    def test_sort_by_region(self):
        entries = sort_ping(self._entries(), "region")
        assert [e.target.region for e in entries] == ["Asia", "Europe", "South America"]

    def test_sort_by_latency(self):
        entries = sort_ping(self._entries(), "latency")
        assert [e.elapsed_ms for e in entries] == [20, 90, 150]

    def test_unknown_sort_key(self):
        with pytest.raises(ValueError, match="Unknown sort key"):
            sort_ping(self._entries(), "altitude")

    def test_filter_matches_city_country_region(self):
        entries = self._entries()
        assert [e.target.city for e in filter_ping(entries, "tok")] == ["Tokyo"]
        assert [e.target.city for e in filter_ping(entries, "GERMANY")] == ["Berlin"]
        assert [e.target.city for e in filter_ping(entries, "america")] == ["Sao Paulo"]
        assert len(filter_ping(entries, "  ")) == 3


class TestDns:
    @pytest.mark.asyncio
    async def test_total_failure_keeps_every_target(self, fake_prober):
        entries = await scan_dns(fake_prober())
        assert len(entries) == 15
        assert all(e.elapsed_ms == FAILURE_SENTINEL_MS for e in entries)

    @pytest.mark.asyncio
    async def test_fastest_first(self, fake_prober):
        targets = get_catalog("dns")[:3]
        prober = fake_prober(timings={targets[0].key: 80, targets[1].key: 15, targets[2].key: 300})
        entries = await scan_dns(prober, targets=targets)
        assert [e.elapsed_ms for e in entries] == [15, 80, 300]
        assert entries[0].target == targets[1]


class TestCdn:
    @pytest.mark.asyncio
    async def test_status_vocabulary(self, fake_prober):
        cdn = get_catalog("cdn")[:2]
        tunnels = get_catalog("tunnels")[:2]
        prober = fake_prober(timings={cdn[0].key: 45, tunnels[1].key: 210})

        cdn_entries, tunnel_entries = await scan_cdn(prober, cdn_targets=cdn, tunnel_targets=tunnels)

        assert [e.status for e in cdn_entries] == ["Accessible", "Blocked"]
        assert [e.status for e in tunnel_entries] == ["Accessible", "Blocked"]
        assert tunnel_entries[0].target == tunnels[1]

    @pytest.mark.asyncio
    async def test_progress_spans_both_catalogs(self, fake_prober):
        seen = []
        await scan_cdn(
            fake_prober(default=10),
            cdn_targets=get_catalog("cdn")[:2],
            tunnel_targets=get_catalog("tunnels")[:2],
            progress_callback=seen.append,
        )
        assert seen == [50, 100]


class TestPorts:
    @pytest.mark.parametrize(
        "connected,elapsed,status",
        [
            (True, 1200, "open"),
            (False, 40, "closed"),
            (False, 3000, "filtered"),
            (True, 2600, "filtered"),
            (False, 500, "closed"),
            (False, 2500, "filtered"),
        ],
    )
    def test_heuristic_table(self, connected, elapsed, status):
        attempt = ConnectAttempt(PortDef(443, "HTTPS", "TCP", "Secure Web"), elapsed, connected)
        assert classify_port(attempt) == status

    @pytest.mark.asyncio
    async def test_catalog_order_kept(self, fake_prober):
        prober = fake_prober(connects={443: (1200, True), 25: (40, False)})
        entries = await scan_ports(prober, "common")

        assert [e.target for e in entries] == port_catalog("common")
        by_port = {e.port: e.status for e in entries}
        assert by_port[443] == "open"
        assert by_port[25] == "closed"
        assert by_port[22] == "filtered"

    @pytest.mark.asyncio
    async def test_scan_type_selects_group(self, fake_prober):
        entries = await scan_ports(fake_prober(), "vpn")
        assert len(entries) == 18


class TestProtocols:
    @pytest.mark.asyncio
    async def test_status_and_recommendation(self, fake_prober):
        targets = [make_protocol("Fast"), make_protocol("Slow"), make_protocol("Gone")]
        prober = fake_prober(timings={"Fast": 120, "Slow": 450})

        entries = await scan_protocols(prober, targets=targets)

        assert [e.name for e in entries] == ["Fast", "Slow", "Gone"]
        assert [e.status for e in entries] == ["supported", "partial", "blocked"]
        assert [e.recommendation for e in entries] == [
            "Recommended ✓",
            "Usable with high latency",
            "May be blocked",
        ]

    @pytest.mark.asyncio
    async def test_threshold_is_exclusive(self, fake_prober):
        targets = [make_protocol("Edge")]
        entries = await scan_protocols(fake_prober(timings={"Edge": 300}), targets=targets)
        assert entries[0].status == "partial"
