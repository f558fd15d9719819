"""Tests for the scan session orchestrator."""

from __future__ import annotations

import asyncio
import logging

import pytest

from netscanner import session as session_mod
from netscanner.catalog import get_catalog
from netscanner.config import FAILURE_SENTINEL_MS
from netscanner.export import build_report
from netscanner.models import ConnectionInfo, ScanConfig, SpeedResult
from netscanner.session import ScanObserver, ScanSession


class RecordingObserver(ScanObserver):
    def __init__(self):
        self.progress = []
        self.done = []

    def on_progress(self, category, percent):
        self.progress.append((category, percent))

    def on_category_done(self, category):
        self.done.append(category)


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def offline(monkeypatch):
    """Replace geolocation and the speed test with instant fakes."""
    calls = {"geo": 0, "speed": 0}

    async def fake_geo(client=None):
        calls["geo"] += 1
        # yield control so concurrent callers can interleave
        await asyncio.sleep(0)
        return ConnectionInfo(ip="203.0.113.7", country="Germany", city="Berlin")

    async def fake_speed(prober):
        calls["speed"] += 1
        return SpeedResult(download_mbps=50.0, upload_mbps=15.0, ping_ms=20)

    monkeypatch.setattr(session_mod, "get_connection_info", fake_geo)
    monkeypatch.setattr(session_mod, "run_speed_test", fake_speed)
    return calls


class TestSingleCategories:
    @pytest.mark.asyncio
    async def test_run_ping_stores_result(self, fake_prober, observer):
        s = ScanSession(fake_prober(default=60), observer=observer)
        entries = await s.run_ping()

        assert s.state.ping is entries
        assert len(entries) == 55
        assert ("ping", 100) in observer.progress
        assert observer.done == ["ping"]

    @pytest.mark.asyncio
    async def test_run_cdn_fills_both_slices(self, fake_prober):
        s = ScanSession(fake_prober(default=60))
        await s.run_cdn()
        assert len(s.state.cdn) == 10
        assert len(s.state.tunnels) == 10

    @pytest.mark.asyncio
    async def test_run_ports_uses_configured_type(self, fake_prober):
        s = ScanSession(fake_prober(), ScanConfig(port_scan_type="web"))
        await s.run_ports()
        assert len(s.state.ports) == 10

    @pytest.mark.asyncio
    async def test_ping_view_filters_without_rescanning(self, fake_prober):
        prober = fake_prober(default=60)
        s = ScanSession(prober, ScanConfig(ping_filter="japan"))
        await s.run_ping()
        probed = len(prober.probed)

        view = s.ping_view()

        assert view
        assert all(e.target.country == "Japan" for e in view)
        assert len(s.state.ping) == 55
        assert len(prober.probed) == probed

    @pytest.mark.asyncio
    async def test_country_sort_leaves_state_in_latency_order(self, fake_prober):
        waypoints = get_catalog("ping")
        japan = next(t for t in waypoints if t.country == "Japan")
        first_by_name = min(waypoints, key=lambda t: t.country.casefold())
        prober = fake_prober({japan.key: 40, first_by_name.key: 90})
        s = ScanSession(prober, ScanConfig(ping_sort="country"))

        await s.run_ping()

        elapsed = [e.elapsed_ms for e in s.state.ping]
        assert elapsed == sorted(elapsed)
        assert s.state.ping[0].target.key == japan.key
        assert s.state.ping[1].target.key == first_by_name.key
        assert s.state.ping[-1].elapsed_ms == FAILURE_SENTINEL_MS
        assert build_report(s.state)["overview"]["best_location"] == f"{japan.flag} Japan"

        view = s.ping_view()
        assert view[0].target.country == first_by_name.country
        countries = [e.target.country for e in view]
        assert countries == sorted(countries, key=str.casefold)

    @pytest.mark.asyncio
    async def test_vpn_advice_fills_prerequisites(self, fake_prober, observer):
        s = ScanSession(fake_prober(default=60), observer=observer)
        result = await s.generate_vpn_advice()

        assert s.state.vpn is result
        assert len(s.state.ping) == 55
        assert len(s.state.protocols) == 19
        assert len(s.state.ports) == 18
        assert observer.done == ["ping", "protocols", "ports", "vpn"]

    @pytest.mark.asyncio
    async def test_unknown_category(self, fake_prober):
        s = ScanSession(fake_prober())
        with pytest.raises(ValueError, match="Unknown category"):
            await s.run_category("satellite")

    @pytest.mark.asyncio
    async def test_run_categories_scans_cdn_once(self, fake_prober):
        prober = fake_prober(default=60)
        s = ScanSession(prober)
        state = await s.run_categories(["cdn", "tunnels"])
        assert len(prober.probed) == 20
        assert state.timestamp is not None


class TestFullScan:
    @pytest.mark.asyncio
    async def test_milestones_and_state(self, fake_prober, observer, offline):
        s = ScanSession(fake_prober(default=60), observer=observer)
        state = await s.full_scan()

        full = [pct for cat, pct in observer.progress if cat == "full"]
        assert full == [5, 15, 40, 55, 70, 82, 90, 95, 100]
        assert state.connection.ip == "203.0.113.7"
        assert state.ping and state.dns and state.cdn and state.tunnels
        assert len(state.ports) == 40
        assert state.protocols and state.vpn and state.speed
        assert state.timestamp is not None
        assert not s.is_scanning

    @pytest.mark.asyncio
    async def test_skips_geo_and_speed(self, fake_prober, offline):
        s = ScanSession(fake_prober(default=60), ScanConfig(no_geo=True, include_speed=False))
        state = await s.full_scan()

        assert offline == {"geo": 0, "speed": 0}
        assert state.connection is None
        assert state.speed is None
        assert state.ping

    @pytest.mark.asyncio
    async def test_total_network_failure_completes(self, fake_prober, offline):
        s = ScanSession(fake_prober())
        state = await s.full_scan()
        assert all(e.status == "unreachable" for e in state.ping)
        assert all(e.status == "filtered" for e in state.ports)
        assert state.vpn.summary.best_location is None

    @pytest.mark.asyncio
    async def test_failing_step_is_contained(self, fake_prober, offline, monkeypatch, caplog):
        async def broken_dns(*args, **kwargs):
            raise RuntimeError("resolver table corrupted")

        monkeypatch.setattr(session_mod, "scan_dns", broken_dns)
        s = ScanSession(fake_prober(default=60))

        with caplog.at_level(logging.ERROR, logger="netscanner.session"):
            state = await s.full_scan()

        assert state.dns == []
        assert state.cdn and state.protocols and state.speed
        assert "dns scan failed" in caplog.text
        assert not s.is_scanning

    @pytest.mark.asyncio
    async def test_second_scan_rejected_while_running(self, fake_prober, offline, caplog):
        s = ScanSession(fake_prober(default=60))

        with caplog.at_level(logging.WARNING, logger="netscanner.session"):
            first, second = await asyncio.gather(s.full_scan(), s.full_scan())

        assert offline["geo"] == 1
        assert first is second is s.state
        assert "already running" in caplog.text

    @pytest.mark.asyncio
    async def test_flag_blocks_new_scan(self, fake_prober, observer, offline):
        s = ScanSession(fake_prober(), observer=observer)
        s.is_scanning = True
        await s.full_scan()
        assert observer.progress == []
        assert offline["geo"] == 0
