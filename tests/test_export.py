"""Tests for JSON, CSV and report export."""

from __future__ import annotations

import csv
import io
import json

import pytest

from conftest import make_protocol, make_waypoint
from netscanner.advisor import recommend
from netscanner.catalog import get_catalog
from netscanner.catalog.protocols import RECOMMENDATIONS
from netscanner.config import FAILURE_SENTINEL_MS
from netscanner.export import (
    average_latency,
    build_report,
    export_csv,
    export_json,
    export_report,
    write_to_file,
)
from netscanner.models import ConnectionInfo, PortDef, PortEntry, ProbeOutcome, SessionState, SpeedResult
from netscanner.scanners import _entry


def _ping_entries(count: int):
    entries = []
    for i in range(count):
        elapsed = 20 + i * 10
        entries.append(_entry(ProbeOutcome(make_waypoint(f"Country {i}", f"City {i}"), elapsed, True, [elapsed]),
                              "reachable"))
    return entries


@pytest.fixture
def state():
    ping = _ping_entries(3)
    ping.append(_entry(ProbeOutcome(make_waypoint("Nowhere", "Void"), FAILURE_SENTINEL_MS, False), "unreachable"))
    dns_target = get_catalog("dns")[0]
    cdn_target = get_catalog("cdn")[0]
    protocol = make_protocol("Trojan")
    ports = [
        PortEntry(PortDef(443, "HTTPS", "TCP", "Secure Web"), 120, True, "open"),
        PortEntry(PortDef(25, "SMTP", "TCP", "Email Sending"), 3000, False, "filtered"),
    ]
    protocols = [_entry(ProbeOutcome(protocol, 90, True), "supported", RECOMMENDATIONS["supported"])]
    return SessionState(
        connection=ConnectionInfo(ip="198.51.100.4", country="Germany", city="Berlin", isp="Telekom"),
        ping=ping,
        dns=[_entry(ProbeOutcome(dns_target, 15, True), "reachable")],
        cdn=[_entry(ProbeOutcome(cdn_target, 35, True), "Accessible")],
        ports=ports,
        protocols=protocols,
        vpn=recommend(ping, protocols, ports),
        speed=SpeedResult(download_mbps=42.5, upload_mbps=12.75, ping_ms=21, jitter_ms=4, ping_samples=[20, 24]),
        timestamp="2024-05-01T10:00:00+00:00",
    )


class TestJson:
    def test_canonical_shape(self, state):
        data = json.loads(export_json(state))
        assert set(data) == {
            "connection", "ping", "dns", "cdn", "tunnels", "ports",
            "protocols", "vpn", "speed", "timestamp",
        }
        assert set(data["vpn"]) == {"providers", "configs", "summary"}

    def test_entry_fields(self, state):
        data = json.loads(export_json(state))
        first = data["ping"][0]
        assert first["city"] == "City 0"
        assert first["latency"] == 20
        assert first["rating"] == {
            "tier": "Excellent", "stars": 5, "label": "Excellent",
            "color": "bright_green", "class": "excellent",
        }
        assert data["ping"][-1]["status"] == "unreachable"
        assert data["protocols"][0]["recommendation"] == "Recommended ✓"
        assert data["ports"][0] == {
            "port": 443, "service": "HTTPS", "protocol": "TCP", "description": "Secure Web",
            "status": "open", "connected": True, "latency": 120,
        }

    def test_vpn_summary(self, state):
        summary = json.loads(export_json(state))["vpn"]["summary"]
        assert summary["best_protocol"] == "Trojan"
        assert summary["open_vpn_ports"] == 1
        assert summary["best_location"]["city"] == "City 0"

    def test_empty_session(self):
        data = json.loads(export_json(SessionState()))
        assert data["connection"] is None
        assert data["ping"] == []
        assert data["vpn"] is None
        assert data["speed"] is None


class TestCsv:
    def test_sections(self, state):
        text = export_csv(state)
        for title in ("PING TEST RESULTS", "DNS TEST RESULTS", "CDN RESULTS",
                      "PORT SCAN RESULTS", "PROTOCOL TEST RESULTS"):
            assert title in text

    def test_rows(self, state):
        rows = list(csv.reader(io.StringIO(export_csv(state))))
        assert rows[0] == ["PING TEST RESULTS"]
        assert rows[1] == ["Country", "City", "Region", "Latency (ms)", "Status", "Rating"]
        assert rows[2] == ["Country 0", "City 0", "Europe", "20", "reachable", "Excellent"]

        port_header = rows.index(["Port", "Service", "Protocol", "Status", "Description"])
        assert rows[port_header + 1] == ["443", "HTTPS", "TCP", "open", "Secure Web"]

    def test_empty_session(self):
        assert export_csv(SessionState()) == ""


class TestReport:
    def test_overview(self, state):
        overview = build_report(state)["overview"]
        assert overview["ip"] == "198.51.100.4"
        assert overview["location"] == "Berlin, Germany"
        assert overview["download_mbps"] == 42.5
        assert overview["best_dns"] == state.dns[0].name
        assert overview["average_latency_ms"] == 30

    def test_ping_rows_capped(self, state):
        state.ping = _ping_entries(25)
        section = build_report(state)["sections"][0]
        assert section["label"] == "Global Ping Results (25 locations)"
        assert len(section["rows"]) == 20

    def test_port_section(self, state):
        ports = next(s for s in build_report(state)["sections"] if s["key"] == "ports")
        assert ports["label"] == "Port Scan (1 open / 2 total)"
        assert ports["open_count"] == 1
        assert [r["color"] for r in ports["rows"]] == ["green", "yellow"]
        assert ports["rows"][0]["cells"] == [443, "HTTPS", "OPEN"]

    def test_vpn_section(self, state):
        vpn = next(s for s in build_report(state)["sections"] if s["key"] == "vpn")
        assert len(vpn["rows"]) == 12
        assert vpn["rows"][0]["cells"][-1] == "100/100"

    def test_serializes(self, state):
        assert json.loads(export_report(state))["generated_at"] == state.timestamp


def test_average_latency_ignores_failures(state):
    assert average_latency(state.ping) == 30
    assert average_latency(state.ping[-1:]) is None


def test_write_to_file(tmp_path, state):
    path = tmp_path / "scan.json"
    write_to_file(export_json(state), str(path))
    assert json.loads(path.read_text(encoding="utf-8"))["timestamp"] == state.timestamp
