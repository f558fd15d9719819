"""JSON, CSV and composite report export for session results."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict
from typing import Optional

from netscanner import __version__
from netscanner.config import REPORT_PING_ROWS, STATUS_COLORS
from netscanner.models import (
    PortEntry,
    RecommendationEntry,
    ScanEntry,
    SessionState,
    SpeedResult,
    VpnRecommendation,
)
from netscanner.stats import round_ms


def export_json(state: SessionState, indent: int = 2) -> str:
    """Export the whole session as a JSON string."""
    data = _build_export_dict(state)
    return json.dumps(data, indent=indent, default=str, ensure_ascii=False)


def export_csv(state: SessionState) -> str:
    """Export results as CSV: one titled section per category that has results."""
    output = io.StringIO()
    writer = csv.writer(output)

    if state.ping:
        writer.writerow(["PING TEST RESULTS"])
        writer.writerow(["Country", "City", "Region", "Latency (ms)", "Status", "Rating"])
        for e in state.ping:
            t = e.target
            writer.writerow([t.country, t.city, t.region, e.elapsed_ms, e.status, e.rating.label])
        writer.writerow([])

    if state.dns:
        writer.writerow(["DNS TEST RESULTS"])
        writer.writerow(["Name", "Provider", "Primary IP", "Secondary IP", "Latency (ms)", "Rating"])
        for e in state.dns:
            t = e.target
            writer.writerow([t.name, t.provider, t.primary, t.secondary, e.elapsed_ms, e.rating.label])
        writer.writerow([])

    if state.cdn:
        writer.writerow(["CDN RESULTS"])
        writer.writerow(["Provider", "Latency (ms)", "Status", "Rating"])
        for e in state.cdn:
            writer.writerow([e.name, e.elapsed_ms, e.status, e.rating.label])
        writer.writerow([])

    if state.ports:
        writer.writerow(["PORT SCAN RESULTS"])
        writer.writerow(["Port", "Service", "Protocol", "Status", "Description"])
        for p in state.ports:
            writer.writerow([p.port, p.service, p.target.protocol, p.status, p.target.description])
        writer.writerow([])

    if state.protocols:
        writer.writerow(["PROTOCOL TEST RESULTS"])
        writer.writerow(["Protocol", "Type", "Port", "Encryption", "Speed", "Security", "Status", "Recommendation"])
        for e in state.protocols:
            t = e.target
            writer.writerow([
                t.name, t.kind, t.default_port, t.encryption, t.speed, t.security,
                e.status, e.recommendation or "",
            ])

    return output.getvalue()


def export_report(state: SessionState, indent: int = 2) -> str:
    """Export the composite report as a JSON string."""
    return json.dumps(build_report(state), indent=indent, default=str, ensure_ascii=False)


def write_to_file(content: str, filepath: str) -> None:
    """Write export content to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(content)


# ── Canonical session shape ───────────────────────────────────────────


def _build_export_dict(state: SessionState) -> dict:
    """Build a serializable dictionary from SessionState."""
    return {
        "connection": asdict(state.connection) if state.connection else None,
        "ping": [_entry_to_dict(e) for e in state.ping],
        "dns": [_entry_to_dict(e) for e in state.dns],
        "cdn": [_entry_to_dict(e) for e in state.cdn],
        "tunnels": [_entry_to_dict(e) for e in state.tunnels],
        "ports": [_port_to_dict(p) for p in state.ports],
        "protocols": [_entry_to_dict(e) for e in state.protocols],
        "vpn": _vpn_to_dict(state.vpn),
        "speed": _speed_to_dict(state.speed),
        "timestamp": state.timestamp,
    }


def _entry_to_dict(entry: ScanEntry) -> dict:
    data = asdict(entry.target)
    data.update({
        "name": entry.name,
        "latency": entry.elapsed_ms,
        "succeeded": entry.succeeded,
        "status": entry.status,
        "rating": {
            "tier": entry.rating.tier.value,
            "stars": entry.rating.stars,
            "label": entry.rating.label,
            "color": entry.rating.color,
            "class": entry.rating.css_class,
        },
        "attempts": list(entry.attempts),
    })
    if entry.recommendation is not None:
        data["recommendation"] = entry.recommendation
    return data


def _port_to_dict(entry: PortEntry) -> dict:
    return {
        "port": entry.port,
        "service": entry.service,
        "protocol": entry.target.protocol,
        "description": entry.target.description,
        "status": entry.status,
        "connected": entry.connected,
        "latency": entry.elapsed_ms,
    }


def _provider_to_dict(entry: RecommendationEntry) -> dict:
    return {
        "name": entry.provider_name,
        "best_protocol": entry.best_protocol,
        "security": entry.security_strength,
        "best_location": entry.best_location,
        "speed_score": entry.speed_score,
        "overall": entry.overall_score,
        "features": list(entry.features),
        "type": entry.kind,
    }


def _vpn_to_dict(vpn: Optional[VpnRecommendation]) -> Optional[dict]:
    if vpn is None:
        return None

    summary = None
    if vpn.summary is not None:
        best = vpn.summary.best_location
        summary = {
            "best_location": _entry_to_dict(best) if best else None,
            "best_protocol": vpn.summary.best_protocol,
            "open_vpn_ports": vpn.summary.open_vpn_port_count,
            "total_providers": vpn.summary.total_providers_considered,
        }

    return {
        "providers": [_provider_to_dict(p) for p in vpn.providers],
        "configs": [{"name": c.name, "badge": c.badge, "details": dict(c.details)} for c in vpn.configs],
        "summary": summary,
    }


def _speed_to_dict(speed: Optional[SpeedResult]) -> Optional[dict]:
    if speed is None:
        return None
    return {
        "download": speed.download_mbps,
        "upload": speed.upload_mbps,
        "upload_estimated": True,
        "ping": speed.ping_ms,
        "jitter": speed.jitter_ms,
        "ping_samples": list(speed.ping_samples),
        "bytes_downloaded": speed.bytes_downloaded,
    }


# ── Composite report ──────────────────────────────────────────────────


def average_latency(ping: list[ScanEntry]) -> Optional[int]:
    """Mean latency over reachable waypoints, or None if none was reachable."""
    values = [e.elapsed_ms for e in ping if e.succeeded]
    if not values:
        return None
    return round_ms(sum(values) / len(values))


def _overview(state: SessionState) -> dict:
    overview: dict = {}

    if state.connection:
        c = state.connection
        overview["ip"] = c.ip
        overview["location"] = ", ".join(p for p in [c.city, c.country] if p)
        overview["isp"] = c.isp or "Unknown"

    if state.speed:
        overview["download_mbps"] = state.speed.download_mbps
        overview["upload_mbps"] = state.speed.upload_mbps
        overview["ping_ms"] = state.speed.ping_ms

    if state.ping:
        best = state.ping[0].target
        overview["best_location"] = f"{best.flag} {best.country}"
        overview["average_latency_ms"] = average_latency(state.ping)

    if state.dns:
        overview["best_dns"] = state.dns[0].name

    return overview


def build_report(state: SessionState) -> dict:
    """Combine every category into one report with rendering hints.

    Each section carries a label, its column names and rows; rows carry
    the color hint of their rating tier or status.  Styling itself is
    left to whoever renders the report.
    """
    sections = []

    if state.ping:
        sections.append({
            "key": "ping",
            "label": f"Global Ping Results ({len(state.ping)} locations)",
            "columns": ["#", "Country", "City", "Latency", "Rating"],
            "rows": [
                {
                    "cells": [i, f"{e.target.flag} {e.target.country}", e.target.city,
                              f"{e.elapsed_ms}ms", e.rating.label],
                    "color": e.rating.color,
                }
                for i, e in enumerate(state.ping[:REPORT_PING_ROWS], 1)
            ],
        })

    if state.dns:
        sections.append({
            "key": "dns",
            "label": "DNS Analysis",
            "columns": ["#", "Server", "IP", "Latency"],
            "rows": [
                {
                    "cells": [i, e.name, e.target.primary, f"{e.elapsed_ms}ms"],
                    "color": e.rating.color,
                }
                for i, e in enumerate(state.dns, 1)
            ],
        })

    if state.ports:
        open_count = sum(1 for p in state.ports if p.status == "open")
        sections.append({
            "key": "ports",
            "label": f"Port Scan ({open_count} open / {len(state.ports)} total)",
            "open_count": open_count,
            "columns": ["Port", "Service", "Status"],
            "rows": [
                {
                    "cells": [p.port, p.service, p.status.upper()],
                    "color": STATUS_COLORS.get(p.status, ""),
                }
                for p in state.ports
            ],
        })

    if state.vpn and state.vpn.providers:
        sections.append({
            "key": "vpn",
            "label": "VPN Recommendations",
            "columns": ["#", "Provider", "Protocol", "Location", "Score"],
            "rows": [
                {
                    "cells": [i, v.provider_name, v.best_protocol, v.best_location, f"{v.overall_score}/100"],
                    "color": "",
                }
                for i, v in enumerate(state.vpn.providers, 1)
            ],
        })

    return {
        "title": "Network Scan Report",
        "generator": f"netscanner {__version__}",
        "generated_at": state.timestamp,
        "overview": _overview(state),
        "sections": sections,
    }
