"""Smoke tests for terminal rendering and the CLI."""

from __future__ import annotations

import pytest
from click.testing import CliRunner
from rich.console import Console

from conftest import make_waypoint
from netscanner import display
from netscanner.cli import main
from netscanner.config import FAILURE_SENTINEL_MS
from netscanner.models import ConnectionInfo, ProbeOutcome, SessionState
from netscanner.scanners import _entry


@pytest.fixture
def recorded(monkeypatch):
    console = Console(record=True, width=160, color_system=None)
    monkeypatch.setattr(display, "console", console)
    return console


def test_render_full(recorded):
    state = SessionState(
        connection=ConnectionInfo(ip="198.51.100.4", country="Germany", city="Berlin"),
        ping=[
            _entry(ProbeOutcome(make_waypoint("Germany", "Frankfurt"), 42, True, [40, 44, 42]), "reachable"),
            _entry(ProbeOutcome(make_waypoint("Chile", "Santiago"), FAILURE_SENTINEL_MS, False), "unreachable"),
        ],
    )
    display.render_full(state, verbose=True)
    text = recorded.export_text()

    assert "198.51.100.4" in text
    assert "Frankfurt" in text
    assert "42ms" in text
    assert "timeout" in text
    assert "1/2 reachable" in text


def test_render_unknown_connection(recorded):
    display.render_connection(ConnectionInfo.unknown())
    assert "unknown" in recorded.export_text()


def test_progress_tracker_ignores_untracked_categories():
    tracker = display.ProgressTracker(["ping", "dns"])
    tracker.on_progress("ping", 50)
    tracker.on_progress("full", 15)
    tracker.on_category_done("dns")

    assert tracker.progress == {"ping": 50, "dns": 100}
    assert tracker.status == {"ping": "running", "dns": "done"}


def test_cli_rejects_unknown_category():
    result = CliRunner().invoke(main, ["-c", "ping,satellite"])
    assert result.exit_code == 1
    assert "satellite" in result.output


def test_cli_help():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "--ports-type" in result.output
