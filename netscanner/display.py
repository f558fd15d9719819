"""Rich terminal output for netscanner."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from netscanner.config import CATEGORY_LABELS, FAILURE_SENTINEL_MS, STATUS_COLORS
from netscanner.export import average_latency
from netscanner.models import (
    ConnectionInfo,
    PortEntry,
    ScanEntry,
    SessionState,
    SpeedResult,
    VpnRecommendation,
)
from netscanner.rating import star_bar, stars_text
from netscanner.session import ScanObserver

console = Console()


def _table(title: Optional[str] = None) -> Table:
    return Table(
        show_header=True,
        border_style="bright_black",
        expand=False,
        header_style="bold",
        title=title,
        title_style="bold",
    )


def _fmt_latency(entry: ScanEntry) -> Text:
    """Latency colored by rating tier; failures read as a timeout."""
    if not entry.succeeded:
        return Text("timeout", style="red dim")
    return Text(f"{entry.elapsed_ms}ms", style=entry.rating.color)


def _fmt_rating(entry: ScanEntry) -> Text:
    return Text(f"{stars_text(entry.rating)} {entry.rating.label}", style=entry.rating.color)


def _fmt_status(status: str) -> Text:
    return Text(status, style=STATUS_COLORS.get(status, ""))


def _fmt_attempts(attempts: list[int]) -> str:
    return " / ".join("—" if a >= FAILURE_SENTINEL_MS else str(a) for a in attempts)


# ── User connection info ──────────────────────────────────────────────


def render_connection(info: ConnectionInfo) -> None:
    """Display the client's public connection details."""
    if not info.is_known:
        console.print("[dim]Connection: unknown (no geolocation source answered)[/dim]")
        return

    parts = [f"[bold]{info.ip}[/bold]"]
    location_parts = [p for p in [info.city, info.region, info.country] if p]
    if location_parts:
        parts.append(", ".join(location_parts))
    if info.isp:
        parts.append(f"[dim]{info.isp}[/dim]")
    if info.asn:
        parts.append(f"[dim]{info.asn}[/dim]")
    parts.append(f"[dim]({info.lat:.2f}, {info.lon:.2f})[/dim]")

    flags = [name for name, on in (("VPN", info.is_vpn), ("Proxy", info.is_proxy), ("Tor", info.is_tor)) if on]
    if flags:
        parts.append(f"[yellow]{'/'.join(flags)} detected[/yellow]")
    parts.append("IPv6 ✓" if info.ipv6 else "[dim]IPv6 ✗[/dim]")

    console.print(f"[bold]Your Connection:[/bold] {' | '.join(parts)}")


# ── Progress tracking ─────────────────────────────────────────────────


class ProgressTracker(ScanObserver):
    """Live per-category progress table, fed by a ``ScanSession``."""

    def __init__(self, categories: list[str]):
        self.categories = list(categories)
        self.progress: dict[str, int] = {c: 0 for c in self.categories}
        self.status: dict[str, str] = {c: "waiting" for c in self.categories}
        self.live: Optional[Live] = None

    def _build_table(self) -> Table:
        table = Table(show_header=True, expand=False, border_style="dim")
        table.add_column("Scan", style="bold")
        table.add_column("Progress", min_width=20)
        table.add_column("Status")

        for category in self.categories:
            pct = self.progress[category]
            status = self.status[category]
            bar_width = 15
            filled = min(bar_width, pct * bar_width // 100)
            bar = "[green]" + "█" * filled + "[/green]" + "[dim]░[/dim]" * (bar_width - filled)

            style = "green" if status == "done" else ("dim" if status == "waiting" else "yellow")
            table.add_row(
                CATEGORY_LABELS.get(category, category),
                f"{bar} {pct:3d}%",
                f"[{style}]{status}[/{style}]",
            )

        return table

    def _refresh(self) -> None:
        if self.live:
            self.live.update(self._build_table())

    def start(self) -> None:
        self.live = Live(self._build_table(), console=console, refresh_per_second=4)
        self.live.start()

    def on_progress(self, category: str, percent: int) -> None:
        if category not in self.progress:
            return
        self.progress[category] = percent
        if self.status[category] == "waiting":
            self.status[category] = "running"
        self._refresh()

    def on_category_done(self, category: str) -> None:
        if category not in self.progress:
            return
        self.progress[category] = 100
        self.status[category] = "done"
        self._refresh()

    def finish(self) -> None:
        if self.live:
            self.live.stop()


# ── Category rendering ────────────────────────────────────────────────


def render_ping(entries: list[ScanEntry], verbose: bool = False) -> None:
    if not entries:
        console.print("[dim]No ping results match.[/dim]")
        return

    table = _table("Global Ping")
    table.add_column("#", justify="right", width=3, style="dim")
    table.add_column("Location", min_width=20)
    table.add_column("City")
    table.add_column("Region", style="dim")
    table.add_column("Latency", justify="right")
    table.add_column("Rating")
    if verbose:
        table.add_column("Attempts", style="dim")

    for rank, e in enumerate(entries, 1):
        t = e.target
        row = [str(rank), f"{t.flag} {t.country}", t.city, t.region, _fmt_latency(e), _fmt_rating(e)]
        if verbose:
            row.append(_fmt_attempts(e.attempts))
        table.add_row(*row)

    console.print(table)

    avg = average_latency(entries)
    reachable = sum(1 for e in entries if e.succeeded)
    summary = f"  [dim]{reachable}/{len(entries)} reachable"
    if avg is not None:
        summary += f", average {avg}ms"
    console.print(summary + "[/dim]")


def render_dns(entries: list[ScanEntry]) -> None:
    table = _table("DNS Servers")
    table.add_column("#", justify="right", width=3, style="dim")
    table.add_column("Server", style="bold")
    table.add_column("Provider")
    table.add_column("Primary")
    table.add_column("Secondary", style="dim")
    table.add_column("Latency", justify="right")
    table.add_column("Rating")

    for rank, e in enumerate(entries, 1):
        t = e.target
        table.add_row(str(rank), t.name, t.provider, t.primary, t.secondary, _fmt_latency(e), _fmt_rating(e))

    console.print(table)


def _render_accessibility(title: str, entries: list[ScanEntry]) -> None:
    table = _table(title)
    table.add_column("Name", style="bold")
    table.add_column("Latency", justify="right")
    table.add_column("Status")
    table.add_column("Rating")
    table.add_column("Features", style="dim")

    for e in entries:
        table.add_row(
            e.name, _fmt_latency(e), _fmt_status(e.status), _fmt_rating(e),
            ", ".join(e.target.features),
        )

    console.print(table)


def render_cdn(cdn: list[ScanEntry], tunnels: list[ScanEntry]) -> None:
    if cdn:
        _render_accessibility("CDN Providers", cdn)
    if tunnels:
        _render_accessibility("Tunnel Services", tunnels)


def render_ports(entries: list[PortEntry]) -> None:
    open_count = sum(1 for p in entries if p.status == "open")
    table = _table(f"Ports ({open_count} open / {len(entries)} total)")
    table.add_column("Port", justify="right")
    table.add_column("Service", style="bold")
    table.add_column("Proto", style="dim")
    table.add_column("Status")
    table.add_column("Time", justify="right", style="dim")
    table.add_column("Description", style="dim")

    for p in entries:
        table.add_row(
            str(p.port), p.service, p.target.protocol,
            _fmt_status(p.status), f"{p.elapsed_ms}ms", p.target.description,
        )

    console.print(table)
    console.print("  [dim]Port state is inferred from connection timing, not a packet-level scan.[/dim]")


def render_protocols(entries: list[ScanEntry]) -> None:
    table = _table("Protocols")
    table.add_column("Protocol", style="bold")
    table.add_column("Type")
    table.add_column("Port", justify="right")
    table.add_column("Encryption", style="dim")
    table.add_column("Latency", justify="right")
    table.add_column("Status")
    table.add_column("Recommendation")

    for e in entries:
        t = e.target
        table.add_row(
            t.name, t.kind, str(t.default_port), t.encryption,
            _fmt_latency(e), _fmt_status(e.status), e.recommendation or "",
        )

    console.print(table)


def render_vpn(vpn: VpnRecommendation) -> None:
    if vpn.summary:
        s = vpn.summary
        best = s.best_location
        where = f"{best.target.flag} {best.name} ({best.elapsed_ms}ms)" if best else "none reachable"
        console.print(
            f"[bold]Best location:[/bold] {where} | [bold]Best protocol:[/bold] {s.best_protocol} | "
            f"[bold]Open VPN ports:[/bold] {s.open_vpn_port_count} | "
            f"[dim]{s.total_providers_considered} providers considered[/dim]"
        )

    table = _table("VPN Recommendations")
    table.add_column("#", justify="right", width=3, style="dim")
    table.add_column("Provider", style="bold")
    table.add_column("Protocol")
    table.add_column("Security")
    table.add_column("Location")
    table.add_column("Speed", justify="right", style="dim")
    table.add_column("Score", justify="right")

    for rank, r in enumerate(vpn.providers, 1):
        table.add_row(
            str(rank), r.provider_name, r.best_protocol,
            star_bar(r.security_strength),
            r.best_location, str(r.speed_score), f"[bold]{r.overall_score}[/bold]/100",
        )

    console.print(table)

    for cfg in vpn.configs:
        details = " | ".join(f"{k}: {v}" for k, v in cfg.details.items())
        console.print(f"  [bold]{cfg.name}[/bold] [cyan]{cfg.badge}[/cyan]  [dim]{details}[/dim]")


def render_speed(speed: SpeedResult) -> None:
    console.print(
        f"[bold]Speed:[/bold] down [bold]{speed.download_mbps:.2f}[/bold] Mbps | "
        f"up ~{speed.upload_mbps:.2f} Mbps [dim](estimated)[/dim] | "
        f"ping {speed.ping_ms}ms | jitter {speed.jitter_ms}ms"
    )


# ── Full result rendering ─────────────────────────────────────────────


def render_full(state: SessionState, ping_view: Optional[list[ScanEntry]] = None, verbose: bool = False) -> None:
    """Render every category present in *state*.

    *ping_view* replaces ``state.ping`` in the ping table when the user
    filtered or re-sorted it.
    """
    if state.connection:
        render_connection(state.connection)

    ping = state.ping if ping_view is None else ping_view
    if state.ping:
        console.print()
        render_ping(ping, verbose)
    if state.dns:
        console.print()
        render_dns(state.dns)
    if state.cdn or state.tunnels:
        console.print()
        render_cdn(state.cdn, state.tunnels)
    if state.ports:
        console.print()
        render_ports(state.ports)
    if state.protocols:
        console.print()
        render_protocols(state.protocols)
    if state.vpn:
        console.print()
        render_vpn(state.vpn)
    if state.speed:
        console.print()
        render_speed(state.speed)


def render_error(message: str) -> None:
    """Display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def render_warning(message: str) -> None:
    """Display a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {message}")
