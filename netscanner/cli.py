"""CLI entry point and orchestration for netscanner."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

import click
from rich.logging import RichHandler

from netscanner import __version__
from netscanner.config import CATEGORY_LABELS, PING_ATTEMPTS, PORT_SCAN_TYPES
from netscanner.models import ScanConfig, SessionState
from netscanner.scanners import PING_SORT_KEYS
from netscanner.session import SESSION_CATEGORIES, ScanSession


def _setup_logging(verbose: bool) -> None:
    from netscanner.display import console

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    for name in ("httpx", "httpcore", "hpack"):
        logging.getLogger(name).setLevel(logging.WARNING)


@click.command()
@click.option("-c", "--categories", default="",
              help=f"Comma-separated scans [default: full scan]. Choices: {', '.join(SESSION_CATEGORIES)}")
@click.option("--ports-type", type=click.Choice(PORT_SCAN_TYPES), default="all",
              help="Port group to scan", show_default=True)
@click.option("--sort", "ping_sort", type=click.Choice(PING_SORT_KEYS), default="latency",
              help="Ping result order", show_default=True)
@click.option("--filter", "ping_filter", default="", help="Only show ping locations matching this text")
@click.option("--ping-attempts", default=PING_ATTEMPTS, help="Requests per ping location", show_default=True)
@click.option("--dns-server", default=None, help="Custom DNS server for resolving the port probe host")
@click.option("--json", "json_output", is_flag=True, help="Output JSON to stdout")
@click.option("--csv", "csv_output", is_flag=True, help="Output CSV to stdout")
@click.option("--report", "report_output", is_flag=True, help="Output the composite report (JSON) to stdout")
@click.option("-o", "--output", default=None, help="Write results to file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress progress, show only results")
@click.option("-v", "--verbose", is_flag=True, help="Show per-attempt details and debug logs")
@click.option("--no-geo", is_flag=True, help="Skip connection/geolocation lookup")
@click.option("--no-speed", is_flag=True, help="Skip the speed test in a full scan")
@click.version_option(version=__version__)
def main(
    categories: str,
    ports_type: str,
    ping_sort: str,
    ping_filter: str,
    ping_attempts: int,
    dns_server: str | None,
    json_output: bool,
    csv_output: bool,
    report_output: bool,
    output: str | None,
    quiet: bool,
    verbose: bool,
    no_geo: bool,
    no_speed: bool,
) -> None:
    """netscanner - network reachability and quality scanner.

    Measures latency to global waypoints, DNS services, CDNs and tunnel
    services, infers port and protocol reachability from connection
    timing, and ranks VPN options for your connection.
    """
    _setup_logging(verbose)
    machine_output = json_output or csv_output or report_output

    # Check for proxy warnings
    if not quiet and not machine_output:
        for var in ("HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy"):
            if os.environ.get(var):
                from netscanner.display import render_warning
                render_warning(f"Proxy detected ({var}={os.environ[var]}) — results may not reflect direct routing")
                break

    config = ScanConfig(
        categories=[c.strip().lower() for c in categories.split(",") if c.strip()] if categories else [],
        port_scan_type=ports_type,
        ping_sort=ping_sort,
        ping_filter=ping_filter,
        ping_attempts=ping_attempts,
        no_geo=no_geo,
        include_speed=not no_speed,
        verbose=verbose,
        quiet=quiet,
        json_output=json_output,
        csv_output=csv_output,
        report_output=report_output,
        output_file=output,
    )

    unknown = [c for c in config.categories if c not in SESSION_CATEGORIES]
    if unknown:
        from netscanner.display import render_error
        render_error(f"Unknown categories: {', '.join(unknown)}. Available: {', '.join(SESSION_CATEGORIES)}")
        sys.exit(1)

    try:
        state, ping_view = asyncio.run(_run(config, dns_server))
    except KeyboardInterrupt:
        if not quiet and not machine_output:
            from netscanner.display import console
            console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(130)

    _handle_output(state, ping_view, config)


def _progress_rows(config: ScanConfig) -> list[str]:
    """Categories shown in the live progress table."""
    if config.categories:
        return list(dict.fromkeys("cdn" if c == "tunnels" else c for c in config.categories))
    rows = [step for step in SESSION_CATEGORIES if step != "tunnels"]
    if config.no_geo:
        rows.remove("connection")
    if not config.include_speed:
        rows.remove("speed")
    return rows


async def _run(config: ScanConfig, dns_server: str | None) -> tuple[SessionState, list]:
    """Main async orchestration."""
    from netscanner.display import ProgressTracker, console
    from netscanner.engine import Prober

    progress = None
    if not config.quiet and not (config.json_output or config.csv_output or config.report_output):
        progress = ProgressTracker(_progress_rows(config))

    async with Prober(dns_server=dns_server) as prober:
        session = ScanSession(prober, config, observer=progress)

        if progress:
            what = ", ".join(CATEGORY_LABELS.get(c, c) for c in progress.categories)
            console.print(f"[bold]Scanning: {what}...[/bold]\n")
            progress.start()

        try:
            if config.categories:
                state = await session.run_categories(config.categories)
            else:
                state = await session.full_scan()
        finally:
            if progress:
                progress.finish()

        return state, session.ping_view()


def _handle_output(state: SessionState, ping_view: list, config: ScanConfig) -> None:
    """Handle output rendering and export."""
    from netscanner.display import console, render_full
    from netscanner.export import export_csv, export_json, export_report, write_to_file

    exporters = [
        (config.json_output, export_json),
        (config.csv_output, export_csv),
        (config.report_output, export_report),
    ]
    for enabled, exporter in exporters:
        if not enabled:
            continue
        content = exporter(state)
        if config.output_file:
            write_to_file(content, config.output_file)
            if not config.quiet:
                console.print(f"[dim]Results written to {config.output_file}[/dim]")
        else:
            click.echo(content)
        return

    # Rich terminal output
    render_full(state, ping_view=ping_view, verbose=config.verbose)

    # Also write to file if -o specified (terminal mode writes JSON)
    if config.output_file:
        write_to_file(export_json(state), config.output_file)
        console.print(f"\n[dim]Results written to {config.output_file}[/dim]")


if __name__ == "__main__":
    main()
