"""Probe target catalog registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from netscanner.models import PortDef, ProbeTarget

_CATALOG_MAP: dict[str, Sequence[ProbeTarget]] | None = None


def _load_catalogs() -> dict[str, Sequence[ProbeTarget]]:
    from netscanner.catalog.cdn import CDN_ENDPOINTS, TUNNEL_SERVICES
    from netscanner.catalog.ports import all_ports
    from netscanner.catalog.protocols import PROTOCOLS
    from netscanner.catalog.resolvers import DNS_SERVICES
    from netscanner.catalog.waypoints import WAYPOINTS

    return {
        "ping": WAYPOINTS,
        "dns": DNS_SERVICES,
        "cdn": CDN_ENDPOINTS,
        "tunnels": TUNNEL_SERVICES,
        "ports": tuple(all_ports()),
        "protocols": PROTOCOLS,
    }


def get_catalog_map() -> dict[str, Sequence[ProbeTarget]]:
    """Return the mapping of category → targets, loading lazily."""
    global _CATALOG_MAP
    if _CATALOG_MAP is None:
        _CATALOG_MAP = _load_catalogs()
    return _CATALOG_MAP


def get_catalog(category: str) -> list[ProbeTarget]:
    """Return a fresh list of the targets for *category*."""
    cmap = get_catalog_map()
    if category not in cmap:
        raise ValueError(f"Unknown category: {category!r}. Available: {list(cmap)}")
    return list(cmap[category])


def list_categories() -> list[str]:
    """Return the probe categories in full-scan order."""
    return list(get_catalog_map())


def port_catalog(scan_type: str = "all") -> list[PortDef]:
    """Ports for a scan type; unknown types fall back to the common group."""
    from netscanner.catalog.ports import PORT_GROUPS, all_ports

    if scan_type == "all":
        return all_ports()
    return list(PORT_GROUPS.get(scan_type, PORT_GROUPS["common"]))
