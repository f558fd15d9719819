"""Client connection info via free IP geolocation APIs."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from netscanner.config import GEO_APIS, GEO_TIMEOUT, IPV6_CHECK_URL, IPV6_TIMEOUT, USER_AGENT
from netscanner.models import ConnectionInfo

logger = logging.getLogger(__name__)


async def get_connection_info(
    timeout: float = GEO_TIMEOUT,
    client: Optional[httpx.AsyncClient] = None,
    apis: Optional[list[str]] = None,
) -> ConnectionInfo:
    """Determine the client's public connection details.

    Sources are tried one after another, each bounded by *timeout*; the
    first that answers with usable data wins and the rest are never
    queried.  If none answers, a fully populated "Unknown" record is
    returned.
    """
    for api_url in apis if apis is not None else GEO_APIS:
        try:
            info = await _query_api(api_url, timeout, client)
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Geolocation source %s failed: %r", api_url, exc)
            continue
        if info is not None and info.is_known:
            info.ipv6 = await check_ipv6(client=client)
            logger.info("IP: %s | Location: %s, %s", info.ip, info.city, info.country)
            return info

    logger.warning("Could not fetch IP info from any geolocation source")
    return ConnectionInfo.unknown()


async def check_ipv6(timeout: float = IPV6_TIMEOUT, client: Optional[httpx.AsyncClient] = None) -> bool:
    """True if an IPv6-only endpoint is reachable."""
    try:
        resp = await _get(IPV6_CHECK_URL, timeout, client)
    except httpx.HTTPError as exc:
        logger.debug("IPv6 check failed: %r", exc)
        return False
    return resp.is_success


async def _get(url: str, timeout: float, client: Optional[httpx.AsyncClient]) -> httpx.Response:
    headers = {"User-Agent": USER_AGENT}
    if client is not None:
        return await client.get(url, headers=headers, timeout=timeout)
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
        return await own_client.get(url, headers=headers)


async def _query_api(
    url: str,
    timeout: float,
    client: Optional[httpx.AsyncClient],
) -> Optional[ConnectionInfo]:
    """Query a single geolocation API."""
    resp = await _get(url, timeout, client)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        return None

    if "ipapi.co" in url:
        return _parse_ipapi(data)
    elif "ipwhois.app" in url:
        return _parse_ipwhois(data)
    elif "ip-api.com" in url:
        return _parse_ipapi_com(data)
    return None


def _str(value: object) -> str:
    return "" if value is None else str(value)


def _float(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0


def _timezone(value: object) -> str:
    # some sources nest the zone as {"id": "Europe/Berlin", ...}
    if isinstance(value, dict):
        return _str(value.get("id"))
    return _str(value)


def _apply_security(info: ConnectionInfo, data: dict) -> None:
    """Copy VPN/proxy/Tor flags when the source reports them."""
    security = data.get("security")
    if isinstance(security, dict):
        info.is_vpn = bool(security.get("vpn", False))
        info.is_proxy = bool(security.get("proxy", False))
        info.is_tor = bool(security.get("tor", False))


def _parse_ipapi(data: dict) -> Optional[ConnectionInfo]:
    """Parse ipapi.co response."""
    if data.get("error"):
        logger.debug("ipapi.co error: %s", data.get("reason"))
        return None

    info = ConnectionInfo(
        ip=_str(data.get("ip")) or "Unknown",
        country=_str(data.get("country_name") or data.get("country")) or "Unknown",
        country_code=_str(data.get("country_code")),
        region=_str(data.get("region")),
        city=_str(data.get("city")),
        lat=_float(data.get("latitude")),
        lon=_float(data.get("longitude")),
        timezone=_str(data.get("timezone") or data.get("utc_offset")),
        isp=_str(data.get("org")),
        asn=_str(data.get("asn")),
        postal=_str(data.get("postal")),
        source="ipapi.co",
    )
    _apply_security(info, data)
    return info


def _parse_ipwhois(data: dict) -> Optional[ConnectionInfo]:
    """Parse ipwhois.app response."""
    if data.get("success") is False:
        logger.debug("ipwhois.app error: %s", data.get("message"))
        return None

    info = ConnectionInfo(
        ip=_str(data.get("ip")) or "Unknown",
        country=_str(data.get("country")) or "Unknown",
        country_code=_str(data.get("country_code")),
        region=_str(data.get("region")),
        city=_str(data.get("city")),
        lat=_float(data.get("latitude")),
        lon=_float(data.get("longitude")),
        timezone=_timezone(data.get("timezone")),
        isp=_str(data.get("isp") or data.get("org")),
        asn=_str(data.get("asn")),
        postal=_str(data.get("postal")),
        source="ipwhois.app",
    )
    _apply_security(info, data)
    return info


def _parse_ipapi_com(data: dict) -> Optional[ConnectionInfo]:
    """Parse ip-api.com response."""
    if data.get("status") == "fail":
        logger.debug("ip-api.com error: %s", data.get("message"))
        return None

    return ConnectionInfo(
        ip=_str(data.get("query")) or "Unknown",
        country=_str(data.get("country")) or "Unknown",
        country_code=_str(data.get("countryCode")),
        region=_str(data.get("regionName") or data.get("region")),
        city=_str(data.get("city")),
        lat=_float(data.get("lat")),
        lon=_float(data.get("lon")),
        timezone=_str(data.get("timezone")),
        isp=_str(data.get("isp") or data.get("org")),
        asn=_str(data.get("as")),
        postal=_str(data.get("zip")),
        source="ip-api.com",
    )
