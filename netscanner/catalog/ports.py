"""Port definitions grouped by scan type."""

from __future__ import annotations

from netscanner.models import PortDef

COMMON_PORTS: tuple[PortDef, ...] = (
    PortDef(80, "HTTP", "TCP", "Web Traffic"),
    PortDef(443, "HTTPS", "TCP", "Secure Web Traffic"),
    PortDef(8080, "HTTP Alt", "TCP", "Alternative Web"),
    PortDef(8443, "HTTPS Alt", "TCP", "Alternative Secure Web"),
    PortDef(21, "FTP", "TCP", "File Transfer"),
    PortDef(22, "SSH", "TCP", "Secure Shell"),
    PortDef(25, "SMTP", "TCP", "Email Sending"),
    PortDef(53, "DNS", "TCP/UDP", "Domain Name System"),
    PortDef(110, "POP3", "TCP", "Email Retrieval"),
    PortDef(143, "IMAP", "TCP", "Email Access"),
    PortDef(993, "IMAPS", "TCP", "Secure Email Access"),
    PortDef(3306, "MySQL", "TCP", "MySQL Database"),
    PortDef(5432, "PostgreSQL", "TCP", "PostgreSQL Database"),
    PortDef(6379, "Redis", "TCP", "Redis Cache"),
    PortDef(27017, "MongoDB", "TCP", "MongoDB Database"),
)

VPN_PORTS: tuple[PortDef, ...] = (
    PortDef(443, "HTTPS/VPN", "TCP", "VPN over TLS"),
    PortDef(1194, "OpenVPN", "UDP", "OpenVPN Default"),
    PortDef(1195, "OpenVPN Alt", "UDP", "OpenVPN Alternative"),
    PortDef(500, "IKEv2", "UDP", "IPSec Key Exchange"),
    PortDef(4500, "IPSec NAT", "UDP", "IPSec NAT Traversal"),
    PortDef(1701, "L2TP", "UDP", "Layer 2 Tunneling"),
    PortDef(1723, "PPTP", "TCP", "Point-to-Point Tunneling"),
    PortDef(51820, "WireGuard", "UDP", "WireGuard VPN"),
    PortDef(51821, "WireGuard Alt", "UDP", "WireGuard Alternative"),
    PortDef(8388, "Shadowsocks", "TCP", "Shadowsocks Proxy"),
    PortDef(2053, "VLESS", "TCP", "VLESS Protocol"),
    PortDef(2083, "V2Ray", "TCP", "V2Ray VMess"),
    PortDef(2087, "V2Ray Alt", "TCP", "V2Ray Alternative"),
    PortDef(2096, "XRAY", "TCP", "XRAY Protocol"),
    PortDef(8443, "Trojan", "TCP", "Trojan Protocol"),
    PortDef(443, "Hysteria2", "UDP", "Hysteria 2 QUIC"),
    PortDef(10808, "V2Ray SOCKS", "TCP", "V2Ray Local Proxy"),
    PortDef(10809, "V2Ray HTTP", "TCP", "V2Ray HTTP Proxy"),
)

WEB_PORTS: tuple[PortDef, ...] = (
    PortDef(80, "HTTP", "TCP", "Web Traffic"),
    PortDef(443, "HTTPS", "TCP", "Secure Web Traffic"),
    PortDef(8080, "HTTP Proxy", "TCP", "Proxy/Alt Web"),
    PortDef(8443, "HTTPS Alt", "TCP", "Alt Secure Web"),
    PortDef(3000, "Dev Server", "TCP", "Development"),
    PortDef(3001, "Dev Alt", "TCP", "Dev Alternative"),
    PortDef(5000, "Flask/Dev", "TCP", "Python Dev Server"),
    PortDef(8000, "Django", "TCP", "Django Dev Server"),
    PortDef(9000, "PHP-FPM", "TCP", "PHP FastCGI"),
    PortDef(8888, "Jupyter", "TCP", "Jupyter Notebook"),
)

PORT_GROUPS: dict[str, tuple[PortDef, ...]] = {
    "common": COMMON_PORTS,
    "vpn": VPN_PORTS,
    "web": WEB_PORTS,
}


def all_ports() -> list[PortDef]:
    """Every group combined, keeping the first entry per ``(port, service)``."""
    seen: set[tuple[int, str]] = set()
    ports: list[PortDef] = []
    for group in PORT_GROUPS.values():
        for p in group:
            ident = (p.port, p.service)
            if ident in seen:
                continue
            seen.add(ident)
            ports.append(p)
    return ports
