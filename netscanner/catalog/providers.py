"""VPN providers and configuration templates used by the advisor.

Provider order is a priority ranking: the advisor's speed score is
derived from the position in this tuple, not from measurement.
"""

from __future__ import annotations

from netscanner.models import VpnProvider

VPN_PROVIDERS: tuple[VpnProvider, ...] = (
    VpnProvider("VLESS + Reality (XRAY)", "VLESS Reality", 5, ("Anti-Detection", "Fast", "TLS 1.3"), "Self-hosted"),
    VpnProvider("Hysteria 2", "QUIC", 5, ("Ultra Fast", "Anti-Censorship", "UDP"), "Self-hosted"),
    VpnProvider("WireGuard + Cloudflare WARP", "WireGuard", 4, ("Free", "Fast", "Easy"), "Free/Paid"),
    VpnProvider("Trojan-GFW", "Trojan", 5, ("TLS Camouflage", "Fast"), "Self-hosted"),
    VpnProvider("V2Ray/XRAY (VMess)", "VMess", 4, ("Flexible", "Multi-transport"), "Self-hosted"),
    VpnProvider("NordVPN", "NordLynx", 5, ("No Log", "5000+ Servers", "WireGuard"), "Commercial"),
    VpnProvider("ExpressVPN", "Lightway", 5, ("Fast", "94 Countries", "Split Tunnel"), "Commercial"),
    VpnProvider("Mullvad VPN", "WireGuard", 5, ("Privacy", "No Account", "Open Source"), "Commercial"),
    VpnProvider("Surfshark", "WireGuard", 4, ("Unlimited Devices", "Affordable"), "Commercial"),
    VpnProvider("ProtonVPN", "WireGuard", 5, ("Open Source", "Free Tier", "Swiss Privacy"), "Free/Commercial"),
    VpnProvider("Outline VPN", "Shadowsocks", 4, ("Easy Setup", "Self-hosted", "Free"), "Self-hosted"),
    VpnProvider("Cloudflare WARP+", "WireGuard", 3, ("Free/Cheap", "Fast", "Global"), "Free/Paid"),
)

# (name, badge, index into the ranked reachable locations, fixed details).
# A location index past the end of the measured list falls back to the best one.
CONFIG_TEMPLATES: tuple[tuple[str, str, int, dict[str, str]], ...] = (
    ("VLESS + Reality + XRAY", "recommended", 0, {
        "protocol": "VLESS",
        "transport": "TCP + Reality",
        "port": "443",
        "encryption": "TLS 1.3",
        "flow": "xtls-rprx-vision",
        "fingerprint": "chrome",
    }),
    ("Hysteria 2", "recommended", 0, {
        "protocol": "Hysteria2",
        "transport": "QUIC",
        "port": "443",
        "encryption": "TLS 1.3",
        "bandwidth": "Auto",
        "obfs": "salamander",
    }),
    ("Trojan + WebSocket", "", 1, {
        "protocol": "Trojan",
        "transport": "WebSocket",
        "port": "443",
        "encryption": "TLS 1.3",
        "path": "/trojan-ws",
        "host": "cdn.example.com",
    }),
    ("VMess + WS + CDN", "", 2, {
        "protocol": "VMess",
        "transport": "WebSocket + TLS",
        "port": "443",
        "encryption": "auto",
        "path": "/vmess-ws",
        "cdn": "Cloudflare",
    }),
    ("WireGuard", "", 0, {
        "protocol": "WireGuard",
        "transport": "UDP",
        "port": "51820",
        "encryption": "ChaCha20-Poly1305",
        "mtu": "1280",
        "keepalive": "25",
    }),
    ("Shadowsocks AEAD", "", 3, {
        "protocol": "Shadowsocks",
        "transport": "TCP",
        "port": "8388",
        "encryption": "chacha20-ietf-poly1305",
        "plugin": "v2ray-plugin",
        "mode": "websocket-tls",
    }),
)
