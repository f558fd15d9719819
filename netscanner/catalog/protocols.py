"""Tunnelling and transport protocols with one representative test endpoint each."""

from __future__ import annotations

from netscanner.models import ProtocolDef

_GITHUB = "https://github.com/"
_GOOGLE_204 = "https://www.google.com/generate_204"

PROTOCOLS: tuple[ProtocolDef, ...] = (
    ProtocolDef("VLESS", "VPN", 443, "TLS 1.3", "Very Fast", "High", _GITHUB, "Lightweight proxy protocol"),
    ProtocolDef("VMess", "VPN", 443, "AES-128-GCM", "Fast", "High", _GITHUB, "V2Ray protocol"),
    ProtocolDef("Trojan", "VPN", 443, "TLS 1.3", "Fast", "Very High", _GITHUB, "TLS-based protocol"),
    ProtocolDef("Hysteria 2", "VPN", 443, "QUIC + TLS", "Very Fast", "High", _GITHUB, "QUIC-based anti-censorship"),
    ProtocolDef("WireGuard", "VPN", 51820, "ChaCha20", "Very Fast", "Very High",
                "https://www.wireguard.com/", "Modern VPN protocol"),
    ProtocolDef("OpenVPN", "VPN", 1194, "AES-256", "Medium", "Very High",
                "https://openvpn.net/", "Traditional VPN"),
    ProtocolDef("IKEv2/IPSec", "VPN", 500, "AES-256", "Fast", "Very High", _GOOGLE_204, "IPSec-based VPN"),
    ProtocolDef("Shadowsocks", "Proxy", 8388, "AEAD", "Fast", "Medium", _GITHUB, "SOCKS5 proxy"),
    ProtocolDef("ShadowsocksR", "Proxy", 8388, "Various", "Fast", "Medium", _GITHUB, "Extended Shadowsocks"),
    ProtocolDef("TUIC", "VPN", 443, "QUIC + TLS", "Very Fast", "High", _GITHUB, "QUIC-based proxy"),
    ProtocolDef("NaiveProxy", "Proxy", 443, "TLS 1.3", "Fast", "Very High", _GITHUB, "Chrome-based proxy"),
    ProtocolDef("Reality", "VPN", 443, "TLS 1.3", "Very Fast", "Maximum", _GITHUB, "VLESS + Reality"),
    ProtocolDef("SSTP", "VPN", 443, "SSL/TLS", "Medium", "High", _GOOGLE_204, "Microsoft VPN"),
    ProtocolDef("L2TP", "VPN", 1701, "IPSec", "Medium", "Medium", _GOOGLE_204, "Layer 2 Tunneling"),
    ProtocolDef("PPTP", "VPN", 1723, "MPPE", "Fast", "Low", _GOOGLE_204, "Legacy VPN (insecure)"),
    ProtocolDef("HTTP/2", "Transport", 443, "TLS", "Fast", "High", _GOOGLE_204, "HTTP/2 multiplexing"),
    ProtocolDef("QUIC/HTTP3", "Transport", 443, "TLS 1.3", "Very Fast", "Very High",
                "https://www.google.com/", "UDP-based transport"),
    ProtocolDef("WebSocket", "Transport", 443, "TLS", "Fast", "High",
                "https://echo.websocket.org/", "WS tunnel support"),
    ProtocolDef("gRPC", "Transport", 443, "TLS", "Fast", "High", _GOOGLE_204, "gRPC transport"),
)

# Human-readable advice attached to each protocol status
RECOMMENDATIONS = {
    "supported": "Recommended ✓",
    "partial": "Usable with high latency",
    "blocked": "May be blocked",
}
