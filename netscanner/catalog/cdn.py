"""Content-delivery networks and tunnel services.

Both catalogs are probed the same way; a reachable endpoint means the
service is not blocked from this vantage point.
"""

from __future__ import annotations

from netscanner.models import CdnEndpoint, TunnelService

CDN_ENDPOINTS: tuple[CdnEndpoint, ...] = (
    CdnEndpoint("Cloudflare CDN", ("DDoS Protection", "WAF", "Free SSL", "Argo"),
                "https://www.cloudflare.com/cdn-cgi/trace"),
    CdnEndpoint("Fastly", ("Edge Computing", "Real-time", "Instant Purge"),
                "https://www.fastly.com/"),
    CdnEndpoint("AWS CloudFront", ("Global", "Lambda Edge", "S3 Integration"),
                "https://d1.awsstatic.com/logos/aws-logo-lockups/poweredbyaws/"
                "PB_AWS_logo_RGB_stacked.547f032d90171cdea4dd90c258f47373c5573db5.png"),
    CdnEndpoint("Google Cloud CDN", ("Anycast", "HTTP/2", "SSL"),
                "https://www.gstatic.com/images/branding/product/1x/googleg_48dp.png"),
    CdnEndpoint("Azure CDN", ("Microsoft Network", "Rules Engine", "Analytics"),
                "https://azure.microsoft.com/favicon.ico"),
    CdnEndpoint("Akamai", ("Enterprise", "Security", "Performance"),
                "https://www.akamai.com/"),
    CdnEndpoint("KeyCDN", ("Pay-as-use", "HTTP/2", "Free SSL"),
                "https://www.keycdn.com/"),
    CdnEndpoint("BunnyCDN", ("Affordable", "Fast", "Storage"),
                "https://bunny.net/"),
    CdnEndpoint("StackPath", ("Edge Computing", "WAF", "DDoS"),
                "https://www.stackpath.com/"),
    CdnEndpoint("jsDelivr", ("Free", "Open Source", "npm/GitHub"),
                "https://cdn.jsdelivr.net/npm/jquery@3/dist/jquery.min.js"),
)

TUNNEL_SERVICES: tuple[TunnelService, ...] = (
    TunnelService("Cloudflare WARP", "WireGuard", ("Free", "Fast", "Privacy"),
                  "https://cloudflare-dns.com/dns-query"),
    TunnelService("Cloudflare Tunnel", "HTTP/2", ("Zero Trust", "No Port Forward"),
                  "https://www.cloudflare.com/cdn-cgi/trace"),
    TunnelService("ngrok", "HTTP/HTTPS/TCP", ("Easy Setup", "Custom Domain"),
                  "https://ngrok.com/"),
    TunnelService("Tailscale", "WireGuard", ("Mesh VPN", "Zero Config"),
                  "https://tailscale.com/"),
    TunnelService("ZeroTier", "Custom", ("P2P", "SD-WAN", "Free"),
                  "https://www.zerotier.com/"),
    TunnelService("WireGuard", "WireGuard", ("Modern", "Fast", "Secure"),
                  "https://www.wireguard.com/"),
    TunnelService("Hysteria 2", "QUIC", ("Anti-Censorship", "Fast"),
                  "https://github.com/"),
    TunnelService("VLESS/XRAY", "VLESS", ("Lightweight", "Flexible"),
                  "https://github.com/"),
    TunnelService("Shadowsocks", "SOCKS5", ("Proxy", "Lightweight"),
                  "https://github.com/"),
    TunnelService("V2Ray", "VMess/VLESS", ("Multi-Protocol", "Flexible"),
                  "https://github.com/"),
)
