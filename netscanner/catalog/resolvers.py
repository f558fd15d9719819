"""Public DNS services, probed through their DoH (or nearest HTTPS) endpoint."""

from __future__ import annotations

from netscanner.models import DnsService

# Services without a public HTTPS endpoint fall back to a generic 204 probe.
_FALLBACK = "https://www.google.com/generate_204"

DNS_SERVICES: tuple[DnsService, ...] = (
    DnsService("Cloudflare", "Cloudflare", "1.1.1.1", "1.0.0.1",
               ("Fast", "Privacy", "DoH", "DoT", "WARP"), "https://cloudflare-dns.com/dns-query"),
    DnsService("Cloudflare Family", "Cloudflare", "1.1.1.3", "1.0.0.3",
               ("Family Safe", "Malware Block", "DoH"), "https://family.cloudflare-dns.com/dns-query"),
    DnsService("Google DNS", "Google", "8.8.8.8", "8.8.4.4",
               ("Reliable", "Global", "DoH", "DoT"), "https://dns.google/resolve?name=example.com"),
    DnsService("Quad9", "Quad9", "9.9.9.9", "149.112.112.112",
               ("Security", "Privacy", "DoH", "DoT"), "https://dns.quad9.net/dns-query"),
    DnsService("OpenDNS", "Cisco", "208.67.222.222", "208.67.220.220",
               ("Phishing Block", "Content Filter"), "https://doh.opendns.com/dns-query"),
    DnsService("AdGuard DNS", "AdGuard", "94.140.14.14", "94.140.15.15",
               ("Ad Block", "Tracker Block", "DoH", "DoT"), "https://dns.adguard-dns.com/dns-query"),
    DnsService("CleanBrowsing", "CleanBrowsing", "185.228.168.9", "185.228.169.9",
               ("Family Filter", "Security", "DoH"), "https://doh.cleanbrowsing.org/doh/security-filter/"),
    DnsService("Comodo Secure", "Comodo", "8.26.56.26", "8.20.247.20",
               ("Malware Block", "Phishing Block"), _FALLBACK),
    DnsService("Level3 DNS", "Level3", "4.2.2.2", "4.2.2.1",
               ("Enterprise", "Reliable"), _FALLBACK),
    DnsService("Verisign DNS", "Verisign", "64.6.64.6", "64.6.65.6",
               ("Stability", "Privacy"), _FALLBACK),
    DnsService("DNS.WATCH", "DNS.WATCH", "84.200.69.80", "84.200.70.40",
               ("No Logging", "Uncensored"), _FALLBACK),
    DnsService("Yandex DNS", "Yandex", "77.88.8.8", "77.88.8.1",
               ("Fast (Russia)", "Content Filter"), _FALLBACK),
    DnsService("NextDNS", "NextDNS", "45.90.28.0", "45.90.30.0",
               ("Customizable", "Analytics", "DoH", "DoT"), "https://dns.nextdns.io/"),
    DnsService("Mullvad DNS", "Mullvad", "194.242.2.2", "194.242.2.3",
               ("Privacy", "No Logging", "DoH"), "https://dns.mullvad.net/dns-query"),
    DnsService("Control D", "ControlD", "76.76.2.0", "76.76.10.0",
               ("Customizable", "Analytics", "DoH", "DoT"), "https://freedns.controld.com/p0"),
)
