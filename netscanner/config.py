"""Constants and configuration for netscanner."""

# Failed probes report this elapsed time so they always sort last.
FAILURE_SENTINEL_MS = 9999

# Rating tier lower bounds (milliseconds), best tier first.
# Anything at or above POOR_BELOW_MS is rated Bad.
EXCELLENT_BELOW_MS = 50
GOOD_BELOW_MS = 100
FAIR_BELOW_MS = 200
POOR_BELOW_MS = 400

# Per-tier hints for presentation collaborators
TIER_COLORS = {
    "Excellent": "bright_green",
    "Good": "green",
    "Fair": "yellow",
    "Poor": "dark_orange",
    "Bad": "red",
}
TIER_CLASSES = {
    "Excellent": "excellent",
    "Good": "good",
    "Fair": "fair",
    "Poor": "poor",
    "Bad": "poor",
}

# Status color hints (ports, protocols, accessibility)
STATUS_COLORS = {
    "open": "green",
    "filtered": "yellow",
    "closed": "red",
    "supported": "green",
    "partial": "yellow",
    "blocked": "red",
    "reachable": "green",
    "unreachable": "red",
    "Accessible": "green",
    "Blocked": "red",
}

# Rows of the ping table in the composite report
REPORT_PING_ROWS = 20

# Probe timeouts (seconds)
PING_TIMEOUT = 5.0
LATENCY_TIMEOUT = 6.0
PORT_TIMEOUT = 3.0
GEO_TIMEOUT = 8.0
IPV6_TIMEOUT = 5.0
DOWNLOAD_TIMEOUT = 10.0

# Batch window sizes
PING_BATCH_SIZE = 6
PORT_BATCH_SIZE = 5
DEFAULT_BATCH_SIZE = 6

# Path-latency samples per waypoint
PING_ATTEMPTS = 3

# Port heuristics: a single host that answers on every TCP port
PORT_PROBE_HOST = "portquiz.net"
PORT_OPEN_BELOW_MS = 2500
PORT_CLOSED_BELOW_MS = 100
PORT_SCAN_TYPES = ["all", "common", "vpn", "web"]

# Protocol support threshold
PROTOCOL_SUPPORTED_BELOW_MS = 300

# Geolocation API fallback chain
GEO_APIS = [
    "https://ipapi.co/json/",
    "https://ipwhois.app/json/",
    "http://ip-api.com/json/?fields=status,message,country,countryCode,region,regionName,city,zip,lat,lon,timezone,isp,org,as,query",
]
IPV6_CHECK_URL = "https://v6.ident.me/"

# Speed test
SPEED_PING_URL = "https://www.google.com/generate_204"
SPEED_PING_SAMPLES = 5
SPEED_PING_FAILURE_MS = 999
SPEED_DOWNLOAD_URLS = [
    "https://cdn.jsdelivr.net/npm/jquery@3.7.1/dist/jquery.min.js",
    "https://cdnjs.cloudflare.com/ajax/libs/lodash.js/4.17.21/lodash.min.js",
    "https://cdn.jsdelivr.net/npm/bootstrap@5.3.2/dist/js/bootstrap.bundle.min.js",
]
SPEED_DOWNLOAD_ROUNDS = 3
UPLOAD_ESTIMATE_RATIO = 0.3

# Fallback when no protocol probe qualifies as supported
DEFAULT_BEST_PROTOCOL = "VLESS"

# Full-scan milestones reported under the "full" category
FULL_SCAN_STEPS = [
    ("connection", 15),
    ("ping", 40),
    ("dns", 55),
    ("cdn", 70),
    ("ports", 82),
    ("protocols", 90),
    ("vpn", 95),
    ("speed", 100),
]
FULL_SCAN_START_PERCENT = 5

# User agent for HTTP requests
USER_AGENT = "netscanner/0.1.0"

# Category display names
CATEGORY_LABELS = {
    "connection": "Connection",
    "ping": "Global Ping",
    "dns": "DNS",
    "cdn": "CDN",
    "tunnels": "Tunnels",
    "ports": "Ports",
    "protocols": "Protocols",
    "vpn": "VPN Advisor",
    "speed": "Speed Test",
}
