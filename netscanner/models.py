"""Data models for netscanner."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

from netscanner.config import (
    DEFAULT_BATCH_SIZE,
    LATENCY_TIMEOUT,
    PING_ATTEMPTS,
    PING_BATCH_SIZE,
    PING_TIMEOUT,
    PORT_BATCH_SIZE,
    PORT_PROBE_HOST,
    PORT_TIMEOUT,
)


# ── Probe targets ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Waypoint:
    """Global path-latency waypoint."""

    country: str
    country_code: str
    city: str
    region: str
    flag: str
    endpoint: str

    @property
    def key(self) -> str:
        return f"{self.country_code}/{self.city}"

    @property
    def name(self) -> str:
        return f"{self.country} ({self.city})"


@dataclass(frozen=True)
class DnsService:
    """Public name-resolution service."""

    name: str
    provider: str
    primary: str
    secondary: str
    features: tuple[str, ...]
    endpoint: str

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class CdnEndpoint:
    """Content-delivery network probed through one of its public assets."""

    name: str
    features: tuple[str, ...]
    endpoint: str

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class TunnelService:
    """Tunnel or proxy service probed through its public site."""

    name: str
    protocol: str
    features: tuple[str, ...]
    endpoint: str

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class PortDef:
    """A port to check against the shared probe host."""

    port: int
    service: str
    protocol: str
    description: str

    @property
    def key(self) -> str:
        return f"{self.port}-{self.service}"

    @property
    def name(self) -> str:
        return self.service

    @property
    def endpoint(self) -> str:
        return f"{PORT_PROBE_HOST}:{self.port}"


@dataclass(frozen=True)
class ProtocolDef:
    """A tunnelling or transport protocol and its representative endpoint."""

    name: str
    kind: str  # VPN | Proxy | Transport
    default_port: int
    encryption: str
    speed: str
    security: str
    endpoint: str
    description: str

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class VpnProvider:
    """A recommendable VPN/proxy offering with a declared security rating."""

    name: str
    best_protocol: str
    security_stars: int
    features: tuple[str, ...]
    kind: str  # Self-hosted | Commercial | Free/Paid ...

    @property
    def key(self) -> str:
        return self.name


ProbeTarget = Union[Waypoint, DnsService, CdnEndpoint, TunnelService, PortDef, ProtocolDef]


# ── Probe outcomes and ratings ────────────────────────────────────────


@dataclass
class ProbeOutcome:
    """Result of one timed probe against a single target.

    ``elapsed_ms`` equals the failure sentinel exactly when ``succeeded``
    is false.
    """

    target: ProbeTarget
    elapsed_ms: int
    succeeded: bool
    attempts: list[int] = field(default_factory=list)


@dataclass
class ConnectAttempt:
    """Raw timing of one TCP connection attempt (port heuristics)."""

    target: PortDef
    elapsed_ms: int
    connected: bool


class RatingTier(str, enum.Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    BAD = "Bad"


@dataclass(frozen=True)
class Rating:
    """Discrete quality bucket derived from elapsed time."""

    tier: RatingTier
    stars: int
    label: str
    color: str
    css_class: str


# ── Category results ──────────────────────────────────────────────────


@dataclass
class ScanEntry:
    """One row of a category result: outcome, rating and derived status."""

    target: ProbeTarget
    elapsed_ms: int
    succeeded: bool
    rating: Rating
    status: str
    attempts: list[int] = field(default_factory=list)
    recommendation: Optional[str] = None

    @property
    def name(self) -> str:
        return self.target.name


@dataclass
class PortEntry:
    """One row of a port scan. ``status`` is a timing heuristic."""

    target: PortDef
    elapsed_ms: int
    connected: bool
    status: str  # open | closed | filtered

    @property
    def port(self) -> int:
        return self.target.port

    @property
    def service(self) -> str:
        return self.target.service


# ── Recommendations ───────────────────────────────────────────────────


@dataclass
class RecommendationEntry:
    """A scored VPN provider."""

    provider_name: str
    best_protocol: str
    security_strength: int
    best_location: str
    speed_score: int
    overall_score: int
    features: tuple[str, ...] = ()
    kind: str = ""


@dataclass
class ConfigTemplate:
    """A suggested client configuration paired with a measured location."""

    name: str
    badge: str
    details: dict[str, str] = field(default_factory=dict)


@dataclass
class RecommendationSummary:
    best_location: Optional[ScanEntry]
    best_protocol: str
    open_vpn_port_count: int
    total_providers_considered: int


@dataclass
class VpnRecommendation:
    providers: list[RecommendationEntry] = field(default_factory=list)
    configs: list[ConfigTemplate] = field(default_factory=list)
    summary: Optional[RecommendationSummary] = None


# ── Connection and speed ──────────────────────────────────────────────


@dataclass
class ConnectionInfo:
    """Client's public connection details.

    Every field has a concrete default so consumers never handle missing
    values; ``ConnectionInfo.unknown()`` is the record used when no
    geolocation source answers.
    """

    ip: str = "Unknown"
    country: str = "Unknown"
    country_code: str = ""
    region: str = ""
    city: str = ""
    lat: float = 0.0
    lon: float = 0.0
    timezone: str = ""
    isp: str = ""
    asn: str = ""
    postal: str = ""
    is_vpn: bool = False
    is_proxy: bool = False
    is_tor: bool = False
    ipv6: bool = False
    source: str = ""

    @classmethod
    def unknown(cls) -> ConnectionInfo:
        return cls()

    @property
    def is_known(self) -> bool:
        return self.ip != "Unknown"


@dataclass
class LatencyStats:
    """Aggregated statistics for a set of latency samples."""

    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0
    median: float = 0.0
    stdev: float = 0.0
    spread: float = 0.0


@dataclass
class SpeedResult:
    download_mbps: float = 0.0
    upload_mbps: float = 0.0
    ping_ms: int = 0
    jitter_ms: int = 0
    ping_samples: list[int] = field(default_factory=list)
    ping_stats: LatencyStats = field(default_factory=LatencyStats)
    bytes_downloaded: int = 0


# ── Run configuration and session ─────────────────────────────────────


@dataclass
class ScanConfig:
    """Configuration for a scan run."""

    categories: list[str] = field(default_factory=list)  # empty = full scan
    port_scan_type: str = "all"
    ping_sort: str = "latency"
    ping_filter: str = ""
    ping_timeout: float = PING_TIMEOUT
    latency_timeout: float = LATENCY_TIMEOUT
    port_timeout: float = PORT_TIMEOUT
    ping_attempts: int = PING_ATTEMPTS
    ping_batch_size: int = PING_BATCH_SIZE
    port_batch_size: int = PORT_BATCH_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    no_geo: bool = False
    include_speed: bool = True
    verbose: bool = False
    quiet: bool = False
    json_output: bool = False
    csv_output: bool = False
    report_output: bool = False
    output_file: Optional[str] = None


@dataclass
class SessionState:
    """Most recent result of each category for one run.

    Owned by a single orchestrator; every field is replaced wholesale by
    the scan that produces it.
    """

    connection: Optional[ConnectionInfo] = None
    ping: list[ScanEntry] = field(default_factory=list)
    dns: list[ScanEntry] = field(default_factory=list)
    cdn: list[ScanEntry] = field(default_factory=list)
    tunnels: list[ScanEntry] = field(default_factory=list)
    ports: list[PortEntry] = field(default_factory=list)
    protocols: list[ScanEntry] = field(default_factory=list)
    vpn: Optional[VpnRecommendation] = None
    speed: Optional[SpeedResult] = None
    timestamp: Optional[str] = None
