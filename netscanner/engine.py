"""Core probing engine for netscanner.

Two layers:
  Prober     -- one time-boxed network operation per call, timed with
                time.perf_counter(); failures never raise, they come back
                as the failure sentinel.
  run_batch  -- fans a probe function out over a target list in fixed-size
                windows, waiting for each window before starting the next.

Public API:
    Prober     -- HTTP timing probes and TCP connection attempts
    run_batch  -- bounded-concurrency, order-preserving batch runner
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

import dns.asyncresolver
import dns.rdatatype
import httpx

from netscanner.config import (
    FAILURE_SENTINEL_MS,
    LATENCY_TIMEOUT,
    PING_ATTEMPTS,
    PING_TIMEOUT,
    PORT_TIMEOUT,
    USER_AGENT,
)
from netscanner.models import ConnectAttempt, PortDef, ProbeOutcome, ProbeTarget
from netscanner.stats import mean_of_successes, round_ms

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Type alias for batch progress reporting.
# Signature: (percent_complete)
BatchProgress = Callable[[int], None]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _elapsed_ms(t0: float) -> int:
    return round_ms((time.perf_counter() - t0) * 1000.0)


def _cache_busted(url: str, token: str) -> httpx.URL:
    """Append a throwaway query parameter so intermediaries cannot serve a cached reply."""
    return httpx.URL(url).copy_merge_params({"_": token})


async def _time_until_headers(client: httpx.AsyncClient, url: str | httpx.URL, timeout: float) -> int:
    """Open a streamed GET and stop the clock once the status line and headers are in."""
    t0 = time.perf_counter()
    async with client.stream("GET", url, timeout=timeout):
        return _elapsed_ms(t0)


def _safe_close_writer(writer: asyncio.StreamWriter | None) -> None:
    """Close a stream writer without raising on already-closed transports."""
    if writer is None:
        return
    try:
        writer.close()
    except Exception:
        pass


# ---------------------------------------------------------------------------
# Prober
# ---------------------------------------------------------------------------

class Prober:
    """Issues single timed network operations against probe targets.

    Use as an async context manager so the underlying ``httpx.AsyncClient``
    is shared by every probe of a scan and closed afterwards.  A client can
    also be injected (tests pass one backed by ``httpx.MockTransport``).
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        dns_server: Optional[str] = None,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._dns_server = dns_server
        self._resolved: dict[str, str] = {}

    async def __aenter__(self) -> Prober:
        self._ensure_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                http2=True,
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT, "Cache-Control": "no-store"},
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=0),
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ---- HTTP timing ----

    async def timed_request(self, url: str | httpx.URL, timeout: float) -> Optional[int]:
        """Time one GET until response headers arrive.

        Returns elapsed milliseconds, or ``None`` on any failure (DNS, TCP,
        TLS, HTTP protocol error or timeout).  Any HTTP status counts as a
        response: only reachability and timing matter.
        """
        client = self._ensure_client()
        try:
            elapsed = await asyncio.wait_for(
                _time_until_headers(client, url, timeout),
                timeout=timeout,
            )
        except (httpx.HTTPError, OSError, asyncio.TimeoutError) as exc:
            logger.debug("Probe of %s failed: %r", url, exc)
            return None
        except Exception as exc:
            logger.debug("Probe of %s failed unexpectedly: %r", url, exc)
            return None
        return min(elapsed, FAILURE_SENTINEL_MS - 1)

    async def probe(self, target: ProbeTarget, timeout: float = LATENCY_TIMEOUT) -> ProbeOutcome:
        """Single timed request against ``target.endpoint``."""
        elapsed = await self.timed_request(target.endpoint, timeout)
        if elapsed is None:
            return ProbeOutcome(target=target, elapsed_ms=FAILURE_SENTINEL_MS, succeeded=False,
                                attempts=[FAILURE_SENTINEL_MS])
        return ProbeOutcome(target=target, elapsed_ms=elapsed, succeeded=True, attempts=[elapsed])

    async def probe_repeated(
        self,
        target: ProbeTarget,
        timeout: float = PING_TIMEOUT,
        attempts: int = PING_ATTEMPTS,
    ) -> ProbeOutcome:
        """Sequential timed requests; reports the mean of the successful ones.

        Each attempt is independently bounded by *timeout* and carries a
        unique cache-busting token.  If every attempt fails the outcome is
        the failure sentinel.
        """
        samples: list[int] = []
        for i in range(attempts):
            url = _cache_busted(target.endpoint, f"{time.time_ns() // 1_000_000}_{i}")
            elapsed = await self.timed_request(url, timeout)
            samples.append(FAILURE_SENTINEL_MS if elapsed is None else elapsed)

        mean = mean_of_successes(samples)
        return ProbeOutcome(
            target=target,
            elapsed_ms=mean,
            succeeded=mean < FAILURE_SENTINEL_MS,
            attempts=samples,
        )

    async def fetch_size(self, url: str | httpx.URL, timeout: float) -> int:
        """Download *url* completely and return the body size; 0 on failure."""
        client = self._ensure_client()
        try:
            resp = await asyncio.wait_for(client.get(url, timeout=timeout), timeout=timeout)
        except (httpx.HTTPError, OSError, asyncio.TimeoutError) as exc:
            logger.debug("Download of %s failed: %r", url, exc)
            return 0
        except Exception as exc:
            logger.debug("Download of %s failed unexpectedly: %r", url, exc)
            return 0
        return len(resp.content)

    # ---- TCP connection attempts ----

    async def _resolve_host(self, hostname: str) -> str:
        """Resolve *hostname* once per prober so DNS time stays out of connect timings.

        Falls back to the hostname itself (leaving resolution to the OS)
        when dnspython cannot resolve it.
        """
        if hostname in self._resolved:
            return self._resolved[hostname]

        resolver = dns.asyncresolver.Resolver()
        resolver.lifetime = PORT_TIMEOUT
        if self._dns_server:
            resolver.nameservers = [self._dns_server]

        address = hostname
        for rdtype in (dns.rdatatype.A, dns.rdatatype.AAAA):
            try:
                answer = await resolver.resolve(hostname, rdtype)
                address = str(answer[0])
                break
            except Exception as exc:
                logger.debug("Resolving %s (%s) failed: %r", hostname, rdtype, exc)
                continue

        self._resolved[hostname] = address
        return address

    async def connect(self, target: PortDef, timeout: float = PORT_TIMEOUT) -> ConnectAttempt:
        """Attempt a TCP connection to the probe host on ``target.port``.

        Records raw elapsed time for both outcomes; the port heuristics need
        to tell a fast refusal from a silent drop.
        """
        host, _, _ = target.endpoint.rpartition(":")
        address = await self._resolve_host(host)

        writer: asyncio.StreamWriter | None = None
        t0 = time.perf_counter()
        try:
            _reader, writer = await asyncio.wait_for(
                asyncio.open_connection(address, target.port),
                timeout=timeout,
            )
            return ConnectAttempt(target=target, elapsed_ms=_elapsed_ms(t0), connected=True)
        except (OSError, asyncio.TimeoutError) as exc:
            elapsed = _elapsed_ms(t0)
            logger.debug("Connect to %s:%d failed after %dms: %r", address, target.port, elapsed, exc)
            return ConnectAttempt(target=target, elapsed_ms=elapsed, connected=False)
        finally:
            _safe_close_writer(writer)


# ---------------------------------------------------------------------------
# Batch scheduling
# ---------------------------------------------------------------------------

async def run_batch(
    targets: Sequence[T],
    probe_fn: Callable[[T], Awaitable[R]],
    concurrency_limit: int,
    progress_callback: BatchProgress | None = None,
) -> list[R]:
    """Run *probe_fn* over *targets* in windows of *concurrency_limit*.

    Every probe in a window runs concurrently via ``asyncio.gather``; the
    next window starts only when the whole window has finished.  Output
    order matches input order.  After each window the callback receives
    the rounded cumulative percentage, ending at exactly 100.

    Parameters
    ----------
    targets:
        Items to probe.
    probe_fn:
        Coroutine function returning one outcome per target.  It is
        expected to convert network failures into data rather than raise.
    concurrency_limit:
        Window size (number of probes in flight).
    progress_callback:
        Optional callable receiving the percentage after each window.
    """
    if concurrency_limit < 1:
        raise ValueError(f"concurrency_limit must be >= 1, got {concurrency_limit}")

    total = len(targets)
    results: list[R] = []

    if total == 0:
        if progress_callback:
            progress_callback(100)
        return results

    for start in range(0, total, concurrency_limit):
        window = targets[start:start + concurrency_limit]
        results.extend(await asyncio.gather(*(probe_fn(t) for t in window)))

        processed = start + len(window)
        if progress_callback:
            progress_callback(round_ms(processed / total * 100))

    return results
