"""Connection cache for authenticated cluster clients.

Purpose:
    Deduplicate and reuse fully configured client handles per cluster target.
    A handle bundles a pooled ``httpx.Client`` (transport, TLS, timeouts),
    the request signer bound to the target's credentials and the application
    identity. At most one handle is ever constructed per fingerprint.

External dependencies:
    - ``httpx`` for the pooled synchronous HTTP client.
    - ``botocore`` (via :mod:`.signing`) for V4 request signing.

Cache key:
    A 32-bit FNV-1a fingerprint of ``host + access_key + secret_key``. Two
    configurations with identical triples always share a handle; a collision
    between different triples is an accepted, bounded risk since the
    fingerprint only deduplicates and never authenticates.

Lifecycle & cleanup:
    The cache is an explicit object owned by the process (or a test) and
    passed to consumers. Entries are never evicted; ``close`` releases every
    pooled connection.

Thread-safety:
    One ``threading.Lock`` guards the mapping. Building a handle performs no
    network I/O, so construction happens under the lock and concurrent callers
    for the same target observe exactly one construction.
"""

from __future__ import annotations

import contextlib
import logging
import platform
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit

import httpx

from ..constants import APP_NAME, MAX_CONNECTIONS, MAX_IDLE_CONNECTIONS_PER_HOST
from ..dto import TargetConfig
from ..errors import ErrorCode, ProbeError
from ..logging import LogContext, get_logger, log_event
from ..timeouts import TimeoutConfig, get_timeout_config
from .signing import SigV4Auth
from .tls import build_ssl_context
from .trace import build_trace_hooks

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193

TransportFactory = Callable[[TargetConfig], httpx.BaseTransport]


def fingerprint(host: str, access_key: str, secret_key: str) -> int:
    """Return the 32-bit FNV-1a hash of ``host + access_key + secret_key``."""
    h = _FNV32_OFFSET
    for byte in (host + access_key + secret_key).encode("utf-8"):
        h ^= byte
        h = (h * _FNV32_PRIME) & 0xFFFFFFFF
    return h


@dataclass(frozen=True)
class CachedClient:
    """Configured handle for one cluster target.

    Attributes:
        fingerprint: Cache key the handle was stored under.
        base_url: ``scheme://host[:port]`` of the target.
        secure: Whether TLS is used.
        http: Pooled ``httpx.Client`` shared by admin and anonymous calls.
        auth: Request signer, ``None`` for anonymous targets.
        target: The configuration the handle was first built from.
    """

    fingerprint: int
    base_url: str
    secure: bool
    http: httpx.Client
    auth: Optional[SigV4Auth]
    target: TargetConfig

    @property
    def host(self) -> str:
        return urlsplit(self.base_url).netloc

    @property
    def scheme(self) -> str:
        return "https" if self.secure else "http"


def _user_agent(target: TargetConfig) -> str:
    system = f"{platform.system()}; {platform.machine()}".strip("; ")
    agent = f"{APP_NAME} ({system})"
    if target.app_name and target.app_name != APP_NAME:
        agent += f" {target.app_name}/{target.app_version}"
    return agent


class ClientCache:
    """Process-wide cache of :class:`CachedClient` handles keyed by fingerprint."""

    def __init__(
        self,
        *,
        timeouts: Optional[TimeoutConfig] = None,
        transport_factory: Optional[TransportFactory] = None,
    ) -> None:
        """Create an empty cache.

        Args:
            timeouts: Timeout configuration; defaults to ``get_timeout_config()``.
            transport_factory: Optional hook returning the ``httpx`` transport
                for a target (tests inject ``httpx.MockTransport`` here).
        """
        self._timeouts = timeouts
        self._transport_factory = transport_factory
        self._clients: Dict[int, CachedClient] = {}
        self._lock = threading.Lock()
        self._logger = get_logger("cluster_probe.http")

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def get(self, config: TargetConfig) -> CachedClient:
        """Return the cached handle for ``config``, building it on first use.

        Raises:
            ProbeError: ``CONFIGURATION`` for a malformed URL,
                ``CONSTRUCTION`` when the client cannot be built. Nothing is
                cached on failure.
        """
        parts = self._parse_url(config)
        secure = parts.scheme != "http"
        host = parts.netloc
        key = fingerprint(host, config.access_key, config.secret_key)

        with self._lock:
            cached = self._clients.get(key)
            if cached is not None:
                return cached
            cached = self._build(key, host, secure, config)
            self._clients[key] = cached

        log_event(
            self._logger,
            "client.create",
            LogContext(target=config.alias, endpoint=host),
            level=logging.DEBUG,
            fingerprint=f"{key:08x}",
            secure=secure,
            insecure=config.insecure or None,
            debug=config.debug or None,
        )
        return cached

    def close(self) -> None:
        """Close and clear all cached clients."""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for c in clients:
            with contextlib.suppress(Exception):  # best-effort shutdown
                c.http.close()

    # ------------------------------------------------------------------ #
    @staticmethod
    def _parse_url(config: TargetConfig):
        try:
            parts = urlsplit(config.host_url)
            _ = parts.port  # validates the port component
        except ValueError as exc:
            raise ProbeError(
                ErrorCode.CONFIGURATION,
                f"invalid URL {config.host_url!r}: {exc}",
                target=config.alias or config.host_url,
                raw=exc,
            ) from exc
        if not parts.netloc:
            raise ProbeError(
                ErrorCode.CONFIGURATION,
                f"invalid URL {config.host_url!r}: missing host",
                target=config.alias or config.host_url,
            )
        return parts

    def _build(self, key: int, host: str, secure: bool, config: TargetConfig) -> CachedClient:
        timeouts = self._timeouts or get_timeout_config()
        base_url = f"{'https' if secure else 'http'}://{host}"
        auth = (
            SigV4Auth(config.access_key, config.secret_key, config.session_token)
            if config.access_key or config.secret_key
            else None
        )
        event_hooks = (
            build_trace_hooks(LogContext(target=config.alias, endpoint=host), self._logger)
            if config.debug
            else None
        )
        try:
            kwargs = {
                "base_url": base_url,
                "timeout": timeouts.request_timeout(timeouts.probe_timeout_seconds),
                # identity keeps response bodies exactly as the server sent them
                "headers": {"User-Agent": _user_agent(config), "Accept-Encoding": "identity"},
                "event_hooks": event_hooks,
                "trust_env": True,
            }
            if self._transport_factory is not None:
                kwargs["transport"] = self._transport_factory(config)
            else:
                kwargs["verify"] = build_ssl_context(insecure=config.insecure)
                kwargs["limits"] = httpx.Limits(
                    max_connections=MAX_CONNECTIONS,
                    max_keepalive_connections=MAX_IDLE_CONNECTIONS_PER_HOST,
                    keepalive_expiry=timeouts.idle_timeout_seconds,
                )
            http = httpx.Client(**kwargs)
        except Exception as exc:
            raise ProbeError(
                ErrorCode.CONSTRUCTION,
                f"unable to initialize client for {host}: {exc}",
                target=config.alias or config.host_url,
                endpoint=host,
                raw=exc,
            ) from exc
        return CachedClient(
            fingerprint=key,
            base_url=base_url,
            secure=secure,
            http=http,
            auth=auth,
            target=config,
        )


__all__ = ["ClientCache", "CachedClient", "fingerprint"]
