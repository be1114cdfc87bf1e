"""Unified timeout configuration for the probe core.

This module centralizes the timeout values used by the connection cache
(dial/handshake, idle connection expiry), the liveness probe stream, the
distributed-mode topology fetch and the netperf runner.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when an override changes. Supported environment
    variables (all optional, positive floats):
        CLUSTER_PROBE_TIMEOUT_PROBE_SECONDS
        CLUSTER_PROBE_TIMEOUT_TOPOLOGY_SECONDS
        CLUSTER_PROBE_TIMEOUT_TOPOLOGY_RETRY_SECONDS
        CLUSTER_PROBE_TIMEOUT_DIAL_SECONDS
        CLUSTER_PROBE_TIMEOUT_IDLE_SECONDS
        CLUSTER_PROBE_TIMEOUT_NETPERF_GRACE_SECONDS

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache after first read).
3. Every probe round is bounded by ``probe_timeout_seconds`` so session
   cancellation is observed within one probe timeout.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

_ENV_PREFIX = "CLUSTER_PROBE_TIMEOUT_"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        probe_timeout_seconds: Deadline for one liveness round, enforced by the
            probe stream over all endpoints; also the per-operation
            ``httpx`` timeout of each probe request.
        topology_timeout_seconds: Bound for each cluster-topology request
            attempt in distributed mode.
        topology_retry_seconds: Fixed backoff between topology attempts.
        dial_timeout_seconds: TCP dial and TLS handshake timeout.
        idle_timeout_seconds: Expiry of idle pooled keep-alive connections.
        netperf_grace_seconds: Extra time granted to a throughput test beyond
            its requested duration before the request is abandoned.
    """

    probe_timeout_seconds: float = 5.0
    topology_timeout_seconds: float = 3.0
    topology_retry_seconds: float = 1.0
    dial_timeout_seconds: float = 10.0
    idle_timeout_seconds: float = 90.0
    netperf_grace_seconds: float = 15.0

    def request_timeout(self, seconds: float) -> httpx.Timeout:
        """Return an ``httpx.Timeout`` applying ``seconds`` to each operation.

        ``httpx`` limits connect, read, write and pool waits separately, not
        the request as a whole. The connect phase never exceeds the dial
        timeout.
        """
        return httpx.Timeout(seconds, connect=min(seconds, self.dial_timeout_seconds))


_FIELDS = (
    ("probe_timeout_seconds", "PROBE_SECONDS"),
    ("topology_timeout_seconds", "TOPOLOGY_SECONDS"),
    ("topology_retry_seconds", "TOPOLOGY_RETRY_SECONDS"),
    ("dial_timeout_seconds", "DIAL_SECONDS"),
    ("idle_timeout_seconds", "IDLE_SECONDS"),
    ("netperf_grace_seconds", "NETPERF_GRACE_SECONDS"),
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(_ENV_PREFIX + suffix, "") for _, suffix in _FIELDS)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    defaults = TimeoutConfig()
    values = {
        field: _parse_env_float(_ENV_PREFIX + suffix, getattr(defaults, field))
        for field, suffix in _FIELDS
    }
    _CACHED = TimeoutConfig(**values)
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
