"""Signed administrative calls against a cluster target.

Purpose
-------
Thin ``httpx`` wrapper exposing the two admin operations the probe tooling
consumes: the cluster topology ("server info") used by distributed-mode
pings, and the network throughput test used by the netperf runner.

Timeout Strategy
----------------
Every call carries an explicit per-request timeout taken from
``get_timeout_config()`` unless the caller passes one.

Failure Semantics
-----------------
Transport failures and non-success responses raise :class:`ProbeError`
classified by ``classify_exception`` / the HTTP status; malformed bodies
raise ``ProbeError`` with ``ErrorCode.UNKNOWN``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.constants import ADMIN_INFO_PATH, ADMIN_NETPERF_PATH
from ..base.durations import format_duration
from ..base.errors import ErrorCode, ProbeError, wrap_exception
from ..base.http import CachedClient
from ..base.models import ClusterInfo, NetperfResult
from ..base.timeouts import TimeoutConfig, get_timeout_config
from .responses import ensure_success


class AdminClient:
    """Signed admin API client bound to one :class:`CachedClient`."""

    def __init__(self, client: CachedClient, *, timeouts: Optional[TimeoutConfig] = None) -> None:
        self._client = client
        self._timeouts = timeouts or get_timeout_config()

    @property
    def target(self) -> str:
        return self._client.target.alias or self._client.base_url

    def server_info(self, timeout: Optional[float] = None) -> ClusterInfo:
        """Fetch the cluster topology.

        Parameters:
            timeout: Seconds allowed for this attempt; defaults to the
                topology timeout.
        """
        seconds = timeout if timeout is not None else self._timeouts.topology_timeout_seconds
        body = self._request_json("GET", ADMIN_INFO_PATH, timeout=seconds)
        return ClusterInfo.from_mapping(body)

    def netperf(self, duration_ns: int, timeout: Optional[float] = None) -> NetperfResult:
        """Run a cluster-wide network throughput test lasting ``duration_ns``."""
        seconds = (
            timeout
            if timeout is not None
            else duration_ns / 1e9 + self._timeouts.netperf_grace_seconds
        )
        body = self._request_json(
            "POST",
            ADMIN_NETPERF_PATH,
            params={"duration": format_duration(duration_ns)},
            timeout=seconds,
        )
        return NetperfResult.from_mapping(body)

    # ------------------------------------------------------------------ #
    def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        timeout: float,
    ) -> Dict[str, Any]:
        try:
            response = self._client.http.request(
                method,
                path,
                params=params,
                auth=self._client.auth,
                timeout=self._timeouts.request_timeout(timeout),
            )
        except httpx.HTTPError as exc:
            raise wrap_exception(exc, target=self.target, endpoint=self._client.host) from exc
        ensure_success(response, target=self.target, endpoint=self._client.host)
        try:
            body = response.json()
        except ValueError as exc:
            raise ProbeError(
                ErrorCode.UNKNOWN,
                f"malformed response from {path}: {exc}",
                target=self.target,
                endpoint=self._client.host,
                raw=exc,
            ) from exc
        if not isinstance(body, dict):
            raise ProbeError(
                ErrorCode.UNKNOWN,
                f"unexpected response shape from {path}",
                target=self.target,
                endpoint=self._client.host,
            )
        return body


__all__ = ["AdminClient"]
