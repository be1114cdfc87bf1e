"""Unsigned liveness probes against one endpoint or every cluster node.

Purpose
-------
Provide the probe stream consumed by the ping session: one concurrent probe
per endpoint (fan-out), with results yielded in arrival order (fan-in).

Concurrency
-----------
Each call to :meth:`AnonymousClient.alive` starts one daemon worker thread
per endpoint and collects results from a queue. Endpoint counts are bounded
by cluster size, so no shared worker pool is kept between rounds.

Deadline
--------
``httpx`` timeouts apply per socket operation, so a server trickling bytes
could hold a request open indefinitely. The stream therefore enforces one
overall deadline of ``probe_timeout_seconds`` from the start of the round:
endpoints that have not reported by then are yielded as ``TIMEOUT`` results
and their workers are abandoned. When the client's cancellation token fires,
the remaining endpoints are yielded as ``CANCELLED`` results at once. The
stream never outlives one probe timeout.

Failure Semantics
-----------------
Per-endpoint failures (transport errors, non-200 status, deadline, cancel)
are reported as ``ProbeResult.error`` and never raised from the stream.
"""
from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

import httpx

from ..base.cancellation import CancellationToken
from ..base.constants import HEALTH_LIVE_PATH, PROBE_CANCEL_POLL_SECONDS
from ..base.errors import ErrorCode, ProbeError, wrap_exception
from ..base.http import CachedClient
from ..base.models import Endpoint, ProbeResult, ServerProperties
from ..base.timeouts import TimeoutConfig, get_timeout_config
from .responses import status_error


@dataclass(frozen=True)
class AliveOpts:
    """Probe options.

    Attributes:
        timeout_seconds: Override of the per-probe timeout.
        path: Health path probed on each endpoint.
    """

    timeout_seconds: Optional[float] = None
    path: str = HEALTH_LIVE_PATH


class AnonymousClient:
    """Unauthenticated probe client bound to one :class:`CachedClient`."""

    def __init__(
        self,
        client: CachedClient,
        *,
        timeouts: Optional[TimeoutConfig] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        self._client = client
        self._timeouts = timeouts or get_timeout_config()
        self._token = token

    def alive(self, opts: Optional[AliveOpts] = None, *servers: ServerProperties) -> Iterator[ProbeResult]:
        """Probe ``servers`` (or the client's own endpoint) concurrently.

        Yields exactly one :class:`ProbeResult` per endpoint as soon as it is
        known, and closes within ``timeout_seconds`` of the call.
        """
        opts = opts or AliveOpts()
        endpoints = self._endpoints(servers)
        timeout = opts.timeout_seconds or self._timeouts.probe_timeout_seconds
        results: "queue.Queue[Tuple[int, ProbeResult]]" = queue.Queue()
        start = time.perf_counter_ns()
        deadline = time.monotonic() + timeout
        for index, endpoint in enumerate(endpoints):
            threading.Thread(
                target=self._worker,
                args=(results, index, endpoint, opts.path, timeout),
                name=f"probe-{endpoint.key}",
                daemon=True,
            ).start()

        pending: Dict[int, Endpoint] = dict(enumerate(endpoints))
        while pending:
            if self._token is not None and self._token.cancelled:
                yield from self._abandon(pending, start, ErrorCode.CANCELLED, "probe cancelled")
                return
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                message = f"no response within {timeout:g}s"
                yield from self._abandon(pending, start, ErrorCode.TIMEOUT, message)
                return
            try:
                index, result = results.get(timeout=min(remaining, PROBE_CANCEL_POLL_SECONDS))
            except queue.Empty:
                continue
            del pending[index]
            yield result

    # ------------------------------------------------------------------ #
    def _endpoints(self, servers) -> List[Endpoint]:
        if not servers:
            return [Endpoint.from_url(self._client.base_url)]
        scheme = self._client.scheme
        out: List[Endpoint] = []
        for server in servers:
            try:
                out.append(Endpoint.from_url(f"{scheme}://{server.endpoint}"))
            except ProbeError:
                # unparseable node address; probing it will report the failure
                out.append(Endpoint(scheme=scheme, host=server.endpoint, port=""))
        return out

    @staticmethod
    def _abandon(
        pending: Dict[int, Endpoint], start: int, code: ErrorCode, message: str
    ) -> Iterator[ProbeResult]:
        elapsed = time.perf_counter_ns() - start
        for endpoint in pending.values():
            yield ProbeResult(endpoint, elapsed, ProbeError(code, message, endpoint=endpoint.key))

    def _worker(self, results: queue.Queue, index: int, endpoint: Endpoint, path: str, timeout: float) -> None:
        try:
            result = self._probe(endpoint, path, timeout)
        except Exception as exc:  # noqa: BLE001 - reported as the endpoint's result
            result = ProbeResult(endpoint, 0, wrap_exception(exc, endpoint=endpoint.key))
        results.put((index, result))

    def _probe(self, endpoint: Endpoint, path: str, timeout: float) -> ProbeResult:
        url = endpoint.url + path
        start = time.perf_counter_ns()
        try:
            response = self._client.http.head(
                url,
                auth=None,
                timeout=self._timeouts.request_timeout(timeout),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            elapsed = time.perf_counter_ns() - start
            return ProbeResult(endpoint, elapsed, wrap_exception(exc, endpoint=endpoint.key))
        elapsed = time.perf_counter_ns() - start
        if response.status_code != httpx.codes.OK:
            return ProbeResult(endpoint, elapsed, status_error(response, endpoint=endpoint.key))
        return ProbeResult(endpoint, elapsed)


__all__ = ["AliveOpts", "AnonymousClient"]
