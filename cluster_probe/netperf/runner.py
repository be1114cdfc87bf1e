"""Cluster network throughput test runner.

Purpose
-------
Run the admin netperf call in a worker thread while the caller keeps
control: ``on_progress`` is invoked every ``poll_interval`` seconds until
the call completes, fails or the session token fires.

Failure Semantics
-----------------
* A malformed, zero or negative duration raises ``ProbeError``
  (``CONFIGURATION``) before any network I/O.
* A failed admin call is reported as ``NetperfOutcome(status="error")``
  carrying the classified error.
* Cancellation returns ``status="cancelled"`` immediately; the worker is
  abandoned and ends on its own request timeout.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..base.cancellation import CancellationToken
from ..base.constants import NETPERF_POLL_INTERVAL_SECONDS
from ..base.durations import format_duration, parse_duration
from ..base.errors import ErrorCode, ProbeError, wrap_exception
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import NetperfResult


class NetperfSource(Protocol):
    def netperf(self, duration_ns: int, timeout: Optional[float] = None) -> NetperfResult: ...


@dataclass(frozen=True)
class NetperfOutcome:
    """Terminal status of a netperf run."""

    status: str
    result: Optional[NetperfResult] = None
    error: Optional[ProbeError] = None
    polls: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "success"


def _validate_duration(duration: str) -> int:
    ns = parse_duration(duration)
    if ns <= 0:
        raise ProbeError(ErrorCode.CONFIGURATION, "duration cannot be 0 or negative")
    return ns


def run_netperf(
    admin: NetperfSource,
    duration: str,
    token: CancellationToken,
    on_progress: Optional[Callable[[], None]] = None,
    poll_interval: float = NETPERF_POLL_INTERVAL_SECONDS,
    *,
    target: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> NetperfOutcome:
    """Run one throughput test and wait for its outcome.

    Raises:
        ProbeError: ``CONFIGURATION`` for an invalid ``duration``.
    """
    duration_ns = _validate_duration(duration)
    log = logger or get_logger("cluster_probe.netperf")
    ctx = LogContext(target=target)
    normalized_log_event(
        log, "netperf.start", ctx, phase="netperf", duration=format_duration(duration_ns)
    )

    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="netperf")
    future: Future = pool.submit(admin.netperf, duration_ns)
    polls = 0
    try:
        while not future.done():
            if token.wait(poll_interval):
                break
            if future.done():
                break
            polls += 1
            if on_progress is not None:
                on_progress()
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    if not future.done() and token.cancelled:
        normalized_log_event(log, "netperf.cancelled", ctx, phase="netperf", polls=polls)
        return NetperfOutcome(status="cancelled", polls=polls)

    try:
        result = future.result()
    except Exception as exc:  # noqa: BLE001 - reported as the outcome
        err = wrap_exception(exc, target=target)
        normalized_log_event(
            log,
            "netperf.failed",
            ctx,
            phase="netperf",
            error_code=err.code.value,
            level=logging.WARNING,
            error=err.message,
        )
        return NetperfOutcome(status="error", error=err, polls=polls)

    normalized_log_event(
        log, "netperf.complete", ctx, phase="netperf", nodes=len(result.node_results), polls=polls
    )
    return NetperfOutcome(status="success", result=result, polls=polls)


__all__ = ["NetperfOutcome", "NetperfSource", "run_netperf"]
