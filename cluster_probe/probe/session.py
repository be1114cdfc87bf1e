"""Round-based latency probe orchestration.

Purpose
-------
Drive ping rounds against one endpoint or every node of a cluster until the
termination policy stops the session, handing one :class:`RoundSnapshot` per
round to a presenter.

Flow
----
1. Validate the termination policy (no I/O on configuration errors).
2. In distributed mode fetch the cluster topology once
   (:func:`fetch_topology`); cancellation there ends the session with status
   ``cancelled`` and zero rounds.
3. Per round: check cancellation, drain the probe stream, fold every result
   into the per-host stats, emit the snapshot, evaluate termination and wait
   ``interval`` seconds on the token unless the session already stopped.

Concurrency
-----------
The per-host stats mapping is touched only by the loop in :meth:`run`; the
probe stream owns its own fan-out. A round in flight when the token fires is
allowed to drain: the stream reports every endpoint (stragglers as
``CANCELLED`` results) within one probe timeout, so the last snapshot always
covers the full endpoint set. Cancellation observed after a round wins over
the error ceiling.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..base.cancellation import CancellationToken, CancelledError
from ..base.dto import PingOptions
from ..base.errors import ProbeError
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import EndpointStats, RoundSnapshot, ServerProperties
from ..base.timeouts import TimeoutConfig, get_timeout_config
from .aggregator import fold_round
from .interfaces import ProbeStream, ResultPresenter, TopologySource
from .snapshot import build_snapshot
from .termination import StopReason, TerminationPolicy, TerminationTracker
from .topology import fetch_topology


@dataclass(frozen=True)
class SessionOutcome:
    """Terminal status of a session.

    Attributes:
        status: ``success``, ``cancelled`` or ``error``.
        rounds: Number of rounds whose snapshot was emitted.
        reason: Why the session stopped, when it ran to a stop decision.
        error: Fatal error for ``status == "error"``.
    """

    status: str
    rounds: int = 0
    reason: Optional[StopReason] = None
    error: Optional[ProbeError] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class PingSession:
    """One ping session over a fixed set of collaborators."""

    def __init__(
        self,
        admin: TopologySource,
        anonymous: ProbeStream,
        options: PingOptions,
        presenter: ResultPresenter,
        token: CancellationToken,
        *,
        target: Optional[str] = None,
        timeouts: Optional[TimeoutConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._admin = admin
        self._anonymous = anonymous
        self._options = options
        self._presenter = presenter
        self._token = token
        self._timeouts = timeouts or get_timeout_config()
        self._logger = logger or get_logger("cluster_probe.probe")
        self._ctx = LogContext(target=target)
        self._stats: Dict[str, EndpointStats] = {}

    @property
    def policy(self) -> TerminationPolicy:
        return TerminationPolicy(count=self._options.count, error_ceiling=self._options.error_count)

    @property
    def stats(self) -> Dict[str, EndpointStats]:
        """Current per-host aggregates keyed by ``host:port``."""
        return dict(self._stats)

    def run(self) -> SessionOutcome:
        """Run rounds until a stop decision and report the terminal status.

        Raises:
            ProbeError: ``CONFIGURATION`` for an invalid round count or error
                ceiling, before any network I/O.
        """
        tracker = self.policy.tracker()

        servers: Tuple[ServerProperties, ...] = ()
        if self._options.distributed:
            try:
                info = fetch_topology(
                    self._admin,
                    self._token,
                    timeouts=self._timeouts,
                    ctx=self._ctx,
                    logger=self._logger,
                )
            except CancelledError:
                tracker.cancel()
                return self._finish(tracker, rounds=0)
            servers = tuple(info.servers)

        index = 0
        while True:
            if tracker.before_round(index + 1, self._token).stopped:
                break
            index += 1
            snapshot, touched = self._run_round(index, servers)
            self._presenter.emit(snapshot)
            if self._token.cancelled:
                tracker.cancel()
                break
            if tracker.after_round(index, touched).stopped:
                break
            if self._token.wait(self._options.interval):
                tracker.cancel()
                break
        return self._finish(tracker, rounds=index)

    # ------------------------------------------------------------------ #
    def _run_round(
        self, index: int, servers: Tuple[ServerProperties, ...]
    ) -> Tuple[RoundSnapshot, List[EndpointStats]]:
        results = list(self._anonymous.alive(None, *servers))
        touched = fold_round(self._stats, results)
        failures = sum(1 for r in results if r.error is not None)
        log_event(
            self._logger,
            "round.complete",
            self._ctx.with_round(index),
            level=logging.DEBUG,
            endpoints=len(results),
            failures=failures,
        )
        return build_snapshot(index, zip(results, touched)), touched

    def _finish(self, tracker: TerminationTracker, *, rounds: int) -> SessionOutcome:
        reason = tracker.decision.reason
        status = "cancelled" if reason is StopReason.CANCELLED else "success"
        normalized_log_event(
            self._logger,
            "session.stop",
            self._ctx,
            phase="session",
            level=logging.INFO,
            status=status,
            reason=reason.value if reason else None,
            rounds=rounds,
        )
        return SessionOutcome(status=status, rounds=rounds, reason=reason)


__all__ = ["PingSession", "SessionOutcome"]
