"""Termination policy for probe sessions.

A session is ``RUNNING`` until one of three independent conditions moves it
to the terminal ``STOPPED`` state:

* the configured round count has been reached,
* any endpoint of the just-finished round reached the consecutive-error
  ceiling (the whole session halts, not just that endpoint),
* the session's cancellation token fired (checked before each round).

Decisions are returned as :class:`Decision` values by a per-session
:class:`TerminationTracker`; no module-level state is involved, so sessions
are re-entrant and testable in isolation.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProbeError
from ..base.models import EndpointStats


class TerminationState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class StopReason(str, Enum):
    COUNT_REACHED = "count_reached"
    ERROR_CEILING = "error_ceiling"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Decision:
    """Outcome of one termination check."""

    state: TerminationState
    reason: Optional[StopReason] = None

    @property
    def stopped(self) -> bool:
        return self.state is TerminationState.STOPPED


CONTINUE = Decision(TerminationState.RUNNING)


@dataclass(frozen=True)
class TerminationPolicy:
    """Round count and consecutive-error ceiling of a session.

    Attributes:
        count: Run exactly this many rounds (``None`` = unbounded).
        error_ceiling: Stop once any endpoint has this many consecutive
            failures (``None`` = disabled).
    """

    count: Optional[int] = None
    error_ceiling: Optional[int] = None

    def validate(self) -> "TerminationPolicy":
        """Raise ``ProbeError(CONFIGURATION)`` for out-of-range settings."""
        if self.count is not None and self.count < 1:
            raise ProbeError(ErrorCode.CONFIGURATION, "ping count cannot be less than 1")
        if self.error_ceiling is not None and self.error_ceiling < 1:
            raise ProbeError(ErrorCode.CONFIGURATION, "error count cannot be less than 1")
        return self

    def tracker(self) -> "TerminationTracker":
        """Validate and return a fresh tracker in the ``RUNNING`` state."""
        return TerminationTracker(self.validate())


class TerminationTracker:
    """Per-session state machine driven by the orchestrator."""

    def __init__(self, policy: TerminationPolicy) -> None:
        self._policy = policy
        self._decision = CONTINUE

    @property
    def decision(self) -> Decision:
        return self._decision

    @property
    def stopped(self) -> bool:
        return self._decision.stopped

    def _stop(self, reason: StopReason) -> Decision:
        if not self._decision.stopped:
            self._decision = Decision(TerminationState.STOPPED, reason)
        return self._decision

    def cancel(self) -> Decision:
        """Record external cancellation."""
        return self._stop(StopReason.CANCELLED)

    def before_round(self, index: int, token: Optional[CancellationToken] = None) -> Decision:
        """Check whether round ``index`` (1-based) may start."""
        if self._decision.stopped:
            return self._decision
        if token is not None and token.cancelled:
            return self._stop(StopReason.CANCELLED)
        if self._policy.count is not None and index > self._policy.count:
            return self._stop(StopReason.COUNT_REACHED)
        return self._decision

    def after_round(self, index: int, round_stats: Iterable[EndpointStats]) -> Decision:
        """Evaluate the stats touched by round ``index`` once it has drained."""
        if self._decision.stopped:
            return self._decision
        ceiling = self._policy.error_ceiling
        if ceiling is not None and any(s.error_count >= ceiling for s in round_stats):
            return self._stop(StopReason.ERROR_CEILING)
        if self._policy.count is not None and index >= self._policy.count:
            return self._stop(StopReason.COUNT_REACHED)
        return self._decision


__all__ = [
    "TerminationState",
    "StopReason",
    "Decision",
    "TerminationPolicy",
    "TerminationTracker",
]
