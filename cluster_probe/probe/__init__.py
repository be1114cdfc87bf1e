"""Probe core: session orchestration, aggregation and termination.

Nothing in this package imports the presentation layer; presenters are
reached only through the :class:`ResultPresenter` protocol.
"""

from .aggregator import fold_round, update_stats
from .interfaces import ProbeStream, ResultPresenter, TopologySource
from .session import PingSession, SessionOutcome
from .snapshot import build_snapshot, build_view
from .termination import (
    Decision,
    StopReason,
    TerminationPolicy,
    TerminationState,
    TerminationTracker,
)
from .topology import fetch_topology

__all__ = [
    "PingSession",
    "SessionOutcome",
    "TerminationPolicy",
    "TerminationTracker",
    "TerminationState",
    "StopReason",
    "Decision",
    "update_stats",
    "fold_round",
    "build_snapshot",
    "build_view",
    "fetch_topology",
    "ProbeStream",
    "ResultPresenter",
    "TopologySource",
]
