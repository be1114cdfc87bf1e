"""Fakes implementing the probe session's collaborator protocols.

Orchestration tests use them to run without sockets or sleeping.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from cluster_probe.base.errors import ErrorCode, ProbeError
from cluster_probe.base.models import ClusterInfo, Endpoint, ProbeResult, RoundSnapshot, ServerProperties

MS = 1_000_000

LOCAL = Endpoint("http", "localhost", "9000")


def ok(ns: int, endpoint: Endpoint = LOCAL) -> ProbeResult:
    return ProbeResult(endpoint, ns)


def failed(message: str = "connection refused", endpoint: Endpoint = LOCAL) -> ProbeResult:
    return ProbeResult(endpoint, 0, ProbeError(ErrorCode.UNAVAILABLE, message, endpoint=endpoint.key))


class FakeProbeStream:
    """Yields one scripted list of results per ``alive`` call.

    Once the script runs out the last round repeats.
    """

    def __init__(self, rounds: Sequence[Sequence[ProbeResult]], on_round=None) -> None:
        self._rounds = list(rounds)
        self._on_round = on_round
        self.calls: List[tuple] = []

    def alive(self, opts=None, *servers: ServerProperties) -> Iterator[ProbeResult]:
        index = len(self.calls)
        self.calls.append(servers)
        if self._on_round is not None:
            self._on_round(index + 1)
        results = self._rounds[index] if index < len(self._rounds) else self._rounds[-1]
        yield from results


class FakeTopology:
    """Fails ``failures`` times, then returns ``info``."""

    def __init__(self, info: Optional[ClusterInfo] = None, failures: int = 0, on_failure=None) -> None:
        self.info = info or ClusterInfo(servers=[])
        self.failures = failures
        self.on_failure = on_failure
        self.calls: List[Optional[float]] = []

    def server_info(self, timeout: Optional[float] = None) -> ClusterInfo:
        self.calls.append(timeout)
        if len(self.calls) <= self.failures:
            if self.on_failure is not None:
                self.on_failure(len(self.calls))
            raise ProbeError(ErrorCode.TIMEOUT, "context deadline exceeded")
        return self.info


class RecordingPresenter:
    def __init__(self) -> None:
        self.snapshots: List[RoundSnapshot] = []
        self.outcomes: list = []

    def emit(self, snapshot: RoundSnapshot) -> None:
        self.snapshots.append(snapshot)

    def finish(self, outcome) -> None:
        self.outcomes.append(outcome)
