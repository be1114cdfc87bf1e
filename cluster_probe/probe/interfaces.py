"""Structural protocols for the probe session's collaborators.

The session depends only on these shapes, so tests can substitute fakes for
the admin client, the probe stream and the presenter without any network.
"""
from __future__ import annotations

from typing import Iterator, Optional, Protocol, runtime_checkable

from ..base.models import ClusterInfo, ProbeResult, RoundSnapshot, ServerProperties


@runtime_checkable
class TopologySource(Protocol):
    def server_info(self, timeout: Optional[float] = None) -> ClusterInfo: ...


@runtime_checkable
class ProbeStream(Protocol):
    def alive(self, opts=None, *servers: ServerProperties) -> Iterator[ProbeResult]: ...


@runtime_checkable
class ResultPresenter(Protocol):
    def emit(self, snapshot: RoundSnapshot) -> None: ...

    def finish(self, outcome) -> None: ...


__all__ = ["TopologySource", "ProbeStream", "ResultPresenter"]
