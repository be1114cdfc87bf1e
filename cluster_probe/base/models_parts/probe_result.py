"""
Single liveness probe outcome.

A :class:`ProbeResult` describes one endpoint in one round: who was probed,
how long the round trip took and, when the probe failed, why. Results are
produced by the probe stream and consumed exactly once by the aggregator.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import ProbeError
from .endpoint import Endpoint


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of probing one endpoint once.

    Attributes:
        endpoint: Identity of the probed server.
        response_time_ns: Measured round trip in integer nanoseconds (also
            recorded for failed probes, where it is the time until failure).
        error: Failure details, or ``None`` for a successful probe.
    """

    endpoint: Endpoint
    response_time_ns: int
    error: Optional[ProbeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = ["ProbeResult"]
