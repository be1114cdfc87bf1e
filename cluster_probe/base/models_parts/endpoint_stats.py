"""
Per-endpoint running latency aggregate.

:class:`EndpointStats` is the immutable value folded by
``cluster_probe.probe.aggregator.update_stats``. Durations are integer
nanoseconds; only successful samples contribute to ``min``/``max``/``sum``/
``average``.

Note on ``min_ns``: an endpoint whose probes have only failed so far reports
``min_ns == 0``. Consumers must read that as "no data" (see ``has_samples``)
rather than as a zero-latency observation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EndpointStats:
    """Immutable latency and error aggregate for one endpoint host.

    Attributes:
        min_ns: Smallest successful round trip (0 until the first success).
        max_ns: Largest successful round trip.
        sum_ns: Sum of successful round trips.
        avg_ns: ``sum_ns // sample_count`` (0 without samples).
        error_count: Consecutive failures since the last success.
        last_error: Message of the most recent failure while failing, else ``None``.
        sample_count: Number of successful samples.
    """

    min_ns: int = 0
    max_ns: int = 0
    sum_ns: int = 0
    avg_ns: int = 0
    error_count: int = 0
    last_error: Optional[str] = None
    sample_count: int = 0

    @property
    def has_samples(self) -> bool:
        """Whether at least one successful sample has been recorded."""
        return self.sample_count > 0


__all__ = ["EndpointStats"]
