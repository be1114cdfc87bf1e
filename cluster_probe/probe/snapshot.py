"""Build display-ready round snapshots from aggregated statistics.

Durations are rounded to microsecond resolution and rendered as compact
duration strings here, so the aggregator itself stays free of any
presentation concern.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from ..base.durations import MICROSECOND, format_duration, round_duration
from ..base.models import EndpointStats, EndpointStatsView, ProbeResult, RoundSnapshot


def _us(ns: int) -> str:
    return format_duration(round_duration(ns, MICROSECOND))


def build_view(result: ProbeResult, stats: EndpointStats) -> EndpointStatsView:
    """Render ``stats`` (already updated with ``result``) for one endpoint."""
    return EndpointStatsView(
        endpoint=result.endpoint,
        min=_us(stats.min_ns),
        max=_us(stats.max_ns),
        average=_us(stats.avg_ns),
        error_count=str(stats.error_count),
        roundtrip=_us(result.response_time_ns),
        error=stats.last_error or None,
    )


def build_snapshot(counter: int, entries: Iterable[Tuple[ProbeResult, EndpointStats]]) -> RoundSnapshot:
    """Bundle one round's ``(result, stats)`` pairs, in arrival order."""
    return RoundSnapshot(counter=counter, servers=[build_view(r, s) for r, s in entries])


__all__ = ["build_view", "build_snapshot"]
