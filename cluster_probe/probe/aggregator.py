"""Online per-endpoint latency aggregation.

``update_stats`` folds one :class:`ProbeResult` into the previous
:class:`EndpointStats` of that endpoint and returns the next value. It keeps
no hidden state: the caller owns the per-host mapping. Memory stays constant
per endpoint however many rounds run, since only min/max/sum/count are kept.

Arithmetic is integer-only (nanoseconds) and the average uses floor
division, so results are exact at any magnitude.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..base.models import EndpointStats, ProbeResult


def _error_message(result: ProbeResult) -> str:
    err = result.error
    return err.message if err is not None else ""


def update_stats(prior: Optional[EndpointStats], result: ProbeResult) -> EndpointStats:
    """Return the aggregate after observing ``result``.

    Failure: latency fields carry forward unchanged, the consecutive error
    count grows by one and the message is recorded. Without history every
    latency field is 0.

    Success: the error count resets; ``min``/``max``/``sum``/``count`` absorb
    the sample (an absent or zero prior ``min`` is replaced by the sample) and
    ``average = sum // count``.
    """
    if result.error is not None:
        if prior is None:
            return EndpointStats(error_count=1, last_error=_error_message(result))
        return EndpointStats(
            min_ns=prior.min_ns,
            max_ns=prior.max_ns,
            sum_ns=prior.sum_ns,
            avg_ns=prior.avg_ns,
            error_count=prior.error_count + 1,
            last_error=_error_message(result),
            sample_count=prior.sample_count,
        )

    sample = result.response_time_ns
    if prior is None:
        return EndpointStats(
            min_ns=sample,
            max_ns=sample,
            sum_ns=sample,
            avg_ns=sample,
            sample_count=1,
        )
    floor = prior.min_ns if prior.has_samples else sample
    total = prior.sum_ns + sample
    count = prior.sample_count + 1
    return EndpointStats(
        min_ns=min(floor, sample),
        max_ns=max(prior.max_ns, sample),
        sum_ns=total,
        avg_ns=total // count,
        sample_count=count,
    )


def fold_round(
    stats: Dict[str, EndpointStats],
    results: Iterable[ProbeResult],
) -> List[EndpointStats]:
    """Apply ``update_stats`` for each result, updating ``stats`` in place.

    Returns the new aggregates in the order of ``results``.
    """
    updated: List[EndpointStats] = []
    for result in results:
        key = result.endpoint.key
        current = update_stats(stats.get(key), result)
        stats[key] = current
        updated.append(current)
    return updated


__all__ = ["update_stats", "fold_round"]
