"""Distributed-mode topology fetch with fixed-backoff retries.

The first attempt is bounded by the topology timeout. On failure the fetch
waits ``topology_retry_seconds`` on the session token and tries again, for as
long as the session is not cancelled. Cancellation during the retry loop
raises :class:`CancelledError`; no partial topology is ever returned.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import wrap_exception
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ClusterInfo
from ..base.timeouts import TimeoutConfig, get_timeout_config
from .interfaces import TopologySource


def fetch_topology(
    admin: TopologySource,
    token: CancellationToken,
    *,
    timeouts: Optional[TimeoutConfig] = None,
    ctx: Optional[LogContext] = None,
    logger: Optional[logging.Logger] = None,
) -> ClusterInfo:
    """Return the cluster topology, retrying until success or cancellation.

    Raises:
        CancelledError: the token fired before a fetch succeeded.
    """
    cfg = timeouts or get_timeout_config()
    log = logger or get_logger("cluster_probe.probe")
    attempt = 0
    while True:
        token.raise_if_cancelled()
        attempt += 1
        try:
            info = admin.server_info(timeout=cfg.topology_timeout_seconds)
        except Exception as exc:  # noqa: BLE001 - classified and retried
            err = wrap_exception(exc)
        else:
            normalized_log_event(
                log,
                "topology.fetched",
                ctx,
                phase="topology",
                attempt=attempt,
                servers=len(info.servers),
            )
            return info

        normalized_log_event(
            log,
            "topology.retry",
            ctx,
            phase="topology",
            attempt=attempt,
            error_code=err.code.value,
            level=logging.WARNING,
            error=err.message,
            delay=cfg.topology_retry_seconds,
        )
        if token.wait(cfg.topology_retry_seconds):
            raise CancelledError(token.reason or "topology fetch cancelled")


__all__ = ["fetch_topology"]
