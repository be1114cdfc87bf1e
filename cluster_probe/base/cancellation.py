"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the session-scoped cancellation constructs via the canonical
``cluster_probe.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` carries the single cancellation signal of a probe or
  netperf session into every round, every inter-round wait and the topology
  retry loop.
- ``CancelledError`` is raised by operations that observe a cancellation
  request and cannot return a meaningful partial result.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
