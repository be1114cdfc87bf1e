"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a probe session (for example while the cluster topology is still being
fetched).
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Cancellation is a normal termination path rather than a failure; callers
    map it to a ``cancelled`` session status instead of an error report.
    """

__all__ = ["CancelledError"]
