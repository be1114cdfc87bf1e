"""cluster_probe package

Liveness probing and connection management for storage cluster administration.

Purpose:
    Maintain a cache of authenticated, TLS-configured client handles per
    cluster target, drive repeated liveness probe rounds against one endpoint
    or every node of a cluster, and aggregate per-endpoint latency statistics
    until a round count, a consecutive-error ceiling or cancellation stops the
    session.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProbeError`, :class:`ErrorCode`
    - Connection cache: :class:`ClientCache`
    - Probe session: :class:`PingSession`, :class:`TerminationPolicy`
"""

from .base.errors import ErrorCode, ProbeError
from .base.http import CachedClient, ClientCache
from .probe import PingSession, SessionOutcome, TerminationPolicy

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "ProbeError",
    "CachedClient",
    "ClientCache",
    "PingSession",
    "SessionOutcome",
    "TerminationPolicy",
]
