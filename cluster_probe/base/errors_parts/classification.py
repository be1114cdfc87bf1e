"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements ``httpx`` exception mapping, HTTP status extraction and
status-to-code mapping, with a message heuristic as the last resort.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .probe_error import ProbeError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.CONFIGURATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.UNAVAILABLE,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProbeError passthrough.
        2. Timeouts (``httpx.TimeoutException`` and builtin ``TimeoutError``).
        3. Transport failures (connection refused, DNS, TLS).
        4. HTTP status mapping.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProbeError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return ErrorCode.UNAVAILABLE
    status = _extract_status(exc)
    if status is not None:
        return _HTTP_STATUS_MAP.get(status, ErrorCode.UNEXPECTED_STATUS)
    return ErrorCode.UNKNOWN


def wrap_exception(
    exc: Exception,
    *,
    target: Optional[str] = None,
    endpoint: Optional[str] = None,
) -> ProbeError:
    """Return ``exc`` as a :class:`ProbeError`, classifying foreign exceptions.

    Existing ``ProbeError`` instances are returned unchanged apart from filling
    in missing target/endpoint context.
    """
    if isinstance(exc, ProbeError):
        if exc.target is None:
            exc.target = target
        if exc.endpoint is None:
            exc.endpoint = endpoint
        return exc
    code = classify_exception(exc)
    return ProbeError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        target=target,
        endpoint=endpoint,
        retryable=code in (ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE),
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "wrap_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
