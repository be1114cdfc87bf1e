"""Response checking helpers shared by the admin collaborators.

Non-success responses are turned into :class:`ProbeError` values whose code
is derived from the HTTP status and whose message prefers the server's own
error description (``{"Code": ..., "Message": ...}`` bodies).
"""
from __future__ import annotations

import json
from typing import Optional

import httpx

from ..base.errors import ErrorCode, ProbeError
from ..base.errors_parts.classification import _HTTP_STATUS_MAP


def status_error(
    response: httpx.Response,
    *,
    target: Optional[str] = None,
    endpoint: Optional[str] = None,
) -> ProbeError:
    """Build a :class:`ProbeError` describing a non-success ``response``."""
    status = response.status_code
    code = _HTTP_STATUS_MAP.get(status, ErrorCode.UNEXPECTED_STATUS)
    message = f"unexpected status {status}"
    detail = _server_message(response)
    if detail:
        message = f"{message}: {detail}"
    return ProbeError(
        code=code,
        message=message,
        target=target,
        endpoint=endpoint,
        retryable=code in (ErrorCode.UNAVAILABLE, ErrorCode.TIMEOUT),
    )


def _server_message(response: httpx.Response) -> Optional[str]:
    if response.request.method == "HEAD" or not response.content:
        return None
    try:
        body = json.loads(response.content)
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("Message") or body.get("message") or body.get("Code")
    return None


def ensure_success(
    response: httpx.Response,
    *,
    target: Optional[str] = None,
    endpoint: Optional[str] = None,
) -> httpx.Response:
    """Return ``response`` unchanged when successful, else raise ``ProbeError``."""
    if response.is_success:
        return response
    raise status_error(response, target=target, endpoint=endpoint)


__all__ = ["status_error", "ensure_success"]
