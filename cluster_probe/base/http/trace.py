"""Debug tracing hooks for cluster HTTP clients.

When a target is configured with ``debug``, every request and response is
logged as a structured ``http.request`` / ``http.response`` event at DEBUG
level. Credentials never reach the log: signature and token headers are
redacted.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping

import httpx

from ..logging import LogContext, get_logger, log_event

_REDACTED_HEADERS = frozenset(("authorization", "x-amz-security-token", "cookie"))

EventHooks = Dict[str, List[Callable]]


def redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Return a copy of ``headers`` with credential-bearing values masked."""
    return {
        k: ("**REDACTED**" if k.lower() in _REDACTED_HEADERS else v)
        for k, v in headers.items()
    }


def build_trace_hooks(ctx: LogContext | None = None, logger: logging.Logger | None = None) -> EventHooks:
    """Return ``httpx`` event hooks that log each request/response pair."""
    log = logger or get_logger("cluster_probe.http")

    def _on_request(request: httpx.Request) -> None:
        log_event(
            log,
            "http.request",
            ctx,
            level=logging.DEBUG,
            method=request.method,
            url=str(request.url),
            headers=redact_headers(request.headers),
        )

    def _on_response(response: httpx.Response) -> None:
        log_event(
            log,
            "http.response",
            ctx,
            level=logging.DEBUG,
            method=response.request.method,
            url=str(response.request.url),
            status=response.status_code,
            headers=redact_headers(response.headers),
        )

    return {"request": [_on_request], "response": [_on_response]}


__all__ = ["build_trace_hooks", "redact_headers"]
