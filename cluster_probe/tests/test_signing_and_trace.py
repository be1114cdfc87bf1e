"""Tests for V4 request signing and debug trace hooks."""
from __future__ import annotations

import json
import logging

import httpx

from cluster_probe.base.http import SigV4Auth
from cluster_probe.base.http.trace import build_trace_hooks, redact_headers
from cluster_probe.base.logging import LogContext


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _signed(auth: SigV4Auth, **kwargs) -> httpx.Request:
    request = httpx.Request("GET", "http://localhost:9000/minio/admin/v3/info", **kwargs)
    return next(auth.auth_flow(request))


def test_signature_headers_are_added():
    request = _signed(SigV4Auth("AKID", "SECRET"))

    authorization = request.headers["Authorization"]
    assert authorization.startswith("AWS4-HMAC-SHA256 Credential=AKID/")
    assert "/us-east-1/s3/aws4_request" in authorization
    assert "host" in authorization.split("SignedHeaders=")[1]
    assert "x-amz-date" in request.headers
    assert "x-amz-content-sha256" in request.headers
    assert "x-amz-security-token" not in request.headers


def test_session_token_is_sent():
    request = _signed(SigV4Auth("AKID", "SECRET", "TOKEN"))
    assert request.headers["x-amz-security-token"] == "TOKEN"


def test_unrelated_headers_are_not_signed():
    request = _signed(SigV4Auth("AKID", "SECRET"), headers={"User-Agent": "x", "Accept-Encoding": "identity"})
    signed = request.headers["Authorization"].split("SignedHeaders=")[1].split(",")[0]
    assert "user-agent" not in signed
    assert "accept-encoding" not in signed


def test_redact_headers_masks_credentials():
    headers = {"Authorization": "AWS4 secret", "X-Amz-Security-Token": "t", "Host": "h"}
    redacted = redact_headers(headers)
    assert redacted["Authorization"] == "**REDACTED**"
    assert redacted["X-Amz-Security-Token"] == "**REDACTED**"
    assert redacted["Host"] == "h"


def test_trace_hooks_log_request_and_response():
    logger = logging.getLogger("cluster_probe.tests.trace")
    logger.setLevel(logging.DEBUG)
    collector = _ListHandler()
    logger.handlers[:] = [collector]
    logger.propagate = False

    hooks = build_trace_hooks(LogContext(target="local"), logger)
    request = _signed(SigV4Auth("AKID", "SECRET"))
    hooks["request"][0](request)
    hooks["response"][0](httpx.Response(200, request=request))

    events = [json.loads(m) for m in collector.messages]
    assert [e["event"] for e in events] == ["http.request", "http.response"]
    assert events[0]["target"] == "local"
    headers = {k.lower(): v for k, v in events[0]["headers"].items()}
    assert headers["authorization"] == "**REDACTED**"
    assert events[1]["status"] == 200
