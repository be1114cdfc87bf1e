"""Tests for unsigned liveness probes (fan-out / fan-in, round deadline)."""
from __future__ import annotations

import socket
import threading
import time

import httpx
import pytest

from cluster_probe.admin import AliveOpts, AnonymousClient
from cluster_probe.base.cancellation import CancellationToken
from cluster_probe.base.dto import TargetConfig
from cluster_probe.base.errors import ErrorCode
from cluster_probe.base.http import ClientCache
from cluster_probe.base.models import ServerProperties
from cluster_probe.base.timeouts import TimeoutConfig

from .http_support import RecordingHandler, mock_client


def test_alive_without_servers_probes_own_endpoint_unsigned():
    handler = RecordingHandler(lambda req: httpx.Response(200))
    results = list(AnonymousClient(mock_client(handler)).alive())

    assert len(results) == 1
    result = results[0]
    assert result.ok
    assert result.endpoint.key == "localhost:9000"
    assert result.endpoint.scheme == "http"
    assert result.response_time_ns >= 0
    request = handler.requests[0]
    assert request.method == "HEAD"
    assert request.url.path == "/minio/health/live"
    assert "authorization" not in request.headers


def test_alive_fans_out_to_every_server():
    def _respond(request):
        return httpx.Response(503 if request.url.host == "node2" else 200)

    handler = RecordingHandler(_respond)
    servers = [ServerProperties(f"node{i}:9000") for i in (1, 2, 3)]
    results = list(AnonymousClient(mock_client(handler)).alive(None, *servers))

    by_host = {r.endpoint.host: r for r in results}
    assert set(by_host) == {"node1", "node2", "node3"}
    assert by_host["node1"].ok and by_host["node3"].ok
    failure = by_host["node2"].error
    assert failure.code is ErrorCode.UNAVAILABLE
    assert failure.message == "unexpected status 503"
    assert failure.endpoint == "node2:9000"


def test_transport_failures_become_result_errors():
    def _respond(request):
        if request.url.host == "down":
            raise httpx.ConnectError("connection refused", request=request)
        raise httpx.ConnectTimeout("timed out", request=request)

    servers = [ServerProperties("down:9000"), ServerProperties("slow:9000")]
    results = list(AnonymousClient(mock_client(_respond)).alive(None, *servers))

    codes = {r.endpoint.host: r.error.code for r in results}
    assert codes == {"down": ErrorCode.UNAVAILABLE, "slow": ErrorCode.TIMEOUT}


def test_alive_honours_custom_path_and_scheme():
    handler = RecordingHandler(lambda req: httpx.Response(200))
    client = mock_client(handler, host_url="https://secure.example.net:9443")
    results = list(AnonymousClient(client).alive(AliveOpts(path="/minio/health/ready")))

    assert results[0].endpoint.scheme == "https"
    assert str(handler.requests[0].url) == "https://secure.example.net:9443/minio/health/ready"


@pytest.fixture()
def trickle_url(monkeypatch):
    """Local server that answers every request one header byte at a time."""
    monkeypatch.setenv("NO_PROXY", "*")
    monkeypatch.setenv("no_proxy", "*")
    stop = threading.Event()
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen()
    listener.settimeout(0.1)

    def _trickle(conn):
        with conn:
            try:
                conn.recv(4096)
                for byte in b"HTTP/1.1 200 OK\r\nX-Slow: ":
                    conn.sendall(bytes([byte]))
                    if stop.wait(0.2):
                        return
                while not stop.wait(0.2):
                    conn.sendall(b"a")
            except OSError:
                return

    def _serve():
        while not stop.is_set():
            try:
                conn, _ = listener.accept()
            except OSError:
                continue
            threading.Thread(target=_trickle, args=(conn,), daemon=True).start()

    server = threading.Thread(target=_serve, daemon=True)
    server.start()
    yield f"http://127.0.0.1:{listener.getsockname()[1]}"
    stop.set()
    server.join(timeout=2)
    listener.close()


def _slow_client(url):
    cache = ClientCache()
    return cache, cache.get(TargetConfig(host_url=url, alias="slow"))


def test_trickling_server_is_cut_off_at_probe_timeout(trickle_url):
    cache, client = _slow_client(trickle_url)
    timeouts = TimeoutConfig(probe_timeout_seconds=1.0)
    try:
        started = time.monotonic()
        results = list(AnonymousClient(client, timeouts=timeouts).alive())
        elapsed = time.monotonic() - started
    finally:
        cache.close()

    assert elapsed < 2.5
    assert len(results) == 1
    error = results[0].error
    assert error.code is ErrorCode.TIMEOUT
    assert error.endpoint == results[0].endpoint.key
    assert results[0].response_time_ns >= 900_000_000


def test_cancellation_closes_stream_before_probe_timeout(trickle_url):
    cache, client = _slow_client(trickle_url)
    token = CancellationToken()
    timeouts = TimeoutConfig(probe_timeout_seconds=30.0)
    timer = threading.Timer(0.3, token.cancel, args=("interrupt",))
    try:
        timer.start()
        started = time.monotonic()
        results = list(AnonymousClient(client, timeouts=timeouts, token=token).alive())
        elapsed = time.monotonic() - started
    finally:
        timer.cancel()
        cache.close()

    assert elapsed < 5.0
    assert [r.error.code for r in results] == [ErrorCode.CANCELLED]


def test_fast_endpoints_report_before_slow_one_times_out(trickle_url):
    cache, client = _slow_client(trickle_url)
    slow = ServerProperties(trickle_url.split("://", 1)[1])
    try:
        results = list(
            AnonymousClient(client, timeouts=TimeoutConfig(probe_timeout_seconds=1.0)).alive(
                None, slow, ServerProperties("127.0.0.1:1")
            )
        )
    finally:
        cache.close()

    assert len(results) == 2
    assert results[-1].endpoint.key == slow.endpoint
    assert results[-1].error.code is ErrorCode.TIMEOUT
    assert results[0].error.code is not ErrorCode.TIMEOUT
