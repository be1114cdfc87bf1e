"""CLI tests: argument wiring, exit codes and rendered output.

Network access is replaced by a connection cache whose clients use
``httpx.MockTransport``; targets come from ``MC_HOST_<alias>``.
"""
from __future__ import annotations

import json
import signal

import httpx
import pytest

from cluster_probe.base.cancellation import CancellationToken
from cluster_probe.service import cli
from cluster_probe.service.cli import main
from cluster_probe.service.cli.cli_actions import (
    EXIT_CANCELLED,
    EXIT_ERROR,
    EXIT_OK,
    handle_ping,
    sigint_cancels,
)
from cluster_probe.service.cli.cli_parser import build_parser

from .http_support import RecordingHandler, mock_cache

NETPERF_BODY = {"nodeResults": [{"endpoint": "localhost:9000", "tx": 2048, "rx": 4096}]}


def _respond(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/speedtest/net"):
        return httpx.Response(200, json=NETPERF_BODY)
    return httpx.Response(200)


@pytest.fixture()
def handler(monkeypatch):
    monkeypatch.setenv("MC_HOST_local", "http://AK:SK@localhost:9000")
    return RecordingHandler(_respond)


@pytest.fixture()
def cache(handler):
    cache = mock_cache(handler)
    yield cache
    cache.close()


def _documents(text):
    decoder = json.JSONDecoder()
    docs, pos = [], 0
    text = text.strip()
    while pos < len(text):
        doc, end = decoder.raw_decode(text, pos)
        docs.append(doc)
        pos = end
        while pos < len(text) and text[pos].isspace():
            pos += 1
    return docs


def test_parser_defaults():
    args = build_parser().parse_args(["ping", "myminio"])
    assert (args.count, args.error_count, args.interval, args.distributed) == (None, None, 1.0, False)
    net = build_parser().parse_args(["netperf", "myminio"])
    assert net.duration == "10s"


def test_ping_json_rounds(handler, cache, capsys):
    code = main(["ping", "local", "-c", "2", "-i", "0", "--json"], cache=cache)

    assert code == EXIT_OK
    docs = _documents(capsys.readouterr().out)
    assert [d["counter"] for d in docs] == ["1", "2"]
    assert docs[0]["servers"][0]["endpoint"] == {"scheme": "http", "host": "localhost", "port": "9000"}
    assert all(r.method == "HEAD" for r in handler.requests)
    assert len(handler.requests) == 2
    assert len(cache) == 1


def test_ping_text_output(handler, cache, capsys):
    code = main(["ping", "local", "--count", "1", "--interval", "0"], cache=cache)

    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("1: http://localhost:9000   min=")
    assert "errors=0" in out


def test_unknown_alias_exits_with_error(handler, cache, capsys):
    code = main(["ping", "nosuch", "-c", "1"], cache=cache)

    assert code == EXIT_ERROR
    assert "no such alias `nosuch`" in capsys.readouterr().err
    assert handler.requests == []


@pytest.mark.parametrize(
    "argv, message",
    [
        (["ping", "local", "-c", "0"], "ping count cannot be less than 1"),
        (["ping", "local", "-e", "0"], "error count cannot be less than 1"),
    ],
)
def test_invalid_limits_exit_before_probing(handler, cache, capsys, argv, message):
    assert main(argv, cache=cache) == EXIT_ERROR
    assert message in capsys.readouterr().err
    assert handler.requests == []


def test_negative_interval_is_rejected(handler, cache, capsys):
    assert main(["ping", "local", "-i", "-1"], cache=cache) == EXIT_ERROR
    assert "configuration" in capsys.readouterr().err


def test_cancelled_session_exit_code(handler, cache, capsys):
    token = CancellationToken()
    token.cancel("interrupt")
    args = build_parser().parse_args(["ping", "local"])

    assert handle_ping(args, cache, token) == EXIT_CANCELLED
    assert "cancelled after 0 round(s)" in capsys.readouterr().err


def test_netperf_json(handler, cache, capsys):
    code = main(["netperf", "local", "--duration", "1s", "--json"], cache=cache)

    assert code == EXIT_OK
    doc = json.loads(capsys.readouterr().out)
    assert doc["status"] == "success"
    assert doc["netResult"]["nodeResults"][0]["tx"] == 2048
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.params["duration"] == "1s"


def test_netperf_invalid_duration(handler, cache, capsys):
    assert main(["netperf", "local", "--duration", "0s"], cache=cache) == EXIT_ERROR
    assert "duration cannot be 0 or negative" in capsys.readouterr().err
    assert handler.requests == []


def test_sigint_cancels_token_and_restores_handler():
    before = signal.getsignal(signal.SIGINT)
    token = CancellationToken()
    with sigint_cancels(token):
        signal.raise_signal(signal.SIGINT)
    assert token.cancelled
    assert token.reason == "interrupted"
    assert signal.getsignal(signal.SIGINT) is before


def test_main_closes_the_cache_it_creates(handler, monkeypatch, capsys):
    own = mock_cache(handler)
    closed = []
    monkeypatch.setattr(own, "close", lambda: closed.append(True))
    monkeypatch.setattr(cli, "ClientCache", lambda: own)

    assert cli.main(["ping", "local", "-c", "1", "-i", "0"]) == EXIT_OK
    assert closed == [True]
    assert len(handler.requests) == 1
