"""Tests for the netperf runner's polling and outcome handling."""
from __future__ import annotations

import threading

import pytest

from cluster_probe.base.cancellation import CancellationToken
from cluster_probe.base.errors import ErrorCode, ProbeError
from cluster_probe.base.models import NetperfNodeResult, NetperfResult
from cluster_probe.netperf import run_netperf


class _Admin:
    def __init__(self, result=None, error=None, release: threading.Event | None = None):
        self.result = result or NetperfResult([NetperfNodeResult("n1:9000", tx=1, rx=2)])
        self.error = error
        self.release = release
        self.durations = []

    def netperf(self, duration_ns, timeout=None):
        self.durations.append(duration_ns)
        if self.release is not None:
            self.release.wait(5)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.parametrize("duration", ["0s", "-1s", "ten", ""])
def test_invalid_duration_is_configuration_error(duration):
    admin = _Admin()
    with pytest.raises(ProbeError) as exc:
        run_netperf(admin, duration, CancellationToken())
    assert exc.value.code is ErrorCode.CONFIGURATION
    assert admin.durations == []


def test_success_returns_result_and_passes_duration():
    admin = _Admin()
    outcome = run_netperf(admin, "2s", CancellationToken(), poll_interval=0.01)

    assert outcome.status == "success"
    assert outcome.result is admin.result
    assert admin.durations == [2_000_000_000]


def test_progress_is_reported_while_running():
    release = threading.Event()
    admin = _Admin(release=release)
    ticks = []

    def _progress():
        ticks.append(1)
        if len(ticks) == 3:
            release.set()

    outcome = run_netperf(admin, "1s", CancellationToken(), on_progress=_progress, poll_interval=0.01)

    assert outcome.ok
    assert len(ticks) >= 3
    assert outcome.polls == len(ticks)


def test_failure_is_reported_as_error_outcome():
    admin = _Admin(error=ProbeError(ErrorCode.AUTH, "denied"))
    outcome = run_netperf(admin, "1s", CancellationToken(), poll_interval=0.01)

    assert outcome.status == "error"
    assert outcome.error.code is ErrorCode.AUTH


def test_cancellation_returns_without_waiting_for_call():
    release = threading.Event()
    token = CancellationToken()
    admin = _Admin(release=release)

    outcome = run_netperf(
        admin, "10s", token, on_progress=lambda: token.cancel("interrupt"), poll_interval=0.01
    )
    release.set()

    assert outcome.status == "cancelled"
    assert outcome.result is None
