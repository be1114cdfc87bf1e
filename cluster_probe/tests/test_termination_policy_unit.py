"""Unit tests for the termination state machine."""
from __future__ import annotations

import pytest

from cluster_probe.base.cancellation import CancellationToken
from cluster_probe.base.errors import ErrorCode, ProbeError
from cluster_probe.base.models import EndpointStats
from cluster_probe.probe.termination import StopReason, TerminationPolicy, TerminationState


@pytest.mark.parametrize(
    "policy, message",
    [
        (TerminationPolicy(count=0), "ping count cannot be less than 1"),
        (TerminationPolicy(count=-3), "ping count cannot be less than 1"),
        (TerminationPolicy(error_ceiling=0), "error count cannot be less than 1"),
    ],
)
def test_invalid_policy_is_configuration_error(policy, message):
    with pytest.raises(ProbeError) as exc:
        policy.tracker()
    assert exc.value.code is ErrorCode.CONFIGURATION
    assert exc.value.message == message


def test_count_stops_after_exact_number_of_rounds():
    tracker = TerminationPolicy(count=2).tracker()

    assert tracker.before_round(1).state is TerminationState.RUNNING
    assert not tracker.after_round(1, [EndpointStats()]).stopped
    assert not tracker.before_round(2).stopped
    decision = tracker.after_round(2, [EndpointStats()])
    assert decision.stopped and decision.reason is StopReason.COUNT_REACHED


def test_error_ceiling_any_endpoint_stops_session():
    tracker = TerminationPolicy(error_ceiling=2).tracker()
    healthy = EndpointStats(min_ns=1, max_ns=1, sum_ns=1, avg_ns=1, sample_count=1)

    assert not tracker.after_round(1, [healthy, EndpointStats(error_count=1)]).stopped
    decision = tracker.after_round(2, [healthy, EndpointStats(error_count=2)])
    assert decision.reason is StopReason.ERROR_CEILING


def test_error_ceiling_checked_before_count():
    tracker = TerminationPolicy(count=1, error_ceiling=1).tracker()
    decision = tracker.after_round(1, [EndpointStats(error_count=1)])
    assert decision.reason is StopReason.ERROR_CEILING


def test_cancellation_checked_at_round_start():
    token = CancellationToken()
    tracker = TerminationPolicy().tracker()
    assert not tracker.before_round(1, token).stopped

    token.cancel("interrupt")
    decision = tracker.before_round(2, token)
    assert decision.reason is StopReason.CANCELLED


def test_unbounded_policy_never_stops_on_its_own():
    tracker = TerminationPolicy().tracker()
    for index in range(1, 50):
        assert not tracker.before_round(index).stopped
        assert not tracker.after_round(index, [EndpointStats(error_count=index)]).stopped


def test_stopped_is_terminal():
    tracker = TerminationPolicy(count=1).tracker()
    tracker.after_round(1, [])
    assert tracker.cancel().reason is StopReason.COUNT_REACHED
    assert tracker.stopped
