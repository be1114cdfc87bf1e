"""Pytest fixtures shared by the cluster_probe test suite."""

from __future__ import annotations

import os
from typing import Iterator

import pytest

from cluster_probe.base.timeouts import TimeoutConfig

from .fakes import RecordingPresenter


@pytest.fixture()
def fast_timeouts() -> TimeoutConfig:
    """Timeouts small enough that retry loops finish quickly."""
    return TimeoutConfig(
        probe_timeout_seconds=1.0,
        topology_timeout_seconds=0.5,
        topology_retry_seconds=0.01,
    )


@pytest.fixture()
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Point the alias file at an empty temp path and drop cached aliases."""
    from cluster_probe.config import reset_config_cache

    monkeypatch.setenv("CLUSTER_PROBE_CONFIG_FILE", str(tmp_path / "absent.json"))
    for name in [k for k in os.environ if k.startswith("MC_HOST_")]:
        monkeypatch.delenv(name)
    reset_config_cache()
    yield
    reset_config_cache()
