"""Typed options for a ping session.

All fields are independently optional: without ``count`` and ``error_count``
the session runs until cancelled; ``interval`` defaults to one second.
Range validation (``count >= 1``) is owned by the termination policy so it is
reported as a configuration error before the first round.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_INTERVAL_SECONDS


class PingOptions(BaseModel):
    """Round count, error ceiling, interval and fan-out mode of a ping session."""

    model_config = ConfigDict(frozen=True)

    count: Optional[int] = None
    error_count: Optional[int] = None
    interval: float = Field(default=DEFAULT_INTERVAL_SECONDS, ge=0)
    distributed: bool = False


__all__ = ["PingOptions"]
