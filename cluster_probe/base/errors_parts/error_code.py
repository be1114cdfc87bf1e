"""
Normalized probe error codes (taxonomy).

Values are lowercase snake_case and are considered a stable public contract
for logging and machine-readable output.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIGURATION = "configuration"
    CONSTRUCTION = "construction"
    TOPOLOGY = "topology"
    AUTH = "auth"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNEXPECTED_STATUS = "unexpected_status"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
