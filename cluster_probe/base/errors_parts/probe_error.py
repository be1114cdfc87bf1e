"""
Structured probe error exception type.

Wraps transport, configuration and construction failures with a normalized
`ErrorCode` plus the target/endpoint identity needed to render a
diagnosable message.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProbeError(Exception):
    """Represents a structured probe error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        target: Alias or URL the user asked for, when known.
        endpoint: ``host:port`` of the endpoint involved, when known.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    target: Optional[str] = None
    endpoint: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        """Return a compact string combining location, code and message."""
        where = self.endpoint or self.target
        prefix = f"{where} " if where else ""
        return f"{prefix}{self.code.value}: {self.message}"


__all__ = ["ProbeError"]
