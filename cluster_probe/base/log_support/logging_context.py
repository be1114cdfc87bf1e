"""Structured logging context object for probe sessions.

:class:`LogContext` carries the fields shared by the events of one session
(target alias, endpoint, round counter) plus an ``extra`` mapping. ``to_dict``
merges ``extra`` and prunes ``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for probe logging events."""

    target: Optional[str] = None
    endpoint: Optional[str] = None
    round: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_round(self, index: int) -> "LogContext":
        """Return a copy bound to round ``index``."""
        return replace(self, round=index, extra=dict(self.extra))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
