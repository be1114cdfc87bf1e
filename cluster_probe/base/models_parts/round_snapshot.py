"""
Display-ready per-round snapshot.

After each round the session converts the touched endpoints' statistics into
an :class:`EndpointStatsView` (durations rounded to microseconds and rendered
as strings) and bundles them into a :class:`RoundSnapshot`. The snapshot is
handed to the presenter and then discarded.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .endpoint import Endpoint


@dataclass(frozen=True)
class EndpointStatsView:
    """String rendering of one endpoint's statistics for one round."""

    endpoint: Endpoint
    min: str
    max: str
    average: str
    error_count: str
    roundtrip: str
    error: Optional[str] = None

    @property
    def failing(self) -> bool:
        return self.error_count != "0"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "endpoint": self.endpoint.to_dict(),
            "min": self.min,
            "max": self.max,
            "average": self.average,
            "error-count": self.error_count,
        }
        if self.error:
            data["error"] = self.error
        data["roundtrip"] = self.roundtrip
        return data


@dataclass(frozen=True)
class RoundSnapshot:
    """Ordinal round counter plus the per-endpoint views of that round."""

    counter: int
    servers: List[EndpointStatsView] = field(default_factory=list)
    status: str = "success"

    @property
    def distributed(self) -> bool:
        return len(self.servers) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "counter": str(self.counter),
            "servers": [s.to_dict() for s in self.servers],
        }


__all__ = ["EndpointStatsView", "RoundSnapshot"]
