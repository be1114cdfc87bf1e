"""
Network throughput test results.

A netperf run reports, per node, the bytes per second transmitted and
received while the node exchanged traffic with its peers.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class NetperfNodeResult:
    """Throughput measured by one node (bytes per second)."""

    endpoint: str
    tx: int = 0
    rx: int = 0
    error: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NetperfNodeResult":
        return cls(
            endpoint=str(data.get("endpoint") or ""),
            tx=int(data.get("tx") or 0),
            rx=int(data.get("rx") or 0),
            error=data.get("error") or None,
        )


@dataclass(frozen=True)
class NetperfResult:
    """Cluster-wide throughput test result."""

    node_results: List[NetperfNodeResult] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NetperfResult":
        nodes = data.get("nodeResults") or data.get("node_results") or []
        return cls(node_results=[NetperfNodeResult.from_mapping(n) for n in nodes if isinstance(n, Mapping)])

    def to_dict(self) -> Dict[str, Any]:
        return {"nodeResults": [asdict(n) for n in self.node_results]}


__all__ = ["NetperfNodeResult", "NetperfResult"]
