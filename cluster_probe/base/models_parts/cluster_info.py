"""
Cluster topology as reported by the admin "server info" call.

Only the fields the probe session needs are modelled; unknown keys in the
server response are ignored.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional


@dataclass(frozen=True)
class ServerProperties:
    """One node of the cluster."""

    endpoint: str
    state: Optional[str] = None
    version: Optional[str] = None
    uptime: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ServerProperties":
        uptime = data.get("uptime")
        return cls(
            endpoint=str(data.get("endpoint") or ""),
            state=data.get("state"),
            version=data.get("version"),
            uptime=int(uptime) if isinstance(uptime, (int, float)) else None,
        )


@dataclass(frozen=True)
class ClusterInfo:
    """Topology snapshot used to fan out probes in distributed mode."""

    mode: Optional[str] = None
    deployment_id: Optional[str] = None
    servers: List[ServerProperties] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClusterInfo":
        servers = [
            ServerProperties.from_mapping(item)
            for item in data.get("servers") or []
            if isinstance(item, Mapping) and item.get("endpoint")
        ]
        return cls(
            mode=data.get("mode"),
            deployment_id=data.get("deploymentID") or data.get("deployment_id"),
            servers=servers,
        )


__all__ = ["ServerProperties", "ClusterInfo"]
