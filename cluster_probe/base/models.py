"""Probe data model public surface.

Re-exports the one-class-per-file implementations under ``models_parts``.
"""

from .models_parts import (
    ClusterInfo,
    Endpoint,
    EndpointStats,
    EndpointStatsView,
    NetperfNodeResult,
    NetperfResult,
    ProbeResult,
    RoundSnapshot,
    ServerProperties,
)

__all__ = [
    "ClusterInfo",
    "Endpoint",
    "EndpointStats",
    "EndpointStatsView",
    "NetperfNodeResult",
    "NetperfResult",
    "ProbeResult",
    "RoundSnapshot",
    "ServerProperties",
]
