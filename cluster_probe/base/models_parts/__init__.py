"""One-class-per-file parts for the probe data model."""

from .cluster_info import ClusterInfo, ServerProperties
from .endpoint import Endpoint
from .endpoint_stats import EndpointStats
from .netperf_result import NetperfNodeResult, NetperfResult
from .probe_result import ProbeResult
from .round_snapshot import EndpointStatsView, RoundSnapshot

__all__ = [
    "ClusterInfo",
    "ServerProperties",
    "Endpoint",
    "EndpointStats",
    "NetperfNodeResult",
    "NetperfResult",
    "ProbeResult",
    "EndpointStatsView",
    "RoundSnapshot",
]
