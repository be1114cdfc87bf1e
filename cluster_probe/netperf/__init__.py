"""Network throughput test sharing the probe session's cancellation discipline."""

from .runner import NetperfOutcome, NetperfSource, run_netperf

__all__ = ["NetperfOutcome", "NetperfSource", "run_netperf"]
