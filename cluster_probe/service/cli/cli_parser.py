"""Argument parser for ``cluster-probe``.

Wires subcommand shapes only; handlers live in ``cli_actions``. No I/O or
network calls happen here.
"""

from __future__ import annotations

import argparse

from ...base.constants import APP_NAME, DEFAULT_INTERVAL_SECONDS, DEFAULT_NETPERF_DURATION


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("target", metavar="TARGET", help="alias of the cluster, e.g. myminio")
    parser.add_argument("--insecure", action="store_true", help="disable TLS certificate verification")
    parser.add_argument("--debug", action="store_true", help="log every HTTP request and response")
    parser.add_argument("--json", action="store_true", help="print JSON documents instead of text")
    parser.add_argument("--log-file", default=None, help="also write logs to this rotating file")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``ping`` and ``netperf`` subcommands."""
    p = argparse.ArgumentParser(prog=APP_NAME, description="Cluster liveness and latency probe")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ping = sub.add_parser("ping", help="Measure liveness and latency of a cluster")
    _add_common_flags(p_ping)
    p_ping.add_argument("-c", "--count", type=int, default=None, help="stop after N rounds")
    p_ping.add_argument(
        "-e",
        "--error-count",
        type=int,
        default=None,
        help="stop once any endpoint has E consecutive errors",
    )
    p_ping.add_argument(
        "-i",
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL_SECONDS,
        help="seconds to wait between rounds",
    )
    p_ping.add_argument(
        "-a", "--distributed", action="store_true", help="probe every node of the cluster"
    )

    p_net = sub.add_parser("netperf", help="Measure network throughput between cluster nodes")
    _add_common_flags(p_net)
    p_net.add_argument(
        "--duration",
        default=DEFAULT_NETPERF_DURATION,
        help="duration of the test, e.g. 10s or 1m",
    )
    return p


__all__ = ["build_parser"]
