"""Base shared constants for the probe core.

Central location to avoid scattering magic strings and default numbers across
the connection cache, the admin collaborators and the probe session.
"""
from __future__ import annotations

import ssl

# Application identity sent with every request
APP_NAME = "cluster-probe"

# TLS baseline; older protocol versions are refused
TLS_MINIMUM_VERSION = ssl.TLSVersion.TLSv1_2

# Connection pool limits
MAX_IDLE_CONNECTIONS_PER_HOST = 256
MAX_CONNECTIONS = 1024

# Admin and health endpoints
HEALTH_LIVE_PATH = "/minio/health/live"
ADMIN_INFO_PATH = "/minio/admin/v3/info"
ADMIN_NETPERF_PATH = "/minio/admin/v3/speedtest/net"

# Request signing scope
SIGNING_SERVICE = "s3"
SIGNING_REGION = "us-east-1"

# Probe session defaults
DEFAULT_INTERVAL_SECONDS = 1.0
DEFAULT_NETPERF_DURATION = "10s"
NETPERF_POLL_INTERVAL_SECONDS = 0.1
PROBE_CANCEL_POLL_SECONDS = 0.1

__all__ = [
    "APP_NAME",
    "TLS_MINIMUM_VERSION",
    "MAX_IDLE_CONNECTIONS_PER_HOST",
    "MAX_CONNECTIONS",
    "HEALTH_LIVE_PATH",
    "ADMIN_INFO_PATH",
    "ADMIN_NETPERF_PATH",
    "SIGNING_SERVICE",
    "SIGNING_REGION",
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_NETPERF_DURATION",
    "NETPERF_POLL_INTERVAL_SECONDS",
    "PROBE_CANCEL_POLL_SECONDS",
]
