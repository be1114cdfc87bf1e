"""Default values for target resolution.

Plain constants only; no I/O and no imports from other cluster_probe
packages so this module can be imported anywhere.
"""

from __future__ import annotations

import os

# Environment variable naming the alias config file.
CONFIG_FILE_ENV = "CLUSTER_PROBE_CONFIG_FILE"
# Alias file used when CONFIG_FILE_ENV is unset (shared with the mc client).
DEFAULT_CONFIG_PATH = os.path.join("~", ".mc", "config.json")

# Prefix of per-alias environment URLs, e.g. MC_HOST_myminio.
HOST_ENV_PREFIX = "MC_HOST_"

# Schemes accepted for alias URLs.
SUPPORTED_SCHEMES = ("http", "https")
