"""Errors parts package public surface.

Prefer importing from `cluster_probe.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .probe_error import ProbeError
from .classification import classify_exception, wrap_exception

__all__ = ["ErrorCode", "ProbeError", "classify_exception", "wrap_exception"]
