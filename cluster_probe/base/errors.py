"""Unified probe error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``cluster_probe.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.probe_error import ProbeError
from .errors_parts.classification import classify_exception, wrap_exception

__all__ = ["ErrorCode", "ProbeError", "classify_exception", "wrap_exception"]
