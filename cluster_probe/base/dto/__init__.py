"""Typed option and configuration DTOs."""

from .probe_options import PingOptions
from .target_config import TargetConfig

__all__ = ["PingOptions", "TargetConfig"]
