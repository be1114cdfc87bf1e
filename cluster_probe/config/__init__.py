"""Target resolution: alias name -> connection settings.

Goals
-----
* Turn the ``ALIAS[/path]`` argument of the CLI into a :class:`TargetConfig`
  (host URL, credentials, TLS and trace flags).
* Merge alias sources in a predictable order (later wins):
    1. Alias config file (JSON, or YAML) at ``CLUSTER_PROBE_CONFIG_FILE``,
       defaulting to ``~/.mc/config.json``.
    2. ``MC_HOST_<alias>`` environment URLs.

Alias File Layout
-----------------
```
{"aliases": {"myminio": {"url": "https://play.example.net",
                         "accessKey": "...", "secretKey": "..."}}}
```

Public API
----------
* resolve_target(aliased_url, *, insecure=False, debug=False) -> TargetConfig
* load_aliases() -> dict
* reset_config_cache() (tests)
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from ..base.dto import TargetConfig
from ..base.errors import ErrorCode, ProbeError
from ..base.logging import get_logger, log_event
from .defaults import CONFIG_FILE_ENV, DEFAULT_CONFIG_PATH, SUPPORTED_SCHEMES
from .env import alias_from_env

_FILE_CACHE: Optional[Dict[str, Dict[str, Any]]] = None


def reset_config_cache() -> None:
    """Forget the parsed alias file so the next lookup re-reads it."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _config_path() -> Path:
    return Path(os.path.expanduser(os.getenv(CONFIG_FILE_ENV) or DEFAULT_CONFIG_PATH))


def _parse_config_text(text: str) -> Any:
    # Try JSON first
    try:
        return json.loads(text)
    except ValueError:
        return yaml.safe_load(text)


def load_aliases() -> Dict[str, Dict[str, Any]]:
    """Return the ``aliases`` section of the alias file (cached)."""
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = _config_path()
    if not path.is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    try:
        data = _parse_config_text(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        log_event(
            get_logger("cluster_probe.config"),
            "config.unreadable",
            level=logging.WARNING,
            path=str(path),
            error=str(exc),
        )
        data = {}
    aliases = data.get("aliases") if isinstance(data, dict) else None
    _FILE_CACHE = {
        str(k): v for k, v in (aliases or {}).items() if isinstance(v, dict)
    }
    return _FILE_CACHE


def split_alias(aliased_url: str) -> Tuple[str, str]:
    """Split ``alias/rest`` at the first ``/`` into ``(alias, rest)``."""
    alias, _, rest = aliased_url.partition("/")
    return alias, rest


def _is_raw_url(text: str) -> bool:
    return any(text.startswith(f"{scheme}://") for scheme in SUPPORTED_SCHEMES)


def _lookup(alias: str) -> Optional[Dict[str, Any]]:
    entry: Dict[str, Any] = {}
    if file_entry := load_aliases().get(alias):
        entry |= file_entry
    if env_entry := alias_from_env(alias):
        entry |= {k: v for k, v in env_entry.items() if v is not None}
    return entry or None


def resolve_target(aliased_url: str, *, insecure: bool = False, debug: bool = False) -> TargetConfig:
    """Resolve ``aliased_url`` into the settings of one cluster target.

    Raises:
        ProbeError: ``CONFIGURATION`` for an empty argument, a raw URL, an
            unknown alias or an alias without a URL.
    """
    text = (aliased_url or "").strip()
    if not text:
        raise ProbeError(ErrorCode.CONFIGURATION, "no target alias given")
    if _is_raw_url(text):
        raise ProbeError(
            ErrorCode.CONFIGURATION,
            f"`{text}` is a URL, not an alias; use an alias defined in the alias file or MC_HOST_<alias>",
            target=text,
        )
    alias, _ = split_alias(text)
    entry = _lookup(alias)
    if entry is None:
        raise ProbeError(ErrorCode.CONFIGURATION, f"no such alias `{alias}`", target=alias)
    url = str(entry.get("url") or "").rstrip("/")
    if not url:
        raise ProbeError(ErrorCode.CONFIGURATION, f"alias `{alias}` has no URL", target=alias)
    return TargetConfig(
        alias=alias,
        host_url=url,
        access_key=str(entry.get("accessKey") or ""),
        secret_key=str(entry.get("secretKey") or ""),
        session_token=entry.get("sessionToken") or None,
        insecure=insecure,
        debug=debug,
    )


__all__ = [
    "resolve_target",
    "load_aliases",
    "split_alias",
    "reset_config_cache",
]
