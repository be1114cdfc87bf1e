"""Resolved cluster target configuration.

Purpose
-------
Carry everything the connection cache needs to build a client handle for one
target: the endpoint URL, credentials, transport flags and application
identity. Produced by the target resolver (``cluster_probe.config``).

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_copy`` convenience.

Notes
-----
- Only ``(host, access_key, secret_key)`` participate in the cache
  fingerprint; the remaining fields are applied when a handle is first built.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..constants import APP_NAME


class TargetConfig(BaseModel):
    """Resolved target: endpoint URL, credentials and transport flags.

    Attributes
    ----------
    host_url:
        Endpoint URL such as ``https://play.example.com:9000``.
    alias:
        Alias the user typed, kept for error context.
    access_key / secret_key / session_token:
        Credentials used for request signing. Empty keys mean anonymous.
    insecure:
        Skip TLS certificate verification.
    debug:
        Log every HTTP request and response (credentials redacted).
    app_name / app_version:
        Application identity appended to the ``User-Agent``.
    """

    model_config = ConfigDict(frozen=True)

    host_url: str
    alias: Optional[str] = None
    access_key: str = ""
    secret_key: str = ""
    session_token: Optional[str] = None
    insecure: bool = False
    debug: bool = False
    app_name: str = APP_NAME
    app_version: str = "0.1.0"


__all__ = ["TargetConfig"]
