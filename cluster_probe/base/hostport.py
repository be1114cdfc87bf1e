"""Host/port extraction for endpoint addresses.

Purpose
-------
Normalize the many address shapes reported by the cluster and typed by users
(``":9000"``, ``"localhost:9000"``, ``"http://localhost:9000/"``,
``"https://example.com"``) into a ``(host, port)`` pair. When the port is
absent it is guessed from the scheme (``http`` -> 80, ``https`` -> 443).

Failure Modes
-------------
All failures raise :class:`ProbeError` with ``ErrorCode.CONFIGURATION``:
empty input, malformed ``host:port`` text, or a missing port with no scheme
to guess it from.
"""
from __future__ import annotations

from typing import Tuple
from urllib.parse import urlsplit

from .errors import ErrorCode, ProbeError

_DEFAULT_PORTS = {"http": "80", "https": "443"}


class _MissingPort(ValueError):
    """Raised by ``split_host_port`` when the address carries no port."""


def split_host_port(address: str) -> Tuple[str, str]:
    """Split ``host:port`` (or ``[ipv6]:port``) into its parts.

    Raises ``ValueError`` for malformed input; the ``_MissingPort`` subclass
    signals an otherwise valid address without a port.
    """
    i = address.rfind(":")
    if i < 0:
        raise _MissingPort(f"address {address}: missing port in address")

    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError(f"address {address}: missing ']' in address")
        if end + 1 == len(address):
            raise _MissingPort(f"address {address}: missing port in address")
        if end + 1 != i:
            if address[end + 1] == ":":
                raise ValueError(f"address {address}: too many colons in address")
            raise _MissingPort(f"address {address}: missing port in address")
        host = address[1:end]
        if "[" in address[1:] or "]" in address[end + 1:]:
            raise ValueError(f"address {address}: unexpected bracket in address")
    else:
        host = address[:i]
        if ":" in host:
            raise ValueError(f"address {address}: too many colons in address")
        if "[" in host or "]" in host:
            raise ValueError(f"address {address}: unexpected bracket in address")
    return host, address[i + 1:]


def extract_host_port(address: str) -> Tuple[str, str]:
    """Extract ``(host, port)`` from an endpoint address or URL.

    Examples
    --------
    >>> extract_host_port("localhost:9000")
    ('localhost', '9000')
    >>> extract_host_port("https://example.com")
    ('example.com', '443')
    >>> extract_host_port(":9000")
    ('', '9000')
    """
    if not address:
        raise ProbeError(ErrorCode.CONFIGURATION, "unable to process empty address")

    candidate = address
    if not candidate.startswith(("http://", "https://")):
        candidate = "//" + candidate

    try:
        parts = urlsplit(candidate)
    except ValueError as exc:
        raise ProbeError(ErrorCode.CONFIGURATION, str(exc), endpoint=address, raw=exc) from exc

    addr, scheme = parts.netloc, parts.scheme
    if not addr:
        addr, scheme = candidate, "http"

    try:
        return split_host_port(addr)
    except _MissingPort:
        port = _DEFAULT_PORTS.get(scheme)
        if port is None:
            raise ProbeError(
                ErrorCode.CONFIGURATION, "unable to guess port from scheme", endpoint=address
            ) from None
        host = addr[1:-1] if addr.startswith("[") and addr.endswith("]") else addr
        return host, port
    except ValueError as exc:
        raise ProbeError(ErrorCode.CONFIGURATION, str(exc), endpoint=address, raw=exc) from exc


def join_host_port(host: str, port: str) -> str:
    """Inverse of :func:`split_host_port`; brackets IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


__all__ = ["extract_host_port", "split_host_port", "join_host_port"]
