"""TLS context construction for cluster clients.

The minimum protocol version is pinned to TLS 1.2: SSLv3 and TLS 1.0 fall to
POODLE/BEAST with CBC ciphers and TLS 1.1 still allows RC4. Trust-store
loading beyond the platform defaults is owned by the caller.
"""
from __future__ import annotations

import ssl

from ..constants import TLS_MINIMUM_VERSION


def build_ssl_context(*, insecure: bool = False) -> ssl.SSLContext:
    """Return a client ``SSLContext`` pinned to the TLS baseline.

    Parameters:
        insecure: Disable hostname checks and certificate verification.
    """
    ctx = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    ctx.minimum_version = TLS_MINIMUM_VERSION
    if insecure:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


__all__ = ["build_ssl_context"]
