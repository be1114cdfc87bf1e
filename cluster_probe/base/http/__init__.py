"""HTTP layer: connection cache, request signing, TLS and debug tracing."""

from .client import CachedClient, ClientCache, fingerprint
from .signing import SigV4Auth

__all__ = ["CachedClient", "ClientCache", "SigV4Auth", "fingerprint"]
