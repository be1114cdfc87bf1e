"""
Probed endpoint identity.

An :class:`Endpoint` names one server of the cluster by scheme, host and
port. Its ``key`` is the ``host:port`` text used to key per-endpoint
statistics for the duration of a probe session.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from ..hostport import extract_host_port, join_host_port


@dataclass(frozen=True)
class Endpoint:
    """Scheme/host/port triple of a probed server."""

    scheme: str
    host: str
    port: str

    @classmethod
    def from_url(cls, url: str) -> "Endpoint":
        """Build an endpoint from ``scheme://host[:port]``.

        Raises :class:`~cluster_probe.base.errors.ProbeError` when the
        address cannot be split into host and port.
        """
        scheme = url.split("://", 1)[0] if "://" in url else "http"
        host, port = extract_host_port(url)
        return cls(scheme=scheme, host=host, port=port)

    @property
    def key(self) -> str:
        """``host:port`` identity used to key statistics."""
        return join_host_port(self.host, self.port)

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.key}"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


__all__ = ["Endpoint"]
