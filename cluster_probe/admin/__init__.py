"""Administrative client collaborators built on a cached client handle.

``AdminClient`` performs signed admin calls (server info, netperf);
``AnonymousClient`` issues unsigned liveness probes.
"""

from .admin_client import AdminClient
from .anonymous_client import AliveOpts, AnonymousClient

__all__ = ["AdminClient", "AliveOpts", "AnonymousClient"]
