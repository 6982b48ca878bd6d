"""Clients for the external tools shipctl drives."""

from shipctl.clients.helm import ReleaseClient
from shipctl.clients.kubectl import ClusterClient

__all__ = ["ReleaseClient", "ClusterClient"]
