"""Kubernetes access through the Karmada control plane.

Exposes:
    KarmadaClientFactory -- builds per-member-cluster clients.
    MemberClusterClient  -- dynamic list/get/patch against one member cluster.
    ResourceLister       -- protocol consumed by the resource tree fetcher.
"""

from karmada_console.kube.client import (
    KarmadaClientFactory,
    MemberClusterClient,
    ResourceLister,
    load_client_factory,
)

__all__ = [
    "KarmadaClientFactory",
    "MemberClusterClient",
    "ResourceLister",
    "load_client_factory",
]
