"""Core data structures for the Karmada console."""

from karmada_console.models.config import ConsoleConfig
from karmada_console.models.resources import (
    CONTAINER_KIND,
    GroupVersionResource,
    Health,
    HealthStatus,
    OwnerReference,
    ResourceNode,
    ResourceStatus,
)

__all__ = [
    "CONTAINER_KIND",
    "ConsoleConfig",
    "GroupVersionResource",
    "Health",
    "HealthStatus",
    "OwnerReference",
    "ResourceNode",
    "ResourceStatus",
]
