"""Resource tree data structures.

Raw API objects are untyped nested dicts; they are projected into
``ResourceNode`` at the fetch boundary and never travel further.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

CONTAINER_KIND = "Container"


class HealthStatus(StrEnum):
    """Health classification reported for Pods and replicated workloads."""

    HEALTHY = "Healthy"
    PROGRESSING = "Progressing"
    DEGRADED = "Degraded"
    UNKNOWN = "Unknown"


class ResourceStatus(StrEnum):
    """Simplified status strings produced by the per-kind rules.

    Pod and PersistentVolumeClaim phases are passed through verbatim and
    may fall outside this set.
    """

    READY = "Ready"
    PROGRESSING = "Progressing"
    PENDING = "Pending"
    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"
    UNKNOWN = "Unknown"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    WAITING = "Waiting"
    TERMINATED = "Terminated"


@dataclass(frozen=True)
class GroupVersionResource:
    """API group / version / plural resource triple."""

    group: str
    version: str
    resource: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def api_path(self, namespace: str = "", name: str = "") -> str:
        """Render the REST path for a list (or, with *name*, a single object).

        An empty *namespace* addresses the resource cluster-wide.
        """
        base = f"/apis/{self.group}/{self.version}" if self.group else f"/api/{self.version}"
        if namespace:
            base = f"{base}/namespaces/{namespace}"
        path = f"{base}/{self.resource}"
        if name:
            path = f"{path}/{name}"
        return path


@dataclass(frozen=True)
class OwnerReference:
    """Parentage link as reported by the source object."""

    uid: str
    kind: str = ""
    name: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"uid": self.uid, "kind": self.kind, "name": self.name}


@dataclass(frozen=True)
class Health:
    status: HealthStatus

    def to_dict(self) -> dict[str, str]:
        return {"status": str(self.status)}


@dataclass
class ResourceNode:
    """A node of the ownership forest rendered by the application detail view."""

    uid: str
    kind: str
    name: str
    namespace: str = ""
    status: str = ResourceStatus.UNKNOWN
    health: Health | None = None
    creation_timestamp: str = ""
    owner_references: list[OwnerReference] = field(default_factory=list)
    children: list[ResourceNode] = field(default_factory=list)
    # Container pseudo-nodes only
    image: str | None = None
    ports: list[Any] | None = None

    @classmethod
    def from_declared(cls, entry: Mapping[str, Any]) -> ResourceNode:
        """Project an Application ``status.resources`` entry at face value.

        Declared entries rarely carry a uid, in which case the node takes
        no part in tree assembly.
        """
        health: Health | None = None
        raw_health = entry.get("health")
        if isinstance(raw_health, Mapping):
            try:
                health = Health(HealthStatus(str(raw_health.get("status", ""))))
            except ValueError:
                health = Health(HealthStatus.UNKNOWN)

        return cls(
            uid=_str(entry.get("uid")),
            kind=_str(entry.get("kind")),
            name=_str(entry.get("name")),
            namespace=_str(entry.get("namespace")),
            status=_str(entry.get("status")) or ResourceStatus.UNKNOWN,
            health=health,
            creation_timestamp=_str(entry.get("creationTimestamp")),
            owner_references=parse_owner_references(entry.get("ownerReferences")),
        )

    def shallow_copy(self) -> ResourceNode:
        """Copy the node with an empty ``children`` list."""
        return ResourceNode(
            uid=self.uid,
            kind=self.kind,
            name=self.name,
            namespace=self.namespace,
            status=self.status,
            health=self.health,
            creation_timestamp=self.creation_timestamp,
            owner_references=list(self.owner_references),
            children=[],
            image=self.image,
            ports=copy.deepcopy(self.ports),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the node and its subtree to the JSON response shape."""
        data: dict[str, Any] = {
            "uid": self.uid,
            "kind": self.kind,
            "name": self.name,
            "namespace": self.namespace,
            "status": str(self.status),
            "creationTimestamp": self.creation_timestamp,
            "ownerReferences": [ref.to_dict() for ref in self.owner_references],
            "children": [child.to_dict() for child in self.children],
        }
        if self.health is not None:
            data["health"] = self.health.to_dict()
        if self.image is not None:
            data["image"] = self.image
        if self.ports:
            data["ports"] = self.ports
        return data


def parse_owner_references(raw: object) -> list[OwnerReference]:
    """Keep well-formed owner references (non-empty uid) in listed order."""
    if not isinstance(raw, list):
        return []
    refs: list[OwnerReference] = []
    for item in raw:
        if isinstance(item, OwnerReference):
            refs.append(item)
            continue
        if not isinstance(item, Mapping):
            continue
        uid = item.get("uid")
        if not isinstance(uid, str) or not uid:
            continue
        refs.append(OwnerReference(uid=uid, kind=_str(item.get("kind")), name=_str(item.get("name"))))
    return refs


def _str(value: object) -> str:
    return value if isinstance(value, str) else ""
