"""Synthetic Container nodes derived from Pod objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from karmada_console.models.resources import CONTAINER_KIND, OwnerReference, ResourceNode, ResourceStatus

# Declaration order of the container lists in a pod spec
_CONTAINER_FIELDS = ("containers", "initContainers", "ephemeralContainers")

_STATE_STATUS = (
    ("running", ResourceStatus.RUNNING),
    ("waiting", ResourceStatus.WAITING),
    ("terminated", ResourceStatus.TERMINATED),
)


def container_uid(pod_uid: str, container_name: str) -> str:
    return f"{pod_uid}-container-{container_name}"


def _declared_containers(pod: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    spec = pod.get("spec")
    if not isinstance(spec, Mapping):
        return []
    containers: list[Mapping[str, Any]] = []
    for field_name in _CONTAINER_FIELDS:
        entries = spec.get(field_name)
        if isinstance(entries, list):
            containers.extend(entry for entry in entries if isinstance(entry, Mapping))
    return containers


def _container_statuses(pod: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    status = pod.get("status")
    if not isinstance(status, Mapping):
        return []
    entries = status.get("containerStatuses")
    if not isinstance(entries, list):
        return []
    return [entry for entry in entries if isinstance(entry, Mapping)]


def container_status(name: str, statuses: list[Mapping[str, Any]]) -> str:
    """Resolve a container's status from the pod's ``containerStatuses``.

    ``ready: true`` gives Ready; a populated ``state`` key then overrides it
    with Running, Waiting or Terminated.
    """
    result: str = ResourceStatus.UNKNOWN
    for entry in statuses:
        if entry.get("name") != name:
            continue
        if entry.get("ready") is True:
            result = ResourceStatus.READY
        state = entry.get("state")
        if isinstance(state, Mapping):
            for key, state_status in _STATE_STATUS:
                if key in state:
                    result = state_status
                    break
    return result


def synthesize_containers(pod_node: ResourceNode, pod: Mapping[str, Any]) -> list[ResourceNode]:
    """Build one Container node per named container of *pod*.

    Each node is owned by *pod_node*; containers without a string name are
    skipped.
    """
    statuses = _container_statuses(pod)
    owner = OwnerReference(uid=pod_node.uid, kind="Pod", name=pod_node.name)
    nodes: list[ResourceNode] = []

    for container in _declared_containers(pod):
        name = container.get("name")
        if not isinstance(name, str) or not name:
            continue

        node = ResourceNode(
            uid=container_uid(pod_node.uid, name),
            kind=CONTAINER_KIND,
            name=name,
            namespace=pod_node.namespace,
            status=container_status(name, statuses),
            creation_timestamp=pod_node.creation_timestamp,
            owner_references=[owner],
        )
        image = container.get("image")
        if isinstance(image, str):
            node.image = image
        ports = container.get("ports")
        if isinstance(ports, list) and ports:
            node.ports = list(ports)
        nodes.append(node)

    return nodes
