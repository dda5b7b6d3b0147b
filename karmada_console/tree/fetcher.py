"""Resource fetch orchestration for the ArgoCD application resource tree.

Pipeline per request:
    discover (namespace, kind) pairs from ``status.resources``
    -> list every pair (bounded concurrency, failures skipped)
    -> project raw objects into ResourceNodes (+ synthetic containers)
    -> assemble the ownership forest.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog

from karmada_console.errors import ApplicationStatusError
from karmada_console.models.resources import ResourceNode, parse_owner_references
from karmada_console.observability.metrics import (
    resource_fetch_failures_total,
    resources_fetched_total,
    tree_build_seconds,
)
from karmada_console.tree.assembler import build_resource_tree
from karmada_console.tree.containers import synthesize_containers
from karmada_console.tree.mapper import IMPLICIT_KINDS, kind_to_gvr, order_kinds
from karmada_console.tree.status import derive_health, derive_status

if TYPE_CHECKING:
    from karmada_console.kube.client import ResourceLister

_log = structlog.get_logger(component="tree.fetcher")

DEFAULT_NAMESPACE = "default"


def _application_name(application: Mapping[str, Any]) -> str:
    metadata = application.get("metadata")
    if isinstance(metadata, Mapping) and isinstance(metadata.get("name"), str):
        return metadata["name"]
    return "<unnamed>"


def declared_resources(application: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Return ``status.resources`` of an Application.

    Raises:
        ApplicationStatusError: no status, or no resource list in it.
    """
    name = _application_name(application)
    status = application.get("status")
    if not isinstance(status, Mapping):
        raise ApplicationStatusError(name, "application status not found or invalid")
    resources = status.get("resources")
    if not isinstance(resources, list):
        raise ApplicationStatusError(name, "no resources found in application status")
    return [entry for entry in resources if isinstance(entry, Mapping)]


def discover_targets(declared: list[Mapping[str, Any]]) -> dict[str, set[str]]:
    """Group declared kinds by namespace.

    Entries without a kind are ignored, an empty namespace counts as
    ``default`` and every namespace also gets Pod and ReplicaSet.
    """
    targets: dict[str, set[str]] = {}
    for entry in declared:
        kind = entry.get("kind")
        if not isinstance(kind, str) or not kind:
            continue
        namespace = entry.get("namespace")
        if not isinstance(namespace, str) or not namespace:
            namespace = DEFAULT_NAMESPACE
        targets.setdefault(namespace, set()).add(kind)

    for kinds in targets.values():
        kinds.update(IMPLICIT_KINDS)
    return targets


def fetch_plan(targets: dict[str, set[str]]) -> list[tuple[str, str]]:
    """Flatten targets into the ordered list of (namespace, kind) pairs."""
    return [(namespace, kind) for namespace in sorted(targets) for kind in order_kinds(targets[namespace])]


def project_object(kind: str, obj: Mapping[str, Any]) -> list[ResourceNode]:
    """Project one listed object into its node, plus containers for Pods.

    Malformed items produce nothing: a nested ``List``, no metadata
    mapping, no uid or name, or a ``spec`` or ``status`` that is present
    but not a mapping. A missing ``spec`` or ``status`` is fine.
    """
    if obj.get("kind") == "List":
        return []
    for section in ("spec", "status"):
        value = obj.get(section)
        if value is not None and not isinstance(value, Mapping):
            return []
    metadata = obj.get("metadata")
    if not isinstance(metadata, Mapping):
        return []
    uid = metadata.get("uid")
    name = metadata.get("name")
    if not isinstance(uid, str) or not uid or not isinstance(name, str):
        return []

    namespace = metadata.get("namespace")
    created = metadata.get("creationTimestamp")
    node = ResourceNode(
        uid=uid,
        kind=kind,
        name=name,
        namespace=namespace if isinstance(namespace, str) else "",
        status=derive_status(kind, obj),
        health=derive_health(kind, obj),
        creation_timestamp=created if isinstance(created, str) else "",
        owner_references=parse_owner_references(metadata.get("ownerReferences")),
    )
    if kind == "Pod":
        return [node, *synthesize_containers(node, obj)]
    return [node]


async def _fetch_pair(
    lister: ResourceLister,
    namespace: str,
    kind: str,
    semaphore: asyncio.Semaphore,
    timeout: float | None,
) -> list[ResourceNode]:
    gvr = kind_to_gvr(kind)
    async with semaphore:
        try:
            items = await asyncio.wait_for(lister.list(gvr, namespace), timeout=timeout)
        except Exception as exc:  # noqa: BLE001
            # one failing pair only costs its own contribution
            resource_fetch_failures_total.labels(kind=kind).inc()
            _log.warning(
                "resource_list_failed",
                kind=kind,
                namespace=namespace,
                api_version=gvr.api_version,
                resource=gvr.resource,
                error=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
            )
            return []

    resources_fetched_total.labels(kind=kind).inc(len(items))
    nodes: list[ResourceNode] = []
    skipped = 0
    for item in items:
        projected = project_object(kind, item)
        if not projected:
            skipped += 1
        nodes.extend(projected)
    if skipped:
        _log.debug("malformed_items_skipped", kind=kind, namespace=namespace, count=skipped)
    return nodes


async def fetch_application_resources(
    lister: ResourceLister,
    application: Mapping[str, Any],
    *,
    concurrency: int = 4,
    timeout: float | None = 10.0,
) -> list[ResourceNode]:
    """Collect the flat resource list for an Application.

    The list starts with the declared resources taken at face value,
    followed by everything listed per (namespace, kind) pair in plan order.
    A failing pair is logged and skipped; cancellation of the caller
    propagates immediately.

    Raises:
        ApplicationStatusError: the Application has nothing to discover from.
    """
    declared = declared_resources(application)
    plan = fetch_plan(discover_targets(declared))
    semaphore = asyncio.Semaphore(max(concurrency, 1))

    results = await asyncio.gather(
        *(_fetch_pair(lister, namespace, kind, semaphore, timeout) for namespace, kind in plan)
    )

    resources = [ResourceNode.from_declared(entry) for entry in declared]
    for nodes in results:
        resources.extend(nodes)

    _log.debug(
        "application_resources_fetched",
        application=_application_name(application),
        pairs=len(plan),
        resources=len(resources),
    )
    return resources


async def load_application_tree(
    lister: ResourceLister,
    application: Mapping[str, Any],
    *,
    concurrency: int = 4,
    timeout: float | None = 10.0,
) -> list[ResourceNode]:
    """Fetch an Application's resources and assemble the ownership forest."""
    start = time.monotonic()
    resources = await fetch_application_resources(
        lister,
        application,
        concurrency=concurrency,
        timeout=timeout,
    )
    roots = build_resource_tree(resources)
    tree_build_seconds.observe(time.monotonic() - start)
    return roots
