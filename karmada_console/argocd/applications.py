"""ArgoCD Application operations on a member cluster.

Applications live in the ArgoCD namespace of each member cluster and are
read through the Karmada proxy like any other unstructured object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from karmada_console.models.resources import GroupVersionResource
from karmada_console.tree.assembler import count_nodes
from karmada_console.tree.fetcher import load_application_tree

if TYPE_CHECKING:
    from karmada_console.kube.client import MemberClusterClient
    from karmada_console.models.config import ConsoleConfig

_log = structlog.get_logger(component="argocd.applications")

APPLICATION_GVR = GroupVersionResource("argoproj.io", "v1alpha1", "applications")


def clean_metadata(obj: dict[str, Any], cluster: str) -> dict[str, Any]:
    """Label *obj* with its cluster and drop ``managedFields``, in place."""
    metadata = obj.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
        obj["metadata"] = metadata
    labels = metadata.get("labels")
    if not isinstance(labels, dict):
        labels = {}
        metadata["labels"] = labels
    labels["cluster"] = cluster
    metadata.pop("managedFields", None)
    return obj


class ApplicationService:
    """Application list, detail (with resource tree) and sync."""

    def __init__(self, config: ConsoleConfig) -> None:
        self._namespace = config.argocd.namespace
        self._concurrency = config.resource_tree.fetch_concurrency
        self._timeout = config.resource_tree.fetch_timeout_seconds

    async def list_applications(self, client: MemberClusterClient) -> dict[str, Any]:
        items = await client.list(APPLICATION_GVR)
        for item in items:
            clean_metadata(item, client.cluster)
        return {"items": items, "totalItems": len(items)}

    async def get_application_detail(self, client: MemberClusterClient, name: str) -> dict[str, Any]:
        """Return the Application and its ownership forest.

        Raises:
            ApplicationStatusError: the Application has no status resources.
            ApiException: the Application itself could not be read.
        """
        application = await client.get(APPLICATION_GVR, self._namespace, name)
        clean_metadata(application, client.cluster)

        roots = await load_application_tree(
            client,
            application,
            concurrency=self._concurrency,
            timeout=self._timeout,
        )
        _log.info(
            "application_tree_built",
            cluster=client.cluster,
            application=name,
            roots=len(roots),
            nodes=count_nodes(roots),
        )
        return {
            "application": application,
            "resources": [root.to_dict() for root in roots],
        }

    async def sync_application(self, client: MemberClusterClient, name: str) -> dict[str, Any]:
        """Request a sync by setting ``operation.sync`` on the Application."""
        await client.merge_patch(
            APPLICATION_GVR,
            self._namespace,
            name,
            {"operation": {"sync": {}}},
        )
        _log.info("application_sync_requested", cluster=client.cluster, application=name)
        return {"message": f"application {name} sync started successfully"}
