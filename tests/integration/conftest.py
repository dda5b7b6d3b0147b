"""Shared fixtures for integration tests.

``FakeCluster`` stands in for a member cluster reached through the Karmada
proxy. It implements the same list/get/merge_patch surface as
``MemberClusterClient`` and records every call.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any

import pytest
from kubernetes_asyncio.client.rest import ApiException  # type: ignore[import-untyped]

from karmada_console.models.resources import GroupVersionResource


class FakeCluster:
    """In-memory member cluster keyed by (resource plural, namespace)."""

    def __init__(self, cluster: str = "member1") -> None:
        self.cluster = cluster
        self.objects: dict[tuple[str, str], list[dict[str, Any]]] = {}
        self.failures: dict[tuple[str, str], BaseException] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, str]] = []
        self.patches: list[tuple[str, str, str, dict[str, Any]]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def add(self, resource: str, obj: dict[str, Any]) -> dict[str, Any]:
        namespace = obj.get("metadata", {}).get("namespace", "")
        self.objects.setdefault((resource, namespace), []).append(obj)
        return obj

    async def list(self, gvr: GroupVersionResource, namespace: str = "") -> list[dict[str, Any]]:
        self.calls.append((gvr.resource, namespace))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(gvr.resource, 0.0)
            await asyncio.sleep(delay)
            failure = self.failures.get((gvr.resource, namespace))
            if failure is not None:
                raise failure
            if namespace:
                items = self.objects.get((gvr.resource, namespace), [])
            else:
                items = [obj for (resource, _ns), objs in self.objects.items() if resource == gvr.resource for obj in objs]
            return copy.deepcopy(items)
        finally:
            self.in_flight -= 1

    async def get(self, gvr: GroupVersionResource, namespace: str, name: str) -> dict[str, Any]:
        failure = self.failures.get((gvr.resource, namespace))
        if failure is not None:
            raise failure
        for obj in self.objects.get((gvr.resource, namespace), []):
            if obj["metadata"]["name"] == name:
                return copy.deepcopy(obj)
        raise ApiException(status=404, reason="Not Found")

    async def merge_patch(
        self,
        gvr: GroupVersionResource,
        namespace: str,
        name: str,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        obj = await self.get(gvr, namespace, name)
        self.patches.append((gvr.resource, namespace, name, body))
        return obj

    async def close(self) -> None:
        self.closed = True

    async def __aenter__(self) -> FakeCluster:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class FakeFactory:
    """Client factory handing out one FakeCluster per cluster name."""

    def __init__(self, clusters: dict[str, FakeCluster]) -> None:
        self.clusters = clusters
        self.requested: list[str] = []

    def member(self, cluster: str) -> FakeCluster:
        self.requested.append(cluster)
        fake = self.clusters.get(cluster)
        if fake is None:
            fake = FakeCluster(cluster)
            self.clusters[cluster] = fake
        return fake


# ---------------------------------------------------------------------------
# Object factories
# ---------------------------------------------------------------------------


def _metadata(name: str, namespace: str, uid: str, owner: tuple[str, str, str] | None = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "name": name,
        "namespace": namespace,
        "uid": uid,
        "creationTimestamp": "2026-01-05T10:00:00Z",
    }
    if owner is not None:
        kind, owner_name, owner_uid = owner
        metadata["ownerReferences"] = [{"apiVersion": "apps/v1", "kind": kind, "name": owner_name, "uid": owner_uid}]
    return metadata


def make_deployment(name: str, namespace: str, uid: str, replicas: int = 2, ready: int = 2) -> dict[str, Any]:
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": _metadata(name, namespace, uid),
        "spec": {"replicas": replicas},
        "status": {"replicas": replicas, "readyReplicas": ready},
    }


def make_replicaset(name: str, namespace: str, uid: str, owner: tuple[str, str, str] | None = None) -> dict[str, Any]:
    return {
        "apiVersion": "apps/v1",
        "kind": "ReplicaSet",
        "metadata": _metadata(name, namespace, uid, owner),
        "status": {"replicas": 2, "readyReplicas": 2},
    }


def make_pod(
    name: str,
    namespace: str,
    uid: str,
    owner: tuple[str, str, str] | None = None,
    phase: str = "Running",
    containers: tuple[str, ...] = ("app",),
) -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": _metadata(name, namespace, uid, owner),
        "spec": {"containers": [{"name": c, "image": f"example/{c}:1.0"} for c in containers]},
        "status": {
            "phase": phase,
            "containerStatuses": [{"name": c, "ready": True, "state": {"running": {}}} for c in containers],
        },
    }


def make_service(name: str, namespace: str, uid: str) -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": _metadata(name, namespace, uid),
        "spec": {"type": "ClusterIP"},
    }


def make_configmap(name: str, namespace: str, uid: str) -> dict[str, Any]:
    return {"apiVersion": "v1", "kind": "ConfigMap", "metadata": _metadata(name, namespace, uid)}


def make_secret(name: str, namespace: str, uid: str) -> dict[str, Any]:
    return {"apiVersion": "v1", "kind": "Secret", "metadata": _metadata(name, namespace, uid)}


def make_application(
    name: str,
    declared: list[dict[str, Any]] | None,
    namespace: str = "argocd",
) -> dict[str, Any]:
    app: dict[str, Any] = {
        "apiVersion": "argoproj.io/v1alpha1",
        "kind": "Application",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "uid": f"app-{name}",
            "labels": {"team": "web"},
            "managedFields": [{"manager": "argocd-server"}],
        },
        "spec": {"project": "default"},
    }
    if declared is not None:
        app["status"] = {"resources": declared, "sync": {"status": "Synced"}}
    return app


def declared(kind: str, name: str, namespace: str, group: str = "", **extra: Any) -> dict[str, Any]:
    entry: dict[str, Any] = {"group": group, "version": "v1", "kind": kind, "name": name, "namespace": namespace}
    entry.update(extra)
    return entry


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def guestbook() -> FakeCluster:
    """Member cluster with a guestbook Deployment and its dependents."""
    cluster = FakeCluster("member1")
    ns = "guestbook"
    cluster.add("deployments", make_deployment("guestbook-ui", ns, "dep-1"))
    cluster.add("replicasets", make_replicaset("guestbook-ui-7d4f", ns, "rs-1", owner=("Deployment", "guestbook-ui", "dep-1")))
    cluster.add("pods", make_pod("guestbook-ui-7d4f-a", ns, "p-1", owner=("ReplicaSet", "guestbook-ui-7d4f", "rs-1")))
    cluster.add("pods", make_pod("guestbook-ui-7d4f-b", ns, "p-2", owner=("ReplicaSet", "guestbook-ui-7d4f", "rs-1")))
    cluster.add("services", make_service("guestbook-ui", ns, "svc-1"))
    cluster.add("configmaps", make_configmap("guestbook-config", ns, "cm-1"))
    cluster.add("secrets", make_secret("guestbook-secret", ns, "sec-1"))
    cluster.add(
        "applications",
        make_application(
            "guestbook",
            [
                declared("Deployment", "guestbook-ui", ns, group="apps", health={"status": "Healthy"}, status="Synced"),
                declared("Service", "guestbook-ui", ns),
                declared("ConfigMap", "guestbook-config", ns),
                declared("Secret", "guestbook-secret", ns),
            ],
        ),
    )
    return cluster


@pytest.fixture
def guestbook_app(guestbook: FakeCluster) -> dict[str, Any]:
    return copy.deepcopy(guestbook.objects[("applications", "argocd")][0])
