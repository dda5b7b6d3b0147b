"""Kind to GroupVersionResource mapping for dynamic list calls."""

from __future__ import annotations

from types import MappingProxyType

from karmada_console.models.resources import GroupVersionResource

_GVR_TABLE: MappingProxyType[str, GroupVersionResource] = MappingProxyType(
    {
        "Deployment": GroupVersionResource("apps", "v1", "deployments"),
        "StatefulSet": GroupVersionResource("apps", "v1", "statefulsets"),
        "DaemonSet": GroupVersionResource("apps", "v1", "daemonsets"),
        "ReplicaSet": GroupVersionResource("apps", "v1", "replicasets"),
        "Pod": GroupVersionResource("", "v1", "pods"),
        "Service": GroupVersionResource("", "v1", "services"),
        "Ingress": GroupVersionResource("networking.k8s.io", "v1", "ingresses"),
        "ConfigMap": GroupVersionResource("", "v1", "configmaps"),
        "Secret": GroupVersionResource("", "v1", "secrets"),
        "PersistentVolumeClaim": GroupVersionResource("", "v1", "persistentvolumeclaims"),
        "Job": GroupVersionResource("batch", "v1", "jobs"),
        "CronJob": GroupVersionResource("batch", "v1", "cronjobs"),
        "HorizontalPodAutoscaler": GroupVersionResource("autoscaling", "v2", "horizontalpodautoscalers"),
    }
)

# Fetch order for a namespace. Kinds outside this tuple follow, sorted.
TRACKED_KINDS: tuple[str, ...] = (
    "Deployment",
    "StatefulSet",
    "DaemonSet",
    "ReplicaSet",
    "Pod",
    "Job",
    "CronJob",
    "Service",
    "Ingress",
    "ConfigMap",
    "Secret",
    "PersistentVolumeClaim",
    "HorizontalPodAutoscaler",
)

# Always listed per namespace: usually owned by a declared workload
# rather than declared themselves.
IMPLICIT_KINDS: frozenset[str] = frozenset({"Pod", "ReplicaSet"})


def kind_to_gvr(kind: str) -> GroupVersionResource:
    """Map a kind to its GVR.

    Unknown kinds fall back to the core group, ``v1`` and a naive plural
    (``lowercase(kind) + "s"``). The guess is wrong for irregular plurals
    and non-core groups; the resulting list call fails and is skipped.
    """
    gvr = _GVR_TABLE.get(kind)
    if gvr is not None:
        return gvr
    return GroupVersionResource("", "v1", kind.lower() + "s")


def order_kinds(kinds: set[str] | frozenset[str]) -> list[str]:
    """Tracked kinds in canonical order, then any other kinds alphabetically."""
    known = [kind for kind in TRACKED_KINDS if kind in kinds]
    extra = sorted(kind for kind in kinds if kind not in _GVR_TABLE)
    return known + extra
