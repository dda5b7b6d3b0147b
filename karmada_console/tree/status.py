"""Per-kind status and health derivation.

Each rule reads only the object it is given. Missing or mistyped fields
fall back to the documented default for the kind instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from karmada_console.models.resources import Health, HealthStatus, ResourceStatus

_REPLICATED_WORKLOADS = frozenset({"Deployment", "StatefulSet", "DaemonSet"})

_POD_PHASE_HEALTH: dict[str, HealthStatus] = {
    "Running": HealthStatus.HEALTHY,
    "Succeeded": HealthStatus.HEALTHY,
    "Pending": HealthStatus.PROGRESSING,
    "Failed": HealthStatus.DEGRADED,
    "Unknown": HealthStatus.UNKNOWN,
}


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = obj.get(key)
    return value if isinstance(value, Mapping) else None


def _number(value: object) -> float | None:
    # bool is an int subclass but never a replica count
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def _replicas_ready(obj: Mapping[str, Any]) -> bool | None:
    """Compare ``status.replicas`` with ``status.readyReplicas``.

    Returns None when either field is absent.
    """
    status = _section(obj, "status")
    if status is None or "replicas" not in status or "readyReplicas" not in status:
        return None
    replicas = _number(status["replicas"])
    ready = _number(status["readyReplicas"])
    if replicas is None or ready is None:
        return status["replicas"] == status["readyReplicas"]
    return replicas == ready


def pod_phase_to_health(phase: str) -> HealthStatus:
    return _POD_PHASE_HEALTH.get(phase, HealthStatus.UNKNOWN)


def _pod_status(obj: Mapping[str, Any]) -> str:
    status = _section(obj, "status")
    phase = status.get("phase") if status is not None else None
    return phase if isinstance(phase, str) else ""


def _replicated_status(obj: Mapping[str, Any]) -> str:
    ready = _replicas_ready(obj)
    if ready is None:
        return ResourceStatus.UNKNOWN
    return ResourceStatus.READY if ready else ResourceStatus.PROGRESSING


def _service_status(obj: Mapping[str, Any]) -> str:
    spec = _section(obj, "spec")
    if spec is None or spec.get("type") != "LoadBalancer":
        return ResourceStatus.READY
    status = _section(obj, "status")
    load_balancer = _section(status, "loadBalancer") if status is not None else None
    ingress = load_balancer.get("ingress") if load_balancer is not None else None
    # No external address assigned yet
    if isinstance(ingress, list) and not ingress:
        return ResourceStatus.PENDING
    return ResourceStatus.READY


def _job_status(obj: Mapping[str, Any]) -> str:
    status = _section(obj, "status")
    if status is None:
        return ResourceStatus.RUNNING
    succeeded = _number(status.get("succeeded"))
    if succeeded is not None and succeeded > 0:
        return ResourceStatus.COMPLETED
    failed = _number(status.get("failed"))
    if failed is not None and failed > 0:
        return ResourceStatus.FAILED
    return ResourceStatus.RUNNING


def _pvc_status(obj: Mapping[str, Any]) -> str:
    status = _section(obj, "status")
    phase = status.get("phase") if status is not None else None
    if isinstance(phase, str):
        return phase
    return ResourceStatus.PENDING


def _hpa_status(obj: Mapping[str, Any]) -> str:
    status = _section(obj, "status")
    conditions = status.get("conditions") if status is not None else None
    result: str = ResourceStatus.UNKNOWN
    if not isinstance(conditions, list):
        return result
    for condition in conditions:
        if not isinstance(condition, Mapping) or condition.get("type") != "ScalingActive":
            continue
        result = ResourceStatus.ACTIVE if condition.get("status") == "True" else ResourceStatus.INACTIVE
    return result


def _always_ready(_obj: Mapping[str, Any]) -> str:
    return ResourceStatus.READY


_STATUS_RULES: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "Pod": _pod_status,
    "Deployment": _replicated_status,
    "StatefulSet": _replicated_status,
    "DaemonSet": _replicated_status,
    "ReplicaSet": _replicated_status,
    "Service": _service_status,
    "Ingress": _always_ready,
    "Job": _job_status,
    "CronJob": _always_ready,
    "PersistentVolumeClaim": _pvc_status,
    "ConfigMap": _always_ready,
    "Secret": _always_ready,
    "HorizontalPodAutoscaler": _hpa_status,
}


def derive_status(kind: str, obj: Mapping[str, Any]) -> str:
    """Return the simplified status string for *obj* of the given *kind*."""
    rule = _STATUS_RULES.get(kind)
    if rule is None:
        return ResourceStatus.UNKNOWN
    return rule(obj)


def derive_health(kind: str, obj: Mapping[str, Any]) -> Health | None:
    """Return the health classification, or None where the kind has none.

    Pods need a string ``status.phase``; replicated workloads need both
    replica counters.
    """
    if kind == "Pod":
        status = _section(obj, "status")
        phase = status.get("phase") if status is not None else None
        if not isinstance(phase, str):
            return None
        return Health(pod_phase_to_health(phase))

    if kind in _REPLICATED_WORKLOADS:
        ready = _replicas_ready(obj)
        if ready is None:
            return None
        return Health(HealthStatus.HEALTHY if ready else HealthStatus.PROGRESSING)

    return None
