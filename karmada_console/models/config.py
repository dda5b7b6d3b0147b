"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class KarmadaConfig:
    """Access to the Karmada control plane.

    An empty ``kubeconfig`` means in-cluster service account credentials
    are tried first, then the default kubeconfig location.
    """

    kubeconfig: str = ""
    context: str = ""


@dataclass
class ArgoCDConfig:
    """Where ArgoCD keeps its Application objects on member clusters."""

    namespace: str = "argocd"


@dataclass
class ResourceTreeConfig:
    """Resource tree fan-out tuning."""

    fetch_concurrency: int = 4
    fetch_timeout_seconds: float = 10.0


@dataclass
class APIConfig:
    """REST API configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class ConsoleConfig:
    """Top-level console configuration."""

    karmada: KarmadaConfig = field(default_factory=KarmadaConfig)
    argocd: ArgoCDConfig = field(default_factory=ArgoCDConfig)
    resource_tree: ResourceTreeConfig = field(default_factory=ResourceTreeConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log: LogConfig = field(default_factory=LogConfig)
