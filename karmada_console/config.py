"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from karmada_console.models.config import (
    APIConfig,
    ArgoCDConfig,
    ConsoleConfig,
    KarmadaConfig,
    LogConfig,
    ResourceTreeConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KARMADA_CONSOLE_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float, min_val: float | None = None) -> float:
    val = float(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    return val


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_namespace(value: str) -> str:
    if not value:
        raise ValueError("ArgoCD namespace must not be empty")
    return value


def load_config() -> ConsoleConfig:
    """Load configuration from KARMADA_CONSOLE_* environment variables."""
    return ConsoleConfig(
        karmada=KarmadaConfig(
            kubeconfig=_env("KUBECONFIG", ""),
            context=_env("KARMADA_CONTEXT", ""),
        ),
        argocd=ArgoCDConfig(
            namespace=_validate_namespace(_env("ARGOCD_NAMESPACE", "argocd")),
        ),
        resource_tree=ResourceTreeConfig(
            fetch_concurrency=_env_int("TREE_FETCH_CONCURRENCY", 4, min_val=1, max_val=32),
            fetch_timeout_seconds=_env_float("TREE_FETCH_TIMEOUT", 10.0, min_val=0.1),
        ),
        api=APIConfig(
            host=_env("API_HOST", "0.0.0.0"),
            port=_env_int("API_PORT", 8000, min_val=1024, max_val=65535),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
