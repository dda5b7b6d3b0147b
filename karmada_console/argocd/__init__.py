"""ArgoCD Application views for member clusters."""

from karmada_console.argocd.applications import (
    APPLICATION_GVR,
    ApplicationService,
    clean_metadata,
)

__all__ = ["APPLICATION_GVR", "ApplicationService", "clean_metadata"]
