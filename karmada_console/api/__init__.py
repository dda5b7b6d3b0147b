"""REST API layer for the Karmada console.

Exposes:
    create_app -- FastAPI application factory.
    build_app  -- Alias for create_app (used by karmada_console.app bootstrap).
"""

from karmada_console.api.app import create_app

build_app = create_app

__all__ = ["build_app", "create_app"]
