"""Resource tree pipeline for the ArgoCD application detail view.

Submodules:
    mapper      -- kind to GroupVersionResource table with plural fallback.
    status      -- per-kind status and health rules.
    containers  -- synthetic Container nodes under Pods.
    fetcher     -- discovery and fan-out of list calls.
    assembler   -- ownership forest from owner references.
"""

from karmada_console.tree.assembler import build_resource_tree, count_nodes, iter_tree
from karmada_console.tree.containers import synthesize_containers
from karmada_console.tree.fetcher import (
    discover_targets,
    fetch_application_resources,
    load_application_tree,
    project_object,
)
from karmada_console.tree.mapper import kind_to_gvr
from karmada_console.tree.status import derive_health, derive_status

__all__ = [
    "build_resource_tree",
    "count_nodes",
    "derive_health",
    "derive_status",
    "discover_targets",
    "fetch_application_resources",
    "iter_tree",
    "kind_to_gvr",
    "load_application_tree",
    "project_object",
    "synthesize_containers",
]
