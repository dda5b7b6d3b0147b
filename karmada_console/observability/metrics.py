"""Prometheus metrics for the resource tree pipeline."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

resources_fetched_total = Counter(
    "karmada_console_resources_fetched_total",
    "Objects returned by resource tree list calls",
    ["kind"],
)

resource_fetch_failures_total = Counter(
    "karmada_console_resource_fetch_failures_total",
    "Resource tree list calls that failed and were skipped",
    ["kind"],
)

tree_build_seconds = Histogram(
    "karmada_console_tree_build_seconds",
    "Time to fetch and assemble an application resource tree",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
