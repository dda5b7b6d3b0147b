"""Exception hierarchy for the Karmada console.

Only precondition failures are raised to callers. Per-fetch and per-object
problems inside the resource tree pipeline are logged and skipped instead.
"""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for errors surfaced at the HTTP boundary."""

    code = "CONSOLE_ERROR"


class ApplicationStatusError(ConsoleError):
    """The Application carries no ``status`` or no ``status.resources``."""

    code = "APPLICATION_STATUS_MISSING"

    def __init__(self, application: str, reason: str) -> None:
        super().__init__(f"Application '{application}': {reason}")
        self.application = application
        self.reason = reason


class ClusterAccessError(ConsoleError):
    """A member cluster could not be reached through the Karmada proxy."""

    code = "CLUSTER_UNAVAILABLE"

    def __init__(self, cluster: str, cause: Exception) -> None:
        super().__init__(f"Cluster '{cluster}' is not reachable: {cause}")
        self.cluster = cluster
        self.cause = cause
