"""Dynamic Kubernetes client for Karmada member clusters.

Member clusters are reached through the Karmada aggregated API proxy:
every request path is appended to
``/apis/cluster.karmada.io/v1alpha1/clusters/{cluster}/proxy``.
Objects come back as plain dicts, the way an unstructured list does.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Protocol

import aiohttp
import structlog
from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
from kubernetes_asyncio import config as k8s_config  # type: ignore[import-untyped]

from karmada_console.errors import ClusterAccessError
from karmada_console.models.resources import GroupVersionResource

if TYPE_CHECKING:
    from karmada_console.models.config import KarmadaConfig

_log = structlog.get_logger(component="kube.client")

_PROXY_PATH = "/apis/cluster.karmada.io/v1alpha1/clusters/{cluster}/proxy"

# Deserialize every success body as plain JSON
_RESPONSE_TYPES = {200: "object", 201: "object"}


class ResourceLister(Protocol):
    """Minimal list interface required by the resource tree fetcher."""

    async def list(self, gvr: GroupVersionResource, namespace: str = "") -> list[dict[str, Any]]: ...


def member_proxy_host(karmada_host: str, cluster: str) -> str:
    return karmada_host.rstrip("/") + _PROXY_PATH.format(cluster=cluster)


class MemberClusterClient:
    """Unstructured access to one member cluster.

    Use as an async context manager so the underlying connection pool is
    closed when the request is done.
    """

    def __init__(self, cluster: str, api_client: k8s_client.ApiClient) -> None:
        self.cluster = cluster
        self._api = api_client

    async def __aenter__(self) -> MemberClusterClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._api.close()

    async def _call(
        self,
        method: str,
        path: str,
        body: Any = None,
        content_type: str | None = None,
    ) -> dict[str, Any]:
        header_params = {"Accept": "application/json"}
        if content_type is not None:
            header_params["Content-Type"] = content_type
        try:
            result = await self._api.call_api(
                path,
                method,
                path_params={},
                query_params=[],
                header_params=header_params,
                body=body,
                response_types_map=_RESPONSE_TYPES,
                auth_settings=["BearerToken"],
                _return_http_data_only=True,
                _preload_content=True,
            )
        except aiohttp.ClientError as exc:
            raise ClusterAccessError(self.cluster, exc) from exc
        return result if isinstance(result, dict) else {}

    async def list(self, gvr: GroupVersionResource, namespace: str = "") -> list[dict[str, Any]]:
        """List objects of *gvr*, cluster-wide when *namespace* is empty."""
        payload = await self._call("GET", gvr.api_path(namespace))
        items = payload.get("items")
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    async def get(self, gvr: GroupVersionResource, namespace: str, name: str) -> dict[str, Any]:
        return await self._call("GET", gvr.api_path(namespace, name))

    async def merge_patch(
        self,
        gvr: GroupVersionResource,
        namespace: str,
        name: str,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        return await self._call(
            "PATCH",
            gvr.api_path(namespace, name),
            body=body,
            content_type="application/merge-patch+json",
        )


class KarmadaClientFactory:
    """Hands out member cluster clients derived from the Karmada configuration."""

    def __init__(self, configuration: k8s_client.Configuration) -> None:
        self._configuration = configuration

    @property
    def karmada_host(self) -> str:
        return str(self._configuration.host)

    def member(self, cluster: str) -> MemberClusterClient:
        member_config = copy.deepcopy(self._configuration)
        member_config.host = member_proxy_host(self.karmada_host, cluster)
        _log.debug("member_client_created", cluster=cluster, host=member_config.host)
        return MemberClusterClient(cluster, k8s_client.ApiClient(configuration=member_config))


async def load_client_factory(config: KarmadaConfig) -> KarmadaClientFactory:
    """Load Karmada credentials from in-cluster config or a kubeconfig file."""
    configuration = k8s_client.Configuration()
    if not config.kubeconfig:
        try:
            k8s_config.load_incluster_config(client_configuration=configuration)
            _log.info("karmada client configured from in-cluster service account")
            return KarmadaClientFactory(configuration)
        except k8s_config.ConfigException:
            _log.debug("in-cluster config unavailable, falling back to kubeconfig")

    await k8s_config.load_kube_config(
        config_file=config.kubeconfig or None,
        context=config.context or None,
        client_configuration=configuration,
    )
    _log.info("karmada client configured from kubeconfig", context=config.context or "<current>")
    return KarmadaClientFactory(configuration)
