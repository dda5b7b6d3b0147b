"""Route handlers for the member cluster ArgoCD endpoints."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from karmada_console.api.schemas import ApiResponse, HealthResponse
from karmada_console.argocd import ApplicationService
from karmada_console.kube.client import MemberClusterClient

router = APIRouter()

# DNS-1123 subdomain
_NAME_PATTERN = r"^[a-z0-9]([a-z0-9\-\.]{0,251}[a-z0-9])?$"

ClusterName = Annotated[str, Path(pattern=_NAME_PATTERN, max_length=253)]
ApplicationName = Annotated[str, Path(pattern=_NAME_PATTERN, max_length=253)]


async def member_client(request: Request, cluster: ClusterName) -> AsyncIterator[MemberClusterClient]:
    """Open a member cluster client for the duration of one request."""
    client: MemberClusterClient = request.app.state.client_factory.member(cluster)
    try:
        yield client
    finally:
        await client.close()


def application_service(request: Request) -> ApplicationService:
    return request.app.state.application_service


MemberClient = Annotated[MemberClusterClient, Depends(member_client)]
Applications = Annotated[ApplicationService, Depends(application_service)]


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    from karmada_console import __version__

    return HealthResponse(version=__version__)


@router.get("/member/{cluster}/argocd/application", response_model=ApiResponse)
async def list_applications(client: MemberClient, service: Applications) -> ApiResponse:
    return ApiResponse(data=await service.list_applications(client))


@router.get("/member/{cluster}/argocd/application/{name}", response_model=ApiResponse)
async def get_application_detail(
    name: ApplicationName,
    client: MemberClient,
    service: Applications,
) -> ApiResponse:
    """Application object plus its resource ownership forest."""
    return ApiResponse(data=await service.get_application_detail(client, name))


@router.post("/member/{cluster}/argocd/application/{name}/sync", response_model=ApiResponse)
async def sync_application(
    name: ApplicationName,
    client: MemberClient,
    service: Applications,
) -> ApiResponse:
    return ApiResponse(data=await service.sync_application(client, name))
