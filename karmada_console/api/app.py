"""FastAPI application factory for the Karmada console.

Usage::

    from karmada_console.api.app import create_app

    app = create_app(client_factory=factory, config=config)

The factory is used by both the production bootstrap
(``karmada_console.app``) and the tests.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from kubernetes_asyncio.client.rest import ApiException  # type: ignore[import-untyped]
from prometheus_client import make_asgi_app

from karmada_console.api.routes import router
from karmada_console.api.schemas import ErrorResponse
from karmada_console.argocd import ApplicationService
from karmada_console.errors import ApplicationStatusError, ClusterAccessError
from karmada_console.models.config import ConsoleConfig

_log = structlog.get_logger(component="api.app")

_API_PREFIX = "/api/v1"


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(code=status_code, message=message, error=error).model_dump(),
    )


def create_app(client_factory: Any, config: ConsoleConfig | None = None) -> FastAPI:
    """Create and configure the console FastAPI application.

    Args:
        client_factory: Object with ``member(cluster)`` returning a
                        MemberClusterClient (KarmadaClientFactory in production).
        config:         ConsoleConfig; defaults are used when omitted.

    Returns:
        Configured FastAPI application, ready to be served by uvicorn.
    """
    from karmada_console import __version__

    config = config or ConsoleConfig()

    app = FastAPI(
        title="Karmada Console",
        summary="Karmada multi-cluster console API",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url=None,
        openapi_url="/api/v1/openapi.json",
    )

    app.state.client_factory = client_factory
    app.state.config = config
    app.state.application_service = ApplicationService(config)

    app.include_router(router, prefix=_API_PREFIX)
    app.mount("/metrics", make_asgi_app())

    # -----------------------------------------------------------------------
    # Exception handlers
    # -----------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = exc.errors()
        message = "invalid request"
        if errors:
            locs = errors[0].get("loc", ())
            field = str(locs[-1]) if locs else ""
            message = f"invalid {field}: {errors[0].get('msg', '')}".strip()
        return _error(400, "INVALID_REQUEST", message)

    @app.exception_handler(ApplicationStatusError)
    async def application_status_handler(
        _request: Request,
        exc: ApplicationStatusError,
    ) -> JSONResponse:
        return _error(400, exc.code, str(exc))

    @app.exception_handler(ClusterAccessError)
    async def cluster_access_handler(
        request: Request,
        exc: ClusterAccessError,
    ) -> JSONResponse:
        _log.warning("cluster_unreachable", path=str(request.url.path), cluster=exc.cluster, error=str(exc.cause))
        return _error(502, exc.code, str(exc))

    @app.exception_handler(ApiException)
    async def api_exception_handler(
        request: Request,
        exc: ApiException,
    ) -> JSONResponse:
        """Map member cluster API errors: 404 passes through, the rest is 502."""
        status = getattr(exc, "status", None)
        _log.warning(
            "member_api_error",
            path=str(request.url.path),
            status=status,
            reason=getattr(exc, "reason", ""),
        )
        if status == 404:
            return _error(404, "NOT_FOUND", "requested object not found in member cluster")
        return _error(502, "MEMBER_API_ERROR", f"member cluster API returned {status}: {getattr(exc, 'reason', '')}")

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions. Never expose stack traces."""
        _log.error(
            "unhandled_exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
        )
        return _error(500, "INTERNAL_ERROR", "An unexpected error occurred.")

    return app
