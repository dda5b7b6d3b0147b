"""Application bootstrap for the Karmada console.

Startup order: config -> logging -> Karmada client -> REST.
Shutdown runs in reverse order and each step's errors are logged
independently.
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

from karmada_console.config import load_config
from karmada_console.models.config import ConsoleConfig
from karmada_console.observability.logging import get_logger, setup_logging

if TYPE_CHECKING:
    import structlog

_SHUTDOWN_GRACE_SECONDS = 15


class _ComponentError(Exception):
    """Raised when a mandatory component fails to start."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}")
        self.component = component
        self.cause = cause


class ConsoleApp:
    """Application root. Owns the client factory and the REST server.

    ``stop()`` is safe to call on an app that never started.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        self.config: ConsoleConfig | None = config
        self._client_factory: object | None = None
        self._rest_server: object | None = None
        self._background_tasks: list[asyncio.Task[None]] = []
        self._running = False
        self._log: structlog.stdlib.BoundLogger | None = None

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Start all components in dependency order.

        Raises _ComponentError if a mandatory component cannot start.
        """
        if self.config is None:
            self.config = load_config()

        setup_logging(self.config.log.level)
        self._log = get_logger("app")
        self._log.info("karmada console starting", version=_console_version())

        await self._start_client_factory()
        await self._start_rest()

        self._running = True
        self._log.info("karmada console started", port=self.config.api.port)

    async def _start_client_factory(self) -> None:
        assert self._log is not None
        assert self.config is not None
        self._log.debug("loading karmada client configuration")
        try:
            from karmada_console.kube import load_client_factory

            self._client_factory = await load_client_factory(self.config.karmada)
        except Exception as exc:
            raise _ComponentError("karmada_client", exc) from exc

    async def _start_rest(self) -> None:
        """Start the uvicorn REST server as a background task."""
        assert self._log is not None
        assert self.config is not None
        self._log.debug("starting rest api")
        try:
            import uvicorn

            from karmada_console.api import build_app

            fastapi_app = build_app(client_factory=self._client_factory, config=self.config)
            uv_config = uvicorn.Config(
                app=fastapi_app,
                host=self.config.api.host,
                port=self.config.api.port,
                log_config=None,  # structlog handles all logging
                access_log=False,
            )
            server = uvicorn.Server(uv_config)
            task = asyncio.create_task(server.serve(), name="rest-server")
            self._background_tasks.append(task)
            self._rest_server = server
            self._log.info("rest api started", host=self.config.api.host, port=self.config.api.port)
        except Exception as exc:
            raise _ComponentError("rest", exc) from exc

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def stop(self) -> None:
        """Gracefully stop the REST server, then background tasks."""
        if not self._running and self._log is None:
            return

        log = self._log or get_logger("app")
        log.info("karmada console shutting down")
        self._running = False

        if self._rest_server is not None:
            self._rest_server.should_exit = True  # type: ignore[attr-defined]

        if self._background_tasks:
            _done, pending = await asyncio.wait(self._background_tasks, timeout=_SHUTDOWN_GRACE_SECONDS)
            for task in pending:
                log.warning("task did not stop in time", task=task.get_name())
                task.cancel()
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
        self._background_tasks.clear()
        self._rest_server = None
        self._client_factory = None

        log.info("karmada console stopped")

    @property
    def running(self) -> bool:
        return self._running


def _console_version() -> str:
    from karmada_console import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def main(config: ConsoleConfig | None = None) -> None:
    """Create the app, register OS signals, run until shutdown is requested."""
    app = ConsoleApp(config)
    loop = asyncio.get_running_loop()

    shutdown_triggered = False

    def _request_shutdown() -> None:
        nonlocal shutdown_triggered
        if shutdown_triggered:
            return
        shutdown_triggered = True
        asyncio.create_task(app.stop(), name="shutdown")

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, _request_shutdown)

    try:
        await app.start()
        while app.running:
            await asyncio.sleep(1)
    except _ComponentError as exc:
        log = get_logger("app")
        log.critical(
            "fatal startup error",
            component=exc.component,
            error=str(exc.cause),
        )
        await app.stop()
        raise SystemExit(1) from exc
    finally:
        if app.running:
            await app.stop()
