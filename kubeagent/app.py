"""Application bootstrap for KubeAgent.

Wires all components in dependency order and manages the asyncio lifecycle.
Startup order: config → logging → engine → notifications → tick loop → REST

Shutdown stops components in reverse order. Each component's stop error is
caught and logged independently so one failure does not leave the tick
loop or the server running.
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

from kubeagent.config import load_config
from kubeagent.engine import ClusterEngine, TickResult
from kubeagent.models.config import KubeAgentConfig
from kubeagent.observability.logging import get_logger, setup_logging
from kubeagent.simulator.loop import TickLoop

if TYPE_CHECKING:
    import structlog

    from kubeagent.notifications import NotificationDispatcher

_SHUTDOWN_GRACE_SECONDS = 5


class _ComponentError(Exception):
    """Raised when a mandatory component fails to start."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}")
        self.component = component
        self.cause = cause


class KubeAgentApp:
    """Application root. Owns every component and coordinates their lifecycle.

    ``stop()`` is safe to call on an app that was never started or has
    already stopped.
    """

    def __init__(self, config: KubeAgentConfig | None = None) -> None:
        self.config = config
        self.engine: ClusterEngine | None = None
        self._notifications: NotificationDispatcher | None = None
        self._tick_loop: TickLoop[TickResult] | None = None
        self._rest_server: object | None = None
        self._background_tasks: list[asyncio.Task[None]] = []

        self._running = False
        self._log: structlog.stdlib.BoundLogger | None = None

    @property
    def running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Start all components in dependency order.

        Raises _ComponentError if a mandatory component cannot start.
        """
        # --- 1. Configuration -------------------------------------------
        if self.config is None:
            self.config = load_config()

        # --- 2. Logging -------------------------------------------------
        setup_logging(self.config.log.level)
        self._log = get_logger("app")
        self._log.info("kubeagent starting", version=_kubeagent_version())

        # --- 3. Cluster engine ------------------------------------------
        self._start_engine()

        # --- 4. Notification dispatcher ---------------------------------
        self._start_notifications()

        # --- 5. Tick loop -----------------------------------------------
        await self._start_tick_loop()

        # --- 6. REST API ------------------------------------------------
        await self._start_rest()

        self._running = True
        self._log.info("kubeagent started", api_enabled=self.config.api.enabled)

    def _start_engine(self) -> None:
        assert self._log is not None
        assert self.config is not None
        try:
            self.engine = ClusterEngine(self.config)
            self._log.info("cluster engine started", seed=self.config.simulation.seed)
        except Exception as exc:
            raise _ComponentError("engine", exc) from exc

    def _start_notifications(self) -> None:
        assert self._log is not None
        assert self.config is not None
        try:
            from kubeagent.notifications import build_notification_dispatcher

            self._notifications = build_notification_dispatcher(config=self.config.notifications)
            self._log.info("notifications started", channels=len(self._notifications.channels))
        except Exception as exc:
            # Non-fatal: the alert feed still fills, only toasts are lost.
            self._log.warning(
                "notification dispatcher failed to start; alerts will not be pushed",
                error=str(exc),
            )
            self._notifications = None

    async def _start_tick_loop(self) -> None:
        assert self._log is not None
        assert self.config is not None
        assert self.engine is not None
        try:
            loop: TickLoop[TickResult] = TickLoop(
                self.engine.tick,
                self.config.simulation.tick_interval_seconds,
                on_tick=self._on_tick,
            )
            await loop.start()
            self._tick_loop = loop
        except Exception as exc:
            raise _ComponentError("tick_loop", exc) from exc

    def _on_tick(self, result: TickResult) -> None:
        """Surface the first alert of a tick as a transient notification."""
        if result.alerts and self._notifications is not None:
            self._notifications.dispatch(result.alerts[0])

    async def _start_rest(self) -> None:
        assert self._log is not None
        assert self.config is not None
        assert self.engine is not None
        if not self.config.api.enabled:
            self._log.info("rest api disabled (api.enabled=false)")
            return
        try:
            import uvicorn

            from kubeagent.api import build_app

            fastapi_app = build_app(engine=self.engine, config=self.config)
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
            self._log.info("rest api started", port=self.config.api.port)
        except Exception as exc:
            raise _ComponentError("rest", exc) from exc

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def stop(self) -> None:
        """Stop all components in reverse startup order."""
        if not self._running and self._log is None:
            return

        log = self._log or get_logger("app")
        log.info("kubeagent shutting down")
        self._running = False

        if self._rest_server is not None:
            self._rest_server.should_exit = True  # type: ignore[attr-defined]
        if self._background_tasks:
            _done, pending = await asyncio.wait(self._background_tasks, timeout=_SHUTDOWN_GRACE_SECONDS)
            for task in pending:
                task.cancel()
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
        self._background_tasks.clear()
        self._rest_server = None

        await self._stop_component("tick_loop", self._tick_loop)
        self._tick_loop = None
        await self._stop_component("notifications", self._notifications)
        self._notifications = None

        log.info("kubeagent stopped")
        self._log = None

    async def _stop_component(self, name: str, component: object | None) -> None:
        """Call stop() on a component if it has that method, catching all errors."""
        if component is None:
            return
        log = self._log or get_logger("app")
        stop_fn = getattr(component, "stop", None)
        if stop_fn is None:
            return
        try:
            result = stop_fn()
            if asyncio.iscoroutine(result):
                await asyncio.wait_for(result, timeout=_SHUTDOWN_GRACE_SECONDS)
        except TimeoutError:
            log.warning("component stop timed out", component=name, timeout=_SHUTDOWN_GRACE_SECONDS)
        except Exception as exc:
            log.error("component stop raised an error", component=name, error=str(exc))


def _kubeagent_version() -> str:
    from kubeagent import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def main(config: KubeAgentConfig | None = None) -> None:
    """Create the app, register OS signals, run until shutdown is requested."""
    app = KubeAgentApp(config)
    loop = asyncio.get_running_loop()
    stop_requested = asyncio.Event()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, stop_requested.set)

    try:
        await app.start()
        await stop_requested.wait()
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
