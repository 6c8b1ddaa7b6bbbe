"""Cancelable asyncio timer that drives ticks on a fixed cadence."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

from kubeagent.observability.logging import get_logger

_log = get_logger("simulator.loop")

R = TypeVar("R")


class TickLoop(Generic[R]):
    """Calls ``tick_fn`` every ``interval`` seconds until stopped.

    ``on_tick`` receives each tick's result. A tick that raises is logged
    and the loop keeps going; only ``stop()`` ends it.
    """

    def __init__(
        self,
        tick_fn: Callable[[], R],
        interval: float,
        on_tick: Callable[[R], None] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self._tick_fn = tick_fn
        self._interval = interval
        self._on_tick = on_tick
        self._task: asyncio.Task[None] | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="tick-loop")
        _log.info("tick loop started", interval=self._interval)

    async def stop(self) -> None:
        """Cancel the timer and wait for the task to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        _log.info("tick loop stopped", ticks=self.ticks)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                result = self._tick_fn()
                self.ticks += 1
                if self._on_tick is not None:
                    self._on_tick(result)
            except Exception as exc:
                _log.error("tick failed", error=str(exc))
