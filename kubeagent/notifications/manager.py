"""Notification dispatch for KubeAgent.

NotificationChannel    -- ABC every channel must implement.
NotificationDispatcher -- Fans an alert out to all registered channels;
                          a failing channel never blocks the others or
                          the tick loop.
LogNotificationChannel -- Writes the alert to the structured log.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

import structlog

from kubeagent.models.alerts import Alert, AlertSeverity
from kubeagent.observability.metrics import notifications_total

_log = structlog.get_logger(component="notifications.manager")


class NotificationChannel(ABC):
    """Abstract base class for all notification channels.

    ``send`` must not raise; it returns ``False`` on failure instead.
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier used in metrics and logs."""

    @abstractmethod
    async def send(self, alert: Alert) -> bool:
        """Deliver *alert* via this channel.

        Returns:
            True  -- delivered.
            False -- delivery failed (already logged inside implementation).
        """


class LogNotificationChannel(NotificationChannel):
    """Surfaces alerts as log lines. Always available."""

    @property
    def channel_name(self) -> str:
        return "log"

    async def send(self, alert: Alert) -> bool:
        log = _log.warning if alert.severity is AlertSeverity.CRITICAL else _log.info
        log(
            "alert_notification",
            alert_id=alert.id,
            pod=alert.pod_name,
            type=alert.type.value,
            severity=alert.severity.value,
            message=alert.message,
        )
        return True


class NotificationDispatcher:
    """Fan-out dispatcher that sends an alert to every registered channel.

    * Never raises: exceptions from individual channels are caught and logged.
    * Never blocks the caller: ``dispatch`` schedules the fan-out as a
      background task on the running loop and returns immediately.
    """

    def __init__(self, channels: list[NotificationChannel]) -> None:
        self._channels = channels
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def channels(self) -> list[NotificationChannel]:
        return list(self._channels)

    def dispatch(self, alert: Alert) -> None:
        """Schedule delivery of *alert* to every channel."""
        if not self._channels:
            return
        task = asyncio.ensure_future(self._fan_out(alert))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def stop(self) -> None:
        """Wait for in-flight deliveries to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _fan_out(self, alert: Alert) -> None:
        tasks = [self._send_one(channel, alert) for channel in self._channels]
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _send_one(self, channel: NotificationChannel, alert: Alert) -> None:
        """Deliver to a single channel, recording metrics regardless of outcome."""
        try:
            success = await channel.send(alert)
        except Exception as exc:  # noqa: BLE001
            _log.error(
                "notification_channel_unexpected_error",
                channel=channel.channel_name,
                alert_id=alert.id,
                error=str(exc),
            )
            success = False

        label = "true" if success else "false"
        notifications_total.labels(channel=channel.channel_name, success=label).inc()

        if not success:
            _log.warning(
                "notification_failed",
                channel=channel.channel_name,
                alert_id=alert.id,
            )
