"""Notification system for KubeAgent.

The first alert of every tick is surfaced as a transient notification on
each configured channel.

Exports:
    NotificationChannel        -- Abstract base for all channel implementations.
    NotificationDispatcher     -- Sends an alert to all registered channels
                                  without blocking the tick loop.
    LogNotificationChannel     -- Structured-log channel, always enabled.
    WebhookNotificationChannel -- Generic JSON POST webhook channel.
    build_notification_dispatcher -- Factory used by the application bootstrap.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import structlog

from kubeagent.notifications.manager import (
    LogNotificationChannel,
    NotificationChannel,
    NotificationDispatcher,
)
from kubeagent.notifications.webhook import WebhookNotificationChannel

if TYPE_CHECKING:
    from kubeagent.models.config import NotificationConfig

_log = structlog.get_logger(component="notifications")

__all__ = [
    "LogNotificationChannel",
    "NotificationChannel",
    "NotificationDispatcher",
    "WebhookNotificationChannel",
    "build_notification_dispatcher",
]


def build_notification_dispatcher(config: NotificationConfig) -> NotificationDispatcher:
    """Build a NotificationDispatcher from environment-resolved secrets.

    ``webhook_secret_ref`` names the environment variable holding the
    webhook URL (KUBEAGENT_NOTIFICATIONS_WEBHOOK_SECRET_REF -> env var name
    -> URL). The webhook channel is enabled only when that variable is set.
    """
    channels: list[NotificationChannel] = [LogNotificationChannel()]

    webhook_ref = config.webhook_secret_ref
    if webhook_ref:
        webhook_url = os.environ.get(webhook_ref, "")
        if webhook_url:
            try:
                channels.append(WebhookNotificationChannel(url=webhook_url))
                _log.info("webhook_channel_enabled")
            except ValueError as exc:
                _log.warning("webhook_channel_disabled", reason=str(exc))
        else:
            _log.debug("webhook_channel_skipped", reason="secret ref env var is empty")

    return NotificationDispatcher(channels=channels)
