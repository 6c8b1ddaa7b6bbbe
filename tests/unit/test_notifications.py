"""Tests for notification dispatch, the log channel and the webhook channel."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from kubeagent.models.alerts import Alert, AlertSeverity, AlertType
from kubeagent.models.config import NotificationConfig
from kubeagent.notifications import build_notification_dispatcher
from kubeagent.notifications.manager import LogNotificationChannel, NotificationChannel, NotificationDispatcher
from kubeagent.notifications.webhook import WebhookNotificationChannel, build_payload

_TS = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)
_URL = "https://hooks.example.com/kubeagent"


def _make_alert(severity: AlertSeverity = AlertSeverity.CRITICAL) -> Alert:
    return Alert(
        pod_id="pod-abc",
        pod_name="api-gateway-x1y2z",
        type=AlertType.STATUS,
        severity=severity,
        message="Pod api-gateway-x1y2z has entered Error state!",
        timestamp=_TS,
    )


class _RecordingChannel(NotificationChannel):
    def __init__(self, name: str = "recording", result: bool = True) -> None:
        self._name = name
        self._result = result
        self.sent: list[Alert] = []

    @property
    def channel_name(self) -> str:
        return self._name

    async def send(self, alert: Alert) -> bool:
        self.sent.append(alert)
        return self._result


class _ExplodingChannel(NotificationChannel):
    @property
    def channel_name(self) -> str:
        return "exploding"

    async def send(self, alert: Alert) -> bool:
        raise RuntimeError("channel down")


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class TestDispatcher:
    async def test_fans_out_to_every_channel(self) -> None:
        first, second = _RecordingChannel("a"), _RecordingChannel("b")
        dispatcher = NotificationDispatcher([first, second])
        alert = _make_alert()
        dispatcher.dispatch(alert)
        await dispatcher.stop()
        assert first.sent == [alert]
        assert second.sent == [alert]

    async def test_failing_channel_does_not_block_others(self) -> None:
        healthy = _RecordingChannel()
        dispatcher = NotificationDispatcher([_ExplodingChannel(), healthy, _RecordingChannel("sad", result=False)])
        dispatcher.dispatch(_make_alert())
        await dispatcher.stop()
        assert len(healthy.sent) == 1

    async def test_no_channels_is_noop(self) -> None:
        dispatcher = NotificationDispatcher([])
        dispatcher.dispatch(_make_alert())
        await dispatcher.stop()
        assert dispatcher.channels == []

    async def test_log_channel_always_succeeds(self) -> None:
        channel = LogNotificationChannel()
        assert await channel.send(_make_alert(AlertSeverity.CRITICAL)) is True
        assert await channel.send(_make_alert(AlertSeverity.WARNING)) is True


# ---------------------------------------------------------------------------
# Webhook channel
# ---------------------------------------------------------------------------


class TestWebhookChannel:
    def test_rejects_bad_urls(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            WebhookNotificationChannel(url="")
        with pytest.raises(ValueError, match="http"):
            WebhookNotificationChannel(url="ftp://example.com/hook")

    def test_payload_shape(self) -> None:
        alert = _make_alert()
        payload = build_payload(alert)
        assert payload == {
            "id": alert.id,
            "pod_id": "pod-abc",
            "pod_name": "api-gateway-x1y2z",
            "type": "Status",
            "severity": "Critical",
            "message": "Pod api-gateway-x1y2z has entered Error state!",
            "timestamp": "2026-02-18T12:00:00+00:00",
        }

    async def test_success_on_2xx(self, monkeypatch: pytest.MonkeyPatch) -> None:
        captured: dict[str, Any] = {}

        async def _post(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            captured["url"] = url
            captured.update(kwargs)
            return httpx.Response(200, request=httpx.Request("POST", url))

        monkeypatch.setattr(httpx.AsyncClient, "post", _post)
        channel = WebhookNotificationChannel(url=_URL, headers={"Authorization": "Bearer t"})
        assert await channel.send(_make_alert()) is True
        assert captured["url"] == _URL
        assert captured["json"]["pod_name"] == "api-gateway-x1y2z"
        assert captured["headers"]["Authorization"] == "Bearer t"

    async def test_failure_on_5xx(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def _post(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(503, text="unavailable", request=httpx.Request("POST", url))

        monkeypatch.setattr(httpx.AsyncClient, "post", _post)
        assert await WebhookNotificationChannel(url=_URL).send(_make_alert()) is False

    async def test_timeout_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def _post(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            raise httpx.ReadTimeout("timed out")

        monkeypatch.setattr(httpx.AsyncClient, "post", _post)
        assert await WebhookNotificationChannel(url=_URL).send(_make_alert()) is False

    async def test_connection_error_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def _post(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            raise httpx.ConnectError("refused")

        monkeypatch.setattr(httpx.AsyncClient, "post", _post)
        assert await WebhookNotificationChannel(url=_URL).send(_make_alert()) is False


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestBuildDispatcher:
    def test_log_channel_only_by_default(self) -> None:
        dispatcher = build_notification_dispatcher(NotificationConfig())
        assert [c.channel_name for c in dispatcher.channels] == ["log"]

    def test_webhook_enabled_from_secret_ref(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_TEST_HOOK_URL", _URL)
        dispatcher = build_notification_dispatcher(NotificationConfig(webhook_secret_ref="KUBEAGENT_TEST_HOOK_URL"))
        assert [c.channel_name for c in dispatcher.channels] == ["log", "webhook"]

    def test_empty_secret_skips_webhook(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("KUBEAGENT_TEST_HOOK_URL", raising=False)
        dispatcher = build_notification_dispatcher(NotificationConfig(webhook_secret_ref="KUBEAGENT_TEST_HOOK_URL"))
        assert [c.channel_name for c in dispatcher.channels] == ["log"]

    def test_invalid_webhook_url_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_TEST_HOOK_URL", "not-a-url")
        dispatcher = build_notification_dispatcher(NotificationConfig(webhook_secret_ref="KUBEAGENT_TEST_HOOK_URL"))
        assert [c.channel_name for c in dispatcher.channels] == ["log"]
