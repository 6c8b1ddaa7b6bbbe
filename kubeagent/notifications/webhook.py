"""JSON webhook notification channel.

POSTs each alert as a flat JSON object whose keys mirror the Alert fields,
so a dashboard can render it without knowing KubeAgent's types.
"""

from __future__ import annotations

import httpx
import structlog

from kubeagent.models.alerts import Alert
from kubeagent.notifications.manager import NotificationChannel

_log = structlog.get_logger(component="notifications.webhook")


class WebhookNotificationChannel(NotificationChannel):
    """Delivers alerts by POSTing a JSON payload to a configurable URL.

    Args:
        url:     Full endpoint URL.
        headers: Optional extra headers (e.g. Authorization).
        timeout: HTTP request timeout in seconds. Defaults to 5.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 5.0,
    ) -> None:
        if not url:
            raise ValueError("Webhook url must not be empty")
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Webhook url must be http(s), got: {url!r}")
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout

    @property
    def channel_name(self) -> str:
        return "webhook"

    async def send(self, alert: Alert) -> bool:
        """POST *alert*; True on a 2xx response."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._url,
                    json=build_payload(alert),
                    headers={"Content-Type": "application/json", **self._headers},
                )
        except httpx.TimeoutException:
            _log.warning("webhook_request_timeout", alert_id=alert.id, url=self._url)
            return False
        except httpx.HTTPError as exc:
            _log.warning("webhook_http_error", error=str(exc), alert_id=alert.id)
            return False

        if response.is_success:
            return True
        _log.warning(
            "webhook_non_2xx_response",
            status_code=response.status_code,
            body=response.text[:200],
            alert_id=alert.id,
        )
        return False


def build_payload(alert: Alert) -> dict[str, object]:
    return {
        "id": alert.id,
        "pod_id": alert.pod_id,
        "pod_name": alert.pod_name,
        "type": alert.type.value,
        "severity": alert.severity.value,
        "message": alert.message,
        "timestamp": alert.timestamp.isoformat(),
    }
