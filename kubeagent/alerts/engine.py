"""Edge-triggered alert detection.

The engine compares two snapshots and reports only conditions that became
true between them. A pod that stays above threshold produces one alert at
the crossing, not one per tick. The engine keeps no state of its own.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime

from kubeagent.models.alerts import Alert, AlertSeverity, AlertType
from kubeagent.models.cluster import ClusterState
from kubeagent.models.config import AlertConfig
from kubeagent.models.pods import Pod, PodStatus
from kubeagent.observability.logging import get_logger
from kubeagent.observability.metrics import alerts_total

_log = get_logger("alerts.engine")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class AlertEngine:
    """Diffs consecutive snapshots into new alerts."""

    def __init__(self, config: AlertConfig | None = None) -> None:
        self._config = config or AlertConfig()

    def detect(
        self,
        previous: ClusterState,
        current: ClusterState,
        now: datetime | None = None,
    ) -> list[Alert]:
        """Return alerts for conditions newly crossed between *previous* and *current*.

        Pods absent from *previous* are skipped. Order follows *current*'s pod
        order, with a pod's status alert ahead of its utilization alert.
        """
        now = now or datetime.now(tz=UTC)
        before = {pod.id: pod for pod in previous.pods}
        alerts: list[Alert] = []

        for pod in current.pods:
            last = before.get(pod.id)
            if last is None:
                continue
            status_alert = self._status_edge(last, pod, now)
            if status_alert is not None:
                alerts.append(status_alert)
            usage_alert = self._utilization_edge(last, pod, now)
            if usage_alert is not None:
                alerts.append(usage_alert)

        for alert in alerts:
            alerts_total.labels(type=alert.type.value, severity=alert.severity.value).inc()
            _log.info(
                "alert raised",
                alert_id=alert.id,
                pod=alert.pod_name,
                type=alert.type.value,
                severity=alert.severity.value,
            )
        return alerts

    def _status_edge(self, last: Pod, pod: Pod, now: datetime) -> Alert | None:
        if pod.status != PodStatus.ERROR or last.status == PodStatus.ERROR:
            return None
        return Alert(
            pod_id=pod.id,
            pod_name=pod.name,
            type=AlertType.STATUS,
            severity=AlertSeverity.CRITICAL,
            message=f"Pod {pod.name} has entered Error state!",
            timestamp=now,
        )

    def _utilization_edge(self, last: Pod, pod: Pod, now: datetime) -> Alert | None:
        threshold = self._config.utilization_threshold
        cpu, memory = pod.usage.cpu, pod.usage.memory
        cpu_crossed = cpu > threshold and last.usage.cpu <= threshold
        memory_crossed = memory > threshold and last.usage.memory <= threshold
        if not (cpu_crossed or memory_crossed):
            return None

        # CPU wins when both are over, even if only memory just crossed.
        metric = "CPU" if cpu > threshold else "Memory"
        severity = AlertSeverity.CRITICAL if cpu > self._config.critical_cpu_threshold else AlertSeverity.WARNING
        peak = _round_half_up(max(cpu, memory))
        return Alert(
            pod_id=pod.id,
            pod_name=pod.name,
            type=AlertType.UTILIZATION,
            severity=severity,
            message=f"High {metric} usage on {pod.name} ({peak}%)",
            timestamp=now,
        )
