"""Prometheus counters for the simulator, alerting and command paths."""

from __future__ import annotations

from prometheus_client import Counter

ticks_total = Counter(
    "kubeagent_ticks_total",
    "Simulation ticks applied to the cluster state.",
)

alerts_total = Counter(
    "kubeagent_alerts_total",
    "Alerts raised by the alert engine.",
    ["type", "severity"],
)

commands_total = Counter(
    "kubeagent_commands_total",
    "Operator commands executed, by matched route.",
    ["route"],
)

notifications_total = Counter(
    "kubeagent_notifications_total",
    "Notification deliveries, by channel and outcome.",
    ["channel", "success"],
)
