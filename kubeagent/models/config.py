"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SimulationConfig:
    """Tick simulator configuration."""

    seed: int | None = None
    tick_interval_seconds: float = 3.0
    status_flip_probability: float = 0.01
    cpu_spike_probability: float = 0.05
    cpu_jitter: float = 5.0
    cpu_spike: float = 50.0
    memory_jitter: float = 2.0


@dataclass
class AlertConfig:
    """Alert engine configuration."""

    utilization_threshold: float = 90.0
    critical_cpu_threshold: float = 95.0
    feed_size: int = 50


@dataclass
class NotificationConfig:
    """Notification system configuration."""

    webhook_secret_ref: str = ""


@dataclass
class APIConfig:
    """REST API configuration."""

    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class KubeAgentConfig:
    """Top-level KubeAgent configuration."""

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    alerts: AlertConfig = field(default_factory=AlertConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log: LogConfig = field(default_factory=LogConfig)
