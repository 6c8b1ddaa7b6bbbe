"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kubeagent.models.config import (
    AlertConfig,
    APIConfig,
    KubeAgentConfig,
    LogConfig,
    NotificationConfig,
    SimulationConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEAGENT_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float, min_val: float | None = None, max_val: float | None = None) -> float:
    val = float(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_seed(key: str) -> int | None:
    val = _env(key, "").strip()
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"Invalid seed: {val!r}. Must be an integer") from None


def _validate_probability(name: str, value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Invalid {name}: {value}. Must be between 0 and 1")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> KubeAgentConfig:
    """Load configuration from KUBEAGENT_* environment variables."""
    return KubeAgentConfig(
        simulation=SimulationConfig(
            seed=_env_seed("SEED"),
            tick_interval_seconds=_env_float("TICK_INTERVAL", 3.0, min_val=0.1),
            status_flip_probability=_validate_probability(
                "status flip probability", _env_float("STATUS_FLIP_PROBABILITY", 0.01)
            ),
            cpu_spike_probability=_validate_probability(
                "cpu spike probability", _env_float("CPU_SPIKE_PROBABILITY", 0.05)
            ),
        ),
        alerts=AlertConfig(
            utilization_threshold=_env_float("ALERT_THRESHOLD", 90.0, min_val=0.0, max_val=100.0),
            critical_cpu_threshold=_env_float("ALERT_CRITICAL_CPU", 95.0, min_val=0.0, max_val=100.0),
            feed_size=_env_int("ALERT_FEED_SIZE", 50, min_val=1, max_val=1000),
        ),
        notifications=NotificationConfig(
            webhook_secret_ref=_env("NOTIFICATIONS_WEBHOOK_SECRET_REF", ""),
        ),
        api=APIConfig(
            enabled=_env_bool("API_ENABLED", True),
            host=_env("API_HOST", "0.0.0.0"),
            port=_env_int("API_PORT", 8080, min_val=1024, max_val=65535),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
