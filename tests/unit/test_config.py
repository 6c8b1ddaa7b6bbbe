"""Tests for environment-driven configuration loading."""

from __future__ import annotations

import pytest

from kubeagent.config import load_config

_VARS = (
    "SEED",
    "TICK_INTERVAL",
    "STATUS_FLIP_PROBABILITY",
    "CPU_SPIKE_PROBABILITY",
    "ALERT_THRESHOLD",
    "ALERT_CRITICAL_CPU",
    "ALERT_FEED_SIZE",
    "NOTIFICATIONS_WEBHOOK_SECRET_REF",
    "API_ENABLED",
    "API_HOST",
    "API_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(f"KUBEAGENT_{name}", raising=False)


class TestDefaults:
    def test_defaults(self) -> None:
        config = load_config()
        assert config.simulation.seed is None
        assert config.simulation.tick_interval_seconds == 3.0
        assert config.simulation.status_flip_probability == 0.01
        assert config.simulation.cpu_spike_probability == 0.05
        assert config.alerts.utilization_threshold == 90.0
        assert config.alerts.critical_cpu_threshold == 95.0
        assert config.alerts.feed_size == 50
        assert config.notifications.webhook_secret_ref == ""
        assert config.api.enabled is True
        assert config.api.port == 8080
        assert config.log.level == "info"


class TestOverrides:
    def test_values_read_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_SEED", "1234")
        monkeypatch.setenv("KUBEAGENT_TICK_INTERVAL", "0.5")
        monkeypatch.setenv("KUBEAGENT_STATUS_FLIP_PROBABILITY", "0.2")
        monkeypatch.setenv("KUBEAGENT_ALERT_FEED_SIZE", "10")
        monkeypatch.setenv("KUBEAGENT_API_ENABLED", "false")
        monkeypatch.setenv("KUBEAGENT_LOG_LEVEL", "DEBUG")
        config = load_config()
        assert config.simulation.seed == 1234
        assert config.simulation.tick_interval_seconds == 0.5
        assert config.simulation.status_flip_probability == 0.2
        assert config.alerts.feed_size == 10
        assert config.api.enabled is False
        assert config.log.level == "debug"

    def test_numeric_values_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_TICK_INTERVAL", "0")
        monkeypatch.setenv("KUBEAGENT_ALERT_FEED_SIZE", "5000")
        monkeypatch.setenv("KUBEAGENT_ALERT_THRESHOLD", "140")
        monkeypatch.setenv("KUBEAGENT_API_PORT", "80")
        config = load_config()
        assert config.simulation.tick_interval_seconds == 0.1
        assert config.alerts.feed_size == 1000
        assert config.alerts.utilization_threshold == 100.0
        assert config.api.port == 1024

    def test_blank_seed_means_unseeded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_SEED", "  ")
        assert load_config().simulation.seed is None


class TestValidation:
    def test_invalid_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_SEED", "abc")
        with pytest.raises(ValueError, match="Invalid seed"):
            load_config()

    def test_probability_out_of_range(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_CPU_SPIKE_PROBABILITY", "1.5")
        with pytest.raises(ValueError, match="cpu spike probability"):
            load_config()

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_non_numeric_interval(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEAGENT_TICK_INTERVAL", "fast")
        with pytest.raises(ValueError):
            load_config()
