"""Shared fixtures for KubeAgent integration tests.

Provides a seeded ClusterEngine with a fixed clock so full tick, alert and
command pipelines can be exercised deterministically.
"""

from __future__ import annotations

import random
from datetime import UTC, datetime

import pytest

from kubeagent.engine import ClusterEngine
from kubeagent.models.config import AlertConfig, KubeAgentConfig, SimulationConfig

_NOW = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


def make_engine(
    seed: int = 21,
    flip_probability: float = 0.01,
    spike_probability: float = 0.05,
    feed_size: int = 50,
) -> ClusterEngine:
    """Create a ClusterEngine with deterministic randomness and time."""
    config = KubeAgentConfig(
        simulation=SimulationConfig(
            seed=seed,
            status_flip_probability=flip_probability,
            cpu_spike_probability=spike_probability,
        ),
        alerts=AlertConfig(feed_size=feed_size),
    )
    return ClusterEngine(config, rng=random.Random(seed), clock=lambda: _NOW)


@pytest.fixture
def engine() -> ClusterEngine:
    return make_engine()


@pytest.fixture
def flapping_engine() -> ClusterEngine:
    """Every Running/Error pod toggles on every tick."""
    return make_engine(flip_probability=1.0, spike_probability=0.0)
