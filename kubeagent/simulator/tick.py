"""Per-tick random walk of pod usage and health.

Random draws happen in a fixed order per pod (status flip, CPU jitter, CPU
spike, memory jitter) so a scripted random source can force a transition.
"""

from __future__ import annotations

from typing import Protocol

from kubeagent.models.cluster import ClusterState
from kubeagent.models.config import SimulationConfig
from kubeagent.models.pods import EventType, K8sEvent, Pod, PodStatus
from kubeagent.observability.logging import get_logger
from kubeagent.observability.metrics import ticks_total
from kubeagent.store.state_store import StateStore

_log = get_logger("simulator")

_TOGGLE = {
    PodStatus.RUNNING: PodStatus.ERROR,
    PodStatus.ERROR: PodStatus.RUNNING,
}


class RandomSource(Protocol):
    """The subset of ``random.Random`` the simulator draws from."""

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...


class TickSimulator:
    """Advances every pod in the store by one time step."""

    def __init__(self, store: StateStore, rng: RandomSource, config: SimulationConfig | None = None) -> None:
        self._store = store
        self._rng = rng
        self._config = config or SimulationConfig()
        self._event_seq = 0

    def tick(self) -> None:
        self._store.apply_tick(self._advance)
        ticks_total.inc()

    def _advance(self, state: ClusterState) -> None:
        for pod in state.pods:
            self._step(pod)

    def _step(self, pod: Pod) -> None:
        cfg = self._config
        rng = self._rng

        if rng.random() < cfg.status_flip_probability and pod.status in _TOGGLE:
            self._flip(pod)

        cpu_delta = rng.uniform(-cfg.cpu_jitter, cfg.cpu_jitter)
        if rng.random() < cfg.cpu_spike_probability:
            cpu_delta = cfg.cpu_spike
        memory_delta = rng.uniform(-cfg.memory_jitter, cfg.memory_jitter)

        pod.usage.cpu += cpu_delta
        pod.usage.memory += memory_delta
        pod.usage.clamp()

    def _flip(self, pod: Pod) -> None:
        previous = pod.status
        pod.status = _TOGGLE[previous]
        self._event_seq += 1
        if pod.status is PodStatus.ERROR:
            event = K8sEvent(
                id=f"tick-{self._event_seq}",
                type=EventType.WARNING,
                reason="BackOff",
                message="Back-off restarting failed container",
                timestamp=self._store.clock(),
            )
        else:
            event = K8sEvent(
                id=f"tick-{self._event_seq}",
                type=EventType.NORMAL,
                reason="Started",
                message="Started container main",
                timestamp=self._store.clock(),
            )
        pod.events.append(event)
        _log.info("pod status flipped", pod=pod.name, previous=previous.value, status=pod.status.value)
