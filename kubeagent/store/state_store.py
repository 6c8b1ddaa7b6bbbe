"""Canonical cluster state and its mutation surface.

The store is the single owner of the live ``ClusterState``. Readers only
ever receive deep copies from ``snapshot()``; writers go through
``apply_tick`` or ``apply_command_effect``, which run a callback against the
live state while holding the writer lock.
"""

from __future__ import annotations

import random
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TypeVar

from kubeagent.models.cluster import ClusterState
from kubeagent.observability.logging import get_logger
from kubeagent.store.seed import build_seed_cluster

_log = get_logger("store")

T = TypeVar("T")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class StateStore:
    """Owns the cluster state. Never raises."""

    def __init__(self, rng: random.Random, clock: Clock | None = None) -> None:
        self._rng = rng
        self._clock = clock or utc_now
        self._state = ClusterState()
        # Re-entrant so the engine can hold it across snapshot/tick/snapshot.
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def clock(self) -> Clock:
        return self._clock

    def initialize(self) -> None:
        """Replace the current state with a freshly generated seed cluster."""
        state = build_seed_cluster(self._rng, self._clock())
        with self._lock:
            self._state = state
        _log.info(
            "cluster initialized",
            pods=len(state.pods),
            namespaces=len(state.namespaces),
        )

    def snapshot(self) -> ClusterState:
        """Return an independent deep copy of the current state."""
        with self._lock:
            return self._state.copy()

    def apply_tick(self, mutation: Callable[[ClusterState], T]) -> T:
        """Run a simulator step against the live state."""
        return self._apply("tick", mutation)

    def apply_command_effect(self, effect: Callable[[ClusterState], T]) -> T:
        """Run a command handler against the live state."""
        return self._apply("command", effect)

    def _apply(self, source: str, fn: Callable[[ClusterState], T]) -> T:
        with self._lock:
            result = fn(self._state)
        _log.debug("state mutation applied", source=source)
        return result
