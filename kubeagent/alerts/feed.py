"""Bounded, most-recent-first alert feed."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable

from kubeagent.models.alerts import Alert

_DEFAULT_FEED_SIZE = 50


class AlertFeed:
    """Holds at most ``max_size`` alerts, newest first.

    Publishing a batch prepends it in its original order; whatever falls
    past ``max_size`` is dropped silently.
    """

    def __init__(self, max_size: int = _DEFAULT_FEED_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"Alert feed size must be at least 1, got {max_size}")
        self._items: deque[Alert] = deque(maxlen=max_size)
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._items.maxlen or 0

    def publish(self, alerts: Iterable[Alert]) -> None:
        with self._lock:
            # extendleft reverses, so feed the batch backwards.
            self._items.extendleft(reversed(list(alerts)))

    def items(self, limit: int | None = None) -> list[Alert]:
        with self._lock:
            items = list(self._items)
        return items if limit is None else items[: max(limit, 0)]

    @property
    def latest(self) -> Alert | None:
        with self._lock:
            return self._items[0] if self._items else None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
