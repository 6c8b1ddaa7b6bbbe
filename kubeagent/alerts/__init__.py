"""Alerting for KubeAgent.

Exports:
    AlertEngine -- Stateless edge detector over consecutive snapshots.
    AlertFeed   -- Bounded most-recent-first alert history.
"""

from kubeagent.alerts.engine import AlertEngine
from kubeagent.alerts.feed import AlertFeed

__all__ = ["AlertEngine", "AlertFeed"]
