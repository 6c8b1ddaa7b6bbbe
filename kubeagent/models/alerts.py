"""Alert data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import uuid4


class AlertType(StrEnum):
    """Condition that produced an alert."""

    STATUS = "Status"
    UTILIZATION = "Utilization"


class AlertSeverity(StrEnum):
    """Alert severity level."""

    WARNING = "Warning"
    CRITICAL = "Critical"


@dataclass(frozen=True)
class Alert:
    """Emitted by the alert engine, consumed read-only by the feed and notifications."""

    pod_id: str
    pod_name: str
    type: AlertType
    severity: AlertSeverity
    message: str
    timestamp: datetime
    id: str = field(default_factory=lambda: str(uuid4()))
