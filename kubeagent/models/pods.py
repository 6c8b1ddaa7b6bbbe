"""Pod, event and scheduling data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class PodStatus(StrEnum):
    """Pod lifecycle status as displayed by ``kubectl get pods``."""

    RUNNING = "Running"
    PENDING = "Pending"
    ERROR = "Error"
    TERMINATING = "Terminating"


class EventType(StrEnum):
    """Kubernetes event type."""

    NORMAL = "Normal"
    WARNING = "Warning"


class ConstraintType(StrEnum):
    """Kind of scheduling constraint attached to a pod."""

    NODE_AFFINITY = "NodeAffinity"
    POD_AFFINITY = "PodAffinity"
    POD_ANTI_AFFINITY = "PodAntiAffinity"


class ConstraintRule(StrEnum):
    """Whether a scheduling constraint is hard or soft."""

    REQUIRED = "Required"
    PREFERRED = "Preferred"


@dataclass(frozen=True)
class K8sEvent:
    """Audit record appended to a pod's event log.

    Immutable: events are only ever appended, never edited or removed.
    """

    id: str
    type: EventType
    reason: str
    message: str
    timestamp: datetime


@dataclass(frozen=True)
class SchedulingConstraint:
    """Descriptive placement hint. Nothing in the simulator enforces it."""

    type: ConstraintType
    rule: ConstraintRule
    label_selector: str


@dataclass
class PodUsage:
    """CPU and memory utilization as percentages in [0, 100]."""

    cpu: float = 0.0
    memory: float = 0.0

    def clamp(self) -> None:
        self.cpu = _clamp(self.cpu)
        self.memory = _clamp(self.memory)


@dataclass
class Pod:
    """A simulated workload instance bound to a node.

    Pods are mutated in place by the tick simulator; ``id`` is never reassigned.
    """

    id: str
    name: str
    namespace: str
    status: PodStatus
    ip: str
    node: str
    labels: dict[str, str] = field(default_factory=dict)
    creation_timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    usage: PodUsage = field(default_factory=PodUsage)
    events: list[K8sEvent] = field(default_factory=list)
    connections: list[str] = field(default_factory=list)  # distinct target pod ids
    scheduling_constraints: list[SchedulingConstraint] = field(default_factory=list)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))
