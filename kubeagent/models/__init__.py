"""Core data structures for KubeAgent."""

from kubeagent.models.alerts import Alert, AlertSeverity, AlertType
from kubeagent.models.cluster import ClusterState
from kubeagent.models.config import (
    AlertConfig,
    APIConfig,
    KubeAgentConfig,
    LogConfig,
    NotificationConfig,
    SimulationConfig,
)
from kubeagent.models.pods import (
    ConstraintRule,
    ConstraintType,
    EventType,
    K8sEvent,
    Pod,
    PodStatus,
    PodUsage,
    SchedulingConstraint,
)
from kubeagent.models.steps import AgentResponse, Intent, K8sStep

__all__ = [
    "APIConfig",
    "AgentResponse",
    "Alert",
    "AlertConfig",
    "AlertSeverity",
    "AlertType",
    "ClusterState",
    "ConstraintRule",
    "ConstraintType",
    "EventType",
    "Intent",
    "K8sEvent",
    "K8sStep",
    "KubeAgentConfig",
    "LogConfig",
    "NotificationConfig",
    "Pod",
    "PodStatus",
    "PodUsage",
    "SchedulingConstraint",
    "SimulationConfig",
]
