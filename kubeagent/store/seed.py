"""Seed cluster generation.

The roster is fixed (five application pods spread round-robin over three
nodes plus four system pods pinned to the first node); names, ids, IPs,
usage and connections are drawn from the injected random source.
"""

from __future__ import annotations

import random
import string
from datetime import datetime, timedelta

from kubeagent.models.cluster import ClusterState
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

NAMESPACES = ["default", "kube-system", "production", "monitoring"]
NODES = ["node-1", "node-2", "node-3"]
APP_PODS = ["api-gateway", "auth-service", "user-db", "redis-cache", "worker-node-a"]
SYSTEM_PODS = ["coredns", "kube-proxy", "calico-node", "metrics-server"]

_FRONTEND_COUNT = 2
_APP_IP_PREFIX = "10.244.0."
_APP_IP_HOSTS = range(10, 251)
_SYSTEM_IP_PREFIX = "10.96.0."
_SYSTEM_IP_HOSTS = range(1, 51)
_IMAGE = "nginx:latest"
_ALPHABET = string.digits + string.ascii_lowercase

_CONSTRAINTS: dict[str, list[SchedulingConstraint]] = {
    "api-gateway": [
        SchedulingConstraint(ConstraintType.NODE_AFFINITY, ConstraintRule.REQUIRED, "disk=ssd"),
    ],
    "user-db": [
        SchedulingConstraint(ConstraintType.POD_ANTI_AFFINITY, ConstraintRule.REQUIRED, "app=user-db"),
    ],
    "redis-cache": [
        SchedulingConstraint(ConstraintType.POD_AFFINITY, ConstraintRule.PREFERRED, "app=user-db"),
    ],
}

# (reason, message template, minutes before creation)
_LIFECYCLE = [
    ("Scheduled", "Successfully assigned {pod} to {node}", 60),
    ("Pulling", f'Pulling image "{_IMAGE}"', 59),
    ("Pulled", f'Successfully pulled image "{_IMAGE}" in 2.1s', 58),
    ("Created", "Created container main", 57),
    ("Started", "Started container main", 56),
]


def random_token(rng: random.Random, length: int) -> str:
    """Return *length* random lowercase base36 characters."""
    return "".join(rng.choice(_ALPHABET) for _ in range(length))


def lifecycle_events(rng: random.Random, pod_name: str, node: str, now: datetime) -> list[K8sEvent]:
    """Build the five canonical start-up events, oldest first."""
    return [
        K8sEvent(
            id=random_token(rng, 9),
            type=EventType.NORMAL,
            reason=reason,
            message=message.format(pod=pod_name, node=node),
            timestamp=now - timedelta(minutes=minutes_ago),
        )
        for reason, message, minutes_ago in _LIFECYCLE
    ]


def build_seed_cluster(rng: random.Random, now: datetime) -> ClusterState:
    """Generate the initial cluster state."""
    pods: list[Pod] = []
    app_ips = rng.sample(_APP_IP_HOSTS, len(APP_PODS))
    system_ips = rng.sample(_SYSTEM_IP_HOSTS, len(SYSTEM_PODS))

    for i, base in enumerate(APP_PODS):
        node = NODES[i % len(NODES)]
        name = f"{base}-{random_token(rng, 5)}"
        pods.append(
            Pod(
                id=f"pod-{random_token(rng, 9)}",
                name=name,
                namespace="default",
                status=PodStatus.RUNNING,
                ip=f"{_APP_IP_PREFIX}{app_ips[i]}",
                node=node,
                labels={"app": base, "tier": "frontend" if i < _FRONTEND_COUNT else "backend"},
                creation_timestamp=now,
                usage=PodUsage(cpu=float(rng.randint(5, 64)), memory=float(rng.randint(10, 79))),
                events=lifecycle_events(rng, name, node, now),
                scheduling_constraints=list(_CONSTRAINTS.get(base, [])),
            )
        )

    for i, base in enumerate(SYSTEM_PODS):
        node = NODES[0]
        name = f"{base}-{random_token(rng, 5)}"
        pods.append(
            Pod(
                id=f"sys-{i}",
                name=name,
                namespace="kube-system",
                status=PodStatus.RUNNING,
                ip=f"{_SYSTEM_IP_PREFIX}{system_ips[i]}",
                node=node,
                labels={"k8s-app": base},
                creation_timestamp=now,
                usage=PodUsage(cpu=float(rng.randint(2, 16)), memory=float(rng.randint(5, 24))),
                events=lifecycle_events(rng, name, node, now),
            )
        )

    _link_pods(rng, pods)
    return ClusterState(pods=pods, namespaces=list(NAMESPACES))


def _link_pods(rng: random.Random, pods: list[Pod]) -> None:
    """Give each pod 0-2 outbound connections to other pods."""
    for pod in pods:
        if rng.random() <= 0.5:
            continue
        attempts = rng.randint(1, 2)
        for _ in range(attempts):
            target = rng.choice(pods)
            if target.id != pod.id and target.id not in pod.connections:
                pod.connections.append(target.id)
