"""Cluster snapshot data structure."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from kubeagent.models.pods import Pod


@dataclass
class ClusterState:
    """The snapshot type exchanged across the engine boundary.

    ``namespaces`` holds unique names in display order.
    """

    pods: list[Pod] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)

    def copy(self) -> ClusterState:
        """Return a deep copy sharing no mutable state with this one."""
        return copy.deepcopy(self)

    def get(self, pod_id: str) -> Pod | None:
        for pod in self.pods:
            if pod.id == pod_id:
                return pod
        return None

    def find(self, name: str, namespace: str | None = None) -> Pod | None:
        """Return the first pod named *name*, optionally restricted to *namespace*."""
        for pod in self.pods:
            if pod.name == name and (namespace is None or pod.namespace == namespace):
                return pod
        return None

    def in_namespace(self, namespace: str) -> list[Pod]:
        return [pod for pod in self.pods if pod.namespace == namespace]
