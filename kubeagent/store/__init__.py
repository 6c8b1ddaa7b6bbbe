"""State store for KubeAgent.

Submodules:
    seed        -- Seed cluster roster and randomized generation.
    state_store -- StateStore: canonical state, snapshots, mutation hooks.
"""

from kubeagent.store.state_store import StateStore

__all__ = ["StateStore"]
