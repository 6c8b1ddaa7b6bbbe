"""Simulator package: per-tick state evolution and its timer."""

from kubeagent.simulator.loop import TickLoop
from kubeagent.simulator.tick import RandomSource, TickSimulator

__all__ = ["RandomSource", "TickLoop", "TickSimulator"]
