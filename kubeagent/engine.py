"""Cluster engine facade.

Wires the state store, tick simulator, alert engine, alert feed and command
interpreter together and exposes the boundary operations used by the REST
API, the CLI and the application's tick loop:

    state()    -- snapshot of the cluster
    tick()     -- advance one step, returning the new snapshot and new alerts
    execute()  -- run one command string
    run_plan() -- run the ``command`` of each step of a translated plan
    alerts()   -- the bounded alert feed, newest first
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from kubeagent.alerts.engine import AlertEngine
from kubeagent.alerts.feed import AlertFeed
from kubeagent.commands.interpreter import CommandInterpreter
from kubeagent.models.alerts import Alert
from kubeagent.models.cluster import ClusterState
from kubeagent.models.config import KubeAgentConfig
from kubeagent.models.steps import AgentResponse, K8sStep
from kubeagent.observability.logging import get_logger
from kubeagent.simulator.tick import TickSimulator
from kubeagent.store.state_store import Clock, StateStore

_log = get_logger("engine")


@dataclass
class TickResult:
    """Snapshot after a tick plus the alerts that tick produced."""

    state: ClusterState
    alerts: list[Alert] = field(default_factory=list)


@dataclass
class CommandResult:
    """Terminal output of one command and the snapshot taken after it."""

    command: str
    output: str
    state: ClusterState
    executed: bool = True


@dataclass
class StepResult:
    """A plan step together with the output of its command."""

    step: K8sStep
    output: str

    @property
    def transcript(self) -> str:
        return f"$ {self.step.command}\n{self.output}"


class ClusterEngine:
    """Owns one simulated cluster and every component acting on it."""

    def __init__(
        self,
        config: KubeAgentConfig | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or KubeAgentConfig()
        self._rng = rng if rng is not None else random.Random(self.config.simulation.seed)
        self.store = StateStore(self._rng, clock=clock)
        self.simulator = TickSimulator(self.store, self._rng, self.config.simulation)
        self.alert_engine = AlertEngine(self.config.alerts)
        self.feed = AlertFeed(self.config.alerts.feed_size)
        self.interpreter = CommandInterpreter(self.store)
        self.store.initialize()

    def state(self) -> ClusterState:
        return self.store.snapshot()

    def tick(self) -> TickResult:
        """Advance the cluster one step and publish any new alerts to the feed."""
        # Hold the writer lock across the pair so no command lands between them.
        with self.store.lock:
            before = self.store.snapshot()
            self.simulator.tick()
            after = self.store.snapshot()
        alerts = self.alert_engine.detect(before, after, now=self.store.clock())
        if alerts:
            self.feed.publish(alerts)
        _log.debug("tick applied", alerts=len(alerts))
        return TickResult(state=after, alerts=alerts)

    def execute(self, command: str) -> CommandResult:
        """Run *command*. Blank commands are a no-op with empty output."""
        if not command or not command.strip():
            return CommandResult(command=command or "", output="", state=self.state(), executed=False)
        output = self.interpreter.execute(command)
        return CommandResult(command=command, output=output, state=self.state())

    def run_plan(self, plan: AgentResponse | Iterable[K8sStep]) -> list[StepResult]:
        """Execute each step's command in order, skipping blank ones."""
        steps = plan.steps if isinstance(plan, AgentResponse) else list(plan)
        results: list[StepResult] = []
        for step in steps:
            if not step.command or not step.command.strip():
                _log.debug("plan step skipped", reason="blank command", description=step.description)
                continue
            results.append(StepResult(step=step, output=self.interpreter.execute(step.command)))
        _log.info("plan executed", steps=len(steps), executed=len(results))
        return results

    def alerts(self, limit: int | None = None) -> list[Alert]:
        return self.feed.items(limit)
