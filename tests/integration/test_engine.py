"""Integration tests: tick -> alert -> feed pipeline and command execution.

Exercises the ClusterEngine with real components end to end, including
concurrent ticks and commands from several threads.
"""

from __future__ import annotations

import threading

import pytest

from kubeagent.engine import ClusterEngine
from kubeagent.models.alerts import AlertSeverity, AlertType
from kubeagent.models.pods import EventType, PodStatus
from kubeagent.models.steps import AgentResponse, Intent, K8sStep

from .conftest import _NOW, make_engine

pytestmark = pytest.mark.integration


class TestTickPipeline:
    def test_forced_flip_raises_one_status_alert_per_pod(self, flapping_engine: ClusterEngine) -> None:
        result = flapping_engine.tick()

        assert all(pod.status == PodStatus.ERROR for pod in result.state.pods)
        status_alerts = [a for a in result.alerts if a.type == AlertType.STATUS]
        assert len(status_alerts) == 9
        assert all(a.severity == AlertSeverity.CRITICAL for a in status_alerts)
        assert [a.pod_id for a in status_alerts] == [p.id for p in result.state.pods]
        assert flapping_engine.alerts() == result.alerts

    def test_flip_appends_event(self, flapping_engine: ClusterEngine) -> None:
        flapping_engine.tick()
        pod = flapping_engine.state().pods[0]
        assert pod.events[-1].type == EventType.WARNING
        assert pod.events[-1].reason == "BackOff"
        assert pod.events[-1].timestamp == _NOW

        flapping_engine.tick()
        pod = flapping_engine.state().pods[0]
        assert pod.status == PodStatus.RUNNING
        assert pod.events[-1].reason == "Started"

    def test_recovery_tick_is_silent(self, flapping_engine: ClusterEngine) -> None:
        flapping_engine.tick()
        second = flapping_engine.tick()
        assert [a for a in second.alerts if a.type == AlertType.STATUS] == []

    def test_feed_is_bounded(self) -> None:
        engine = make_engine(flip_probability=1.0, spike_probability=0.0, feed_size=50)
        for _ in range(60):
            engine.tick()
            assert len(engine.alerts()) <= 50
        assert len(engine.alerts()) == 50

    def test_newest_alerts_first(self, flapping_engine: ClusterEngine) -> None:
        first = flapping_engine.tick().alerts
        flapping_engine.tick()
        third = flapping_engine.tick().alerts
        feed = flapping_engine.alerts()
        assert feed[: len(third)] == third
        assert feed[len(third) :] == first

    def test_tick_returns_independent_snapshot(self, engine: ClusterEngine) -> None:
        result = engine.tick()
        result.state.pods.clear()
        assert len(engine.state().pods) == 9

    def test_same_seed_same_history(self) -> None:
        a, b = make_engine(seed=5), make_engine(seed=5)
        for _ in range(30):
            ra, rb = a.tick(), b.tick()
            assert ra.state == rb.state
            assert [(x.pod_id, x.message) for x in ra.alerts] == [(y.pod_id, y.message) for y in rb.alerts]


class TestCommandPipeline:
    def test_execute_returns_output_and_snapshot(self, engine: ClusterEngine) -> None:
        result = engine.execute("kubectl get pods -n kube-system")
        assert result.executed
        assert len(result.output.splitlines()) == 5
        assert result.state == engine.state()

    def test_blank_command(self, engine: ClusterEngine) -> None:
        result = engine.execute("  ")
        assert not result.executed
        assert result.output == ""

    def test_get_pods_reflects_tick(self, flapping_engine: ClusterEngine) -> None:
        flapping_engine.tick()
        rows = flapping_engine.execute("kubectl get pods").output.splitlines()[1:]
        assert {row.split()[2] for row in rows} == {"Error"}

    def test_run_plan(self, engine: ClusterEngine) -> None:
        name = engine.state().in_namespace("default")[0].name
        plan = AgentResponse(
            steps=[
                K8sStep(command="kubectl get pods", description="List pods"),
                K8sStep(command="", description="Nothing to run"),
                K8sStep(command=f"kubectl describe pod {name}", description="Inspect"),
            ],
            intent=Intent.DEBUG,
            summary="Check the first pod",
        )
        results = engine.run_plan(plan)
        assert [r.step.description for r in results] == ["List pods", "Inspect"]
        assert results[1].transcript.startswith(f"$ kubectl describe pod {name}\nName:")

    def test_run_plan_accepts_plain_steps(self, engine: ClusterEngine) -> None:
        results = engine.run_plan([K8sStep(command="tcpdump -i eth0")])
        assert results[0].output.startswith("tcpdump: listening on eth0")


class TestConcurrency:
    def test_ticks_and_commands_from_many_threads(self) -> None:
        engine = make_engine(flip_probability=0.3, spike_probability=0.3)
        errors: list[Exception] = []

        def _ticker() -> None:
            try:
                for _ in range(100):
                    engine.tick()
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        def _operator() -> None:
            try:
                for _ in range(100):
                    engine.execute("kubectl get pods -A")
                    engine.state()
                    engine.alerts(limit=5)
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=_ticker) for _ in range(2)]
        threads += [threading.Thread(target=_operator) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert errors == []
        state = engine.state()
        assert len(state.pods) == 9
        assert len({p.id for p in state.pods}) == 9
        for pod in state.pods:
            assert 0.0 <= pod.usage.cpu <= 100.0
            assert 0.0 <= pod.usage.memory <= 100.0
        assert len(engine.alerts()) <= 50
