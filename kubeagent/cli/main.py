"""``kubeagent`` command-line interface."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import sys

import click

from kubeagent import __version__
from kubeagent.config import load_config
from kubeagent.engine import ClusterEngine
from kubeagent.models.config import KubeAgentConfig
from kubeagent.models.steps import K8sStep
from kubeagent.observability.logging import setup_logging

_seed_option = click.option("--seed", type=int, default=None, help="Seed for the simulated cluster.")


def _engine(seed: int | None) -> ClusterEngine:
    config = KubeAgentConfig()
    config.simulation.seed = seed
    return ClusterEngine(config)


@click.group()
@click.version_option(__version__, prog_name="kubeagent")
@click.option("--log-level", default="warning", show_default=True, help="debug, info, warning or error.")
def cli(log_level: str) -> None:
    """Simulated Kubernetes cluster with command emulation and alerting."""
    setup_logging(log_level, json_output=False)


@cli.command()
def serve() -> None:
    """Run the tick loop and the REST API until interrupted."""
    from kubeagent.app import main

    config = load_config()
    asyncio.run(main(config))


@cli.command("exec", context_settings={"ignore_unknown_options": True})
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@_seed_option
def exec_command(command: tuple[str, ...], seed: int | None) -> None:
    """Run COMMAND against a freshly seeded cluster and print its output."""
    result = _engine(seed).execute(" ".join(command))
    if result.output:
        click.echo(result.output)


@cli.command()
@click.option("-c", "--command", "commands", multiple=True, required=True, help="Step command; repeatable.")
@_seed_option
def plan(commands: tuple[str, ...], seed: int | None) -> None:
    """Run each --command as a plan step and print its transcript."""
    results = _engine(seed).run_plan(K8sStep(command=command) for command in commands)
    click.echo("\n\n".join(result.transcript for result in results))


@cli.command()
@click.option("--ticks", type=click.IntRange(min=1), default=20, show_default=True)
@_seed_option
def simulate(ticks: int, seed: int | None) -> None:
    """Advance the cluster TICKS times, printing each alert as it fires."""
    engine = _engine(seed)
    for n in range(1, ticks + 1):
        for alert in engine.tick().alerts:
            click.echo(f"[tick {n}] {alert.severity.value:<8} {alert.type.value:<11} {alert.message}")
    click.echo(f"{len(engine.feed)} alert(s) in feed after {ticks} tick(s)")


@cli.command()
@_seed_option
def state(seed: int | None) -> None:
    """Print the seeded cluster snapshot as JSON."""
    snapshot = dataclasses.asdict(_engine(seed).state())
    json.dump(snapshot, sys.stdout, indent=2, default=str)
    click.echo()
