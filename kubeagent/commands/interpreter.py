"""Pattern-matched emulation of a small kubectl and shell command set.

Dispatch walks an ordered route table and the first matching route handles
the command. Every handler runs through ``StateStore.apply_command_effect``
so a command never interleaves with a tick. All current routes are
read-only; a state-changing command (delete, scale) would be a new route
whose handler mutates the state it is given.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from kubeagent.commands import transcripts
from kubeagent.models.cluster import ClusterState
from kubeagent.models.pods import Pod
from kubeagent.observability.logging import get_logger
from kubeagent.observability.metrics import commands_total
from kubeagent.store.state_store import Clock, StateStore

_log = get_logger("commands")

_RE_EXEC = re.compile(r"exec\s+-(?:it|ti)\b")
_RE_EXEC_TARGET = re.compile(r"exec\s+-(?:it|ti)\s+(\S+)")
_RE_GET_PODS = re.compile(r"\bget\s+(?:pods?|po)\b")
_RE_DESCRIBE_POD = re.compile(r"\bdescribe\s+pods?\b")
# "describe pod NAME" or the "describe pod/NAME" resource form.
_RE_DESCRIBE_ARGS = re.compile(r"\bdescribe\s+pods?(?:/(\S+)|\s+(.*)$)")
_RE_NAMESPACE = re.compile(r"(?<!\S)(?:-n|--namespace)(?:\s+|=)(\S+)")
_RE_ALL_NAMESPACES = re.compile(r"(?<!\S)(?:-A|--all-namespaces)(?!\S)")

_DEFAULT_NAMESPACE = "default"
_DEFAULT_EXEC_TARGET = "pod"

# (header, width); the last column is unpadded.
_POD_COLUMNS = [("NAME", 30), ("READY", 10), ("STATUS", 15), ("RESTARTS", 10), ("AGE", 0)]
_READY = "1/1"
_RESTARTS = "0"
_AGE = "2d"

_LABEL_WIDTH = 14

Handler = Callable[[str, str, ClusterState], str]


@dataclass(frozen=True)
class _Route:
    name: str
    matches: Callable[[str], bool]
    handle: Handler


class CommandInterpreter:
    """Executes operator command strings against the state store."""

    def __init__(self, store: StateStore, clock: Clock | None = None) -> None:
        self._store = store
        self._clock = clock or store.clock
        self._routes: list[_Route] = [
            _Route("exec", lambda cmd: _RE_EXEC.search(cmd) is not None, self._exec),
            _Route("get-pods", lambda cmd: _RE_GET_PODS.search(cmd) is not None, self._get_pods),
            _Route("describe-pod", lambda cmd: _RE_DESCRIBE_POD.search(cmd) is not None, self._describe_pod),
            _Route("logs", lambda cmd: "logs" in cmd, self._logs),
            _Route("tcpdump", lambda cmd: "tcpdump" in cmd, self._tcpdump),
        ]
        self._fallback = _Route("fallback", lambda cmd: True, self._acknowledge)

    def route_for(self, command: str) -> str:
        """Name of the route that would handle *command*."""
        return self._match(command.strip()).name

    def execute(self, command: str) -> str:
        """Run *command* and return its terminal output.

        Blank input is a no-op returning an empty string. Nothing here raises
        for malformed input; unmatched commands get a generic acknowledgement.
        """
        cmd = command.strip()
        if not cmd:
            return ""
        route = self._match(cmd)
        output = self._store.apply_command_effect(lambda state: route.handle(cmd, command, state))
        commands_total.labels(route=route.name).inc()
        _log.info("command executed", route=route.name, command=cmd)
        return output

    def _match(self, cmd: str) -> _Route:
        for route in self._routes:
            if route.matches(cmd):
                return route
        return self._fallback

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _exec(self, cmd: str, _raw: str, _state: ClusterState) -> str:
        match = _RE_EXEC_TARGET.search(cmd)
        pod = match.group(1) if match else _DEFAULT_EXEC_TARGET
        return transcripts.SHELL_SESSION.format(pod=pod)

    def _get_pods(self, cmd: str, _raw: str, state: ClusterState) -> str:
        match = _RE_NAMESPACE.search(cmd)
        namespace = match.group(1) if match else _DEFAULT_NAMESPACE
        all_namespaces = _RE_ALL_NAMESPACES.search(cmd) is not None

        pods = state.pods if all_namespaces else state.in_namespace(namespace)
        if not pods:
            return transcripts.NO_RESOURCES.format(namespace=namespace)

        lines = [_row([header for header, _ in _POD_COLUMNS])]
        lines.extend(_row([pod.name, _READY, pod.status.value, _RESTARTS, _AGE]) for pod in pods)
        return "\n".join(lines)

    def _describe_pod(self, cmd: str, _raw: str, state: ClusterState) -> str:
        match = _RE_DESCRIBE_ARGS.search(cmd)
        if match is None:
            name = ""
        elif match.group(1) is not None:
            name = match.group(1)
        else:
            args = _positional_args(match.group(2))
            name = args[0] if args else ""
        ns_match = _RE_NAMESPACE.search(cmd)
        pod = state.find(name, ns_match.group(1) if ns_match else None) if name else None
        if pod is None:
            return transcripts.NOT_FOUND.format(pod=name)
        return _describe(pod, self._clock())

    def _logs(self, _cmd: str, _raw: str, _state: ClusterState) -> str:
        return transcripts.log_transcript(self._clock())

    def _tcpdump(self, _cmd: str, _raw: str, _state: ClusterState) -> str:
        return transcripts.TCPDUMP_CAPTURE

    def _acknowledge(self, _cmd: str, raw: str, _state: ClusterState) -> str:
        return transcripts.FALLBACK.format(command=raw)


def _row(values: list[str]) -> str:
    cells = []
    for value, (_, width) in zip(values, _POD_COLUMNS, strict=True):
        if width:
            # Overlong values still get one separating space.
            cells.append(value.ljust(width) if len(value) < width else f"{value} ")
        else:
            cells.append(value)
    return "".join(cells)


def _positional_args(text: str) -> list[str]:
    """Split *text* into tokens, dropping flags and the values of -n/--namespace."""
    args: list[str] = []
    tokens = text.split()
    skip_next = False
    for token in tokens:
        if skip_next:
            skip_next = False
            continue
        if token in ("-n", "--namespace"):
            skip_next = True
            continue
        if token.startswith("-"):
            continue
        args.append(token)
    return args


def _age(delta: timedelta) -> str:
    """Render like kubectl: each unit is used up to twice the next one."""
    seconds = max(int(delta.total_seconds()), 0)
    if seconds < 120:
        return f"{seconds}s"
    if seconds < 120 * 60:
        return f"{seconds // 60}m"
    if seconds < 48 * 3600:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def _field(label: str, value: str) -> str:
    return f"{label + ':':<{_LABEL_WIDTH}}{value}"


def _describe(pod: Pod, now: datetime) -> str:
    lines = [
        _field("Name", pod.name),
        _field("Namespace", pod.namespace),
        _field("Status", pod.status.value),
        _field("IP", pod.ip),
        _field("Node", pod.node),
    ]

    labels = [f"{key}={value}" for key, value in pod.labels.items()]
    if labels:
        lines.append(_field("Labels", labels[0]))
        lines.extend(" " * _LABEL_WIDTH + label for label in labels[1:])
    else:
        lines.append(_field("Labels", "<none>"))

    if not pod.events:
        lines.append(_field("Events", "<none>"))
        return "\n".join(lines)

    lines.append("Events:")
    lines.append(f"  {'Type':<9}{'Reason':<11}{'Age':<6}Message")
    lines.append(f"  {'----':<9}{'------':<11}{'---':<6}-------")
    for event in pod.events:
        age = _age(now - event.timestamp)
        lines.append(f"  {event.type.value:<9}{event.reason:<11}{age:<6}{event.message}")
    return "\n".join(lines)
