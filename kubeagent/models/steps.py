"""Command plan structures produced by the external request translator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Intent(StrEnum):
    """Coarse classification of an operator request."""

    QUERY = "QUERY"
    ACTION = "ACTION"
    DEBUG = "DEBUG"


@dataclass(frozen=True)
class K8sStep:
    """One step of a plan.

    Only ``command`` is executed; ``description`` and ``explanation`` are
    display text passed through untouched.
    """

    command: str
    description: str = ""
    explanation: str = ""


@dataclass
class AgentResponse:
    """A translated request: ordered steps plus a summary for display."""

    steps: list[K8sStep] = field(default_factory=list)
    intent: Intent = Intent.QUERY
    summary: str = ""
