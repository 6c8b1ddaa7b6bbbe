"""Pydantic request and response models for the REST API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PodUsageOut(_FromAttributes):
    cpu: float
    memory: float


class K8sEventOut(_FromAttributes):
    id: str
    type: str
    reason: str
    message: str
    timestamp: datetime


class SchedulingConstraintOut(_FromAttributes):
    type: str
    rule: str
    label_selector: str


class PodOut(_FromAttributes):
    id: str
    name: str
    namespace: str
    status: str
    ip: str
    node: str
    labels: dict[str, str]
    creation_timestamp: datetime
    usage: PodUsageOut
    events: list[K8sEventOut]
    connections: list[str]
    scheduling_constraints: list[SchedulingConstraintOut]


class ClusterStateOut(_FromAttributes):
    pods: list[PodOut]
    namespaces: list[str]


class AlertOut(_FromAttributes):
    id: str
    pod_id: str
    pod_name: str
    type: str
    severity: str
    message: str
    timestamp: datetime


class CommandRequest(BaseModel):
    command: str = Field(default="", max_length=4096)


class CommandResponse(BaseModel):
    command: str
    output: str
    executed: bool
    state: ClusterStateOut


class StepIn(BaseModel):
    """A translated plan step. Missing ``command`` is treated as blank."""

    description: str = ""
    command: str | None = Field(default=None, max_length=4096)
    explanation: str = ""


class PlanRequest(BaseModel):
    steps: list[StepIn] = Field(default_factory=list, max_length=50)
    intent: str = "QUERY"
    summary: str = ""


class StepOut(BaseModel):
    description: str
    command: str
    explanation: str
    output: str
    transcript: str


class PlanResponse(BaseModel):
    summary: str
    results: list[StepOut]
    state: ClusterStateOut


class HealthResponse(BaseModel):
    status: str
    version: str
    pods: int
    alerts: int
    alert_capacity: int


class ErrorResponse(BaseModel):
    error: str
    detail: str
