"""REST route handlers.

Handlers are ``async def`` so they run on the event loop thread, the same
thread as the tick loop; engine calls are synchronous and short.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from kubeagent.api.schemas import (
    AlertOut,
    ClusterStateOut,
    CommandRequest,
    CommandResponse,
    HealthResponse,
    PlanRequest,
    PlanResponse,
    StepOut,
)
from kubeagent.engine import ClusterEngine
from kubeagent.models.steps import AgentResponse, Intent, K8sStep

router = APIRouter()


def _engine(request: Request) -> ClusterEngine:
    return request.app.state.engine  # type: ignore[no-any-return]


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    from kubeagent import __version__

    engine = _engine(request)
    return HealthResponse(
        status="ok",
        version=__version__,
        pods=len(engine.state().pods),
        alerts=len(engine.feed),
        alert_capacity=engine.feed.max_size,
    )


@router.get("/cluster", response_model=ClusterStateOut)
async def cluster(request: Request) -> ClusterStateOut:
    return ClusterStateOut.model_validate(_engine(request).state())


@router.post("/commands", response_model=CommandResponse)
async def run_command(body: CommandRequest, request: Request) -> CommandResponse:
    result = _engine(request).execute(body.command)
    return CommandResponse(
        command=result.command,
        output=result.output,
        executed=result.executed,
        state=ClusterStateOut.model_validate(result.state),
    )


@router.post("/plans", response_model=PlanResponse)
async def run_plan(body: PlanRequest, request: Request) -> PlanResponse:
    engine = _engine(request)
    intent = body.intent if body.intent in Intent.__members__ else Intent.QUERY
    plan = AgentResponse(
        steps=[
            K8sStep(command=step.command or "", description=step.description, explanation=step.explanation)
            for step in body.steps
        ],
        intent=Intent(intent),
        summary=body.summary,
    )
    results = engine.run_plan(plan)
    return PlanResponse(
        summary=plan.summary,
        results=[
            StepOut(
                description=r.step.description,
                command=r.step.command,
                explanation=r.step.explanation,
                output=r.output,
                transcript=r.transcript,
            )
            for r in results
        ],
        state=ClusterStateOut.model_validate(engine.state()),
    )


@router.get("/alerts", response_model=list[AlertOut])
async def alerts(request: Request, limit: int | None = Query(default=None, ge=0, le=1000)) -> list[AlertOut]:
    return [AlertOut.model_validate(alert) for alert in _engine(request).alerts(limit)]


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
