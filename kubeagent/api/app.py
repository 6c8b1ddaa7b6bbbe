"""FastAPI application factory for KubeAgent.

Usage::

    from kubeagent.api.app import create_app

    app = create_app(engine=engine, config=config)

Every error leaves the API as an ``{error, detail}`` envelope. Body
validation failures carry a code naming what was rejected (a command, a
plan or a query parameter) so a terminal front end can say which input to
fix.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kubeagent.api.routes import router
from kubeagent.api.schemas import ErrorResponse
from kubeagent.engine import ClusterEngine

_log = structlog.get_logger(component="api.app")

_API_PREFIX = "/api/v1"

# Route suffix -> error code for request bodies that fail validation.
_BODY_ERROR_CODES = {
    "/commands": "INVALID_COMMAND",
    "/plans": "INVALID_PLAN",
}
_DEFAULT_ERROR_CODE = "INVALID_REQUEST"


def create_app(engine: ClusterEngine, config: Any = None) -> FastAPI:
    """Build the REST app around *engine*.

    Args:
        engine: ClusterEngine serving every route.
        config: Optional KubeAgentConfig, kept on ``app.state`` for handlers.
    """
    from kubeagent import __version__

    app = FastAPI(
        title="KubeAgent",
        summary="Simulated Kubernetes cluster for interactive demos",
        version=__version__,
        docs_url=f"{_API_PREFIX}/docs",
        redoc_url=None,
        openapi_url=f"{_API_PREFIX}/openapi.json",
    )
    app.state.engine = engine
    app.state.config = config
    app.include_router(router, prefix=_API_PREFIX)
    app.add_exception_handler(RequestValidationError, _rejected_input)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _engine_failure)
    return app


def _error(status_code: int, code: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=code, detail=detail).model_dump())


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ""
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first.get("msg", ""))
    return f"{location}: {message}" if location else message


async def _rejected_input(request: Request, exc: RequestValidationError) -> JSONResponse:
    path = request.url.path
    code = next(
        (code for suffix, code in _BODY_ERROR_CODES.items() if path.endswith(suffix)),
        _DEFAULT_ERROR_CODE,
    )
    detail = _describe_validation_error(exc)
    _log.info("request rejected", path=path, error=code, detail=detail)
    return _error(400, code, detail)


async def _engine_failure(request: Request, exc: Exception) -> JSONResponse:
    # Stack traces stay in the log; clients only see the envelope.
    _log.error("request failed", path=request.url.path, method=request.method, error=str(exc))
    return _error(500, "INTERNAL_ERROR", "The cluster engine could not complete the request.")
