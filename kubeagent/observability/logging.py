"""Structured logging configuration using structlog.

The server emits JSON lines; the CLI switches to the console renderer so
log lines stay readable next to command output. Both write to stderr so
that stdout carries only command transcripts and snapshots.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(level: str = "info", json_output: bool = True) -> None:
    """Configure structlog processors, level filtering and renderer."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
