"""
person_registry.observability.logging

Structured logging configuration for the registry.

Responsibilities:
- Configure `structlog` once per process, JSON for shipping or console for local runs.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any, Literal

import structlog

LogFormat = Literal["json", "console"]


def configure_logging(*, service_name: str, level: str, fmt: LogFormat = "json") -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer: Any
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def operation_scope(name: str) -> AbstractContextManager[Any]:
    # Events emitted inside the scope carry `operation`; outer bindings are restored on exit.
    return structlog.contextvars.bound_contextvars(operation=name)


# --- Module Notes -----------------------------------------------------------
# Stores log with explicit fields; the service binds the operation name around
# each unit of work so storage_fault events can be traced back to it.
