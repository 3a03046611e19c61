"""Structured logging with run_id support.

Modules log through ``logging.getLogger(__name__)``; ``setup_logging``
installs a root handler whose structlog ``ProcessorFormatter`` renders
every record as JSON or console output. Every log entry includes a
run_id so the lines of one CLI invocation or rollup can be correlated.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

HANDLER_NAME = "hse_kpi"

# Context var for run_id propagation
_run_id: ContextVar[str] = ContextVar("run_id", default="")


def get_run_id() -> str:
    """Get current run ID from context, creating one if unset."""
    rid = _run_id.get()
    if not rid:
        rid = str(uuid.uuid4())
        _run_id.set(rid)
    return rid


def new_run_id() -> str:
    """Generate and set a new run ID."""
    rid = str(uuid.uuid4())
    _run_id.set(rid)
    return rid


def _add_run_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add run_id to every log entry."""
    event_dict["run_id"] = get_run_id()
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str = "json",
) -> logging.Handler:
    """Configure structured logging for the application.

    Replaces the handler installed by a previous call, so it is safe to
    call once per CLI invocation.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine-readable output, "console" for humans.

    Returns:
        The root handler writing to stderr.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_run_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    processors: list[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for old in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(log_level)
    return handler
