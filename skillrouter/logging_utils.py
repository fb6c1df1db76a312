"""Structured logging with trace_id and skill resolution events."""
import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

# Context variable for trace_id so it is attached to every log in the current resolution
trace_id_ctx: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    return trace_id_ctx.get()


def set_trace_id(trace_id: str) -> None:
    trace_id_ctx.set(trace_id)


def clear_trace_id() -> None:
    trace_id_ctx.set(None)


def add_trace_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add trace_id to every event."""
    tid = get_trace_id()
    if tid:
        event_dict["trace_id"] = tid
    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog and stdlib logging. Call once at startup."""
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_id,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=True)
            if log_level == "DEBUG"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# Convenience: log resolution events with consistent event names
def log_registry_loaded(
    logger: structlog.stdlib.BoundLogger,
    source: str,
    skill_count: int,
) -> None:
    logger.info("skill_registry_loaded", source=source, skill_count=skill_count)


def log_skill_resolved(
    logger: structlog.stdlib.BoundLogger,
    request: str,
    skill_id: str | None,
    tier: str,
    confidence: float,
) -> None:
    msg = request[:200] + "..." if len(request) > 200 else request
    if skill_id is None:
        logger.info("skill_not_found", request=msg)
        return
    logger.info(
        "skill_resolved",
        request=msg,
        skill_id=skill_id,
        tier=tier,
        confidence=round(confidence, 3),
    )
