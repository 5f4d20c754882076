"""
Structured logging for the API, resolvers and CLIs.

Every entry emitted while a request is in flight carries the request id and,
for GraphQL traffic, the operation name set by ``LoggingContextMiddleware``.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
operation_ctx: ContextVar[str | None] = ContextVar("graphql_operation", default=None)

# Third-party loggers that are chatty below WARNING
NOISY_LOGGERS = ("aiosqlite", "asyncio", "uvicorn.access")


def add_request_context(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor copying the request context into each entry."""
    request_id = request_id_ctx.get()
    if request_id:
        event_dict["request_id"] = request_id

    operation = operation_ctx.get()
    if operation:
        event_dict.setdefault("graphql_operation", operation)

    return event_dict


def _resolve_level(debug: bool, level: str | None) -> int:
    if not level:
        return logging.DEBUG if debug else logging.INFO
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog on top of the stdlib root logger.

    Args:
        debug: Render colored console output instead of JSON lines.
        level: Explicit level name; defaults to DEBUG/INFO from ``debug``.
    """
    log_level = _resolve_level(debug, level)
    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    renderer = structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_context,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:16]


def set_request_context(request_id: str | None = None, operation: str | None = None) -> str:
    """Bind request context for the current task and return the request id in use."""
    request_id = request_id or generate_request_id()
    request_id_ctx.set(request_id)
    if operation is not None:
        operation_ctx.set(operation)
    return request_id


def clear_request_context() -> None:
    request_id_ctx.set(None)
    operation_ctx.set(None)
