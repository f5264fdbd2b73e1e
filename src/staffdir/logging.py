"""
structlog configuration and request-scoped logging context.

Every log line emitted while a request is being served carries the request
id, and once known, the caller's user id and the dispatched operation name.
"""

import base64
import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)
operation_ctx: ContextVar[str | None] = ContextVar("operation", default=None)

# Event-dict key -> context variable
_CONTEXT_FIELDS: dict[str, ContextVar[str | None]] = {
    "request_id": request_id_ctx,
    "user_id": user_id_ctx,
    "operation": operation_ctx,
}


class RequestContextFilter:
    """structlog processor that copies the request context into each event."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        _ = logger, method_name
        for key, var in _CONTEXT_FIELDS.items():
            value = var.get()
            if value:
                event_dict[key] = value
        return event_dict


def configure_logging(debug: bool = False) -> None:
    """Route structlog through stdlib logging on stdout.

    Args:
        debug: Colored console output at DEBUG level; otherwise JSON lines at INFO.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer = structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            RequestContextFilter(),
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
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
    """14-character URL-safe id: low 6 bytes of the microsecond clock plus 4 random bytes."""
    clock = int(time.time() * 1_000_000) % (1 << 48)
    raw = clock.to_bytes(6, "big") + secrets.token_bytes(4)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> str:
    """Start a request's logging context and return the request id in use."""
    request_id = request_id or generate_request_id()
    request_id_ctx.set(request_id)
    if user_id is not None:
        user_id_ctx.set(user_id)
    return request_id


def set_user_context(user_id: str | None) -> None:
    user_id_ctx.set(user_id)


def set_operation_context(operation: str | None) -> None:
    operation_ctx.set(operation)


def clear_request_context() -> None:
    for var in _CONTEXT_FIELDS.values():
        var.set(None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def get_user_id() -> str | None:
    return user_id_ctx.get()
