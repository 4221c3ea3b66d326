"""Structured logging helpers for the wardrobe planner.

Every planner event is a JSON line carrying an ``event`` name and the
correlation id of the operation that produced it. Locations, photos and
free-text notes are personal data and are masked before they reach a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import time
import uuid
from typing import Any, Dict, Iterator, Optional

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
SENSITIVE_KEYS = frozenset({"location", "destination", "image", "photo", "notes", "api_key", "appid"})
REDACTED = "[redacted]"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` fields flattened in."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", message),
            "message": message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        for key, value in redact_for_log(extras).items():
            payload.setdefault(key, value)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Route the root logger through a single JSON handler on stderr.

    Calling it again replaces the previous JSON handler; handlers installed by
    other code are left in place.
    """

    root = logging.getLogger()
    for existing in [handler for handler in root.handlers if isinstance(handler.formatter, JsonFormatter)]:
        root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    root.setLevel(desired_level.upper() if isinstance(desired_level, str) else desired_level)


def redact_for_log(payload: Any) -> Any:
    """Return a log-safe copy of ``payload``.

    Values under :data:`SENSITIVE_KEYS` are replaced wholesale; inline images
    and URLs are masked wherever they appear.
    """

    if isinstance(payload, dict):
        return {
            key: REDACTED if key in SENSITIVE_KEYS else redact_for_log(value) for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set)):
        return [redact_for_log(value) for value in payload]
    if isinstance(payload, str):
        if payload.startswith("data:"):
            return "[redacted-image]"
        if payload.lower().startswith(("http://", "https://")):
            return "[redacted-url]"
        return payload
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id`` if given, else keep the current one or mint a new one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    minted = uuid.uuid4().hex
    CORRELATION_ID.set(minted)
    return minted


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    token = CORRELATION_ID.set(correlation_id or ensure_correlation_id())
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit ``event`` with redacted ``fields`` attached to the record."""

    exc_info = fields.pop("exc_info", None)
    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={**redact_for_log(fields), "event": event, "correlation_id": correlation_id},
    )


@contextlib.contextmanager
def operation_context(operation: str, correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id around a planner operation and log how long it took."""

    logger = logging.getLogger(__name__)
    started = time.perf_counter()
    with correlation_context(correlation_id) as scoped_id:
        try:
            yield scoped_id
        finally:
            log_event(
                logger,
                logging.DEBUG,
                "operation_scope_closed",
                operation=operation,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
    "operation_context",
]
