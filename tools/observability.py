"""Decorator that wraps planner operations in structured start/finish logs."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from planner_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

MAX_LOGGED_ARGUMENTS = 6


def _argument_summary(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """Name the keyword arguments and their types; values may be personal data."""

    names = sorted(kwargs)
    summary: Dict[str, Any] = {name: type(kwargs[name]).__name__ for name in names[:MAX_LOGGED_ARGUMENTS]}
    if len(names) > MAX_LOGGED_ARGUMENTS:
        summary["omitted"] = len(names) - MAX_LOGGED_ARGUMENTS
    return summary


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def instrument_operation(
    operation: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log ``operation`` around each call, validating keyword arguments first.

    When ``input_model`` is given the keyword arguments are coerced through it.
    A validation failure is logged and handed to ``on_validation_error``; with
    no handler the ``ValidationError`` propagates. Exceptions raised by the
    wrapped callable are logged with their traceback and re-raised.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            started = time.perf_counter()

            if input_model is not None:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump()
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "operation_validation_failed",
                        operation=operation,
                        correlation_id=correlation_id,
                        fields=[".".join(str(part) for part in error["loc"]) for error in exc.errors()],
                    )
                    if on_validation_error is None:
                        raise
                    return on_validation_error(exc)

            log_event(
                LOGGER,
                logging.DEBUG,
                "operation_started",
                operation=operation,
                correlation_id=correlation_id,
                arguments=_argument_summary(kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_failed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(started),
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER,
                logging.DEBUG,
                "operation_completed",
                operation=operation,
                correlation_id=correlation_id,
                duration_ms=_elapsed_ms(started),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation", "MAX_LOGGED_ARGUMENTS"]
