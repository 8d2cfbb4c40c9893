"""Structured logging configuration for Dungeon Echoes.

The engine logs every phase of a turn as structured key/value events so a
resolved turn can be audited after the fact: classification, each roll
against its DC, every world flag set and the terminal status. Output is
human-readable in development and JSON in production.

Example:
    >>> from dungeon_echoes.core.logging import get_logger, turn_context
    >>> logger = get_logger(__name__)
    >>> with turn_context(session_id="a1b2"):
    ...     logger.info("Turn resolved", facts=3, room="celda")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from dungeon_echoes.core.config import Settings


APP_NAME = "dungeon_echoes"

SECRET_KEYS = frozenset({"api_key", "authorization", "token"})
REDACTED = "***"

_THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "openai")


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every log entry with the application name."""
    event_dict["app"] = APP_NAME
    return event_dict


def redact_secrets(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Mask credentials accidentally passed as log fields."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _build_processors(json_format: bool) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        # Spanish fact lines stay readable in JSON output
        return [
            *shared,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [
        *shared,
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure application-wide logging.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output logs in JSON format for production.
        log_file: Optional path to a log file for persistent logging.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # openai and httpx log through the standard library
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=log_level,
        handlers=handlers,
        force=True,
    )
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from the application settings."""
    if settings is None:
        from dungeon_echoes.core.config import get_settings

        settings = get_settings()
    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.log_json,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional name for the logger (typically __name__).

    Returns:
        A structlog BoundLogger instance.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log entries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def turn_context(**kwargs: Any) -> Iterator[None]:
    """Bind context (session id, turn number) for the duration of a block.

    Only the keys bound here are removed on exit.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "APP_NAME",
    "add_app_context",
    "redact_secrets",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "turn_context",
]
