"""Structured logging for the AI RPG engine.

All modules log through structlog with keyword context. The output is
human-readable in debug mode and one JSON object per line otherwise.
Per-player context is bound for the duration of a turn with
``bind_context`` and dropped with ``clear_context``.

Example:
    >>> from rpg_engine.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Turn applied", player_id="p-1", time_elapsed=12)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from rpg_engine.core.config import Settings


REDACTED = "***"

# Keys whose values never reach a log line
_SECRET_KEYS = frozenset({"api_key", "openrouter_api_key", "openai_api_key", "authorization"})

# Chatty libraries underneath the openai SDK
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def redact_secrets(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Mask API keys passed as log context."""
    for key in _SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _app_context(app_name: str, app_version: str) -> Processor:
    def add_app_context(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        event_dict.setdefault("version", app_version)
        return event_dict

    return add_app_context


def configure_logging(settings: Settings | None = None, *, json_format: bool | None = None) -> None:
    """Configure structlog and standard library logging from settings.

    Args:
        settings: Application settings. If None, uses global settings.
        json_format: Force JSON (True) or console (False) output. By
            default JSON is used unless ``settings.json_logs`` is off and
            debug mode is on.

    Example:
        >>> configure_logging(json_format=False)
    """
    if settings is None:
        from rpg_engine.core.config import get_settings

        settings = get_settings()

    if json_format is None:
        json_format = settings.json_logs or settings.is_production
    level = getattr(logging, settings.log_level, logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _app_context(settings.app_name, settings.app_version),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        renderer: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=level,
        stream=sys.stdout,
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context included in every later log line of this thread.

    Example:
        >>> bind_context(player_id="p-1")
        >>> logger.info("Turn started")  # Will include player_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context, ending a player's turn scope."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "REDACTED",
    "configure_logging",
    "redact_secrets",
    "get_logger",
    "bind_context",
    "clear_context",
]
