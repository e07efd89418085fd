"""Structured logging for the HeroForge engine.

The engine is a library: its loggers live under the ``heroforge`` stdlib
logger, which carries only a ``NullHandler``. Nothing is written anywhere
until the host application attaches handlers of its own or calls
:func:`configure_logging`. Events are built by structlog and handed to the
stdlib logger, so host logging setups (levels, handlers, filters) apply
unchanged.

Example:
    >>> from heroforge.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Combat resolved", victory=True, turns=4)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from heroforge.core.config import Settings


ROOT_LOGGER_NAME = "heroforge"

_HANDLER_MARKER = "_heroforge_handler"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every event with the engine name."""
    event_dict["app"] = ROOT_LOGGER_NAME
    return event_dict


# Runs when an event is emitted, before it is handed to the stdlib logger.
_EVENT_PROCESSORS: list[Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    add_app_context,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def _build_formatter(json_format: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: list[Processor]
    if json_format:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=False)]
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer],
    )


def configure_logging(
    settings: Settings | None = None,
    *,
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Attach a stdout handler to the engine's loggers.

    Only the ``heroforge`` logger is touched; the root logger and the host
    application's handlers are left alone. Calling this again replaces the
    handler installed by the previous call.

    Args:
        settings: Source of ``log_level``, ``json_logs`` and ``debug``.
            Defaults to :func:`~heroforge.core.config.get_settings`.
        level: Overrides the configured level. ``debug=True`` in the settings
            forces ``DEBUG`` when no explicit level is given.
        json_format: Overrides ``json_logs``.

    Example:
        >>> configure_logging(level="DEBUG", json_format=True)
    """
    if settings is None:
        from heroforge.core.config import get_settings

        settings = get_settings()

    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    if json_format is None:
        json_format = settings.json_logs

    engine_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(engine_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            engine_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(json_format))
    setattr(handler, _HANDLER_MARKER, True)

    engine_logger.addHandler(handler)
    engine_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    engine_logger.propagate = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by a stdlib logger under ``heroforge``.

    Args:
        name: Dotted logger name, typically ``__name__``. Names outside the
            ``heroforge`` namespace are not affected by
            :func:`configure_logging`.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER_NAME),
        processors=_EVENT_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent events.

    Example:
        >>> bind_context(hero_id="h-1")
        >>> logger.debug("Regen credited")  # carries hero_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "ROOT_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
