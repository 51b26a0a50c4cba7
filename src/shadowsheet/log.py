"""Structured logging setup for shadowsheet."""

import logging

import structlog

from shadowsheet.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog from settings.

    ``log_format`` selects JSON lines ("json") or human readable output
    (anything else). Events below ``log_level`` are dropped.
    """
    if settings is None:
        settings = get_settings()

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer: structlog.typing.Processor
    if settings.log_format.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
