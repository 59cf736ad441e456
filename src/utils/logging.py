# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging configuration using structlog.

Two kinds of log lines are produced: structlog events from the editor
(`syllabus_loaded`, `syllabus_saved`, ...) and %-style standard library
records from the portal HTTP client. Both go through one handler and one
renderer, so a session reads as a single stream: colored console output
in development, one JSON object per line otherwise.

Example:
    >>> from src.utils.logging import setup_logging, get_logger
    >>> setup_logging()
    >>> logger = get_logger(__name__)
    >>> logger.info("syllabus_saved", course_id="CST-4010", items=12)
"""

import logging
import sys

import structlog
from structlog.types import Processor

from src.core.config.settings import Settings, get_settings

# Transport libraries log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderers(settings: Settings) -> list[Processor]:
    if settings.is_development or settings.debug:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(settings: Settings | None = None) -> logging.Handler:
    """Configure structured logging for the application.

    Replaces the root handlers with a single stdout handler whose
    formatter renders structlog events and plain `logging` records alike.

    Args:
        settings: Application settings; the cached settings when omitted.

    Returns:
        The installed root handler.
    """
    settings = settings or get_settings()
    log_level = logging.getLevelName(settings.log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(settings),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)
