# storefront_api/logging/config.py

"""
Logging configuration for the storefront API.

Called once at process startup from ``storefront_api.main.create_app``
(and from the CLI). Emits structured JSON logs when ``LOG_FORMAT=json``
and colored console logs otherwise. Standard-library loggers (uvicorn,
SQLAlchemy) are routed to stdout at the same level.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, List

import structlog

from storefront_api.config import LogFormat, Settings

from . import DEFAULT_LOGGER_NAME, get_logger


def configure_logging(settings: Settings) -> Any:
    """
    Configure structlog and stdlib logging, then return the service logger.
    """
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    return get_logger(DEFAULT_LOGGER_NAME)


__all__ = ["configure_logging"]
