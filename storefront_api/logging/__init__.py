# storefront_api/logging/__init__.py

"""
Logging helpers for the storefront API.

API code does:

    from storefront_api.logging import get_logger

    logger = get_logger(__name__)
    logger.info("order_created", order_id=code)

and stays decoupled from how structlog is configured (see ``config.py``).
"""

from __future__ import annotations

from typing import Any, Optional

import structlog


DEFAULT_LOGGER_NAME = "storefront_api"


def get_logger(name: Optional[str] = None) -> Any:
    """
    Return a structlog logger bound to ``name`` (the service default when
    omitted).
    """
    return structlog.get_logger(name or DEFAULT_LOGGER_NAME)


__all__ = ["get_logger", "DEFAULT_LOGGER_NAME"]
