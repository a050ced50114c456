"""
Logger Factory - Convenience wrapper for LoggingService.

Provides a simple get_logger() function and a configure_logging() that
falls back to the process settings.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Optional

import structlog

from nativepack_core.config import settings
from nativepack_core.logging_service import LoggingService


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a module/component-specific logger.

    Args:
        name: Logger name (typically module path or __name__)

    Returns:
        Cached BoundLogger instance

    Raises:
        RuntimeError: If logging not configured yet
        ValueError: If name is empty or exceeds 200 chars
    """
    return LoggingService.get_logger(name)


def configure_logging(level: Optional[str] = None, format: Optional[str] = None) -> None:
    """
    Configure structured logging infrastructure.

    Uses settings.log_level / settings.log_format when arguments are omitted.

    Raises:
        ValueError: If level or format is invalid
        RuntimeError: If called after logging already configured
    """
    if level is None:
        level = settings.log_level
    if format is None:
        format = settings.log_format

    LoggingService.configure_logging(level=level, format=format)
