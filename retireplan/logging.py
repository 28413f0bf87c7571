"""
Centralized logging configuration for RetirePlan.

All modules obtain loggers through :func:`get_logger` so that output is
structured consistently. Configuration is done once by the entry point
(the CLI, or an embedding service) through :func:`configure_logging`.
Until then, if the application has not configured structlog itself,
importing the package installs :func:`configure_library_defaults`: only
WARNING and above, written to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog
from structlog.types import FilteringBoundLogger

__all__ = ["configure_logging", "configure_library_defaults", "get_logger"]


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    extra_processors: Optional[list] = None,
) -> None:
    """
    Configure structlog for the whole package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_json: If True, render JSON lines; otherwise human-readable
        include_timestamp: Add an ISO timestamp to every event
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # Logs go to stderr so that --json output on stdout stays parseable
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structlog logger.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)


def configure_library_defaults() -> None:
    """Quiet fallback used until configure_logging() is called."""
    structlog.reset_defaults()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_library_defaults()
