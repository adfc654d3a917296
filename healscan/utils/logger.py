"""
Logging configuration for HealScan AI.

structlog with JSON output in production and a colored console
renderer when DEBUG is on.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from healscan.config import settings


def configure_logging(
    log_level: Optional[str] = None,
    json_format: bool = True
) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Override log level (defaults to settings.log_level)
        json_format: JSON lines (True) or console output (False)
    """
    numeric_level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn and the SDKs log through the standard library
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )


def get_logger(name: str = "healscan") -> structlog.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)


configure_logging(
    log_level=settings.log_level,
    json_format=not settings.debug
)

logger = get_logger()
