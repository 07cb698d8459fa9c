"""Structured logging for Privacy Guard.

Logs go to stderr so that reports on stdout stay machine-readable.
"""

import logging
import sys

import structlog
from structlog.types import Processor


def configure_logging(log_level: str = "WARNING", json_output: bool = False) -> None:
    """Configure structlog for the CLI.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON lines. If False, use console format.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "privacyguard") -> structlog.stdlib.BoundLogger:
    """Get a logger bound to the given module name."""
    return structlog.get_logger(name)
