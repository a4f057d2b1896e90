"""
Structured logging configuration using structlog.

JSON lines in production so the serverless platform's log drain can
index them, coloured console output during local development. Logs go
to stderr; stdout belongs to the CLI's JSON output.

setup_logging() has to run before the first get_logger(..., **context)
call of a process. Binding context resolves structlog's lazy proxy
against whatever configuration is active at that moment, so a logger
bound earlier keeps structlog's defaults (console renderer on stdout)
for its whole life. Entry points (CatalogEndpoint, the CLI commands)
therefore configure logging first and only bind loggers afterwards.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from game_sorter.config import get_settings

_configured = False


def setup_logging(*, force: bool = False) -> None:
    """
    Configure structured logging for the application.

    Safe to call on every invocation: after the first call it is a
    no-op unless ``force`` is set.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.logging.include_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if settings.logging.format == "json":
        processors = [
            *shared_processors,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.logging.level)
        ),
        context_class=dict,
        # stderr keeps stdout clean for the CLI's JSON output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.logging.level),
    )
    _configured = True


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)
        **initial_context: Initial context values to bind to the logger

    Returns:
        structlog.BoundLogger: Configured logger instance

    Example:
        >>> logger = get_logger(__name__, component="sampler")
        >>> logger.info("Sampling started", source="rawg")
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
