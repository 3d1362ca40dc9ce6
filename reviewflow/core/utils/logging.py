"""
Structured logging utilities.

Configures structlog for the action run and provides a context manager for
timing pipeline operations with consistent start, completion and failure events.
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from reviewflow.core.config.logging_config import LoggingConfig

logger = structlog.get_logger(__name__)


def setup_logging(logging_config: LoggingConfig) -> None:
    """
    Configure stdlib logging and structlog from the logging configuration.

    Args:
        logging_config: Level and format for the run.
    """
    level = logging.getLevelName(logging_config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=logging_config.format, stream=sys.stdout)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@asynccontextmanager
async def log_operation(operation: str, **context: Any) -> Any:  # AsyncGenerator[None, None]
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        **context: Additional context to include in logs

    Example:
        async with log_operation("team_reconciliation", repo=repo, pr=pr_number):
            reviewers = await resolve_teams_and_filter(...)
    """
    start_time = time.time()
    log = logger.bind(operation=operation, **context)

    log.info("operation_started")

    try:
        yield
    except Exception as e:
        latency_ms = int((time.time() - start_time) * 1000)
        log.error("operation_failed", error=str(e), latency_ms=latency_ms, exc_info=True)
        raise
    else:
        latency_ms = int((time.time() - start_time) * 1000)
        log.info("operation_completed", latency_ms=latency_ms)
