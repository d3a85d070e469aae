"""
Centralized logging configuration for the fearspike signal engine.

This module provides standardized logging configuration using structlog
for all components. Retrieval, parsing and query orchestration log through
loggers obtained here so that relay diagnostics share one format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
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

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_retrieval_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for relay retrieval diagnostics.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for relay attempts
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="retrieval",
        audit_trail=True
    )


def log_relay_attempt(
    logger: FilteringBoundLogger,
    relay_id: str,
    outcome: str,
    duration_ms: int,
    position: int,
    total: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a single relay attempt with standardized format.

    Args:
        logger: Structlog logger instance
        relay_id: Identifier of the relay that was tried
        outcome: Attempt outcome tag
        duration_ms: Wall time spent on the attempt
        position: 1-based position of the relay in the chain
        total: Number of relays in the chain
        context: Additional context data
    """
    bound_logger = logger.bind(
        relay_id=relay_id,
        outcome=outcome,
        duration_ms=duration_ms,
        relay_position=f"{position}/{total}",
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if outcome == "success":
        bound_logger.info("Relay attempt succeeded")
    else:
        bound_logger.warning("Relay attempt failed")
