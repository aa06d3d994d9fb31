"""Logging configuration for iTerm-MCP.

Logs are structured with structlog and written to stderr, since the MCP
stdio transport owns stdout.
"""

import logging
import sys
from typing import Optional

import structlog

__all__ = ["configure_logging", "get_logger"]


def configure_logging(level: str = "WARNING") -> None:
    """Configure structlog once at startup.

    Args:
        level: Standard logging level name, unknown names fall back to WARNING
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a structlog logger, typically with the calling module's name.

    If structlog has not been configured yet, it is configured here with
    the WARNING level so nothing is ever printed to stdout.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
