"""Structured logging for the ground station.

Usage:
    from rakshak.logging import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Target set", extra={"latitude": 12.0})
"""

from rakshak.logging.config import LogFormat, LoggingConfig, LogLevel
from rakshak.logging.context import (
    clear_context,
    extra_context,
    generate_session_id,
    get_extra_context,
    get_session_id,
    set_extra_context,
    set_session_id,
)
from rakshak.logging.formatters import HumanFormatter, JSONFormatter
from rakshak.logging.logger import get_logger, reset_logging, setup_logging

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "clear_context",
    "extra_context",
    "generate_session_id",
    "get_extra_context",
    "get_logger",
    "get_session_id",
    "reset_logging",
    "set_extra_context",
    "set_session_id",
    "setup_logging",
]
