"""Logging infrastructure for surrealkit.

This module provides structured logging with JSON output and context
tracking for client operations.
"""

from surrealkit.logging.filters import ContextFilter, connection_context
from surrealkit.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "connection_context",
]
