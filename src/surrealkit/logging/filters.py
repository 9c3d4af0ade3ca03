"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
so every entry emitted while a client operation is in flight can be
correlated with the namespace, database and operation it belongs to.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional
from surrealkit.__version__ import __version__

namespace_var: ContextVar[Optional[str]] = ContextVar("surreal_namespace", default=None)
database_var: ContextVar[Optional[str]] = ContextVar("surreal_database", default=None)
operation_var: ContextVar[Optional[str]] = ContextVar("surreal_operation", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Context variables follow asyncio tasks, so records emitted from
    concurrent operations each carry their own values.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "surreal_namespace", namespace_var.get())
        setattr(record, "surreal_database", database_var.get())
        setattr(record, "surreal_operation", operation_var.get())
        setattr(record, "sdk_name", "surrealkit")
        setattr(record, "sdk_version", __version__)

        return True


@contextmanager
def connection_context(
    namespace: Optional[str] = None,
    database: Optional[str] = None,
    operation: Optional[str] = None,
) -> Iterator[None]:
    """Set connection context variables for the duration of a block.

    Previous values are restored on exit, so nested operations (an
    operation delegating to another) report the innermost one.
    """
    tokens = (
        namespace_var.set(namespace),
        database_var.set(database),
        operation_var.set(operation),
    )
    try:
        yield
    finally:
        for var, token in zip((namespace_var, database_var, operation_var), tokens):
            var.reset(token)
