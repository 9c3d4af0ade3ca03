"""OpenTelemetry helpers for SurrealDB client spans.

Span attributes follow the OpenTelemetry database semantic conventions
(``db.system``, ``db.operation``, ``db.statement``, ``db.name``). Without an
OpenTelemetry SDK installed the spans are no-ops.
"""

from typing import Any, Dict, Optional

from opentelemetry import trace

from surrealkit.__version__ import __version__
from surrealkit.constants import DB_SYSTEM

__all__ = [
    "MAX_STATEMENT_LENGTH",
    "db_attributes",
    "get_tracer",
    "statement_attributes",
]

MAX_STATEMENT_LENGTH = 4096


def get_tracer(name: str = "surrealkit", version: Optional[str] = None):
    """Return a tracer from the active OpenTelemetry provider."""
    return trace.get_tracer(name, version or __version__)


def db_attributes(operation: str) -> Dict[str, Any]:
    """Attributes shared by every span of a client operation."""
    return {"db.system": DB_SYSTEM, "db.operation": operation}


def statement_attributes(statement: Optional[str]) -> Dict[str, str]:
    """``db.statement`` for a query, trimmed to ``MAX_STATEMENT_LENGTH``."""
    if not statement:
        return {}
    statement = statement.strip()
    if len(statement) > MAX_STATEMENT_LENGTH:
        statement = f"{statement[:MAX_STATEMENT_LENGTH - 3]}..."
    return {"db.statement": statement}
