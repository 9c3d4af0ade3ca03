"""Structured logging for surrealkit.

Records are rendered as JSON lines. The SurrealDB scope published by
``connection_context`` is grouped under a ``surreal`` key, and the ids of
the active OpenTelemetry span are attached when one is recording.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict

from opentelemetry import trace

from surrealkit.logging.filters import ContextFilter

LOGGER_NAME = "surrealkit"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"asctime", "message"}

# ContextFilter attribute -> key inside the ``surreal`` object
_SCOPE_KEYS = {
    "surreal_namespace": "namespace",
    "surreal_database": "database",
    "surreal_operation": "operation",
}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """Render each record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scope: Dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRIBUTES:
                continue
            if key in _SCOPE_KEYS:
                if value is not None:
                    scope[_SCOPE_KEYS[key]] = value
            else:
                payload.setdefault(key, value)

        if scope:
            payload["surreal"] = scope

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            payload["trace_id"] = format(span_context.trace_id, "032x")
            payload["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(level: str = "INFO", *, root: bool = False) -> None:
    """Send surrealkit logs to stdout as JSON lines.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Use DEBUG
            to see the output of clients created with ``debug=True``.
        root: Attach the handler to the root logger instead of the
            ``surrealkit`` logger, so application logs share the format.
    """
    level = level.upper()
    target: Dict[str, Any] = {"level": level, "handlers": ["console"]}

    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"surreal_json": {"()": CustomJsonFormatter}},
        "filters": {"surreal_context": {"()": ContextFilter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "surreal_json",
                "filters": ["surreal_context"],
                "stream": "ext://sys.stdout",
            }
        },
    }

    if root:
        config_dict["root"] = target
    else:
        config_dict["loggers"] = {LOGGER_NAME: {**target, "propagate": False}}

    logging.config.dictConfig(config_dict)
