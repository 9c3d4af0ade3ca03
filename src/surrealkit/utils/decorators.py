"""Tracing for client operations.

Every public ``SurrealClient`` operation runs inside a CLIENT span named
``surrealkit.client.<operation>``. Failures are recorded on the span and
re-raised unchanged.
"""

import functools
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar

from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from surrealkit.telemetry import db_attributes, get_tracer


F = TypeVar('F', bound=Callable[..., Any])
AttributeGetter = Callable[..., Optional[Dict[str, Any]]]

SPAN_PREFIX = "surrealkit.client"

logger = None


def _get_logger():
    """Get logger instance lazily."""
    global logger
    if logger is None:
        from surrealkit.logging import get_logger
        logger = get_logger(__name__)
    return logger


def _call_attributes(getter: Optional[AttributeGetter], args: tuple, kwargs: dict) -> Dict[str, Any]:
    if getter is None:
        return {}
    try:
        return getter(*args, **kwargs) or {}
    except Exception as exc:
        _get_logger().warning("trace attribute getter failed: %s", exc)
        return {}


@contextmanager
def operation_span(operation: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Span]:
    """Open the span for one client operation.

    Args:
        operation: Operation name, e.g. ``query_one``
        attributes: Extra attributes; None values are dropped
    """
    span_attributes = db_attributes(operation)
    span_attributes.update({k: v for k, v in (attributes or {}).items() if v is not None})

    tracer = get_tracer(SPAN_PREFIX)
    with tracer.start_as_current_span(
        f"{SPAN_PREFIX}.{operation}",
        kind=SpanKind.CLIENT,
        attributes=span_attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise


def traced(operation: str, attribute_getter: Optional[AttributeGetter] = None) -> Callable[[F], F]:
    """Run an async client method inside ``operation_span``.

    Args:
        operation: Operation name used for the span name and ``db.operation``
        attribute_getter: Receives the call's arguments (including ``self``)
            and returns attributes known only at call time.
    """

    def decorator(func: F) -> F:

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with operation_span(operation, _call_attributes(attribute_getter, args, kwargs)):
                return await func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
