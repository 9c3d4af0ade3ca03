"""Unit tests for operation tracing."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from opentelemetry.trace import SpanKind, StatusCode

from surrealkit.telemetry import MAX_STATEMENT_LENGTH, statement_attributes
from surrealkit.utils.decorators import operation_span, traced


@pytest.fixture
def tracer():
    tracer = MagicMock()
    tracer.start_as_current_span.return_value.__exit__.return_value = False
    with patch("surrealkit.utils.decorators.get_tracer", return_value=tracer):
        yield tracer


def _span(tracer):
    return tracer.start_as_current_span.return_value.__enter__.return_value


def test_span_name_kind_and_attributes(tracer):
    @traced("query_one", attribute_getter=lambda query: {"db.statement": query, "db.name": None})
    async def run(query):
        return query.upper()

    assert asyncio.run(run("select")) == "SELECT"

    args, kwargs = tracer.start_as_current_span.call_args
    assert args == ("surrealkit.client.query_one",)
    assert kwargs["kind"] == SpanKind.CLIENT
    assert kwargs["attributes"] == {
        "db.system": "surrealdb",
        "db.operation": "query_one",
        "db.statement": "select",
    }


def test_wrapped_function_metadata_is_kept():
    @traced("fetch")
    async def fetch(key):
        """Fetch a record."""

    assert fetch.__name__ == "fetch"
    assert fetch.__doc__ == "Fetch a record."


def test_exceptions_are_recorded_and_reraised(tracer):
    @traced("delete")
    async def fail():
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError, match="nope"):
        asyncio.run(fail())

    span = _span(tracer)
    span.record_exception.assert_called_once()
    status = span.set_status.call_args.args[0]
    assert status.status_code == StatusCode.ERROR


def test_failing_attribute_getter_does_not_fail_the_call(tracer):
    def broken(*args, **kwargs):
        raise KeyError("missing")

    @traced("create", attribute_getter=broken)
    async def create():
        return "created"

    assert asyncio.run(create()) == "created"


def test_operation_span_without_error(tracer):
    with operation_span("begin") as span:
        assert span is _span(tracer)

    span.record_exception.assert_not_called()


def test_statement_attributes_are_trimmed():
    assert statement_attributes(None) == {}
    assert statement_attributes("  SELECT 1  ") == {"db.statement": "SELECT 1"}

    long_statement = statement_attributes("x" * (MAX_STATEMENT_LENGTH + 10))["db.statement"]
    assert len(long_statement) == MAX_STATEMENT_LENGTH
    assert long_statement.endswith("...")
