import json
import logging
import sys

import pytest

from surrealkit.logging import ContextFilter, setup_logging
from surrealkit.logging.logger import LOGGER_NAME, CustomJsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="surrealkit.client.client",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=10,
        msg="Executing %s",
        args=("query",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(operation="query_one", params={"a": 1})))

    assert payload["message"] == "Executing query"
    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "surrealkit.client.client"
    assert payload["operation"] == "query_one"
    assert payload["params"] == {"a": 1}
    assert "timestamp" in payload
    assert "lineno" not in payload
    assert "trace_id" not in payload


def test_formatter_groups_connection_scope():
    record = _record(surreal_namespace="test", surreal_database="app", surreal_operation=None)

    payload = json.loads(CustomJsonFormatter().format(record))

    assert payload["surreal"] == {"namespace": "test", "database": "app"}
    assert "surreal_namespace" not in payload


def test_formatter_omits_empty_scope():
    record = _record(surreal_namespace=None, surreal_database=None, surreal_operation=None)
    assert "surreal" not in json.loads(CustomJsonFormatter().format(record))


def test_formatter_stringifies_unserializable_values():
    payload = json.loads(CustomJsonFormatter().format(_record(result=object())))
    assert payload["result"].startswith("<object object")


def test_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(CustomJsonFormatter().format(record))
    assert "ValueError: bad" in payload["exception"]


@pytest.fixture
def restore_loggers():
    loggers = [logging.getLogger(), logging.getLogger(LOGGER_NAME)]
    saved = [(lg.handlers[:], lg.level, lg.propagate) for lg in loggers]
    yield
    for lg, (handlers, level, propagate) in zip(loggers, saved):
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate


def _json_handler(logger: logging.Logger) -> logging.Handler:
    return next(h for h in logger.handlers if isinstance(h.formatter, CustomJsonFormatter))


def test_setup_logging_configures_package_logger(restore_loggers):
    setup_logging("debug")

    package_logger = logging.getLogger(LOGGER_NAME)
    handler = _json_handler(package_logger)
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is False
    assert any(isinstance(f, ContextFilter) for f in handler.filters)


def test_setup_logging_on_root(restore_loggers):
    setup_logging("warning", root=True)

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert _json_handler(root).level == logging.WARNING
