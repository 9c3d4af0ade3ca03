"""Result shape normalization.

SurrealDB answers a script with one result per statement. These helpers
pick the last statement and reduce it to a single row or a row sequence.
"""

from typing import Any, Optional, Sequence


def _is_rows(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def last_statement(results: Optional[Sequence[Any]]) -> Any:
    """Return the result of the last statement, or None for an empty script."""
    if not results:
        return None
    return results[-1]


def first_row(value: Any) -> Any:
    """Reduce a statement result to one row.

    A row sequence yields its first element (None when empty); any other
    value, e.g. a scalar or a single record, is returned as is.
    """
    if _is_rows(value):
        return value[0] if value else None
    return value


def single_row(results: Optional[Sequence[Any]]) -> Any:
    return first_row(last_statement(results))


def all_rows(results: Optional[Sequence[Any]]) -> Any:
    """Return the rows of the last statement.

    Returns None when the script produced no statements. A scalar last
    statement is returned unchanged.
    """
    if not results:
        return None
    rows = results[-1]
    return list(rows) if _is_rows(rows) else rows
