"""Value types used by the query builder.

``OrderByField`` and ``RenderedQuery`` are immutable-ish pydantic models;
``WhereClause`` holds the WHERE grouping state between fluent calls.
"""

from typing import Any, Dict, List, Union

from pydantic import ConfigDict, Field, field_validator

from surrealkit.common.exceptions import invalid_sequence_error
from surrealkit.constants import SortDirection, WhereGrouping
from surrealkit.types import SurrealKitModel


class OrderByField(SurrealKitModel):
    """One ORDER BY entry."""

    field: str = Field(..., min_length=1)
    direction: SortDirection = Field(default=SortDirection.ASC)

    @field_validator("direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: Any) -> Any:
        if v is None:
            return SortDirection.ASC
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def coerce(cls, value: Union["OrderByField", Dict[str, Any], str]) -> "OrderByField":
        """Accept an OrderByField, a ``{"field", "direction"}`` mapping or a bare field name."""
        if isinstance(value, OrderByField):
            return value
        if isinstance(value, str):
            return cls(field=value)
        return cls.model_validate(value)

    def render(self) -> str:
        return f"{self.field} {SortDirection(self.direction).value}"


class RenderedQuery(SurrealKitModel):
    """A built query: the text plus a snapshot of its bound variables.

    Later changes to the builder never affect an already rendered query.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    variables: Dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return self.text


class WhereClause:
    """WHERE grouping state.

    Conditions are collected into the current group until the next
    ``where()``/``end_group()``, which finalizes it. Conditions are opaque
    strings; nothing here parses or validates them.
    """

    def __init__(self):
        self.groups: List[List[str]] = []
        self.current: List[str] = []

    @property
    def accumulating(self) -> bool:
        return bool(self.current)

    def start(self, condition: str) -> None:
        self.end_group()
        self.current = [condition]

    def extend(self, condition: str) -> None:
        """Add ``condition`` to the current group.

        Raises:
            InvalidSequenceError: If no group has been started
        """
        if not self.accumulating:
            raise invalid_sequence_error("or_", "where")
        self.current.append(condition)

    def end_group(self) -> None:
        if self.current:
            self.groups.append(self.current)
            self.current = []

    def render(self, grouping: WhereGrouping) -> str:
        """Join finalized groups; empty string when there are none.

        Parentheses are dropped when every group holds a single condition.
        """
        if not self.groups:
            return ""

        if all(len(group) == 1 for group in self.groups):
            parts = [group[0] for group in self.groups]
        else:
            inner = f" {grouping.inner} "
            parts = [f"({inner.join(group)})" for group in self.groups]

        return f" {grouping.outer} ".join(parts)
