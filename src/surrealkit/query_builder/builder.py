"""Fluent SurrealQL SELECT builder.

Example:
    >>> from surrealkit.query_builder import SurrealQueryBuilder
    >>>
    >>> query = (
    ...     SurrealQueryBuilder("person")
    ...     .select("name", "age")
    ...     .where("age > $minAge")
    ...     .or_("vip = true")
    ...     .and_("status = 'active'")
    ...     .order_by({"field": "age", "direction": "DESC"})
    ...     .limit(10)
    ... )
    >>> query.build()
    "SELECT name, age FROM person WHERE (age > $minAge OR vip = true) AND (status = 'active') ORDER BY age DESC LIMIT 10"
"""

from typing import Any, Callable, Dict, List, Optional, Union

from surrealkit.client import SurrealClient
from surrealkit.constants import WhereGrouping
from surrealkit.logging import get_logger
from surrealkit.query_builder.base import OrderByField, RenderedQuery, WhereClause

logger = get_logger(__name__)

OrderByInput = Union[OrderByField, Dict[str, Any], str]


class SurrealQueryBuilder:
    """Accumulates SELECT clauses through chained calls and renders them.

    Every setter replaces the previous value for its clause and returns
    the builder. Clauses are rendered in a fixed order:
    SELECT, OMIT, FROM, WITH INDEX, WHERE, SPLIT, GROUP, ORDER BY, LIMIT,
    START, FETCH.

    WHERE handling:
        ``where()`` (and its alias ``and_()``) starts a new group, ``or_()``
        adds to the current one. With the default ``AND_OF_ORS`` grouping,
        ``where("a").or_("b").and_("c")`` renders ``(a OR b) AND (c)``.

    Execution helpers create a fresh ``SurrealClient`` per call and close it
    when done.
    """

    def __init__(
        self,
        table: str,
        grouping: Union[WhereGrouping, str] = WhereGrouping.AND_OF_ORS,
        *,
        client_factory: Optional[Callable[[], SurrealClient]] = None,
    ):
        """Initialize the builder.

        Args:
            table: Table (or record/range expression) to select from
            grouping: How WHERE groups are combined
            client_factory: Creates the client used by the execution helpers.
                Defaults to ``SurrealClient()`` configured from the environment.
        """
        if not table:
            raise ValueError("A table is required to build a query")

        self.table = table
        self.grouping = WhereGrouping(grouping)
        self.variables: Dict[str, Any] = {}

        self._fields: List[str] = []
        self._omit_fields: List[str] = []
        self._where = WhereClause()
        self._order_by: List[OrderByField] = []
        self._group_by: List[str] = []
        self._group_all = False
        self._split: List[str] = []
        self._fetch: List[str] = []
        self._index: List[str] = []
        self._limit: Optional[int] = None
        self._offset: int = 0
        self._client_factory = client_factory or SurrealClient

    # ==========================================================================
    # CLAUSES
    # ==========================================================================

    def select(self, *fields: str) -> "SurrealQueryBuilder":
        """Select fields to return; no fields selects ``*``."""
        self._fields = list(fields)
        return self

    def omit(self, *fields: str) -> "SurrealQueryBuilder":
        """Leave fields out of the returned records."""
        self._omit_fields = list(fields)
        return self

    def where(self, condition: str) -> "SurrealQueryBuilder":
        """Start a new condition group. Must come before any ``or_()``."""
        self._where.start(condition)
        return self

    def and_(self, condition: str) -> "SurrealQueryBuilder":
        """Alias for ``where()``: starts another group."""
        return self.where(condition)

    def or_(self, condition: str) -> "SurrealQueryBuilder":
        """Add an alternative to the current group.

        Raises:
            InvalidSequenceError: If no ``where()`` group is open
        """
        self._where.extend(condition)
        return self

    def end_group(self) -> "SurrealQueryBuilder":
        self._where.end_group()
        return self

    def fetch(self, *fields: str) -> "SurrealQueryBuilder":
        """Resolve record links for these fields."""
        self._fetch = list(fields)
        return self

    def offset(self, n: int) -> "SurrealQueryBuilder":
        self._offset = n
        return self

    def limit(self, n: int) -> "SurrealQueryBuilder":
        self._limit = n
        return self

    def group_by(self, *fields: str) -> "SurrealQueryBuilder":
        self._group_by = list(fields)
        return self

    def group_all(self, enabled: bool = True) -> "SurrealQueryBuilder":
        """Aggregate over the whole table. Wins over ``group_by()``."""
        self._group_all = enabled
        return self

    def order_by(self, *fields: OrderByInput) -> "SurrealQueryBuilder":
        """Order the results; direction defaults to ASC."""
        self._order_by = [OrderByField.coerce(field) for field in fields]
        return self

    def split(self, *fields: str) -> "SurrealQueryBuilder":
        self._split = list(fields)
        return self

    def index(self, *indexes: str) -> "SurrealQueryBuilder":
        """Hint the indexes to use."""
        self._index = list(indexes)
        return self

    # ==========================================================================
    # VARIABLES
    # ==========================================================================

    def add_variable(self, key: str, value: Any) -> "SurrealQueryBuilder":
        self.variables[key] = value
        return self

    def remove_variable(self, key: str) -> "SurrealQueryBuilder":
        self.variables.pop(key, None)
        return self

    def clear_variables(self) -> "SurrealQueryBuilder":
        self.variables = {}
        return self

    # ==========================================================================
    # RENDERING
    # ==========================================================================

    def build(self, ignore_pagination: bool = False, ignore_filter: bool = False) -> str:
        """Construct the query string.

        Any open WHERE group is finalized first.

        Args:
            ignore_pagination: Leave out LIMIT and START
            ignore_filter: Leave out WHERE
        """
        self._where.end_group()

        query = f"SELECT {', '.join(self._fields) if self._fields else '*'}"

        if self._omit_fields:
            query += f" OMIT {', '.join(self._omit_fields)}"

        query += f" FROM {self.table}"

        if self._index:
            query += f"WITH INDEX {', '.join(self._index)}"

        where = "" if ignore_filter else self._where.render(self.grouping)
        if where:
            query += f" WHERE {where}"

        if self._split:
            query += f" SPLIT {', '.join(self._split)}"

        if self._group_all:
            query += " GROUP ALL"
        elif self._group_by:
            query += f" GROUP BY {', '.join(self._group_by)}"

        if self._order_by:
            query += f" ORDER BY {', '.join(field.render() for field in self._order_by)}"

        if not ignore_pagination:
            if self._limit is not None:
                query += f" LIMIT {self._limit}"
            if self._offset:
                query += f" START {self._offset}"

        if self._fetch:
            query += f" FETCH {', '.join(self._fetch)}"

        return query

    def compile(
        self,
        params: Optional[Dict[str, Any]] = None,
        ignore_pagination: bool = False,
        ignore_filter: bool = False,
    ) -> RenderedQuery:
        """Render the query together with its variables.

        ``params`` override stored variables with the same name.
        """
        variables = dict(self.variables)
        variables.update(params or {})
        rendered = RenderedQuery(
            text=self.build(ignore_pagination=ignore_pagination, ignore_filter=ignore_filter),
            variables=variables,
        )
        logger.debug("Rendered query", extra={"query": rendered.text, "table": self.table})
        return rendered

    def __str__(self) -> str:
        return self.build()

    # ==========================================================================
    # EXECUTION
    # ==========================================================================

    async def query_one(self, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute the query and return a single row (or None)."""
        rendered = self.compile(params)
        async with self._client_factory() as client:
            return await client.query_one(rendered.text, rendered.variables)

    async def query_many(self, params: Optional[Dict[str, Any]] = None) -> Optional[List[Any]]:
        """Execute the query and return all rows."""
        rendered = self.compile(params)
        async with self._client_factory() as client:
            return await client.query_many(rendered.text, rendered.variables)

    async def execute(self, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Execute the query and return the raw per-statement results."""
        rendered = self.compile(params)
        async with self._client_factory() as client:
            return await client.execute(rendered.text, rendered.variables)

    async def total(self, ignore_filter: bool = False, params: Optional[Dict[str, Any]] = None) -> int:
        """Count the rows the query matches without LIMIT/START.

        Rows are fetched and counted client side. A last statement that
        yields a single value instead of rows counts as one row.

        Args:
            ignore_filter: Count the whole table, ignoring WHERE
            params: Extra variables for this execution
        """
        rendered = self.compile(params, ignore_pagination=True, ignore_filter=ignore_filter)
        async with self._client_factory() as client:
            rows = await client.query_many(rendered.text, rendered.variables)
        if rows is None:
            return 0
        if isinstance(rows, (list, tuple)):
            return len(rows)
        return 1
