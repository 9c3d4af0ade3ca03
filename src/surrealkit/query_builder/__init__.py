"""Query builder module for SurrealQL generation.

The builder only generates query text; execution is delegated to
``surrealkit.client.SurrealClient``.

Design Principles:
    1. **Text Generation Only**: ``build()`` concatenates clauses, it never
       parses or validates conditions
    2. **Opaque Conditions**: WHERE fragments are passed through verbatim;
       bind user input through variables (``$name``), never by formatting
    3. **Fixed Clause Order**: SELECT, OMIT, FROM, WITH INDEX, WHERE, SPLIT,
       GROUP, ORDER BY, LIMIT, START, FETCH

Example:
    >>> from surrealkit.query_builder import SurrealQueryBuilder
    >>>
    >>> builder = SurrealQueryBuilder("person").select("name").where("age > $minAge")
    >>> builder.add_variable("minAge", 18)
    >>> rendered = builder.compile()
    >>> rendered.text
    'SELECT name FROM person WHERE age > $minAge'
    >>> rendered.variables
    {'minAge': 18}
"""

from surrealkit.query_builder.base import OrderByField, RenderedQuery, WhereClause
from surrealkit.query_builder.builder import SurrealQueryBuilder

__all__ = [
    "SurrealQueryBuilder",
    "OrderByField",
    "RenderedQuery",
    "WhereClause",
]
