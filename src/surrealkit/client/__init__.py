"""SurrealDB client.

``SurrealClient`` is the connection wrapper; ``SurrealDBBackend`` adapts the
official ``surrealdb`` SDK to the ``SurrealBackend`` protocol the client
talks to.
"""

from surrealkit.client.backend import SurrealDBBackend
from surrealkit.client.client import SurrealClient
from surrealkit.client.results import all_rows, first_row, single_row

__all__ = [
    "SurrealClient",
    "SurrealDBBackend",
    "all_rows",
    "first_row",
    "single_row",
]
