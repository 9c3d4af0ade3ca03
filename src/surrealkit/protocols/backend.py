"""Backend protocol definitions.

This module defines the narrow interface surrealkit needs from a SurrealDB
client library. ``SurrealClient`` only talks to objects satisfying this
protocol, which keeps the SDK replaceable and the client testable with
plain mocks.
"""

from typing import Any, Callable, List, Optional, Protocol, runtime_checkable


LiveCallback = Callable[[Any], Any]


@runtime_checkable
class SurrealBackend(Protocol):
    """Protocol for an opened (or openable) SurrealDB session.

    Key arguments are record ids (``"user:tobie"``) or table names
    (``"user"``). Row-returning methods may return a single record or a
    sequence of records; the client normalizes both.
    """

    async def connect(
        self,
        url: Optional[str],
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        """Open the session and authenticate.

        Namespace and database are selected afterwards with ``use()``.

        Raises:
            Exception: Any error when the endpoint is unreachable or the
                credentials are rejected
        """
        ...

    async def use(self, namespace: Optional[str], database: Optional[str]) -> None:
        """Select the namespace and database for subsequent statements."""
        ...

    async def query(self, query: str, params: Optional[dict] = None) -> List[Any]:
        """Run a script and return one result per statement, in order."""
        ...

    async def create(self, key: str, value: Any) -> Any:
        ...

    async def select(self, key: str) -> Any:
        ...

    async def merge(self, key: str, value: Any) -> Any:
        ...

    async def delete(self, key: str) -> Any:
        ...

    async def close(self) -> None:
        ...

    async def live(self, table: str, callback: LiveCallback) -> Any:
        """Subscribe to changes on ``table``.

        ``callback`` is invoked once per notification on the backend's
        delivery path.

        Returns:
            Identifier of the live query
        """
        ...
