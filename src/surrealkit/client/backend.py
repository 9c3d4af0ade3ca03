"""SurrealDB SDK backend.

This module adapts the official ``surrealdb`` Python SDK to the
``SurrealBackend`` protocol. It is the only place that knows about the
SDK's response shapes; everything above it works with plain per-statement
results.
"""

import asyncio
import inspect
import re
from typing import Any, Callable, List, Optional, Set

from surrealdb import AsyncSurreal, RecordID

from surrealkit.common.exceptions import config_missing_error, query_error
from surrealkit.logging import get_logger
from surrealkit.protocols.backend import LiveCallback

logger = get_logger(__name__)

_INTEGER_ID = re.compile(r"-?[0-9]+")
_ESCAPED_ID = (("⟨", "⟩"), ("`", "`"))


def _record_id_value(identifier: str) -> Any:
    """Parse the id part of a record key the way SurrealQL reads it.

    ``user:1`` addresses the integer id 1, while an escaped id such as
    ``user:⟨1⟩`` stays the string "1".
    """
    if len(identifier) >= 2 and (identifier[0], identifier[-1]) in _ESCAPED_ID:
        return identifier[1:-1]
    if _INTEGER_ID.fullmatch(identifier):
        return int(identifier)
    return identifier


def to_thing(key: str) -> Any:
    """Turn ``"table:id"`` into a RecordID; plain table names pass through."""
    if ":" in key:
        table, identifier = key.split(":", 1)
        return RecordID(table, _record_id_value(identifier))
    return key


class SurrealDBBackend:
    """``SurrealBackend`` implementation backed by ``surrealdb.AsyncSurreal``.

    Live queries need a WebSocket endpoint (``ws://`` or ``wss://``); the
    remaining operations work over HTTP as well.

    Usage:
        backend = SurrealDBBackend()
        await backend.connect("ws://localhost:8000/rpc", username="root", password="root")
        await backend.use("test", "test")
        results = await backend.query("SELECT * FROM user; SELECT * FROM post")
    """

    def __init__(self, factory: Callable[[str], Any] = AsyncSurreal):
        """Initialize the backend.

        Args:
            factory: Callable creating an SDK connection from a URL
        """
        self._factory = factory
        self._db: Optional[Any] = None
        self._live_tasks: Set[asyncio.Task] = set()

    @property
    def session(self) -> Any:
        if self._db is None:
            raise RuntimeError("SurrealDB backend is not connected. Call connect() first.")
        return self._db

    async def connect(
        self,
        url: Optional[str],
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        if not url:
            raise config_missing_error("SURREAL_DB_HOST", "No SurrealDB host configured")

        db = self._factory(url)
        await db.connect()
        self._db = db
        if username:
            await db.signin({"username": username, "password": password})

    async def use(self, namespace: Optional[str], database: Optional[str]) -> None:
        await self.session.use(namespace, database)

    async def query(self, query: str, params: Optional[dict] = None) -> List[Any]:
        """Run a script and return one result per statement.

        Raises:
            QueryError: If the request or any statement reports an error
        """
        response = await self.session.query_raw(query, params or {})

        if response.get("error"):
            raise query_error(query, response["error"])

        results = []
        for index, statement in enumerate(response.get("result") or []):
            if statement.get("status") == "ERR":
                raise query_error(query, statement.get("result"), statement=index)
            results.append(statement.get("result"))
        return results

    async def create(self, key: str, value: Any) -> Any:
        return await self.session.create(to_thing(key), value)

    async def select(self, key: str) -> Any:
        return await self.session.select(to_thing(key))

    async def merge(self, key: str, value: Any) -> Any:
        return await self.session.merge(to_thing(key), value)

    async def delete(self, key: str) -> Any:
        return await self.session.delete(to_thing(key))

    async def live(self, table: str, callback: LiveCallback) -> Any:
        query_id = await self.session.live(table)
        stream = await self.session.subscribe_live(query_id)

        task = asyncio.create_task(self._deliver(table, stream, callback))
        self._live_tasks.add(task)
        task.add_done_callback(self._live_tasks.discard)
        return query_id

    async def _deliver(self, table: str, stream: Any, callback: LiveCallback) -> None:
        """Feed every notification to ``callback``.

        A failing callback is logged and does not end the subscription.
        """
        async for notification in stream:
            try:
                outcome = callback(notification)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception:
                logger.exception(
                    "Live query callback failed",
                    extra={"table": table, "operation": "live"},
                )

    async def close(self) -> None:
        for task in list(self._live_tasks):
            task.cancel()
        self._live_tasks.clear()

        if self._db is not None:
            db, self._db = self._db, None
            await db.close()
            logger.debug("SurrealDB session closed")
