"""SurrealDB client wrapper.

``SurrealClient`` forwards queries and record operations to a SurrealDB
backend and normalizes multi-statement results to the shape callers
usually want: the first row, or all rows, of the last statement.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, Optional, Union

from surrealkit.__version__ import __version__
from surrealkit.client.backend import SurrealDBBackend
from surrealkit.client.results import first_row, single_row, all_rows
from surrealkit.common.exceptions import connection_error
from surrealkit.constants import (
    BEGIN_TRANSACTION,
    COMMIT_TRANSACTION,
    RELATE_CONTENT_PARAM,
    ConnectionMode,
)
from surrealkit.logging import connection_context, get_logger
from surrealkit.protocols.backend import LiveCallback, SurrealBackend
from surrealkit.settings import ConnectionConfig, ConnectionOptions, resolve_config
from surrealkit.telemetry import statement_attributes
from surrealkit.utils.decorators import traced

logger = get_logger(__name__)


def _scope_attributes(client: "SurrealClient") -> Dict[str, Any]:
    return {
        "db.surrealdb.namespace": client.config.namespace,
        "db.name": client.config.database,
    }


def _statement_attributes(client: "SurrealClient", *args: Any, **kwargs: Any) -> Dict[str, Any]:
    statement = args[0] if args else kwargs.get("query")
    return {**_scope_attributes(client), **statement_attributes(statement)}


def _target_attributes(client: "SurrealClient", *args: Any, **kwargs: Any) -> Dict[str, Any]:
    target = args[0] if args else kwargs.get("key") or kwargs.get("table")
    return {**_scope_attributes(client), "db.surrealdb.target": target}


class SurrealClient:
    """Async wrapper around a SurrealDB connection.

    Configuration is resolved once at construction: explicit options win,
    missing values come from ``SURREAL_DB_*`` (or ``NEXT_PUBLIC_SURREAL_DB_*``)
    environment variables.

    Connection lifecycle:
        - per-call (default): every operation opens its own handle and
          closes it before returning.
        - pooled: the first operation opens a handle that is reused until
          ``close()``. Opening is serialized per instance.

    ``live()`` always keeps its handle open until ``close()``, whatever the
    mode. Transactions opened with ``begin()`` only span later calls in
    pooled mode.

    Usage:
        async with SurrealClient(connection_mode="pooled") as db:
            await db.create("user:tobie", {"name": "Tobie"})
            user = await db.query_one("SELECT * FROM user WHERE name = $name", {"name": "Tobie"})
    """

    def __init__(
        self,
        connection: Union[ConnectionOptions, Mapping[str, Any], None] = None,
        debug: Optional[bool] = None,
        connection_mode: Union[ConnectionMode, str, None] = None,
        *,
        config: Optional[ConnectionConfig] = None,
        backend_factory: Callable[[], SurrealBackend] = SurrealDBBackend,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the client.

        Args:
            connection: host, user, password, namespace and database overrides
            debug: Emit debug output for every operation
            connection_mode: ``per-call`` or ``pooled``
            config: Fully resolved configuration, bypasses resolution
            backend_factory: Creates a backend handle per connection
            environ: Environment snapshot used instead of the process environment
        """
        self.config = config or resolve_config(
            connection,
            debug=debug,
            connection_mode=connection_mode,
            environ=environ,
        )
        self._backend_factory = backend_factory
        self._handle: Optional[SurrealBackend] = None
        self._connected = False
        self._lock = asyncio.Lock()

        self._debug("Debug mode enabled", operation="init", version=__version__)
        self._debug(
            "Connection",
            operation="init",
            connection=self.config.to_dict(exclude={"debug"}),
        )

    @property
    def debug(self) -> bool:
        return self.config.debug

    @property
    def connected(self) -> bool:
        return self._connected

    def _debug(self, message: str, **fields: Any) -> None:
        if not self.config.debug:
            return
        logger.debug(message, extra=fields)

    async def __aenter__(self) -> "SurrealClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ==========================================================================
    # CONNECTION LIFECYCLE
    # ==========================================================================

    async def _open(self) -> SurrealBackend:
        """Create a backend handle, authenticate and select namespace/database.

        Raises:
            SurrealConnectionError: If the endpoint is unreachable or the
                credentials are rejected
        """
        config = self.config
        self._debug(
            "Connecting to SurrealDB",
            operation="connect",
            host=config.url,
            namespace=config.namespace,
            database=config.database,
        )

        handle = self._backend_factory()
        try:
            await handle.connect(
                config.url,
                username=config.user,
                password=config.secret_password(),
            )
            await handle.use(config.namespace, config.database)
        except Exception as e:
            await self._discard(handle)
            raise connection_error(
                f"Failed to connect to SurrealDB at {config.url}",
                host=config.url,
                namespace=config.namespace,
                database=config.database,
                cause=e,
            ) from e

        self._debug("Connected to SurrealDB", operation="connect")
        return handle

    async def _discard(self, handle: SurrealBackend) -> None:
        """Close a handle whose session could not be set up."""
        try:
            await handle.close()
        except Exception as e:
            logger.warning("Failed to close SurrealDB handle: %s", e, extra={"operation": "connect"})

    async def connect(self) -> None:
        """Open the instance's handle if it is not open yet.

        Raises:
            SurrealConnectionError: If the session cannot be established
        """
        async with self._lock:
            if self._connected:
                return
            self._handle = await self._open()
            self._connected = True

    async def init(self) -> SurrealBackend:
        """Connect and return the underlying backend handle."""
        await self.connect()
        return self._handle

    async def close(self) -> None:
        """Release the held handle. Safe to call when nothing is open."""
        self._debug("Closing connection", operation="close")
        async with self._lock:
            handle, self._handle = self._handle, None
            self._connected = False

        if handle is not None:
            await handle.close()
            self._debug("Connection closed", operation="close")

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[SurrealBackend]:
        with connection_context(self.config.namespace, self.config.database, operation):
            if self.config.pooled:
                await self.connect()
                yield self._handle
                return

            handle = await self._open()
            try:
                yield handle
            finally:
                await handle.close()

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    @traced("query_one", attribute_getter=_statement_attributes)
    async def query_one(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute a query and return the first row.

        If there are multiple statements, the first row of the last one is
        returned. A scalar last statement is returned as is.

        Returns:
            The row, or None when the last statement produced no rows
        """
        self._debug("Executing query", operation="query_one", query=query, params=params)
        async with self._session("query_one") as db:
            results = await db.query(query, params)
        self._debug("QueryOne result", operation="query_one", result=results)
        return single_row(results)

    @traced("query_many", attribute_getter=_statement_attributes)
    async def query_many(self, query: str, params: Optional[Dict[str, Any]] = None) -> Optional[List[Any]]:
        """Execute a query and return all rows of the last statement.

        Returns:
            The rows, or None when the script produced no statements
        """
        self._debug("Executing query", operation="query_many", query=query, params=params)
        async with self._session("query_many") as db:
            results = await db.query(query, params)
        self._debug("QueryMany results", operation="query_many", result=results)
        return all_rows(results)

    @traced("execute", attribute_getter=_statement_attributes)
    async def execute(self, query: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Execute a raw query and return every statement's result unchanged."""
        self._debug("Executing query", operation="execute", query=query, params=params)
        async with self._session("execute") as db:
            results = await db.query(query, params)
        self._debug("Query result", operation="execute", result=results)
        return results

    # ==========================================================================
    # RECORD OPERATIONS
    # ==========================================================================

    @traced("create", attribute_getter=_target_attributes)
    async def create(self, key: str, value: Any) -> Any:
        """Create a record at ``key`` with ``value`` and return it."""
        self._debug("Creating key", operation="create", key=key, value=value)
        async with self._session("create") as db:
            result = first_row(await db.create(key, value))
        self._debug("Create result", operation="create", result=result)
        return result

    @traced("fetch", attribute_getter=_target_attributes)
    async def fetch(self, key: str) -> Any:
        """Fetch the record at ``key``, or None if it does not exist."""
        self._debug("Fetching key", operation="fetch", key=key)
        async with self._session("fetch") as db:
            result = first_row(await db.select(key))
        self._debug("Fetch result", operation="fetch", result=result)
        return result

    @traced("fetch_many", attribute_getter=_target_attributes)
    async def fetch_many(self, table: str) -> Optional[List[Any]]:
        """Fetch every record of ``table``."""
        self._debug("Fetching many keys from table", operation="fetch_many", table=table)
        results = await self.query_many(f"SELECT * FROM {table}")
        self._debug("FetchMany results", operation="fetch_many", result=results)
        return results

    @traced("update", attribute_getter=_target_attributes)
    async def update(self, key: str, value: Any) -> Any:
        """Merge ``value`` into the record at ``key``; creates it if absent."""
        self._debug("Updating key", operation="update", key=key, value=value)
        async with self._session("update") as db:
            result = first_row(await db.merge(key, value))
        self._debug("Update result", operation="update", result=result)
        return result

    @traced("delete", attribute_getter=_target_attributes)
    async def delete(self, key: str) -> Any:
        """Delete the record at ``key`` and return it."""
        self._debug("Deleting key", operation="delete", key=key)
        async with self._session("delete") as db:
            result = first_row(await db.delete(key))
        self._debug("Delete result", operation="delete", result=result)
        return result

    @traced("relate", attribute_getter=_target_attributes)
    async def relate(
        self,
        table: str,
        from_record: str,
        to_record: str,
        value: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Relate two records through an edge table.

        Args:
            table: The edge table name (i.e. "visited")
            from_record: Key of the record to relate from (i.e. "user:1")
            to_record: Key of the record to relate to (i.e. "office:sydney")
            value: Optional edge content (i.e. {"visitedAt": "2021-01-01"})
        """
        self._debug(
            "Relating",
            operation="relate",
            from_record=from_record,
            to_record=to_record,
            table=table,
            value=value,
        )
        query = f"RELATE {from_record}->{table}->{to_record}"
        params = None
        if value:
            query = f"{query} CONTENT ${RELATE_CONTENT_PARAM}"
            params = {RELATE_CONTENT_PARAM: value}

        result = await self.execute(query, params)
        self._debug("Relate result", operation="relate", result=result)

    # ==========================================================================
    # TRANSACTIONS AND LIVE QUERIES
    # ==========================================================================

    async def begin(self) -> List[Any]:
        """Issue ``BEGIN TRANSACTION``. No client-side state is kept."""
        self._debug("Beginning transaction", operation="begin")
        return await self.execute(BEGIN_TRANSACTION)

    async def commit(self) -> List[Any]:
        """Issue ``COMMIT TRANSACTION``."""
        self._debug("Committing transaction", operation="commit")
        return await self.execute(COMMIT_TRANSACTION)

    @traced("live", attribute_getter=_target_attributes)
    async def live(self, table: str, callback: LiveCallback) -> Any:
        """Subscribe to changes on ``table``.

        ``callback`` runs once per notification, on the backend's delivery
        path, until the client is closed.

        Note:
            The subscription needs a handle that outlives this call, so
            ``live()`` connects the instance even in per-call mode and the
            client holds that handle until ``close()``. Other per-call
            operations still open their own handles.

        Returns:
            The live query id reported by SurrealDB
        """
        self._debug("Checking connection", operation="live", table=table)
        await self.connect()
        with connection_context(self.config.namespace, self.config.database, "live"):
            return await self._handle.live(table, callback)
