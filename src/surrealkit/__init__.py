from surrealkit.__version__ import __version__

from surrealkit.client import SurrealClient, SurrealDBBackend
from surrealkit.common.exceptions import (
    ConfigurationError,
    ErrorCode,
    InvalidSequenceError,
    QueryError,
    SurrealConnectionError,
    SurrealKitError,
)
from surrealkit.constants import ConnectionMode, SortDirection, WhereGrouping
from surrealkit.logging import setup_logging
from surrealkit.query_builder import OrderByField, RenderedQuery, SurrealQueryBuilder
from surrealkit.settings import ConnectionConfig, ConnectionOptions, resolve_config


__all__ = [
    "__version__",

    "SurrealClient",
    "SurrealDBBackend",
    "SurrealQueryBuilder",
    "OrderByField",
    "RenderedQuery",

    # Configuration
    "ConnectionConfig",
    "ConnectionOptions",
    "ConnectionMode",
    "resolve_config",
    "SortDirection",
    "WhereGrouping",

    # Exceptions (public API)
    "SurrealKitError",
    "SurrealConnectionError",
    "ConfigurationError",
    "InvalidSequenceError",
    "QueryError",
    "ErrorCode",

    "setup_logging",
]
