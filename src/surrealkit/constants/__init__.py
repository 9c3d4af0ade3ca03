"""Constants module for surrealkit.

This module contains all constant values and enumerations used throughout
surrealkit. It has no dependencies on other surrealkit modules.

Organization:
    - connection: Connection lifecycle modes and environment variable names
    - query: SurrealQL keywords, sort directions and WHERE grouping
"""

from surrealkit.constants.connection import (
    DB_SYSTEM,
    ENV_ALIASES,
    ENV_PREFIX,
    PUBLIC_ENV_PREFIX,
    ConnectionMode,
)
from surrealkit.constants.query import (
    BEGIN_TRANSACTION,
    COMMIT_TRANSACTION,
    RELATE_CONTENT_PARAM,
    SortDirection,
    WhereGrouping,
)

__all__ = [
    "ConnectionMode",
    "ENV_ALIASES",
    "ENV_PREFIX",
    "PUBLIC_ENV_PREFIX",
    "DB_SYSTEM",
    "SortDirection",
    "WhereGrouping",
    "BEGIN_TRANSACTION",
    "COMMIT_TRANSACTION",
    "RELATE_CONTENT_PARAM",
]
