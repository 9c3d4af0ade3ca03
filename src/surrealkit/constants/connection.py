"""Connection-related constants.

This module contains the enums and lookup tables used to resolve how a
client connects to SurrealDB. It has no dependencies on other surrealkit
modules so it can be imported from anywhere.
"""

from enum import Enum
from typing import Dict, Tuple


class ConnectionMode(str, Enum):
    """Connection lifecycle used by a client instance.

    Attributes:
        PER_CALL: Open a fresh handle for every operation and close it
            once the operation finishes.
        POOLED: Open one handle on first use and reuse it until the
            client is closed.
    """

    PER_CALL = "per-call"
    POOLED = "pooled"


ENV_PREFIX = "SURREAL_DB_"
PUBLIC_ENV_PREFIX = "NEXT_PUBLIC_SURREAL_DB_"

# Field name -> environment variable names, in lookup order.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    field: (f"{ENV_PREFIX}{field.upper()}", f"{PUBLIC_ENV_PREFIX}{field.upper()}")
    for field in ("host", "user", "password", "namespace", "database", "debug")
}
ENV_ALIASES["connection_mode"] = (f"{ENV_PREFIX}CONNECTION_MODE",)

DB_SYSTEM = "surrealdb"
