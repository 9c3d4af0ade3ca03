"""Settings module providing connection configuration for surrealkit.

Built on Pydantic Settings. A client's configuration is resolved once, at
construction, into an immutable ``ConnectionConfig``.

Configuration Sources (precedence order):
    1. Explicit options passed to the client (highest priority)
    2. Environment variables, or an explicit environment snapshot
    3. ``.env`` file in the working directory
    4. Default values in code (lowest priority)

Environment Variable Naming:
    - Primary: SURREAL_DB_HOST, SURREAL_DB_USER, SURREAL_DB_PASSWORD,
      SURREAL_DB_NAMESPACE, SURREAL_DB_DATABASE, SURREAL_DB_DEBUG
    - Alias: the same names prefixed with NEXT_PUBLIC_
    - SURREAL_DB_CONNECTION_MODE: per-call (default) or pooled

Quick Start:
    >>> from surrealkit.settings import resolve_config
    >>>
    >>> config = resolve_config(
    ...     {"host": "ws://localhost:8000/rpc", "namespace": "test"},
    ...     environ={"SURREAL_DB_DATABASE": "test"},
    ... )
    >>> config.database
    'test'
"""

from .main import (
    ConnectionConfig,
    ConnectionOptions,
    ConnectionSettings,
    _reload_settings,
    get_settings,
    resolve_config,
    settings_from_environ,
)

__all__ = [
    "ConnectionConfig",
    "ConnectionOptions",
    "ConnectionSettings",
    "get_settings",
    "resolve_config",
    "settings_from_environ",
]
