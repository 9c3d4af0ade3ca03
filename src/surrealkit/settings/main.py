import logging
from typing import Any, Mapping, Optional, Union

from pydantic import AliasChoices, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from surrealkit.constants import ENV_ALIASES, ConnectionMode
from surrealkit.types import SurrealKitModel

logger = logging.getLogger(__name__)


def _env_field(default: Any, name: str, description: str) -> Any:
    return Field(
        default=default,
        validation_alias=AliasChoices(*ENV_ALIASES[name]),
        description=description,
    )


class ConnectionSettings(BaseSettings):
    """Connection defaults read from the environment.

    Every field accepts the primary ``SURREAL_DB_*`` variable and the
    ``NEXT_PUBLIC_SURREAL_DB_*`` alias, in that order. Values are also read
    from a ``.env`` file in the working directory. Empty variables are
    treated as unset.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    host: Optional[str] = _env_field(None, "host", "SurrealDB endpoint, e.g. ws://localhost:8000/rpc")
    user: Optional[str] = _env_field(None, "user", "Username used to sign in")
    password: Optional[SecretStr] = _env_field(None, "password", "Password used to sign in")
    namespace: Optional[str] = _env_field(None, "namespace", "Namespace selected after connecting")
    database: Optional[str] = _env_field(None, "database", "Database selected after connecting")
    debug: bool = _env_field(False, "debug", "Emit debug output for every client operation")
    connection_mode: ConnectionMode = _env_field(
        ConnectionMode.PER_CALL,
        "connection_mode",
        "per-call opens a handle for each operation, pooled reuses one per client",
    )

    @field_validator("debug", mode="before")
    @classmethod
    def parse_debug(cls, v: Any) -> bool:
        """Only the literal string ``true`` enables debug output from the environment."""
        if isinstance(v, str):
            return v.strip().lower() == "true"
        return bool(v)


class ConnectionOptions(SurrealKitModel):
    """Explicit connection options passed by the caller.

    Unset or empty values fall back to ``ConnectionSettings``.
    """

    host: Optional[str] = None
    user: Optional[str] = None
    password: Optional[SecretStr] = None
    namespace: Optional[str] = None
    database: Optional[str] = None


class ConnectionConfig(SurrealKitModel):
    """Resolved, immutable connection configuration held by a client."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    host: Optional[str] = None
    user: Optional[str] = None
    password: Optional[SecretStr] = None
    namespace: Optional[str] = None
    database: Optional[str] = None
    debug: bool = False
    connection_mode: ConnectionMode = ConnectionMode.PER_CALL

    @property
    def url(self) -> Optional[str]:
        return self.host

    @property
    def pooled(self) -> bool:
        return self.connection_mode is ConnectionMode.POOLED

    def secret_password(self) -> Optional[str]:
        return self.password.get_secret_value() if self.password else None


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, SecretStr):
        return bool(value.get_secret_value())
    return value != ""


def _first_set(*values: Any) -> Any:
    for value in values:
        if _is_set(value):
            return value
    return None


class _SnapshotSettings(ConnectionSettings):
    """ConnectionSettings that only reads its init arguments."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (init_settings,)


def settings_from_environ(environ: Mapping[str, str]) -> ConnectionSettings:
    """Build connection defaults from an explicit environment snapshot.

    Unlike ``ConnectionSettings()`` this never touches the process
    environment or ``.env``.

    Args:
        environ: Mapping of variable name to value, e.g. a copy of ``os.environ``

    Returns:
        ConnectionSettings populated only from ``environ``
    """
    known = {name for names in ENV_ALIASES.values() for name in names}
    snapshot = {key: value for key, value in environ.items() if key in known and value}
    return _SnapshotSettings(**snapshot)


def resolve_config(
    connection: Union[ConnectionOptions, Mapping[str, Any], None] = None,
    debug: Optional[bool] = None,
    connection_mode: Union[ConnectionMode, str, None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConnectionConfig:
    """Resolve the configuration a client connects with.

    Explicit values win over environment defaults. ``debug`` only turns
    debug output on; a falsy value defers to the environment.

    Args:
        connection: Explicit host/credential overrides
        debug: Explicit debug flag
        connection_mode: Explicit connection lifecycle
        environ: Environment snapshot to read defaults from. When None the
            process environment and ``.env`` are used via ``get_settings()``.

    Returns:
        Immutable ConnectionConfig
    """
    if isinstance(connection, ConnectionOptions):
        options = connection
    else:
        options = ConnectionOptions.model_validate(dict(connection or {}))

    defaults = settings_from_environ(environ) if environ is not None else get_settings()

    return ConnectionConfig(
        host=_first_set(options.host, defaults.host),
        user=_first_set(options.user, defaults.user),
        password=_first_set(options.password, defaults.password),
        namespace=_first_set(options.namespace, defaults.namespace),
        database=_first_set(options.database, defaults.database),
        debug=bool(debug) or defaults.debug,
        connection_mode=ConnectionMode(connection_mode or defaults.connection_mode),
    )


_settings: Optional[ConnectionSettings] = None


def get_settings(force_reload: bool = False) -> ConnectionSettings:
    """Get the singleton environment settings instance.

    Settings are read from the process environment and ``.env`` on first
    access and reused afterwards.

    Args:
        force_reload: If True, creates a new instance even if one already
                     exists. Useful when environment variables have changed.

    Returns:
        ConnectionSettings: The singleton instance
    """
    global _settings

    if _settings is None or force_reload:
        _settings = ConnectionSettings()
        logger.debug("Loaded connection settings from environment")

    return _settings


def _reload_settings() -> ConnectionSettings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh ConnectionSettings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
