"""Unit tests for connection configuration resolution."""

import pytest
from pydantic import SecretStr, ValidationError

from surrealkit.constants import ConnectionMode
from surrealkit.settings import (
    ConnectionOptions,
    _reload_settings,
    get_settings,
    resolve_config,
    settings_from_environ,
)


ENVIRON = {
    "SURREAL_DB_HOST": "ws://env:8000/rpc",
    "SURREAL_DB_USER": "env-user",
    "SURREAL_DB_PASSWORD": "env-pass",
    "SURREAL_DB_NAMESPACE": "env-ns",
    "SURREAL_DB_DATABASE": "env-db",
}


class TestResolveConfig:
    """Test precedence between explicit options and the environment."""

    def test_environment_defaults(self):
        config = resolve_config(environ=ENVIRON)

        assert config.url == "ws://env:8000/rpc"
        assert config.user == "env-user"
        assert config.secret_password() == "env-pass"
        assert config.namespace == "env-ns"
        assert config.database == "env-db"
        assert config.debug is False
        assert config.connection_mode is ConnectionMode.PER_CALL

    def test_explicit_options_win(self):
        config = resolve_config({"host": "ws://explicit:8000/rpc", "database": "mine"}, environ=ENVIRON)

        assert config.host == "ws://explicit:8000/rpc"
        assert config.database == "mine"
        assert config.namespace == "env-ns"

    def test_empty_options_fall_back(self):
        options = ConnectionOptions(host="", password="")
        config = resolve_config(options, environ=ENVIRON)

        assert config.host == "ws://env:8000/rpc"
        assert config.secret_password() == "env-pass"

    def test_public_aliases(self):
        config = resolve_config(environ={
            "NEXT_PUBLIC_SURREAL_DB_HOST": "ws://public:8000/rpc",
            "NEXT_PUBLIC_SURREAL_DB_NAMESPACE": "public-ns",
        })

        assert config.host == "ws://public:8000/rpc"
        assert config.namespace == "public-ns"

    def test_primary_name_wins_over_alias(self):
        config = resolve_config(environ={
            "SURREAL_DB_HOST": "ws://primary:8000/rpc",
            "NEXT_PUBLIC_SURREAL_DB_HOST": "ws://public:8000/rpc",
        })

        assert config.host == "ws://primary:8000/rpc"

    def test_empty_environment_values_are_ignored(self):
        config = resolve_config(environ={
            "SURREAL_DB_HOST": "",
            "NEXT_PUBLIC_SURREAL_DB_HOST": "ws://public:8000/rpc",
        })

        assert config.host == "ws://public:8000/rpc"

    def test_nothing_configured(self):
        config = resolve_config(environ={})

        assert config.host is None
        assert config.password is None
        assert config.secret_password() is None

    @pytest.mark.parametrize("value, expected", [
        ("true", True),
        ("TRUE", True),
        ("1", False),
        ("yes", False),
        ("false", False),
    ])
    def test_debug_from_environment(self, value, expected):
        assert resolve_config(environ={"SURREAL_DB_DEBUG": value}).debug is expected

    def test_debug_from_public_alias(self):
        assert resolve_config(environ={"NEXT_PUBLIC_SURREAL_DB_DEBUG": "true"}).debug is True

    def test_explicit_debug_only_enables(self):
        assert resolve_config(debug=True, environ={}).debug is True
        assert resolve_config(debug=False, environ={"SURREAL_DB_DEBUG": "true"}).debug is True

    def test_connection_mode(self):
        assert resolve_config(connection_mode="pooled", environ={}).pooled
        assert resolve_config(environ={"SURREAL_DB_CONNECTION_MODE": "pooled"}).pooled
        assert not resolve_config(environ={}).pooled

    def test_unknown_connection_mode(self):
        with pytest.raises(ValueError):
            resolve_config(connection_mode="sometimes", environ={})

    def test_config_is_immutable(self):
        config = resolve_config(environ=ENVIRON)
        with pytest.raises(ValidationError):
            config.host = "ws://other:8000/rpc"

    def test_password_is_secret(self):
        config = resolve_config({"password": "hunter2"}, environ={})

        assert isinstance(config.password, SecretStr)
        assert "hunter2" not in repr(config)
        assert config.to_dict()["password"] == "**********"
        assert config.to_dict()["connection_mode"] == "per-call"


class TestEnvironmentSettings:
    """Test reading settings from the process environment."""

    def test_snapshot_ignores_process_environment(self, monkeypatch):
        monkeypatch.setenv("SURREAL_DB_HOST", "ws://process:8000/rpc")

        assert settings_from_environ({}).host is None

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("SURREAL_DB_HOST", "ws://process:8000/rpc")
        monkeypatch.setenv("NEXT_PUBLIC_SURREAL_DB_DATABASE", "public-db")

        settings = _reload_settings()

        assert settings.host == "ws://process:8000/rpc"
        assert settings.database == "public-db"
        assert resolve_config().host == "ws://process:8000/rpc"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("SURREAL_DB_NAMESPACE=dotenv-ns\n")

        assert _reload_settings().namespace == "dotenv-ns"

    def test_settings_are_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("SURREAL_DB_HOST", "ws://later:8000/rpc")

        assert get_settings() is first
        assert get_settings(force_reload=True).host == "ws://later:8000/rpc"
