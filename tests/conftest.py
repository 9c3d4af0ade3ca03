"""Shared fixtures for surrealkit tests."""

from typing import Any, List, Optional
from unittest.mock import AsyncMock

import pytest

from surrealkit.constants import ENV_ALIASES


class FakeBackendFactory:
    """Creates AsyncMock backends and remembers every handle it handed out."""

    def __init__(self):
        self.handles: List[AsyncMock] = []
        self.query_result: List[Any] = []
        self.record_result: Any = None
        self.connect_error: Optional[Exception] = None
        self.use_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.query_error: Optional[Exception] = None

    def __call__(self) -> AsyncMock:
        handle = AsyncMock()
        handle.query.return_value = self.query_result
        handle.create.return_value = self.record_result
        handle.select.return_value = self.record_result
        handle.merge.return_value = self.record_result
        handle.delete.return_value = self.record_result
        handle.live.return_value = "live-id"
        if self.connect_error is not None:
            handle.connect.side_effect = self.connect_error
        if self.use_error is not None:
            handle.use.side_effect = self.use_error
        if self.close_error is not None:
            handle.close.side_effect = self.close_error
        if self.query_error is not None:
            handle.query.side_effect = self.query_error
        self.handles.append(handle)
        return handle

    @property
    def opened(self) -> int:
        return len(self.handles)

    @property
    def closed(self) -> int:
        return sum(handle.close.await_count for handle in self.handles)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the process environment and any ``.env`` file out of tests."""
    for names in ENV_ALIASES.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("surrealkit.settings.main._settings", None)


@pytest.fixture
def backend_factory() -> FakeBackendFactory:
    return FakeBackendFactory()


@pytest.fixture
def connection() -> dict:
    return {
        "host": "ws://localhost:8000/rpc",
        "user": "root",
        "password": "root",
        "namespace": "test",
        "database": "test",
    }
