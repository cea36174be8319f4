"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from mysql_readonly.adapters.datasource import MySQLAdapter, QueryResult


@pytest.fixture
def db_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set the required database environment variables."""
    values = {
        "DB_HOST": "db.internal",
        "DB_USER": "reader",
        "DB_PASSWORD": "s3cret",
        "DB_NAME": "shop",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    for name in (
        "DB_PORT",
        "DB_CONNECTION_LIMIT",
        "DB_CONNECT_TIMEOUT",
        "DB_QUERY_TIMEOUT",
        "DB_BACKSLASH_ESCAPES",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return values


@pytest.fixture
def mock_db() -> AsyncMock:
    """Return a mock MySQL adapter that answers every query with one row."""
    mock = AsyncMock(spec=MySQLAdapter)
    mock.execute_query.return_value = QueryResult(
        rows=[{"id": 1, "name": "Ada"}],
        row_count=1,
        execution_time_ms=3,
    )
    return mock
