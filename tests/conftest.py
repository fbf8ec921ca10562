import sqlite3
from collections.abc import Generator
from typing import Any
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from sqlite_gateway.main import app


class CountingConnection:
    """sqlite3 connection proxy that counts close() calls."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self.close_calls = 0

    def __getattr__(self, name: str) -> Any:
        return getattr(self._conn, name)

    def close(self) -> None:
        self.close_calls += 1
        self._conn.close()


class CountingDriver:
    """Driver stand-in wrapping sqlite3; remembers every handle it opened."""

    threadsafety = sqlite3.threadsafety

    def __init__(self) -> None:
        self.connections: list[CountingConnection] = []

    def connect(self, *args: Any, **kwargs: Any) -> CountingConnection:
        conn = CountingConnection(sqlite3.connect(*args, **kwargs))
        self.connections.append(conn)
        return conn


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def counting_driver() -> Generator[CountingDriver, None, None]:
    """Route every ExecutionSession through a CountingDriver."""
    driver = CountingDriver()
    with patch("sqlite_gateway.engines.session.load_driver", return_value=driver):
        yield driver


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "test.sqlite")
