"""Shared test fixtures.

Unit tests run against an in-process fake DB-API driver so every call a
session makes on its read and write connections can be asserted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from row_binder.core.connection import ConnectionConfig, ConnectionHandle
from row_binder.core.exceptions import AdapterError
from row_binder.core.session import Session


@dataclass
class FakeResult:
    """One queued statement result."""

    columns: list[str] = field(default_factory=list)
    rows: list[Any] = field(default_factory=list)
    rowcount: int = -1
    lastrowid: int | None = None


class FakeCursor:
    def __init__(self, connection: FakeConnection) -> None:
        self._connection = connection
        self.description: list[tuple[Any, ...]] | None = None
        self.rowcount = -1
        self.lastrowid: int | None = None
        self.closed = False
        self.fetches = 0
        self._rows: list[Any] = []

    def execute(self, sql: str, params: tuple[Any, ...] = ()) -> None:
        self._connection.executed.append((sql, tuple(params)))
        if self._connection.execute_error is not None:
            raise self._connection.execute_error
        result = self._connection.results.pop(0) if self._connection.results else FakeResult()
        if result.columns:
            self.description = [(col, None, None, None, None, None, None) for col in result.columns]
        self._rows = list(result.rows)
        self.rowcount = result.rowcount
        self.lastrowid = result.lastrowid

    def fetchone(self) -> Any:
        self.fetches += 1
        if not self._rows:
            return None
        row = self._rows.pop(0)
        if isinstance(row, Exception):
            raise row
        return row

    @property
    def remaining(self) -> int:
        return len(self._rows)

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self) -> None:
        self.results: list[FakeResult] = []
        self.executed: list[tuple[str, tuple[Any, ...]]] = []
        self.cursors: list[FakeCursor] = []
        self.events: list[str] = []
        self.execute_error: Exception | None = None
        self.commit_error: Exception | None = None
        self.rollback_error: Exception | None = None
        self.closed = False

    def queue(self, columns: list[str] | None = None, rows: list[Any] | None = None, **kwargs: Any) -> None:
        self.results.append(FakeResult(columns=columns or [], rows=rows or [], **kwargs))

    def cursor(self) -> FakeCursor:
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def close(self) -> None:
        self.closed = True


class FakeAdapter:
    def __init__(self, paramstyle: str = "qmark") -> None:
        self._paramstyle = paramstyle

    @property
    def paramstyle(self) -> str:
        return self._paramstyle

    def connect(self, config: ConnectionConfig) -> FakeConnection:
        return FakeConnection()

    def begin(self, connection: FakeConnection) -> None:
        connection.events.append("begin")

    def commit(self, connection: FakeConnection) -> None:
        connection.events.append("commit")
        if connection.commit_error is not None:
            raise connection.commit_error

    def rollback(self, connection: FakeConnection) -> None:
        connection.events.append("rollback")
        if connection.rollback_error is not None:
            raise connection.rollback_error

    def last_insert_id(self, connection: FakeConnection, cursor: FakeCursor) -> int:
        if cursor.lastrowid is None:
            raise AdapterError("no lastrowid")
        return cursor.lastrowid


class FakeExecutor:
    """Query executor handing out one fake read and one fake write connection."""

    def __init__(
        self,
        enable_query_log: bool = False,
        paramstyle: str = "qmark",
        single_connection: bool = False,
    ) -> None:
        self.enable_query_log = enable_query_log
        self.single_connection = single_connection
        self.adapter = FakeAdapter(paramstyle)
        self.read_conn = FakeConnection()
        self.write_conn = FakeConnection()

    def get_read_connection(self) -> ConnectionHandle:
        return ConnectionHandle(self.read_conn, self.adapter, "fake")

    def get_write_connection(self) -> ConnectionHandle:
        return ConnectionHandle(self.write_conn, self.adapter, "fake")


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def session(executor: FakeExecutor) -> Session:
    return Session(executor)


@pytest.fixture
def sqlite_config(tmp_path: Path) -> ConnectionConfig:
    """SQLite file-backed config, so read and write connections share data."""
    return ConnectionConfig(driver="sqlite", database=str(tmp_path / "test.db"))


@pytest.fixture
def executor_factory() -> type[FakeExecutor]:
    return FakeExecutor
