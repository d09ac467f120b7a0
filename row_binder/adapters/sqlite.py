"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3

from row_binder.core.connection import ConnectionConfig
from row_binder.core.exceptions import AdapterError


class SqliteAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open an autocommit connection; transactions are explicit."""
        conn = sqlite3.connect(config.database, isolation_level=None, **config.extra)
        if config.database != ":memory:":
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def begin(self, connection: sqlite3.Connection) -> None:
        connection.execute("BEGIN")

    def commit(self, connection: sqlite3.Connection) -> None:
        connection.execute("COMMIT")

    def rollback(self, connection: sqlite3.Connection) -> None:
        connection.execute("ROLLBACK")

    def last_insert_id(self, connection: sqlite3.Connection, cursor: sqlite3.Cursor) -> int:
        if cursor.lastrowid is None:
            raise AdapterError("sqlite3 reported no lastrowid")
        return cursor.lastrowid
