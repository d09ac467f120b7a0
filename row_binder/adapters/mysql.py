"""MySQL adapter using mysql-connector-python."""

from __future__ import annotations

from typing import Any

from row_binder.core.connection import ConnectionConfig
from row_binder.core.exceptions import AdapterError


class MysqlAdapter:
    """Synchronous MySQL adapter using mysql-connector-python."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def connect(self, config: ConnectionConfig) -> Any:
        """Open an autocommit MySQL connection."""
        import mysql.connector

        return mysql.connector.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
            autocommit=True,
            **config.extra,
        )

    def begin(self, connection: Any) -> None:
        connection.start_transaction()

    def commit(self, connection: Any) -> None:
        connection.commit()

    def rollback(self, connection: Any) -> None:
        connection.rollback()

    def last_insert_id(self, connection: Any, cursor: Any) -> int:
        if not cursor.lastrowid:
            raise AdapterError("mysql reported no lastrowid")
        return int(cursor.lastrowid)
