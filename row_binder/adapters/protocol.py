"""Driver adapter and query executor protocols.

Every adapter module MUST implement DriverAdapter. Connections are put in
autocommit mode by ``connect``; transactions are opened explicitly through
``begin`` so the session decides where a unit of work starts.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_binder.core.connection import ConnectionConfig, ConnectionHandle


@runtime_checkable
class DriverAdapter(Protocol):
    """Synchronous database driver adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """DB-API paramstyle of the driver: 'qmark', 'format' or 'pyformat'."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open an autocommit DB-API connection."""
        ...

    def begin(self, connection: Any) -> None:
        """Start a transaction on *connection*."""
        ...

    def commit(self, connection: Any) -> None:
        """Commit the transaction open on *connection*."""
        ...

    def rollback(self, connection: Any) -> None:
        """Roll back the transaction open on *connection*."""
        ...

    def last_insert_id(self, connection: Any, cursor: Any) -> int:
        """Return the identifier generated by the insert just run on *cursor*.

        Raises:
            AdapterError: If the driver cannot report one.
        """
        ...


@runtime_checkable
class QueryExecutor(Protocol):
    """Supplies the read-path and write-path connections of a session."""

    @property
    def enable_query_log(self) -> bool:
        """Whether sessions append executed statements to their query log."""
        ...

    @property
    def single_connection(self) -> bool:
        """Whether sessions run reads on their write connection."""
        ...

    def get_read_connection(self) -> ConnectionHandle:
        """Open the connection used for read statements."""
        ...

    def get_write_connection(self) -> ConnectionHandle:
        """Open the connection used for write statements and transactions."""
        ...
