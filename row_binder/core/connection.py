"""Connection configuration and connection handles.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionHandle pairs one open DB-API connection with the driver adapter
that knows how to begin transactions and read generated identifiers on it.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from pydantic import BaseModel

from row_binder.core.exceptions import AdapterError, ConnectionError
from row_binder.core.params import normalize_placeholders

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    extra: dict[str, Any] = {}


# Adapter module mapping: driver name → (module_path, class_name)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    "sqlite": ("row_binder.adapters.sqlite", "SqliteAdapter"),
    "postgresql": ("row_binder.adapters.postgresql", "PostgresqlAdapter"),
    "mysql": ("row_binder.adapters.mysql", "MysqlAdapter"),
}


def load_adapter(driver: str) -> Any:
    """Load a driver adapter by driver name."""
    driver_lower = driver.lower()
    if driver_lower not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[driver_lower]

    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class ConnectionHandle:
    """One open connection plus the adapter that drives it."""

    def __init__(self, connection: Any, adapter: Any, driver: str) -> None:
        self._connection = connection
        self._adapter = adapter
        self.driver = driver

    @classmethod
    def open(cls, config: ConnectionConfig) -> ConnectionHandle:
        """Open a new connection described by *config*."""
        adapter = load_adapter(config.driver)
        try:
            connection = adapter.connect(config)
        except Exception as e:
            raise ConnectionError(f"Failed to connect to '{config.driver}': {e}") from e
        logger.debug(f"Opened {config.driver} connection {id(connection)}")
        return cls(connection, adapter, config.driver.lower())

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def paramstyle(self) -> str:
        return str(self._adapter.paramstyle)

    def prepare(self, statement: str) -> str:
        """Return *statement* with placeholders in the driver's style."""
        return normalize_placeholders(statement, self.paramstyle)

    def cursor(self) -> Any:
        """Open a new cursor. The caller owns it and must close it."""
        return self._connection.cursor()

    def begin(self) -> None:
        self._adapter.begin(self._connection)

    def commit(self) -> None:
        self._adapter.commit(self._connection)

    def rollback(self) -> None:
        self._adapter.rollback(self._connection)

    def last_insert_id(self, cursor: Any) -> int:
        return int(self._adapter.last_insert_id(self._connection, cursor))

    def close(self) -> None:
        self._connection.close()
        logger.debug(f"Closed {self.driver} connection {id(self._connection)}")
