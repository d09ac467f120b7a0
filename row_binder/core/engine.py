"""Engine - the query executor behind sessions.

The Engine holds the write-path and read-path connection configs and opens
a fresh connection handle for each one whenever a Session is created.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from row_binder.binding.fields import FieldNaming
from row_binder.core.connection import ConnectionConfig, ConnectionHandle
from row_binder.core.session import Session


class EngineConfig(BaseModel):
    """Engine configuration.

    ``read`` defaults to ``write`` when omitted. ``enable_query_log`` makes
    sessions keep the text of every statement they run.
    """

    write: ConnectionConfig
    read: ConnectionConfig | None = None
    enable_query_log: bool = False


class Engine:
    """Synchronous query executor."""

    def __init__(self, config: EngineConfig, naming: FieldNaming | None = None) -> None:
        self.config = config
        self._naming = naming
        self.enable_query_log = config.enable_query_log

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        *,
        read: ConnectionConfig | None = None,
        enable_query_log: bool = False,
        **kwargs: Any,
    ) -> Engine:
        """Create an Engine from a write-path ConnectionConfig.

        Args:
            config: Write-path connection config.
            read: Optional read-path connection config.
            enable_query_log: Record statement texts in every session.

        Returns:
            Engine instance
        """
        engine_config = EngineConfig(write=config, read=read, enable_query_log=enable_query_log)
        return cls(engine_config, **kwargs)

    @property
    def driver(self) -> str:
        return self.config.write.driver.lower()

    @property
    def single_connection(self) -> bool:
        """True when reads must share the write connection.

        An in-memory SQLite database exists only inside the connection that
        created it, so without a separate read config there is nothing else
        to read from.
        """
        write = self.config.write
        return (
            self.config.read is None
            and write.driver.lower() == "sqlite"
            and write.database == ":memory:"
        )

    def get_write_connection(self) -> ConnectionHandle:
        return ConnectionHandle.open(self.config.write)

    def get_read_connection(self) -> ConnectionHandle:
        return ConnectionHandle.open(self.config.read or self.config.write)

    def new_session(self) -> Session:
        """Open a new Session with its own read and write connections."""
        return Session(self, naming=self._naming)
