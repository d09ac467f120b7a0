"""Transaction handle.

A Transaction is opened on the write-path connection by Session.begin and
carries write statements until it is committed or rolled back.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from row_binder.core.connection import ConnectionHandle
from row_binder.core.exceptions import TransactionStateError

logger = logging.getLogger(__name__)


class _TxState(Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Transaction:
    """An open transaction on one connection handle."""

    def __init__(self, handle: ConnectionHandle) -> None:
        self._handle = handle
        self._state = _TxState.ACTIVE

    @classmethod
    def begin(cls, handle: ConnectionHandle) -> Transaction:
        """Start a transaction on *handle*."""
        handle.begin()
        logger.debug(f"Started transaction on {handle.driver} connection {id(handle.connection)}")
        return cls(handle)

    @property
    def handle(self) -> ConnectionHandle:
        return self._handle

    @property
    def state(self) -> str:
        return self._state.value

    def cursor(self) -> Any:
        """Open a cursor that runs inside this transaction."""
        self._check_active("execute")
        return self._handle.cursor()

    def commit(self) -> None:
        self._check_active("commit")
        try:
            self._handle.commit()
        finally:
            self._state = _TxState.COMMITTED
        logger.debug(f"Committed transaction on connection {id(self._handle.connection)}")

    def rollback(self) -> None:
        self._check_active("rollback")
        try:
            self._handle.rollback()
        finally:
            self._state = _TxState.ROLLED_BACK
        logger.debug(f"Rolled back transaction on connection {id(self._handle.connection)}")

    def _check_active(self, action: str) -> None:
        if self._state == _TxState.COMMITTED:
            raise TransactionStateError("committed", action)
        if self._state == _TxState.ROLLED_BACK:
            raise TransactionStateError("rolled_back", action)
