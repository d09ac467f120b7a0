"""Session - one logical unit of database work.

A Session binds a destination, runs read statements on the read-path
connection and write statements on the write-path connection (or the open
transaction), and populates the bound destination from read results.

Sessions are not safe for concurrent use. The binding context and the
transaction handle are plain mutable state with no lock; create one Session
per thread or task.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from contextlib import closing
from typing import TYPE_CHECKING, Any

from row_binder.binding.classifier import classify
from row_binder.binding.context import BindingContext
from row_binder.binding.fields import FieldNaming
from row_binder.binding.materializer import materialize
from row_binder.core.enums import BindShape
from row_binder.core.exceptions import (
    ExecutionError,
    RowBinderError,
    TransactionError,
    TransactionStateError,
    UsageError,
)
from row_binder.core.params import interpolate
from row_binder.core.transaction import Transaction

if TYPE_CHECKING:
    from row_binder.adapters.protocol import QueryExecutor
    from row_binder.core.connection import ConnectionHandle

logger = logging.getLogger(__name__)

Step = Callable[["Session"], Any]


def _leading_verb(statement: str) -> str:
    return statement[:6].lower()


class Session:
    """Binds query results to caller-supplied destinations.

    Args:
        executor: Supplies the read and write connections and the query-log
            flag (normally an Engine).
        naming: Field naming convention for record destinations.

    Example:
        users = ResultList(User)
        with engine.new_session() as session:
            session.bind(users).read("SELECT id, name FROM users WHERE age > ?", 18)
    """

    def __init__(
        self,
        executor: QueryExecutor,
        naming: FieldNaming | None = None,
    ) -> None:
        self._executor = executor
        self._naming = naming
        self._write: ConnectionHandle = executor.get_write_connection()
        if executor.single_connection:
            self._read: ConnectionHandle = self._write
        else:
            try:
                self._read = executor.get_read_connection()
            except Exception:
                self._write.close()
                raise
        self._tx: Transaction | None = None
        self._binding: BindingContext | None = None
        self._last_insert_id = 0
        self._last_sql = ""
        self._query_log: list[str] = []

    def __enter__(self) -> Session:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release both connection handles."""
        try:
            self._write.close()
        finally:
            if self._read is not self._write:
                self._read.close()

    @property
    def driver(self) -> str:
        """Driver name of the write-path connection."""
        return self._write.driver

    # --- Binding ---

    def bind(self, destination: Any, *, fields: Sequence[str] | None = None) -> Session:
        """Bind the destination that following reads populate.

        Args:
            destination: A table name, a record, a mapping, or a ResultList
                of records or mappings.
            fields: Explicit column list for record destinations, used
                instead of the columns derived from the record's fields.
                Rejected for mapping and table-name destinations.

        Returns:
            The session, for chaining.

        Raises:
            ClassificationError: If the destination shape is not recognized.
            UsageError: If ``fields`` is given for a non-record destination.
        """
        self._binding = None
        self._binding = classify(destination, fields, self._naming)
        return self

    def table(self, destination: Any, *, fields: Sequence[str] | None = None) -> Session:
        """Alias of bind()."""
        return self.bind(destination, fields=fields)

    @property
    def binding(self) -> BindingContext | None:
        return self._binding

    @property
    def shape(self) -> BindShape | None:
        return self._binding.shape if self._binding is not None else None

    @property
    def table_name(self) -> str | None:
        return self._binding.table_name if self._binding is not None else None

    @property
    def fields(self) -> list[str]:
        return list(self._binding.fields) if self._binding is not None else []

    @property
    def limit(self) -> int | None:
        """Row limit implied by the bound destination (1 for a single record)."""
        return self._binding.limit if self._binding is not None else None

    # --- Transactions ---

    @property
    def in_transaction(self) -> bool:
        return self._tx is not None

    def begin(self) -> None:
        """Open a transaction on the write-path connection."""
        try:
            self._tx = Transaction.begin(self._write)
        except RowBinderError:
            raise
        except Exception as e:
            raise TransactionError(f"begin failed: {e}") from e

    def commit(self) -> None:
        """Commit the open transaction. The handle is cleared even on failure."""
        tx = self._require_transaction("commit")
        try:
            self._finish(tx.commit, "commit")
        finally:
            self._tx = None

    def rollback(self) -> None:
        """Roll back the open transaction. The handle is cleared even on failure."""
        tx = self._require_transaction("rollback")
        try:
            self._finish(tx.rollback, "rollback")
        finally:
            self._tx = None

    def run_transaction(self, *steps: Step) -> None:
        """Run *steps* in one transaction.

        Each step is called with this session. The first step that raises
        stops the run: the transaction is rolled back and that exception is
        re-raised. Later steps are never called. If every step succeeds the
        transaction is committed.
        """
        self.begin()
        for step in steps:
            try:
                step(self)
            except BaseException:
                try:
                    self.rollback()
                except RowBinderError as rollback_error:
                    logger.warning(f"Rollback after failed transaction step failed: {rollback_error}")
                raise
        self.commit()

    def _require_transaction(self, action: str) -> Transaction:
        if self._tx is None:
            raise TransactionStateError("idle", action)
        return self._tx

    @staticmethod
    def _finish(action: Callable[[], None], name: str) -> None:
        try:
            action()
        except RowBinderError:
            raise
        except Exception as e:
            raise TransactionError(f"{name} failed: {e}") from e

    # --- Statements ---

    def read(self, statement: str, *args: Any) -> None:
        """Run a read statement and populate the bound destination.

        Always runs on the read-path connection, never inside the open
        transaction. When the executor has a single connection (an in-memory
        SQLite database) the read path is the write connection and sees
        uncommitted writes. The cursor is closed before returning.

        Raises:
            NotFoundError: A single-record destination matched no row.
            ScanError: A row could not be placed into the destination.
            BindValueError: No readable destination is bound.
            ExecutionError: The driver failed to prepare or execute.
        """
        self._record(statement, args)
        sql = self._read.prepare(statement)
        cursor = self._open_cursor(self._read.cursor, statement)
        with closing(cursor):
            self._execute(cursor, sql, args, statement)
            materialize(cursor, self._binding)

    def write(self, statement: str, *args: Any) -> int:
        """Run a write statement and return the affected row count.

        Runs inside the open transaction if there is one, otherwise on the
        write-path connection. After an ``insert`` the generated identifier
        is captured when the driver can report it.

        Raises:
            UsageError: The statement is a select.
            ExecutionError: The driver failed to prepare or execute.
        """
        self._record(statement, args)
        verb = _leading_verb(statement)
        if verb == "select":
            raise UsageError("write does not allow select statements, use read")

        if self._tx is not None:
            handle, open_cursor = self._tx.handle, self._tx.cursor
        else:
            handle, open_cursor = self._write, self._write.cursor

        sql = handle.prepare(statement)
        cursor = self._open_cursor(open_cursor, statement)
        with closing(cursor):
            self._execute(cursor, sql, args, statement)
            if verb == "insert":
                self._capture_insert_id(handle, cursor)
            return int(cursor.rowcount)

    @property
    def last_insert_id(self) -> int:
        """Identifier generated by the last successful insert."""
        return self._last_insert_id

    @property
    def last_sql(self) -> str:
        """Text of the last statement, with arguments interpolated."""
        return self._last_sql

    @property
    def query_log(self) -> list[str]:
        """Statements recorded while the query log was enabled."""
        return list(self._query_log)

    def _record(self, statement: str, args: tuple[Any, ...]) -> None:
        self._last_sql = interpolate(statement, args)
        if self._executor.enable_query_log:
            self._query_log.append(self._last_sql)
        logger.debug(f"Executing: {self._last_sql}")

    @staticmethod
    def _open_cursor(opener: Callable[[], Any], statement: str) -> Any:
        try:
            return opener()
        except RowBinderError:
            raise
        except Exception as e:
            raise ExecutionError(str(e), statement) from e

    @staticmethod
    def _execute(cursor: Any, sql: str, args: tuple[Any, ...], statement: str) -> None:
        try:
            cursor.execute(sql, args)
        except Exception as e:
            raise ExecutionError(str(e), statement) from e

    def _capture_insert_id(self, handle: ConnectionHandle, cursor: Any) -> None:
        try:
            self._last_insert_id = handle.last_insert_id(cursor)
        except Exception as e:
            # The insert itself succeeded.
            logger.debug(f"Could not read generated id: {e}")
