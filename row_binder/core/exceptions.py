"""RowBinder exception hierarchy.

Driver exceptions raised while preparing or executing a statement are
wrapped in ExecutionError with the driver message kept verbatim; the
original exception is available as ``__cause__``.
"""

from __future__ import annotations


class RowBinderError(Exception):
    """Base exception for all RowBinder errors."""


# --- Binding ---


class BindError(RowBinderError):
    """Base for destination binding errors."""


class ClassificationError(BindError):
    """Raised when a destination cannot be classified into a bind shape."""

    def __init__(self, destination: object) -> None:
        self.destination_type = type(destination).__name__
        super().__init__(
            "destination accepts only record, record-collection, mapping, "
            f"or mapping-collection, got: {self.destination_type}"
        )


class BindValueError(BindError):
    """Raised when a read reaches the materializer with an unreadable shape."""

    def __init__(self, shape: object = None) -> None:
        self.shape = shape
        super().__init__("bind value error")


class UnknownFieldError(BindError):
    """Raised when an explicit field list names a column the record lacks."""

    def __init__(self, target_class: str, column: str) -> None:
        self.target_class = target_class
        self.column = column
        super().__init__(f"{target_class} has no field for column '{column}'")


# --- Usage ---


class UsageError(RowBinderError):
    """Raised when a statement is sent down the wrong path (read vs write)."""


# --- Execution ---


class ExecutionError(RowBinderError):
    """Raised on statement preparation, execution or cursor failures."""

    def __init__(self, detail: str, statement: str | None = None) -> None:
        self.detail = detail
        self.statement = statement
        super().__init__(detail)


class NotFoundError(RowBinderError):
    """Raised when a single-record read yields no rows."""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name
        super().__init__("no rows in result set")


# --- Mapping ---


class MappingError(RowBinderError):
    """Base for row mapping errors."""


class ScanError(MappingError):
    """Raised when a row cannot be placed into the destination shape."""


# --- Transaction ---


class TransactionError(RowBinderError):
    """Base for transaction errors."""


class TransactionStateError(TransactionError):
    """Raised on invalid transaction state transitions."""

    def __init__(self, current_state: str, attempted_action: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} transaction in state '{current_state}'")


# --- Adapter ---


class AdapterError(RowBinderError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""
