"""RowBinder - bind SQL query results to records, mappings and lists of them."""

from __future__ import annotations

from row_binder.binding.context import BindingContext, NameProvider, ResultList
from row_binder.binding.fields import DeclaredFieldNaming, FieldNaming, column
from row_binder.core.connection import ConnectionConfig, ConnectionHandle
from row_binder.core.engine import Engine, EngineConfig
from row_binder.core.enums import BindShape, DatabaseBackend
from row_binder.core.exceptions import (
    AdapterError,
    BindError,
    BindValueError,
    ClassificationError,
    ConnectionError,  # noqa: A004
    ExecutionError,
    MappingError,
    NotFoundError,
    RowBinderError,
    ScanError,
    TransactionError,
    TransactionStateError,
    UnknownFieldError,
    UsageError,
)
from row_binder.core.session import Session
from row_binder.core.transaction import Transaction

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionHandle",
    # Engine
    "Engine",
    "EngineConfig",
    # Session
    "Session",
    "Transaction",
    # Binding
    "BindingContext",
    "NameProvider",
    "ResultList",
    "DeclaredFieldNaming",
    "FieldNaming",
    "column",
    # Enums
    "BindShape",
    "DatabaseBackend",
    # Exceptions
    "RowBinderError",
    "BindError",
    "ClassificationError",
    "BindValueError",
    "UnknownFieldError",
    "UsageError",
    "ExecutionError",
    "NotFoundError",
    "MappingError",
    "ScanError",
    "TransactionError",
    "TransactionStateError",
    "AdapterError",
    "ConnectionError",
]
