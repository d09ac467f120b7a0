"""Row materialization.

Streams rows from a DB-API cursor into the destination held by a
BindingContext. The cursor is never closed here; its owner releases it.

Rows are fetched one at a time with ``fetchone``. A single-record read
stops after the first row and leaves the rest of the cursor undrained.
Collection reads stop at the first failing row and keep everything
appended before it.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from row_binder.binding.context import BindingContext
from row_binder.binding.fields import zero_record
from row_binder.core.enums import BindShape
from row_binder.core.exceptions import (
    BindValueError,
    ExecutionError,
    NotFoundError,
    RowBinderError,
    ScanError,
)


def decode_value(value: Any) -> Any:
    """Binary payloads become text with the same bytes; all else passes through."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", "surrogateescape")
    return value


def _columns(cursor: Any) -> list[str]:
    if cursor.description is None:
        return []
    return [desc[0] for desc in cursor.description]


def _advance(cursor: Any) -> Any:
    """Fetch the next row, or None when the cursor is exhausted."""
    try:
        return cursor.fetchone()
    except RowBinderError:
        raise
    except Exception as e:
        raise ExecutionError(str(e)) from e


def _row_values(row: Any, columns: list[str]) -> list[Any]:
    """Positional values of *row*, whether the driver returns tuples or dicts."""
    if isinstance(row, Mapping):
        return [row[col] for col in columns]
    return list(row)


def _scan(instance: Any, attributes: list[str], values: list[Any]) -> None:
    """Assign *values* to *instance* attributes, position by position."""
    if len(values) != len(attributes):
        raise ScanError(
            f"expected {len(attributes)} destination arguments in scan, not {len(values)}"
        )
    for attr, value in zip(attributes, values, strict=True):
        try:
            setattr(instance, attr, value)
        except (AttributeError, TypeError, ValueError) as e:
            raise ScanError(
                f"cannot assign to {type(instance).__name__}.{attr}: {e}"
            ) from e


def _scan_record(cursor: Any, context: BindingContext) -> None:
    row = _advance(cursor)
    if row is None:
        raise NotFoundError(context.table_name)
    _scan(context.destination, context.attributes, _row_values(row, _columns(cursor)))


def _scan_record_list(cursor: Any, context: BindingContext) -> None:
    columns = _columns(cursor)
    while True:
        row = _advance(cursor)
        if row is None:
            return
        instance = zero_record(context.item_type)
        _scan(instance, context.attributes, _row_values(row, columns))
        context.destination.append(instance)


def _mapping_rows(cursor: Any, template: MutableMapping[str, Any]) -> Iterator[Any]:
    """Yield one freshly built mapping per row."""
    # The column list is read once and assumed stable for the whole cursor.
    columns = _columns(cursor)
    while True:
        row = _advance(cursor)
        if row is None:
            return
        entry = copy.copy(template)
        for col, value in zip(columns, _row_values(row, columns), strict=False):
            entry[col] = decode_value(value)
        yield entry


def _scan_mapping(cursor: Any, context: BindingContext) -> None:
    # Every row is written into the same mapping, so the last row wins.
    for entry in _mapping_rows(cursor, {}):
        context.destination.update(entry)


def _scan_mapping_list(cursor: Any, context: BindingContext) -> None:
    for entry in _mapping_rows(cursor, context.template):
        context.destination.append(entry)


_DISPATCH = {
    BindShape.RECORD: _scan_record,
    BindShape.RECORD_LIST: _scan_record_list,
    BindShape.MAPPING: _scan_mapping,
    BindShape.MAPPING_LIST: _scan_mapping_list,
}


def materialize(cursor: Any, context: BindingContext | None) -> None:
    """Populate the bound destination from *cursor*.

    Raises:
        NotFoundError: A single-record read found no row.
        ScanError: A row could not be placed into the destination.
        BindValueError: Nothing readable is bound (no bind, or a table name).
        ExecutionError: The driver failed while fetching.
    """
    if context is None:
        raise BindValueError()
    handler = _DISPATCH.get(context.shape)
    if handler is None:
        raise BindValueError(context.shape)
    handler(cursor, context)
