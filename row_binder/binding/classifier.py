"""Destination classification.

Inspects a bind destination once and produces the BindingContext every
later step dispatches on. Recognized destinations:

* ``str``                      -> TABLE_NAME
* dataclass / Pydantic record  -> RECORD
* ``MutableMapping`` instance  -> MAPPING
* ``ResultList(RecordClass)``  -> RECORD_LIST
* ``ResultList(dict)``         -> MAPPING_LIST

Anything else raises ClassificationError.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping, Sequence
from typing import Any

from row_binder.binding.context import BindingContext, NameProvider, ResultList
from row_binder.binding.fields import (
    FieldNaming,
    derive_fields,
    included_fields,
    is_record_type,
    zero_record,
)
from row_binder.core.enums import BindShape
from row_binder.core.exceptions import (
    ClassificationError,
    UnknownFieldError,
    UsageError,
)

logger = logging.getLogger(__name__)


def _table_name(record: Any) -> str:
    """Class name of *record*, unless it provides its own table name."""
    if isinstance(record, NameProvider) and callable(record.table_name):
        return str(record.table_name())
    return type(record).__name__


def _resolve_attributes(
    record_type: type,
    columns: list[str],
    naming: FieldNaming | None,
) -> list[str]:
    """Map each column to the record attribute it is scanned into."""
    specs = included_fields(record_type, naming)
    by_column = {spec.column: spec.attribute for spec in specs}
    by_attribute = {spec.attribute: spec.attribute for spec in specs}

    attributes: list[str] = []
    for col in columns:
        attr = by_column.get(col) or by_attribute.get(col)
        if attr is None:
            raise UnknownFieldError(record_type.__name__, col)
        attributes.append(attr)
    return attributes


def _bind_fields(
    context: BindingContext,
    record_type: type,
    fields: Sequence[str] | None,
    naming: FieldNaming | None,
) -> None:
    # A fresh context never carries fields from a previous bind; an explicit
    # list given for this bind is kept as-is.
    context.fields = list(fields or [])
    if not context.fields:
        context.fields = derive_fields(record_type, naming)
    context.attributes = _resolve_attributes(record_type, context.fields, naming)


def _classify_collection(
    destination: ResultList[Any],
    fields: Sequence[str] | None,
    naming: FieldNaming | None,
) -> BindingContext:
    item_type = destination.item_type

    if isinstance(item_type, type) and issubclass(item_type, MutableMapping):
        return BindingContext(
            shape=BindShape.MAPPING_LIST,
            destination=destination,
            template=item_type(),
            item_type=item_type,
        )

    if is_record_type(item_type):
        template = zero_record(item_type)
        context = BindingContext(
            shape=BindShape.RECORD_LIST,
            destination=destination,
            table_name=_table_name(template),
            template=template,
            item_type=item_type,
        )
        _bind_fields(context, item_type, fields, naming)
        return context

    raise ClassificationError(destination)


def classify(
    destination: Any,
    fields: Sequence[str] | None = None,
    naming: FieldNaming | None = None,
) -> BindingContext:
    """Classify *destination* and build a fresh BindingContext for it.

    Args:
        destination: The value rows will be bound to, or a bare table name.
        fields: Optional explicit column list for record shapes. When given
            it is used verbatim instead of the derived field list.
        naming: Field naming convention; defaults to DeclaredFieldNaming.

    Raises:
        ClassificationError: If the destination is not a recognized shape.
        UnknownFieldError: If ``fields`` names a column the record lacks.
        UsageError: If ``fields`` is given for a mapping or table-name
            destination.
    """
    if isinstance(destination, str):
        context = BindingContext(
            shape=BindShape.TABLE_NAME,
            destination=destination,
            table_name=destination,
        )
    elif isinstance(destination, ResultList):
        context = _classify_collection(destination, fields, naming)
    elif isinstance(destination, MutableMapping):
        context = BindingContext(shape=BindShape.MAPPING, destination=destination)
    elif is_record_type(type(destination)):
        context = BindingContext(
            shape=BindShape.RECORD,
            destination=destination,
            table_name=_table_name(destination),
            limit=1,
        )
        _bind_fields(context, type(destination), fields, naming)
    else:
        raise ClassificationError(destination)

    if fields and not context.shape.is_record:
        raise UsageError(f"fields apply to record destinations only, not {context.shape.value}")

    logger.debug(
        f"Bound {type(destination).__name__} as {context.shape.value} "
        f"(table={context.table_name}, fields={context.fields})"
    )
    return context
