"""Record field metadata.

Derives the ordered column list of a record class. Supports dataclasses
and Pydantic models; the column name of each field comes from a
FieldNaming convention.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

COLUMN_KEY = "column"
IGNORE_KEY = "ignore"


def is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def is_record_type(cls: Any) -> bool:
    """Return True if *cls* is a class whose instances bind as records."""
    if not isinstance(cls, type):
        return False
    return dataclasses.is_dataclass(cls) or is_pydantic_model(cls)


@dataclass(frozen=True)
class FieldSpec:
    """One declared field of a record class."""

    attribute: str
    column: str
    included: bool = True


@runtime_checkable
class FieldNaming(Protocol):
    """Naming convention: yields one FieldSpec per declared field, in order."""

    def describe(self, record_type: type) -> list[FieldSpec]: ...


class DeclaredFieldNaming:
    """Default convention.

    Dataclasses read ``metadata={"column": ..., "ignore": ...}`` (see
    :func:`column`). Pydantic models use ``Field(alias=...)`` as the column
    name and ``Field(exclude=True)`` to ignore a field. Without an override
    the column name is the attribute name.
    """

    def describe(self, record_type: type) -> list[FieldSpec]:
        if is_pydantic_model(record_type):
            return [
                FieldSpec(
                    attribute=name,
                    column=info.alias or name,
                    included=not info.exclude,
                )
                for name, info in record_type.model_fields.items()  # type: ignore[attr-defined]
            ]

        if dataclasses.is_dataclass(record_type):
            return [
                FieldSpec(
                    attribute=f.name,
                    column=f.metadata.get(COLUMN_KEY) or f.name,
                    included=not f.metadata.get(IGNORE_KEY, False),
                )
                for f in dataclasses.fields(record_type)
            ]

        return []


DEFAULT_NAMING = DeclaredFieldNaming()


def column(name: str | None = None, *, ignore: bool = False, **kwargs: Any) -> Any:
    """Declare a dataclass field with a column override or ignore flag.

    Example:
        @dataclass
        class User:
            id: int
            full_name: str = column("name", default="")
            cache: dict = column(ignore=True, default_factory=dict)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if name is not None:
        metadata[COLUMN_KEY] = name
    if ignore:
        metadata[IGNORE_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def included_fields(record_type: type, naming: FieldNaming | None = None) -> list[FieldSpec]:
    """Return the non-ignored fields of *record_type* in declaration order."""
    naming = naming or DEFAULT_NAMING
    return [spec for spec in naming.describe(record_type) if spec.included]


def derive_fields(record_type: type, naming: FieldNaming | None = None) -> list[str]:
    """Return the ordered column names of *record_type*."""
    return [spec.column for spec in included_fields(record_type, naming)]


def zero_record(record_type: type) -> Any:
    """Allocate a record instance without running its constructor.

    Fields get their declared default, a fresh ``default_factory`` value, or
    ``None``. Each call builds a new instance with new factory values.
    """
    if is_pydantic_model(record_type):
        required = {
            info.alias or name: None
            for name, info in record_type.model_fields.items()  # type: ignore[attr-defined]
            if info.is_required()
        }
        return record_type.model_construct(**required)  # type: ignore[attr-defined]

    instance = record_type.__new__(record_type)
    for f in dataclasses.fields(record_type):
        if f.default is not dataclasses.MISSING:
            value = f.default
        elif f.default_factory is not dataclasses.MISSING:
            value = f.default_factory()
        else:
            value = None
        object.__setattr__(instance, f.name, value)
    return instance
