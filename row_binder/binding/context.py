"""Binding context and collection destinations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from row_binder.core.enums import BindShape

T = TypeVar("T")


@runtime_checkable
class NameProvider(Protocol):
    """Optional capability of a record class: the table it binds to.

    When a record implements ``table_name()`` its return value replaces the
    class name as the bound table name.
    """

    def table_name(self) -> str: ...


class ResultList(list, Generic[T]):  # type: ignore[type-arg]
    """A list destination that knows the type of its elements.

    Python lists carry no element type, so collection destinations are
    declared as ``ResultList(User)`` (records) or ``ResultList(dict)``
    (mappings). Rows read through a session are appended in arrival order.
    """

    def __init__(self, item_type: type[T], iterable: Any = ()) -> None:
        super().__init__(iterable)
        self.item_type = item_type

    def __repr__(self) -> str:
        return f"ResultList({self.item_type.__name__}, {list.__repr__(self)})"


@dataclass
class BindingContext:
    """State of one bind: shape, table, column order and destination.

    ``fields`` holds column names in scan order and ``attributes`` the record
    attribute each column is assigned to. Both are empty for non-record
    shapes. ``item_type`` is the element type of list shapes and
    ``template`` a zero instance of it. Record lists allocate a fresh
    instance per row; mapping lists copy the (empty) template.
    """

    shape: BindShape
    destination: Any
    table_name: str | None = None
    fields: list[str] = field(default_factory=list)
    attributes: list[str] = field(default_factory=list)
    template: Any = None
    item_type: type | None = None
    limit: int | None = None
