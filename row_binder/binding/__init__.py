"""Binding layer - classify destinations and materialize rows into them."""

from __future__ import annotations

from row_binder.binding.classifier import classify
from row_binder.binding.context import BindingContext, NameProvider, ResultList
from row_binder.binding.fields import (
    DeclaredFieldNaming,
    FieldNaming,
    FieldSpec,
    column,
    derive_fields,
    zero_record,
)
from row_binder.binding.materializer import decode_value, materialize

__all__ = [
    "classify",
    "zero_record",
    "BindingContext",
    "NameProvider",
    "ResultList",
    "DeclaredFieldNaming",
    "FieldNaming",
    "FieldSpec",
    "column",
    "derive_fields",
    "decode_value",
    "materialize",
]
