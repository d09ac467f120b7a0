"""Enumerations shared across the binding engine."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


class BindShape(Enum):
    """How a bound destination is interpreted."""

    TABLE_NAME = "table_name"
    RECORD = "record"
    RECORD_LIST = "record_list"
    MAPPING = "mapping"
    MAPPING_LIST = "mapping_list"

    @property
    def is_record(self) -> bool:
        return self in (BindShape.RECORD, BindShape.RECORD_LIST)

    @property
    def is_collection(self) -> bool:
        return self in (BindShape.RECORD_LIST, BindShape.MAPPING_LIST)
