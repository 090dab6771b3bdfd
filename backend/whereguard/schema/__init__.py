"""Schema metadata module.

Contains the schema cache model and the column registry used as column oracle.
"""

from .cache import COLUMNS_QUERY, ColumnInfo, SchemaCache, TableInfo
from .registry import (
    ColumnLookup,
    ColumnOracle,
    ColumnRegistry,
    get_default_registry,
    load_column_registry,
    reset_default_registry,
    resolve_column_set,
    table_name_only,
)

__all__ = [
    "COLUMNS_QUERY",
    "ColumnInfo",
    "SchemaCache",
    "TableInfo",
    "ColumnLookup",
    "ColumnOracle",
    "ColumnRegistry",
    "get_default_registry",
    "load_column_registry",
    "reset_default_registry",
    "resolve_column_set",
    "table_name_only",
]
