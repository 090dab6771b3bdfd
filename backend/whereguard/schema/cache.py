from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

# Portable catalog query; any DB-API connection that exposes information_schema works
COLUMNS_QUERY = """
SELECT
    c.table_schema,
    c.table_name,
    c.column_name,
    c.data_type,
    c.character_maximum_length,
    c.is_nullable
FROM information_schema.columns c
WHERE c.table_schema NOT IN ('information_schema', 'pg_catalog', 'sys')
ORDER BY c.table_schema, c.table_name, c.ordinal_position
"""


@dataclass
class ColumnInfo:
    name: str
    data_type: str
    nullable: bool
    max_length: int | None


@dataclass
class TableInfo:
    schema: str
    name: str
    columns: list[ColumnInfo] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.schema}.{self.name}" if self.schema else self.name

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]


def _is_nullable(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().upper() in ("YES", "Y", "TRUE", "1")
    return bool(value)


class SchemaCache:
    def __init__(self) -> None:
        self.tables: dict[str, TableInfo] = {}
        self.loaded_at: datetime | None = None

    def load(self, conn: Any) -> None:
        """Read table/column metadata through a DB-API connection."""
        cursor = conn.cursor()
        try:
            cursor.execute(COLUMNS_QUERY)
            rows = cursor.fetchall()
        finally:
            cursor.close()
        self.load_rows(rows)

    def load_rows(self, rows: Iterable[tuple]) -> None:
        """Populate from ``(schema, table, column, data_type, max_length, is_nullable)`` rows."""
        self.tables.clear()
        for schema_name, table_name, column_name, data_type, max_length, is_nullable in rows:
            table = TableInfo(schema=schema_name or "", name=table_name)
            table = self.tables.setdefault(table.key, table)
            table.columns.append(
                ColumnInfo(
                    name=column_name,
                    data_type=data_type,
                    nullable=_is_nullable(is_nullable),
                    max_length=int(max_length) if max_length is not None else None,
                )
            )
        self.loaded_at = datetime.now(timezone.utc)

    def table_keys(self) -> list[str]:
        return sorted(self.tables.keys())

    def table_info(self, key: str) -> TableInfo | None:
        return self.tables.get(key)
