"""Known-column lookup used to validate column references.

The registry answers one question: which columns does table ``t`` have?
``None`` means the table is unknown and callers should assume any column
is valid.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Set as AbstractSet
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Union

import yaml

from ..core.config import get_cached_settings
from ..core.exceptions import SchemaRegistryError
from .cache import SchemaCache

logger = logging.getLogger(__name__)


class ColumnLookup(Protocol):
    def columns_for(self, table: str) -> Optional[AbstractSet[str]]:
        ...


# Anything the sanitizer accepts as a column oracle
ColumnOracle = Union[
    ColumnLookup,
    Callable[[str], Optional[AbstractSet[str]]],
    AbstractSet[str],
    None,
]


def table_name_only(table: str) -> str:
    """Drop schema qualifiers: ``public.users`` -> ``users``."""
    return table.strip().rsplit(".", 1)[-1].strip("`\"")


class ColumnRegistry:
    """Thread-safe table -> column set map, case-insensitive on both levels."""

    def __init__(self, tables: Mapping[str, Iterable[str]] | None = None) -> None:
        self._lock = threading.RLock()
        self._tables: dict[str, frozenset[str]] = {}
        for name, columns in (tables or {}).items():
            self.register(name, columns)

    def register(self, table: str, columns: Iterable[str]) -> None:
        key = table.strip().lower()
        if not key:
            raise ValueError("table name must not be empty")
        column_set = frozenset(col.strip().lower() for col in columns if col and col.strip())
        with self._lock:
            self._tables[key] = column_set
        logger.debug(f"Registered {len(column_set)} columns for table '{key}'")

    def columns_for(self, table: str) -> Optional[frozenset[str]]:
        """Columns of ``table`` (full key first, then the bare table name), or None."""
        if not table or not table.strip():
            return None
        key = table.strip().lower()
        short = table_name_only(key)
        with self._lock:
            columns = self._tables.get(key)
            if columns is None:
                columns = self._tables.get(short)
            if columns is None:
                for name, candidate in self._tables.items():
                    if table_name_only(name) == short:
                        return candidate
            return columns

    __call__ = columns_for

    def tables(self) -> list[str]:
        with self._lock:
            return sorted(self._tables)

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, table: object) -> bool:
        return isinstance(table, str) and self.columns_for(table) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

    @classmethod
    def from_schema_cache(cls, cache: SchemaCache) -> "ColumnRegistry":
        registry = cls()
        for key in cache.table_keys():
            info = cache.table_info(key)
            if info is not None:
                registry.register(info.key, info.column_names)
        return registry


def resolve_column_set(table: str, oracle: ColumnOracle) -> Optional[frozenset[str]]:
    """Ask ``oracle`` for the lower-cased columns of ``table``.

    A plain set is taken as the column set of ``table`` itself. An unknown
    table, or one with no registered columns, yields None.
    """
    if oracle is None or not table:
        return None

    if isinstance(oracle, (AbstractSet, list, tuple)):
        columns: Optional[Iterable[str]] = oracle
    elif hasattr(oracle, "columns_for"):
        columns = oracle.columns_for(table)
    elif callable(oracle):
        columns = oracle(table)
    else:
        raise TypeError(f"Unsupported column oracle: {type(oracle).__name__}")

    if columns is None:
        return None
    lowered = frozenset(col.lower() for col in columns)
    return lowered or None


def _load_payload(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            if path.lower().endswith(".json"):
                return json.load(handle)
            return yaml.safe_load(handle) or {}
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaRegistryError(f"Failed to read column registry {path}: {e}") from e


def _iter_tables(payload: Any, path: str) -> Iterable[tuple[str, list[str]]]:
    if not isinstance(payload, dict):
        raise SchemaRegistryError(f"Column registry {path} must be a mapping with a 'tables' key")

    tables = payload.get("tables") or []
    if isinstance(tables, dict):
        for name, columns in tables.items():
            yield str(name), list(columns or [])
        return
    if not isinstance(tables, list):
        raise SchemaRegistryError(f"'tables' in {path} must be a list or a mapping")

    for item in tables:
        if not isinstance(item, dict) or not item.get("name"):
            raise SchemaRegistryError(f"Invalid table entry in {path}: {item!r}")
        yield str(item["name"]), list(item.get("columns", []) or [])


def load_column_registry(path: str | None) -> ColumnRegistry:
    """Load a registry from a YAML or JSON file.

    Accepted layouts::

        tables:
          - name: users
            columns: [id, status, age]

        tables:
          users: [id, status, age]
    """
    registry = ColumnRegistry()
    if not path:
        return registry
    resolved = os.path.abspath(path)
    if not os.path.exists(resolved):
        logger.warning(f"Column registry not found: {resolved}")
        return registry

    payload = _load_payload(resolved)
    for name, columns in _iter_tables(payload, resolved):
        registry.register(name, [str(col) for col in columns])

    logger.info(f"Loaded {len(registry)} tables from column registry {resolved}")
    return registry


_default_registry: Optional[ColumnRegistry] = None
_default_lock = threading.Lock()


def get_default_registry() -> ColumnRegistry:
    """Process-wide registry, loaded once from settings."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = load_column_registry(get_cached_settings().schema_registry_path)
        return _default_registry


def reset_default_registry() -> None:
    global _default_registry
    with _default_lock:
        _default_registry = None
