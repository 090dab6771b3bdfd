"""whereguard: WHERE clause sanitization for generated SQL.

This package cleans free-form WHERE fragments before they are interpolated
into generated queries: it rejects injected statements, removes always-true
conditions and resolves which table prefix each column reference gets.

Package Structure:
    core/       - Core infrastructure (config, logging, request models, exceptions)
    sql/        - Text-level scanning, literal classification, reference extraction
    security/   - Injection guard for WHERE fragments
    schema/     - Schema cache model and column registry (column oracle)
    sanitizer   - Sanitize / qualify orchestration
"""

# Core
from .core.config import Settings, get_settings, get_cached_settings, clear_settings_cache
from .core.exceptions import (
    ClauseTooLongError,
    ConfigError,
    SchemaRegistryError,
    UnsafeClauseError,
    WhereGuardError,
)
from .core.logging_config import configure_logging
from .core.models import PreloadOption, RequestOptions

# Schema
from .schema.cache import ColumnInfo, SchemaCache, TableInfo
from .schema.registry import (
    ColumnOracle,
    ColumnRegistry,
    get_default_registry,
    load_column_registry,
    resolve_column_set,
    table_name_only,
)

# Security
from .security.where_guard import SecurityCheck, is_safe_where_clause, validate_security

# SQL text helpers
from .sql.literals import is_sql_keyword, is_sql_literal_expression, is_trivial_condition
from .sql.references import (
    extract_column_name,
    extract_left_operand,
    extract_table_and_column,
    has_existing_prefix,
)
from .sql.scanner import (
    contains_top_level_or,
    ensure_outer_parentheses,
    find_operator_outside_parens,
    split_top_level_and,
    strip_one_outer_paren,
    strip_outer_parens,
)

# Orchestration
from .sanitizer import (
    add_table_prefix_to_columns,
    prepare_where_clause,
    sanitize_where_clause,
    validate_preload_where,
)

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "get_cached_settings",
    "clear_settings_cache",
    "ClauseTooLongError",
    "ConfigError",
    "SchemaRegistryError",
    "UnsafeClauseError",
    "WhereGuardError",
    "configure_logging",
    "PreloadOption",
    "RequestOptions",
    # Schema
    "ColumnInfo",
    "SchemaCache",
    "TableInfo",
    "ColumnOracle",
    "ColumnRegistry",
    "get_default_registry",
    "load_column_registry",
    "resolve_column_set",
    "table_name_only",
    # Security
    "SecurityCheck",
    "is_safe_where_clause",
    "validate_security",
    # SQL text helpers
    "is_sql_keyword",
    "is_sql_literal_expression",
    "is_trivial_condition",
    "extract_column_name",
    "extract_left_operand",
    "extract_table_and_column",
    "has_existing_prefix",
    "contains_top_level_or",
    "ensure_outer_parentheses",
    "find_operator_outside_parens",
    "split_top_level_and",
    "strip_one_outer_paren",
    "strip_outer_parens",
    # Orchestration
    "add_table_prefix_to_columns",
    "prepare_where_clause",
    "sanitize_where_clause",
    "validate_preload_where",
]
