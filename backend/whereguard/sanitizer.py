"""WHERE clause sanitization and column qualification.

Every WHERE fragment that reaches generated SQL (query parameters, headers,
stored custom SQL, cursor filters, preload filters) goes through
``sanitize_where_clause`` first. It drops the whole fragment on a security
hit, removes always-true conditions and corrects wrong table prefixes.
Adding prefixes to bare columns is a separate, explicit step:
``add_table_prefix_to_columns``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .core.exceptions import ClauseTooLongError, UnsafeClauseError
from .core.models import RequestOptions
from .schema.registry import ColumnOracle, resolve_column_set, table_name_only
from .security.where_guard import SecurityCheck, validate_security
from .sql.literals import is_sql_literal_expression, is_trivial_condition
from .sql.references import (
    extract_left_operand,
    extract_table_and_column,
    has_existing_prefix,
    is_identifier,
    qualify_column_in_condition,
)
from .sql.scanner import (
    contains_top_level_or,
    split_top_level_and,
    strip_one_outer_paren,
    strip_outer_parens,
)

logger = logging.getLogger(__name__)


def _allowed_prefix_set(
    table_name: str,
    allowed_prefixes: Optional[Iterable[str]],
    options: Optional[RequestOptions],
) -> set[str]:
    allowed: set[str] = set()
    if table_name:
        allowed.add(table_name)
        allowed.add(table_name_only(table_name))
    for prefix in allowed_prefixes or ():
        if prefix:
            allowed.add(prefix)
    if options is not None:
        allowed.update(options.allowed_prefixes())
    return allowed


def _raise_if_oversized(check: SecurityCheck) -> None:
    if check.oversized:
        raise ClauseTooLongError(check.reason)


def _fix_prefix(
    cond: str,
    cond_to_check: str,
    table_name: str,
    allowed: set[str],
    valid_columns: Optional[frozenset[str]],
) -> str:
    prefix, column = extract_table_and_column(cond_to_check)
    if not prefix or not column or prefix in allowed:
        return cond

    if not is_identifier(column):
        logger.debug(f"Skipping prefix fix for '{prefix}.{column}' - not a plain column reference")
        return cond

    if valid_columns is not None and column.lower() not in valid_columns:
        logger.debug(
            f"Skipping prefix fix for '{prefix}.{column}' - not a valid column in '{table_name}'"
        )
        return cond

    old_ref = f"{prefix}.{column}"
    new_ref = f"{table_name_only(table_name)}.{column}"
    if old_ref not in cond:
        return cond
    logger.debug(f"Fixed incorrect table prefix in condition: '{old_ref}' -> '{new_ref}'")
    return cond.replace(old_ref, new_ref, 1)


def sanitize_where_clause(
    clause: str,
    table_name: str = "",
    allowed_prefixes: Optional[Iterable[str]] = None,
    column_oracle: ColumnOracle = None,
    *,
    options: Optional[RequestOptions] = None,
) -> str:
    """Remove trivial conditions and fix wrong table prefixes.

    Bare columns are not qualified here; use ``prepare_where_clause`` for that.

    Args:
        clause: WHERE fragment without the WHERE keyword
        table_name: Table the fragment filters; wrong prefixes are rewritten to it
        allowed_prefixes: Extra prefixes left untouched (preload relations, join aliases)
        column_oracle: Known columns of ``table_name``; None means assume valid
        options: Request options whose preloads and join aliases are also allowed

    Returns:
        The sanitized clause, or "" when nothing is left to filter on or the
        clause failed security validation

    Raises:
        ClauseTooLongError: The clause is longer than the configured maximum
    """
    if not clause:
        return ""
    clause = clause.strip()
    if not clause:
        return ""

    check = validate_security(clause)
    if not check.ok:
        _raise_if_oversized(check)
        logger.debug(f"Security validation failed for WHERE clause: {check.reason}")
        return ""

    # Outer parens around a top-level OR must survive, or the OR would leak
    # into whatever the caller ANDs this fragment with
    _, has_outer_parens = strip_one_outer_paren(clause)
    unwrapped = strip_outer_parens(clause)
    preserve_parens = has_outer_parens and contains_top_level_or(unwrapped)

    valid_columns = resolve_column_set(table_name, column_oracle) if table_name else None
    allowed = _allowed_prefix_set(table_name, allowed_prefixes, options)

    kept: list[str] = []
    for cond in split_top_level_and(unwrapped):
        cond_to_check = strip_outer_parens(cond)

        if is_trivial_condition(cond_to_check):
            logger.debug(f"Removing trivial condition: '{cond}'")
            continue

        if table_name and has_existing_prefix(cond_to_check):
            cond = _fix_prefix(cond, cond_to_check, table_name, allowed, valid_columns)

        kept.append(cond)

    if not kept:
        return ""

    result = " AND ".join(kept)
    if preserve_parens:
        result = f"({result})"
        logger.debug(f"Preserved outer parentheses for OR conditions: '{result}'")
    elif result != unwrapped:
        logger.debug(f"Sanitized WHERE clause: '{clause}' -> '{result}'")

    return result


def _prefix_single_condition(
    cond: str,
    table_name: str,
    valid_columns: Optional[frozenset[str]],
) -> str:
    stripped, _ = strip_one_outer_paren(cond)

    if is_sql_literal_expression(stripped) or is_trivial_condition(stripped):
        logger.debug(f"Skipping SQL literal/trivial condition: '{stripped}'")
        return cond

    # "(true AND status = 'x')" must not be read as one column named "true AND status"
    sub_conditions = split_top_level_and(stripped)
    if len(sub_conditions) > 1:
        result = " AND ".join(
            _prefix_single_condition(sub, table_name, valid_columns) for sub in sub_conditions
        )
        return f"({result})" if stripped != cond else result

    if stripped != cond and stripped.startswith("(") and stripped.endswith(")"):
        return f"({_prefix_single_condition(stripped, table_name, valid_columns)})"

    column = extract_left_operand(stripped)
    if not column:
        return cond

    if "." in column:
        logger.debug(f"Skipping column '{column}' - already has table prefix")
        return cond

    if "(" in column:
        logger.debug(f"Skipping column reference '{column}' - inside function or expression")
        return cond

    if not is_identifier(column):
        return cond

    if valid_columns is not None and column.lower() not in valid_columns:
        logger.debug(f"Skipping column '{column}' - not found in table '{table_name}'")
        return cond

    qualified = f"{table_name_only(table_name)}.{column}"
    logger.debug(f"Added table prefix to column: '{column}' -> '{qualified}'")
    return qualify_column_in_condition(cond, column, qualified)


def add_table_prefix_to_columns(
    clause: str,
    table_name: str,
    column_oracle: ColumnOracle = None,
) -> str:
    """Prefix bare column references with ``table_name``.

    Only the left operand of each condition is considered. Columns inside
    function calls, already qualified columns, literals and columns unknown
    to a known oracle are left alone:

        "status = 'active'"                       -> "users.status = 'active'"
        "COALESCE(status, 'x') = 'active'"        -> unchanged
        "(status = 'active' AND age > 18)"        -> "(users.status = 'active' AND users.age > 18)"
    """
    if not clause or not table_name:
        return clause

    clause = clause.strip()
    valid_columns = resolve_column_set(table_name, column_oracle)

    prefixed = [
        _prefix_single_condition(cond, table_name, valid_columns)
        for cond in split_top_level_and(clause)
    ]
    return " AND ".join(prefixed)


def prepare_where_clause(
    clause: str,
    table_name: str,
    allowed_prefixes: Optional[Iterable[str]] = None,
    column_oracle: ColumnOracle = None,
    *,
    options: Optional[RequestOptions] = None,
) -> str:
    """Qualify bare columns, then sanitize.

    Security runs on the raw clause first so a rejected fragment is never
    rewritten.
    """
    if not clause or not clause.strip():
        return ""
    check = validate_security(clause.strip())
    if not check.ok:
        _raise_if_oversized(check)
        return ""

    prefixed = add_table_prefix_to_columns(clause, table_name, column_oracle)
    return sanitize_where_clause(
        prefixed,
        table_name,
        allowed_prefixes,
        column_oracle,
        options=options,
    )


def validate_preload_where(where: str, relation_name: str) -> str:
    """Validate a WHERE clause attached to a preload.

    A preload runs as its own query with its own alias, so prefixes are not
    added or corrected here. Raises UnsafeClauseError when the clause fails
    security validation.
    """
    if not where:
        return where
    where = where.strip()

    if "." in where:
        logger.debug(
            f"Preload WHERE clause for '{relation_name}' contains qualified column references: "
            f"'{where}'. Parent query aliases are not available in a preload query."
        )

    check = validate_security(where)
    if not check.ok:
        _raise_if_oversized(check)
        raise UnsafeClauseError(
            f"Preload WHERE clause for '{relation_name}' rejected: {check.reason}",
            keyword=check.keyword,
        )
    return where
