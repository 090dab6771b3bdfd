"""Recognition of SQL literals and always-true conditions."""

from __future__ import annotations

import re

# Spacing around "=" is normalized before lookup, so "1 =1" and "1 = 1" match too.
SQL_LITERALS = frozenset({"true", "false", "null", "1=1", "0=0"})
TRIVIAL_CONDITIONS = frozenset({"1=1", "0=0", "true", "true=true"})

SQL_KEYWORDS = frozenset({
    "select", "from", "where", "and", "or", "not", "in", "is",
    "null", "true", "false", "like", "between", "exists",
})

_EQUALS_SPACING = re.compile(r"\s*=\s*")


def _normalize(cond: str) -> str:
    return _EQUALS_SPACING.sub("=", cond.strip().lower())


def is_sql_literal_expression(cond: str) -> bool:
    """True for bare literals (true, false, null, 1=1, 0=0) that must never be prefixed."""
    return _normalize(cond) in SQL_LITERALS


def is_trivial_condition(cond: str) -> bool:
    """True for conditions that always evaluate to true and filter nothing.

    ``false`` is a literal but not trivial: dropping it would widen the result.
    """
    return _normalize(cond) in TRIVIAL_CONDITIONS


def is_sql_keyword(word: str) -> bool:
    return word.strip().lower() in SQL_KEYWORDS
