from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

import sqlparse
from sqlparse import tokens as T

from ..core.config import get_cached_settings

logger = logging.getLogger(__name__)

# Statement verbs that never belong in a filter fragment
DANGEROUS_KEYWORDS = (
    "delete", "update", "truncate", "drop", "alter", "create",
    "insert", "grant", "revoke", "exec", "execute",
)
# A verb only counts when a separator follows it
_SEPARATORS = (" ", "\t", "\n", "\r", ";")
_SEMICOLON_PREFIXED = ("delete", "update", "truncate", "drop", "alter", "create", "insert")

DENYLIST = tuple(
    keyword + separator for keyword in DANGEROUS_KEYWORDS for separator in _SEPARATORS
) + tuple(";" + keyword for keyword in _SEMICOLON_PREFIXED)


@dataclass(frozen=True)
class SecurityCheck:
    """Outcome of validating a WHERE clause."""
    ok: bool
    keyword: Optional[str] = None
    reason: str = ""
    # Set for length-cap rejections, which callers must surface as an error
    oversized: bool = False

    def __bool__(self) -> bool:
        return self.ok


_PASSED = SecurityCheck(ok=True)


def _check_denylist(lowered: str) -> SecurityCheck:
    for pattern in DENYLIST:
        if pattern in lowered:
            keyword = pattern.strip(" \t\n\r")
            return SecurityCheck(
                ok=False,
                keyword=keyword,
                reason=f"dangerous SQL keyword detected in WHERE clause: {keyword}",
            )
    return _PASSED


def _check_structure(clause: str) -> SecurityCheck:
    """Reject stacked statements and comments that could cut off the generated SQL."""
    try:
        statements = [stmt for stmt in sqlparse.split(clause) if stmt.strip()]
        parsed = sqlparse.parse(clause)
    except Exception as e:
        return SecurityCheck(ok=False, reason=f"SQL parse error: {e}")

    if len(statements) > 1:
        return SecurityCheck(
            ok=False,
            keyword=";",
            reason=f"Multiple statements not allowed in WHERE clause (got {len(statements)})",
        )

    for stmt in parsed:
        for token in stmt.flatten():
            if token.ttype in T.Comment:
                return SecurityCheck(ok=False, keyword="--", reason="SQL comment not allowed in WHERE clause")

    return _PASSED


def validate_security(
    clause: str,
    *,
    strict: bool | None = None,
    max_length: int | None = None,
) -> SecurityCheck:
    """Validate a whole WHERE clause before it is split or rewritten.

    Args:
        clause: Raw WHERE fragment
        strict: Also run the sqlparse structural check (default from settings)
        max_length: Reject longer clauses; 0 disables (default from settings)

    Returns:
        SecurityCheck; falsy when the clause must be discarded entirely
    """
    if not clause or not clause.strip():
        return _PASSED

    if strict is None or max_length is None:
        settings = get_cached_settings()
        if strict is None:
            strict = settings.strict_structure_check
        if max_length is None:
            max_length = settings.max_clause_length

    if max_length and len(clause) > max_length:
        result = SecurityCheck(
            ok=False,
            reason=f"WHERE clause exceeds {max_length} characters ({len(clause)})",
            oversized=True,
        )
    else:
        result = _check_denylist(clause.lower())
        if result.ok and strict:
            result = _check_structure(clause)

    if not result.ok:
        logger.error(f"Rejected WHERE clause: {result.reason}")
    return result


def is_safe_where_clause(clause: str) -> bool:
    return validate_security(clause).ok
