"""Security and validation module.

Contains the WHERE clause injection guard.
"""

from .where_guard import DANGEROUS_KEYWORDS, DENYLIST, SecurityCheck, is_safe_where_clause, validate_security

__all__ = [
    "DANGEROUS_KEYWORDS",
    "DENYLIST",
    "SecurityCheck",
    "is_safe_where_clause",
    "validate_security",
]
