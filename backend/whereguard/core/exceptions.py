"""Custom exceptions for the WHERE clause guard."""

from __future__ import annotations

from typing import Optional


class WhereGuardError(Exception):
    """Base class for whereguard errors."""

    pass


class UnsafeClauseError(WhereGuardError):
    """Raised when a WHERE clause is rejected by the security validator."""

    def __init__(self, message: str, keyword: Optional[str] = None) -> None:
        super().__init__(message)
        self.keyword = keyword


class SchemaRegistryError(WhereGuardError):
    """Raised when a column registry file cannot be read or has an invalid layout."""

    pass


class ConfigError(WhereGuardError):
    """Raised when an environment setting has an invalid value."""

    pass


class ClauseTooLongError(UnsafeClauseError):
    """Raised when a WHERE clause exceeds the configured maximum length.

    Not reported as an empty clause: dropping a long filter would widen the query.
    """

    pass
