"""Runtime settings for the WHERE clause guard."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

load_dotenv()

_TRUTHY = ("1", "true", "yes", "y")


@dataclass(frozen=True)
class Settings:
    """Application settings."""
    # YAML/JSON file listing the known columns of each table
    schema_registry_path: str
    log_level: str
    # Run the sqlparse statement/comment check after the keyword denylist
    strict_structure_check: bool
    # Longer clauses raise ClauseTooLongError (0 = no limit)
    max_clause_length: int


def _int_from_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def get_settings() -> Settings:
    """Load settings from environment variables."""
    base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
    default_schema = os.path.join(base_dir, "schema", "columns.yaml")

    max_clause_length = _int_from_env("WHEREGUARD_MAX_CLAUSE_LENGTH", "0")
    if max_clause_length < 0:
        raise ConfigError("WHEREGUARD_MAX_CLAUSE_LENGTH must not be negative")

    return Settings(
        schema_registry_path=os.getenv("WHEREGUARD_SCHEMA_PATH", default_schema),
        log_level=os.getenv("WHEREGUARD_LOG_LEVEL", "INFO").upper(),
        strict_structure_check=os.getenv("WHEREGUARD_STRICT_STRUCTURE", "yes").lower() in _TRUTHY,
        max_clause_length=max_clause_length,
    )


# Singleton for caching settings
_settings_cache: Optional[Settings] = None


def get_cached_settings() -> Settings:
    """Get cached settings (loads once)."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = get_settings()
    return _settings_cache


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    global _settings_cache
    _settings_cache = None
