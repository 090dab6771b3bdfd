"""Core infrastructure module.

Contains configuration, logging setup, request models, and exceptions.
"""

from .config import Settings, get_settings, get_cached_settings, clear_settings_cache
from .exceptions import (
    ClauseTooLongError,
    ConfigError,
    SchemaRegistryError,
    UnsafeClauseError,
    WhereGuardError,
)
from .logging_config import LOG_FORMAT, configure_logging
from .models import PreloadOption, RequestOptions

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_cached_settings",
    "clear_settings_cache",
    # Logging
    "LOG_FORMAT",
    "configure_logging",
    # Models
    "PreloadOption",
    "RequestOptions",
    # Exceptions
    "ClauseTooLongError",
    "ConfigError",
    "SchemaRegistryError",
    "UnsafeClauseError",
    "WhereGuardError",
]
