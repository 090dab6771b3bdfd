"""Unit tests for settings and request models."""

from __future__ import annotations

import pytest

from whereguard.core.config import clear_settings_cache, get_cached_settings, get_settings
from whereguard.core.exceptions import ConfigError
from whereguard.core.models import PreloadOption, RequestOptions


class TestSettings:
    """Tests for get_settings."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.log_level == "INFO"
        assert settings.strict_structure_check is True
        assert settings.max_clause_length == 0
        assert settings.schema_registry_path.endswith("columns.yaml")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WHEREGUARD_LOG_LEVEL", "debug")
        monkeypatch.setenv("WHEREGUARD_STRICT_STRUCTURE", "0")
        monkeypatch.setenv("WHEREGUARD_MAX_CLAUSE_LENGTH", "100")
        monkeypatch.setenv("WHEREGUARD_SCHEMA_PATH", "/tmp/cols.json")

        settings = get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.strict_structure_check is False
        assert settings.max_clause_length == 100
        assert settings.schema_registry_path == "/tmp/cols.json"

    def test_invalid_integer(self, monkeypatch):
        monkeypatch.setenv("WHEREGUARD_MAX_CLAUSE_LENGTH", "lots")
        with pytest.raises(ConfigError):
            get_settings()

    def test_negative_length(self, monkeypatch):
        monkeypatch.setenv("WHEREGUARD_MAX_CLAUSE_LENGTH", "-1")
        with pytest.raises(ConfigError):
            get_settings()

    def test_settings_are_frozen(self):
        settings = get_settings()
        with pytest.raises(Exception):
            settings.max_clause_length = 1


class TestCachedSettings:
    def test_cached_until_cleared(self, monkeypatch):
        first = get_cached_settings()
        assert get_cached_settings() is first

        monkeypatch.setenv("WHEREGUARD_MAX_CLAUSE_LENGTH", "10")
        assert get_cached_settings().max_clause_length == 0

        clear_settings_cache()
        assert get_cached_settings().max_clause_length == 10


class TestRequestOptions:
    """Tests for RequestOptions.allowed_prefixes."""

    def test_order_and_deduplication(self):
        options = RequestOptions(
            preload=[PreloadOption(relation="Department"), PreloadOption(relation="users")],
            join_aliases=["d", "Department"],
        )
        assert options.allowed_prefixes("users") == ["users", "Department", "d"]

    def test_empty(self):
        assert RequestOptions().allowed_prefixes() == []

    def test_preload_fields(self):
        preload = PreloadOption(relation="Manager", table_name="users", where="status = 'active'")
        assert preload.table_name == "users"
        assert preload.where == "status = 'active'"
