from __future__ import annotations

import pytest

from whereguard.core.config import clear_settings_cache
from whereguard.schema.registry import reset_default_registry


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Run every test against default settings, unaffected by the caller's environment."""
    for name in (
        "WHEREGUARD_SCHEMA_PATH",
        "WHEREGUARD_LOG_LEVEL",
        "WHEREGUARD_STRICT_STRUCTURE",
        "WHEREGUARD_MAX_CLAUSE_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    reset_default_registry()
    yield
    clear_settings_cache()
    reset_default_registry()
