"""Unit tests for the WHERE clause security validator."""

from __future__ import annotations

import logging

import pytest

from whereguard.security.where_guard import SecurityCheck, is_safe_where_clause, validate_security


class TestDenylist:
    """Tests for the DML/DDL keyword denylist."""

    @pytest.mark.parametrize(
        "clause",
        [
            "status = 'active' AND age > 18",
            "id IN (SELECT id FROM users WHERE status = 'active' ORDER BY created_at DESC LIMIT 10)",
            "updated_at > '2024-01-01'",
            "created_by = 5",
            "",
        ],
    )
    def test_safe_clauses(self, clause):
        assert validate_security(clause).ok is True

    @pytest.mark.parametrize(
        "clause,keyword",
        [
            ("status = 'active'; DELETE FROM users", "delete"),
            ("1=1; UPDATE users SET admin = true", "update"),
            ("status = 'active' OR TRUNCATE TABLE users", "truncate"),
            ("status = 'active'; DROP TABLE users", "drop"),
            ("status = 'active'; INSERT INTO users (name) VALUES ('hacker')", "insert"),
            ("1=1; ALTER TABLE users ADD COLUMN is_admin BOOLEAN", "alter"),
            ("1=1; CREATE TABLE malicious (id INT)", "create"),
            ("1=1 OR EXEC\txp_cmdshell", "exec"),
            ("x = 1 OR grant\nall", "grant"),
        ],
    )
    def test_dangerous_keywords(self, clause, keyword):
        check = validate_security(clause)
        assert check.ok is False
        assert check.keyword == keyword

    def test_leading_semicolon_variant(self):
        check = validate_security("a = 1;drop")
        assert check.ok is False
        assert check.keyword == ";drop"

    def test_case_insensitive(self):
        assert validate_security("a = 1; DrOp TABLE x").ok is False

    def test_keyword_embedded_in_identifier_is_rejected(self):
        # Over-approximation: "last_update " contains "update "
        assert validate_security("last_update = now()").ok is False

    def test_rejection_is_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="whereguard.security.where_guard"):
            validate_security("a=1; DROP TABLE x")
        assert "drop" in caplog.text


class TestStructureCheck:
    """Tests for the sqlparse structural check."""

    def test_stacked_statements_rejected(self):
        check = validate_security("a = 1; b = 2")
        assert check.ok is False
        assert check.keyword == ";"

    def test_line_comment_rejected(self):
        check = validate_security("a = 1 -- AND tenant_id = 7")
        assert check.ok is False
        assert check.keyword == "--"

    def test_block_comment_rejected(self):
        assert validate_security("a = 1 /* hidden */").ok is False

    def test_comment_markers_inside_literals_allowed(self):
        assert validate_security("name = '--not a comment'").ok is True

    def test_semicolon_inside_literal_allowed(self):
        assert validate_security("name = 'a;b'").ok is True

    def test_structure_check_can_be_disabled(self):
        assert validate_security("a = 1 -- note", strict=False).ok is True

    def test_structure_check_disabled_by_setting(self, monkeypatch):
        from whereguard.core.config import clear_settings_cache

        monkeypatch.setenv("WHEREGUARD_STRICT_STRUCTURE", "no")
        clear_settings_cache()
        assert validate_security("a = 1 -- note").ok is True


class TestMaxLength:
    def test_long_clause_rejected(self):
        check = validate_security("a = 1 AND b = 2", max_length=5)
        assert check.ok is False
        assert "exceeds" in check.reason
        assert check.oversized is True

    def test_zero_disables_limit(self):
        assert validate_security("a = 1" * 2000, max_length=0, strict=False).ok is True

    def test_no_limit_by_default(self):
        """Long filters pass unless a cap is configured."""
        clause = "users.id IN (" + ", ".join(str(i) for i in range(1000)) + ")"
        assert len(clause) > 4000
        assert validate_security(clause).ok is True

    def test_denylist_rejection_is_not_oversized(self):
        assert validate_security("a=1; DROP TABLE x").oversized is False


class TestSecurityCheck:
    def test_truthiness(self):
        assert SecurityCheck(ok=True)
        assert not SecurityCheck(ok=False, keyword="drop")

    def test_is_safe_where_clause(self):
        assert is_safe_where_clause("status = 'active'") is True
        assert is_safe_where_clause("status = 'active'; DROP TABLE users") is False
