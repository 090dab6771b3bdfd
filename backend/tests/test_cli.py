"""Tests for the sanitize_where command line tool."""

from __future__ import annotations

import io

from tools.sanitize_where import main
from whereguard.core.config import clear_settings_cache


class TestSanitizeWhereCli:
    """Tests for tools.sanitize_where.main."""

    def test_sanitize(self, capsys):
        assert main(["--table", "users", "wrong.status = 'active' AND 1=1"]) == 0
        assert capsys.readouterr().out.strip() == "users.status = 'active'"

    def test_qualify(self, capsys):
        assert main(["--table", "users", "--qualify", "(status = 'a' OR status = 'b')"]) == 0
        assert capsys.readouterr().out.strip() == "(users.status = 'a' OR users.status = 'b')"

    def test_allowed_prefix(self, capsys):
        assert main(["--table", "users", "--allow", "d", "d.status = 1"]) == 0
        assert capsys.readouterr().out.strip() == "d.status = 1"

    def test_rejected_clause_prints_empty(self, capsys):
        assert main(["--table", "users", "a=1; DROP TABLE x"]) == 0
        assert capsys.readouterr().out.strip() == ""

    def test_check_ok(self, capsys):
        assert main(["--check", "status = 'active'"]) == 0
        assert capsys.readouterr().out.strip() == "OK"

    def test_check_rejected(self, capsys):
        assert main(["--check", "a=1; DROP TABLE x"]) == 1
        assert capsys.readouterr().out.startswith("REJECTED")

    def test_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("status = 'a' AND true\n"))
        assert main(["--table", "users", "-"]) == 0
        assert capsys.readouterr().out.strip() == "status = 'a'"

    def test_broken_registry(self, capsys, tmp_path):
        path = tmp_path / "columns.yaml"
        path.write_text("tables: 5\n", encoding="utf-8")
        assert main(["--table", "users", "--schema", str(path), "status = 1"]) == 2
        assert "Error" in capsys.readouterr().err

    def test_clause_too_long(self, capsys, monkeypatch):
        monkeypatch.setenv("WHEREGUARD_MAX_CLAUSE_LENGTH", "10")
        clear_settings_cache()
        assert main(["--table", "users", "users.status = 'active'"]) == 1
        assert "exceeds" in capsys.readouterr().err
