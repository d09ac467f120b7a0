"""Unit tests for placeholder conversion and statement interpolation."""

from __future__ import annotations

from row_binder.core.params import interpolate, normalize_placeholders, render_value


class TestNormalizePlaceholders:
    def test_qmark_unchanged(self) -> None:
        sql = "SELECT * FROM users WHERE id = ?"
        assert normalize_placeholders(sql, "qmark") == sql

    def test_format_conversion(self) -> None:
        sql = "SELECT * FROM users WHERE id = ? AND name = ?"
        assert normalize_placeholders(sql, "format") == (
            "SELECT * FROM users WHERE id = %s AND name = %s"
        )

    def test_string_literal_preserved(self) -> None:
        sql = "SELECT * FROM users WHERE note = 'why?' AND id = ?"
        assert normalize_placeholders(sql, "pyformat") == (
            "SELECT * FROM users WHERE note = 'why?' AND id = %s"
        )

    def test_percent_escaped(self) -> None:
        sql = "SELECT id % 2 FROM t WHERE name LIKE 'a%'"
        assert normalize_placeholders(sql, "format") == (
            "SELECT id %% 2 FROM t WHERE name LIKE 'a%%'"
        )


class TestInterpolate:
    def test_no_args(self) -> None:
        assert interpolate("DELETE FROM t", ()) == "DELETE FROM t"

    def test_values_rendered(self) -> None:
        sql = "INSERT INTO t VALUES (?, ?, ?, ?)"
        assert interpolate(sql, (1, "a", None, 2.5)) == "INSERT INTO t VALUES (1, 'a', NULL, 2.5)"

    def test_literal_question_mark_untouched(self) -> None:
        sql = "SELECT * FROM t WHERE a = '?' AND b = ?"
        assert interpolate(sql, (3,)) == "SELECT * FROM t WHERE a = '?' AND b = 3"

    def test_missing_args_keep_placeholder(self) -> None:
        assert interpolate("SELECT ?, ?", (1,)) == "SELECT 1, ?"

    def test_surplus_args_reported(self) -> None:
        assert interpolate("SELECT ?", (1, 2)) == "SELECT 1 [extra: 2]"


class TestRenderValue:
    def test_quotes_escaped(self) -> None:
        assert render_value("O'Neil") == "'O''Neil'"

    def test_bytes_as_hex(self) -> None:
        assert render_value(b"\x01\xff") == "X'01ff'"

    def test_bool(self) -> None:
        assert render_value(True) == "1"
        assert render_value(False) == "0"
