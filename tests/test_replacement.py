"""
Tests for REPLACE template parsing.
"""

import re

from sql_masker.masking.replacement import GroupRef, compile_replacement, parse_template


class TestParseTemplate:
    """Tests for parse_template."""

    def test_literal_only(self):
        assert parse_template("***", 0) == ["***"]

    def test_numbered_and_named_groups(self):
        assert parse_template("$1-${tail}", 2) == [GroupRef(1), "-", GroupRef("tail")]

    def test_extra_digits_only_while_group_exists(self):
        assert parse_template("$10", 1) == [GroupRef(1), "0"]
        assert parse_template("$10", 10) == [GroupRef(10)]

    def test_escaped_dollar(self):
        assert parse_template("\\$1", 1) == ["$1"]

    def test_trailing_dollar_is_literal(self):
        assert parse_template("cost$", 0) == ["cost$"]

    def test_unclosed_brace_is_literal(self):
        assert parse_template("${name", 0) == ["${name"]


class TestCompileReplacement:
    """Tests for compile_replacement."""

    def test_swap_groups(self):
        pattern = re.compile(r"(\d{3})(\d{4})")

        result = pattern.sub(compile_replacement(pattern, "$2$1"), "1234567")

        assert result == "4567123"

    def test_missing_group_expands_to_empty(self):
        pattern = re.compile(r"(a)|(b)")

        result = pattern.sub(compile_replacement(pattern, "[$2]"), "ab")

        assert result == "[][b]"

    def test_unknown_named_group_expands_to_empty(self):
        pattern = re.compile(r"x")

        assert pattern.sub(compile_replacement(pattern, "${nope}y"), "axb") == "ayb"
