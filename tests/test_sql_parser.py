"""
Tests for SQLParser and ScriptSplitter.
"""

import pytest
from sqlglot import expressions as exp

from sql_masker import ParseError, ScanConfig, ScriptSplitter, SQLParser
from sql_masker.parser import is_select_shaped


class TestSQLParser:
    """Tests for SQLParser."""

    def test_parse_select(self):
        ast = SQLParser().parse("SELECT a FROM t")

        assert isinstance(ast, exp.Select)

    def test_parse_union(self):
        ast = SQLParser().parse("SELECT a FROM t UNION ALL SELECT b FROM u")

        assert isinstance(ast, exp.Union)

    @pytest.mark.parametrize("operator", ["INTERSECT", "EXCEPT"])
    def test_parse_other_set_operations(self, operator):
        ast = SQLParser().parse(f"SELECT a FROM t {operator} SELECT b FROM u")

        assert is_select_shaped(ast)

    def test_parse_with_dialect(self):
        ast = SQLParser(ScanConfig(dialect="mysql")).parse("SELECT `a` FROM t")

        assert isinstance(ast, exp.Select)

    def test_reject_update(self):
        with pytest.raises(ParseError, match="Only SELECT"):
            SQLParser().parse("UPDATE t SET a = 1")


class TestScriptSplitter:
    """Tests for ScriptSplitter."""

    def setup_method(self):
        self.splitter = ScriptSplitter()

    def test_split(self):
        statements = self.splitter.split_statements("SELECT 1; ; SELECT 2;")

        assert statements == ["SELECT 1", "SELECT 2"]

    def test_split_keeps_statement_types(self):
        parts = self.splitter.split("CREATE TABLE t (a INT); SELECT a FROM t")

        assert isinstance(parts[0][0], exp.Create)
        assert isinstance(parts[1][0], exp.Select)

    def test_empty_script(self):
        with pytest.raises(ParseError, match="empty"):
            self.splitter.split("  ")

    def test_bad_script(self):
        with pytest.raises(ParseError, match="Failed to parse"):
            self.splitter.split("SELECT (1; SELECT 2")

    def test_split_keeps_statement_text_verbatim(self):
        script = "select  a   from t where x = 'a;b';\nUPDATE t SET a = 1"

        statements = self.splitter.split_statements(script)

        assert statements == [
            "select  a   from t where x = 'a;b'",
            "UPDATE t SET a = 1",
        ]

    def test_split_keeps_dialect_syntax(self):
        parts = self.splitter.split("SELECT `a` FROM t LIMIT 2", "mysql")

        assert parts[0][1] == "SELECT `a` FROM t LIMIT 2"
