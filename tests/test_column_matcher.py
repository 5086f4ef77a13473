"""
Tests for ColumnMatcher.
"""

from sql_masker import AliasGraphBuilder, ClosureResolver, ColumnMatcher, ScanConfig


def closure_of(sql, config=None):
    graph = AliasGraphBuilder(config).build(sql)
    return ClosureResolver().close_over(graph)


class TestColumnMatcher:
    """Tests for ColumnMatcher."""

    def setup_method(self):
        self.config = ScanConfig()
        self.matcher = ColumnMatcher(self.config)

    def test_direct_alias(self):
        closure = closure_of("SELECT c1 AS a1, c2 AS a2 FROM t")

        assert self.matcher.matches("a1", "c1", closure)
        assert not self.matcher.matches("a2", "c1", closure)

    def test_self_alias_matches_by_equality(self):
        closure = closure_of("SELECT c1 AS c1 FROM t")

        assert closure == {}
        assert self.matcher.matches("c1", "c1", closure)

    def test_multi_level_alias(self):
        closure = closure_of("SELECT sub.fn AS fn1 FROM (SELECT col AS fn FROM t) sub")

        assert self.matcher.matches("fn1", "col", closure)
        assert self.matcher.matches("fn1", "fn", closure)
        assert not self.matcher.matches("fn", "fn1", closure)

    def test_no_closure(self):
        assert self.matcher.matches("phone", "phone")
        assert not self.matcher.matches("p", "phone")

    def test_disabled_resolution_checks_equality_only(self):
        closure = closure_of("SELECT phone AS p FROM users")

        self.config.alias_resolution_enabled = False

        assert not self.matcher.matches("p", "phone", closure)
        assert self.matcher.matches("phone", "phone", closure)

    def test_config_read_at_call_time(self):
        closure = closure_of("SELECT phone AS p FROM users")

        self.config.alias_resolution_enabled = False
        assert not self.matcher.matches("p", "phone", closure)

        self.config.alias_resolution_enabled = True
        assert self.matcher.matches("p", "phone", closure)

    def test_case_sensitive_by_default(self):
        assert not self.matcher.matches("Phone", "phone")

    def test_case_insensitive(self):
        config = ScanConfig(case_sensitive=False)
        matcher = ColumnMatcher(config)
        closure = closure_of("SELECT Phone AS P FROM users", config)

        assert matcher.matches("PHONE", "phone")
        assert matcher.matches("P", "PHONE", closure)

    def test_quoted_alias_matches_unquoted_result_label(self):
        """Databases label "Contact" as Contact in result rows."""
        closure = closure_of('SELECT phone AS "Contact" FROM users')

        assert self.matcher.matches("Contact", "phone", closure)
        assert not self.matcher.matches("Contact", "email", closure)

    def test_quoted_source_matches_unquoted_rule(self):
        closure = closure_of('SELECT "phone" AS contact FROM users')

        assert self.matcher.matches("contact", "phone", closure)
