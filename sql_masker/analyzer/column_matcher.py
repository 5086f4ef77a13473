"""
Column matcher.

This module defines the ColumnMatcher class, which decides whether a result
column of a query denotes a given base column, looking through any depth of
aliasing recorded in a closure map.
"""

from typing import Optional

from sqlglot import expressions as exp

from sql_masker.models import ClosureMap
from sql_masker.models.config import ScanConfig


class ColumnMatcher:
    """Alias-transparent column name matching.

    A result column matches a base column if the names are equal, or if the
    base column is reachable from the result column in the closure map. When
    ``config.alias_resolution_enabled`` is False only equality is checked.
    When ``config.case_sensitive`` is False both names are lower-cased first.

    Quoted aliases are stored in the closure map with their quotes, while
    databases label result columns without them. A result column with no
    closure entry of its own is therefore also looked up in its quoted form
    (rendered for ``config.dialect``).

    Attributes:
        config: ScanConfig read on every call.

    Example:
        >>> matcher = ColumnMatcher()
        >>> closure = {"fn1": {"fn", "col"}, "fn": {"col"}}
        >>> matcher.matches("fn1", "col", closure)
        True
        >>> matcher.matches("fn1", "other", closure)
        False
    """

    def __init__(self, config: Optional[ScanConfig] = None) -> None:
        self.config = config or ScanConfig()

    def matches(
        self,
        result_column: str,
        base_column: str,
        closure: Optional[ClosureMap] = None,
    ) -> bool:
        """Check whether ``result_column`` denotes ``base_column``.

        Args:
            result_column: Column name as it appears in the result rows.
            base_column: Column name a rule was declared against.
            closure: Closure map of the query that produced the rows.

        Returns:
            True on a direct or alias-resolved match.
        """
        if not self.config.case_sensitive:
            result_column = result_column.lower()
            base_column = base_column.lower()

        if result_column == base_column:
            return True

        if not self.config.alias_resolution_enabled or not closure:
            return False

        reachable = closure.get(result_column)
        if reachable is None:
            reachable = closure.get(self.quoted(result_column), ())
        return base_column in reachable or self.quoted(base_column) in reachable

    def quoted(self, name: str) -> str:
        """Return ``name`` as a quoted identifier in the configured dialect."""
        rendered = exp.to_identifier(name, quoted=True).sql(dialect=self.config.dialect)
        return rendered if self.config.case_sensitive else rendered.lower()
