"""
SQL parser implementation.

This module defines the SQLParser class, which converts SQL strings to
sqlglot AST objects for alias analysis.
"""

from typing import Optional

import sqlglot
from sqlglot import expressions
from sqlglot.errors import SqlglotError

from sql_masker.exceptions import ParseError
from sql_masker.models.config import ScanConfig


# UNION, INTERSECT and EXCEPT. Older sqlglot releases derive the last two
# from Union, newer ones make all three siblings under SetOperation.
SET_OPERATIONS = (expressions.Union, expressions.Intersect, expressions.Except)


def is_select_shaped(ast: Optional[sqlglot.Expression]) -> bool:
    """Check if the AST is a SELECT or a set operation over SELECTs.

    Example:
        >>> is_select_shaped(sqlglot.parse_one("SELECT id FROM users"))
        True
        >>> is_select_shaped(sqlglot.parse_one("DELETE FROM users"))
        False
    """
    if isinstance(ast, expressions.Subquery):
        ast = ast.this
    return isinstance(ast, (expressions.Select, *SET_OPERATIONS))


class SQLParser:
    """SQL parser that converts SQL strings to AST.

    Attributes:
        config: ScanConfig supplying the sqlglot dialect.

    Example:
        >>> parser = SQLParser(ScanConfig())
        >>> ast = parser.parse("SELECT id AS user_id FROM users")
        >>> isinstance(ast, expressions.Select)
        True
    """

    def __init__(self, config: Optional[ScanConfig] = None) -> None:
        self.config = config or ScanConfig()

    def parse(self, sql: str) -> sqlglot.Expression:
        """Parse a SQL string into a SELECT-shaped AST.

        Args:
            sql: SQL string to parse.

        Returns:
            sqlglot expression for the statement (a Select or a set operation).

        Raises:
            ParseError: If the SQL is empty, cannot be parsed, or is not a
                SELECT statement.
        """
        if not sql or not sql.strip():
            raise ParseError("SQL string cannot be empty", sql)

        try:
            ast = sqlglot.parse_one(sql, read=self.config.dialect)
        except SqlglotError as e:
            raise ParseError(
                f"SQL parsing error: {e}. SQL: {sql[:200]}", sql
            ) from e

        if ast is None:
            raise ParseError(
                f"Failed to parse SQL: {sql[:200]}. "
                "The SQL might be invalid or unsupported.",
                sql,
            )

        if not is_select_shaped(ast):
            raise ParseError(
                f"Only SELECT statements are supported. "
                f"Got: {type(ast).__name__}. SQL: {sql[:100]}",
                sql,
            )

        return ast
