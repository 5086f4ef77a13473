"""
Script splitter for SQL scripts.

This module defines the ScriptSplitter class, which splits SQL scripts
containing multiple statements into individual statements so each can be
executed and masked on its own.
"""

from typing import List, Optional, Tuple

import sqlglot
from sqlglot.errors import SqlglotError
from sqlglot.tokens import Token, TokenType

from sql_masker.exceptions import ParseError


class ScriptSplitter:
    """SQL script splitter.

    Usage:
        splitter = ScriptSplitter()
        statements = splitter.split("SELECT 1; SELECT 2;")
        # Returns: [(ast1, "SELECT 1"), (ast2, "SELECT 2")]
    """

    def split(
        self, script: str, dialect: Optional[str] = None
    ) -> List[Tuple[sqlglot.Expression, str]]:
        """Split SQL script.

        Args:
            script: SQL script text (may contain multiple statements).
            dialect: SQL dialect (None for sqlglot's default).

        Returns:
            List of (AST, sql) tuples. The SQL text is the statement exactly
            as written in the script, without its terminating semicolon, so
            it can be sent to the database unchanged.

        Raises:
            ParseError: If the script is empty or cannot be parsed.
        """
        if not script or not script.strip():
            raise ParseError("Script is empty or contains no valid SQL statements")

        try:
            tokens = sqlglot.tokenize(script, read=dialect)
        except SqlglotError as e:
            raise ParseError(f"Failed to parse SQL script: {e}", script) from e

        statements = []
        for chunk in _statement_tokens(tokens):
            # Token offsets are inclusive
            sql = script[chunk[0].start : chunk[-1].end + 1]
            try:
                ast = sqlglot.parse_one(sql, read=dialect)
            except SqlglotError as e:
                raise ParseError(f"Failed to parse SQL script: {e}", sql) from e
            if ast is not None:
                statements.append((ast, sql))

        if not statements:
            raise ParseError("Script is empty or contains no valid SQL statements")

        return statements

    def split_statements(self, script: str, dialect: Optional[str] = None) -> List[str]:
        """Split a script and return only the statement texts."""
        return [sql for _, sql in self.split(script, dialect)]


def _statement_tokens(tokens: List[Token]) -> List[List[Token]]:
    """Group tokens into statements at each semicolon, dropping empty ones."""
    chunks: List[List[Token]] = []
    current: List[Token] = []
    for token in tokens:
        if token.token_type == TokenType.SEMICOLON:
            if current:
                chunks.append(current)
            current = []
        else:
            current.append(token)
    if current:
        chunks.append(current)
    return chunks
