"""
DB-API driver implementation.

This module defines the DBAPIDriver class, which implements the Driver
interface over any PEP 249 connection (sqlite3, psycopg, pymysql, ...).
Statements for table reads are generated with sqlglot so identifiers and
paging clauses are rendered in the connection's dialect.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from sqlglot import expressions as exp

from sql_masker.driver.base import Driver, Rows
from sql_masker.exceptions import FetchError


class DBAPIDriver(Driver):
    """Driver over a PEP 249 connection.

    Attributes:
        connection: The DB-API connection. The driver does not own it;
            ``close`` only closes it when ``owns_connection`` is True.
        dialect: sqlglot dialect used to render generated statements.
        autocommit: If True, non-query statements are committed right away.

    Example:
        >>> import sqlite3
        >>> conn = sqlite3.connect(":memory:")
        >>> driver = DBAPIDriver(conn, dialect="sqlite")
        >>> driver.execute("CREATE TABLE t (id INTEGER, name TEXT)")
        -1
        >>> driver.get_columns("t")
        ['id', 'name']
    """

    def __init__(
        self,
        connection: Any,
        dialect: Optional[str] = None,
        autocommit: bool = False,
        owns_connection: bool = False,
    ) -> None:
        if connection is None:
            raise ValueError("Connection must not be None.")
        self.connection = connection
        self.dialect = dialect
        self.autocommit = autocommit
        self.owns_connection = owns_connection
        # PEP 249 optional extension: connection.Error
        self._error_type: type = getattr(connection, "Error", Exception)

    def execute(self, sql: str) -> Union[Rows, int]:
        """Execute a statement and return rows or the affected row count."""
        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(sql)
                if cursor.description is None:
                    rowcount = cursor.rowcount
                    if self.autocommit:
                        self.connection.commit()
                    return rowcount
                return _rows(cursor)
            finally:
                cursor.close()
        except self._error_type as e:
            raise FetchError(f"Error executing SQL: {e}. SQL: {sql[:200]}") from e

    def get_columns(self, table: str, schema: Optional[str] = None) -> list[str]:
        query = (
            exp.select("*")
            .from_(_table(table, schema))
            .limit(0)
            .sql(dialect=self.dialect)
        )
        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(query)
                return [description[0] for description in cursor.description or ()]
            finally:
                cursor.close()
        except self._error_type as e:
            raise FetchError(
                f"Error reading columns of {_display(table, schema)}: {e}",
                table=table,
                schema=schema,
            ) from e

    def fetch(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
        schema: Optional[str] = None,
    ) -> Rows:
        projection = [exp.column(column) for column in columns] if columns else ["*"]
        query = exp.select(*projection).from_(_table(table, schema))
        skip = max(offset, 0)
        if limit is not None:
            query = query.limit(limit)
            if skip:
                query = query.offset(skip)
                skip = 0

        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(query.sql(dialect=self.dialect))
                rows = _rows(cursor)
            finally:
                cursor.close()
        except self._error_type as e:
            raise FetchError(
                f"Error scanning table {_display(table, schema)}: {e}",
                table=table,
                schema=schema,
            ) from e

        # OFFSET without LIMIT is not portable, skip client-side instead
        return rows[skip:] if skip else rows

    def count(self, table: str, schema: Optional[str] = None) -> int:
        query = (
            exp.select("COUNT(*) AS total")
            .from_(_table(table, schema))
            .sql(dialect=self.dialect)
        )
        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(query)
                row = cursor.fetchone()
            finally:
                cursor.close()
        except self._error_type as e:
            raise FetchError(
                f"Error counting rows of {_display(table, schema)}: {e}",
                table=table,
                schema=schema,
            ) from e
        return int(row[0]) if row else 0

    def close(self) -> None:
        if self.owns_connection:
            self.connection.close()


def _table(table: str, schema: Optional[str]) -> exp.Table:
    return exp.table_(table, db=schema or None)


def _display(table: str, schema: Optional[str]) -> str:
    return f"{schema}.{table}" if schema else table


def _rows(cursor: Any) -> Rows:
    labels = [description[0] for description in cursor.description]
    return [dict(zip(labels, row)) for row in cursor.fetchall()]
