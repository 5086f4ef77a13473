"""
In-memory driver implementation.

This module defines the InMemoryDriver class, which implements the Driver
interface over plain dictionaries. It is meant for tests and prototyping,
where a real database is not needed to exercise masking and scanning.
"""

import copy
import re
from typing import Any, Optional, Sequence

from sql_masker.driver.base import Driver, Rows
from sql_masker.exceptions import FetchError

_SELECT_ALL = re.compile(
    r"^\s*select\s+\*\s+from\s+([\w.]+)\s*;?\s*$", re.IGNORECASE
)


class InMemoryDriver(Driver):
    """Driver that serves tables from a dictionary.

    Attributes:
        tables: Mapping of table name (optionally ``schema.table``) to a
            definition with ``columns`` (catalog order), ``rows`` (list of
            dicts) and optional ``types`` (column -> type name).

    Example:
        >>> driver = InMemoryDriver({
        ...     "users": {
        ...         "columns": ["id", "email"],
        ...         "rows": [{"id": 1, "email": "a@b.com"}],
        ...     }
        ... })
        >>> driver.get_columns("users")
        ['id', 'email']
        >>> driver.count("users")
        1
    """

    def __init__(self, tables: dict[str, dict[str, Any]]) -> None:
        if tables is None:
            raise ValueError("tables cannot be None")
        if not isinstance(tables, dict):
            raise TypeError("tables must be a dictionary")
        self.tables = tables

    def _table(self, table: str, schema: Optional[str]) -> dict[str, Any]:
        key = f"{schema}.{table}" if schema else table
        if key not in self.tables:
            raise FetchError(f"Table not found: {key}", table=table, schema=schema)
        return self.tables[key]

    def execute(self, sql: str) -> Rows:
        """Serve ``SELECT * FROM <table>``; other statements are not supported."""
        match = _SELECT_ALL.match(sql or "")
        if not match:
            raise FetchError(f"InMemoryDriver only supports SELECT * FROM <table>: {sql}")
        name = match.group(1)
        schema, _, table = name.rpartition(".")
        return self.fetch(table, schema=schema or None)

    def get_columns(self, table: str, schema: Optional[str] = None) -> list[str]:
        return list(self._table(table, schema).get("columns", []))

    def fetch(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
        schema: Optional[str] = None,
    ) -> Rows:
        definition = self._table(table, schema)
        selected = list(columns) if columns else list(definition.get("columns", []))
        rows = definition.get("rows", [])
        end = None if limit is None else max(offset, 0) + limit
        return [
            {column: copy.deepcopy(row.get(column)) for column in selected}
            for row in rows[max(offset, 0) : end]
        ]

    def count(self, table: str, schema: Optional[str] = None) -> int:
        return len(self._table(table, schema).get("rows", []))

    def column_type(
        self, table: str, column: str, schema: Optional[str] = None
    ) -> Optional[str]:
        return self._table(table, schema).get("types", {}).get(column)
