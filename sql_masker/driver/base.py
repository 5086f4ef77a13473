"""
Abstract database driver interface.

This module defines the Driver abstract base class, the collaborator through
which sql_masker reaches a database. Masking and scanning never talk to a
database directly; they only consume rows a driver returns.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Union

Rows = list[dict[str, Any]]


class Driver(ABC):
    """Abstract interface for database access.

    Implementations may block on network or disk; retries and timeouts are
    their concern. Failures to read a table, view or query are reported as
    FetchError.

    Example:
        >>> class MyDriver(Driver):
        ...     def execute(self, sql): ...
        ...     def get_columns(self, table, schema=None): ...
        ...     def fetch(self, table, columns=None, offset=0, limit=None, schema=None): ...
        ...     def count(self, table, schema=None): ...
    """

    @abstractmethod
    def execute(self, sql: str) -> Union[Rows, int]:
        """Execute a statement.

        Returns:
            The result rows for a query, or the affected row count for any
            other statement.

        Raises:
            FetchError: If the statement fails.
        """

    @abstractmethod
    def get_columns(self, table: str, schema: Optional[str] = None) -> list[str]:
        """Return the column names of a table or view in catalog order.

        Raises:
            FetchError: If the table or view cannot be read.
        """

    @abstractmethod
    def fetch(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
        schema: Optional[str] = None,
    ) -> Rows:
        """Return rows of a table or view.

        Args:
            table: Table or view name.
            columns: Columns to select; None or empty selects all.
            offset: Number of leading rows to skip.
            limit: Maximum number of rows; None returns all.
            schema: Optional schema name.

        Raises:
            FetchError: If the table or view cannot be read.
        """

    @abstractmethod
    def count(self, table: str, schema: Optional[str] = None) -> int:
        """Return the number of rows in a table or view.

        Raises:
            FetchError: If the table or view cannot be read.
        """

    def column_type(
        self, table: str, column: str, schema: Optional[str] = None
    ) -> Optional[str]:
        """Return the declared type name of a column (optional).

        The default implementation returns None, meaning the type is not
        known to this driver.
        """
        return None

    def close(self) -> None:
        """Release driver resources (optional)."""
        return None
