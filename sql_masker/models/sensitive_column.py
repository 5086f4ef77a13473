"""
Sensitive column model.

This module defines the SensitiveColumn class, produced by the scanner for
every column whose sampled values match one of the supplied patterns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class SensitiveColumn:
    """A column found to contain values matching a sensitive-data pattern.

    Attributes:
        schema: Schema of the scanned table or view, if any.
        table: Name of the scanned table or view.
        column: Name of the matching column.
        regex: The pattern that matched.
        match_data: Matching values in row order, at most ``sample_limit``.

    Example:
        >>> col = SensitiveColumn(None, "users", "email", r"@")
        >>> col.qualified_name
        'users.email'
    """

    schema: Optional[str]
    table: str
    column: str
    regex: str
    match_data: list[Any] = field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        """Return ``schema.table.column``, omitting an empty schema."""
        parts = [self.schema, self.table, self.column]
        return ".".join(part for part in parts if part)

    def to_dict(self) -> dict[str, Any]:
        """Export the column to a dictionary."""
        return {
            "schema": self.schema,
            "table": self.table,
            "column": self.column,
            "regex": self.regex,
            "match_data": list(self.match_data),
        }
