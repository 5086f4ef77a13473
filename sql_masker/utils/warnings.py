"""
Warning system for masking and scanning.

This module defines warning collection functionality for the sql_masker
package. Problems that are tolerated rather than raised (an unparseable
query, a malformed pattern, a value the rule cannot handle) are recorded
here so callers can report them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class MaskingWarning:
    """Warning or error message recorded during masking or scanning.

    Attributes:
        level: Severity level ("INFO", "WARNING", "ERROR").
        message: Warning or error message text.
        context: Optional context information (e.g., SQL snippet or pattern).

    Example:
        >>> warning = MaskingWarning(
        ...     level="WARNING",
        ...     message="Skipping malformed pattern",
        ...     context="[a-z",
        ... )
        >>> warning.level
        'WARNING'
    """

    level: str
    message: str
    context: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate warning level."""
        valid_levels = ["INFO", "WARNING", "ERROR"]
        if self.level not in valid_levels:
            raise ValueError(
                f"Invalid warning level: {self.level}. "
                f"Must be one of {valid_levels}"
            )


class WarningCollector:
    """Collects warnings during masking and scanning.

    Attributes:
        warnings: List of MaskingWarning objects collected so far.

    Example:
        >>> collector = WarningCollector()
        >>> collector.add("WARNING", "Pattern skipped")
        >>> collector.has_errors()
        False
        >>> len(collector.get_all())
        1
    """

    def __init__(self) -> None:
        """Initialize a WarningCollector."""
        self.warnings: list[MaskingWarning] = []

    def add(
        self, level: str, message: str, context: Optional[str] = None
    ) -> None:
        """Add a warning or error message.

        Args:
            level: Severity level ("INFO", "WARNING", "ERROR").
            message: Warning or error message text.
            context: Optional context information.
        """
        self.warnings.append(
            MaskingWarning(level=level, message=message, context=context)
        )

    def extend(self, other: WarningCollector) -> None:
        """Append every warning held by another collector."""
        self.warnings.extend(other.warnings)

    def has_errors(self) -> bool:
        """Check if any error-level warnings exist."""
        return any(warning.level == "ERROR" for warning in self.warnings)

    def get_all(self) -> list[MaskingWarning]:
        """Get all collected warnings, in the order they were added.

        Returns:
            A copy of the collected MaskingWarning list.
        """
        return self.warnings.copy()

    def clear(self) -> None:
        """Drop every collected warning."""
        self.warnings.clear()

    def __len__(self) -> int:
        return len(self.warnings)
