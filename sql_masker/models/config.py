"""
Configuration model for masking and scanning.

This module defines the ScanConfig class and ErrorMode enum, which control
how result columns are traced back to base columns, how many sample values
the scanner keeps, and how tolerated problems are reported.
"""

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Optional


class ErrorMode(str, Enum):
    """Enumeration of error handling modes.

    Attributes:
        FAIL: Raise an exception immediately when an error is encountered.
        WARN: Record a warning and continue processing.
        IGNORE: Silently continue processing.

    Example:
        >>> ErrorMode.values()
        ['fail', 'warn', 'ignore']
    """

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values."""
        return [member.value for member in cls]


DEFAULT_SAMPLE_LIMIT = 5


@dataclass
class ScanConfig:
    """Configuration settings for masking and scanning.

    A ScanConfig is passed to the orchestrator, matcher and scanner when they
    are created. They keep a reference to it and read its fields on every
    call, so changing a field on a held config changes subsequent calls.

    Attributes:
        sample_limit: Maximum number of matching values a SensitiveColumn
            keeps. Defaults to 5.
        alias_resolution_enabled: If True, result columns are traced back to
            base columns through the query's aliases. If False, only exact
            name equality is used. Defaults to True.
        dialect: sqlglot dialect used to read (and render) SQL. None lets
            sqlglot use its default dialect.
        case_sensitive: If False, names are lower-cased before comparison.
            Defaults to True.
        strip_identifier_quotes: If True, quoted identifiers lose their
            quotes when collected into the rename graph. Defaults to False,
            keeping names exactly as written.
        scan_row_limit: Maximum number of rows the scanner samples from a
            table. None samples every row the driver returns.
        on_parse_error: Behavior when a query cannot be parsed for alias
            resolution during masking. Defaults to ErrorMode.WARN, which
            falls back to exact-name matching.
        on_invalid_pattern: Behavior when a scan pattern fails to compile.
            Defaults to ErrorMode.WARN, which skips the pattern.

    Example:
        >>> config = ScanConfig(sample_limit=1)
        >>> config.alias_resolution_enabled
        True
        >>> ScanConfig.from_dict({"on_parse_error": "fail"}).on_parse_error
        <ErrorMode.FAIL: 'fail'>
    """

    sample_limit: int = DEFAULT_SAMPLE_LIMIT
    alias_resolution_enabled: bool = True
    dialect: Optional[str] = None
    case_sensitive: bool = True
    strip_identifier_quotes: bool = False
    scan_row_limit: Optional[int] = None
    on_parse_error: ErrorMode = ErrorMode.WARN
    on_invalid_pattern: ErrorMode = ErrorMode.WARN

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if isinstance(self.sample_limit, bool) or not isinstance(
            self.sample_limit, int
        ):
            raise TypeError("sample_limit must be an integer")
        if self.sample_limit < 0:
            raise ValueError("sample_limit must not be negative")
        if not isinstance(self.alias_resolution_enabled, bool):
            raise TypeError("alias_resolution_enabled must be a boolean")
        if self.dialect is not None and not isinstance(self.dialect, str):
            raise TypeError("dialect must be a string or None")
        if not isinstance(self.case_sensitive, bool):
            raise TypeError("case_sensitive must be a boolean")
        if not isinstance(self.strip_identifier_quotes, bool):
            raise TypeError("strip_identifier_quotes must be a boolean")
        if self.scan_row_limit is not None:
            if isinstance(self.scan_row_limit, bool) or not isinstance(
                self.scan_row_limit, int
            ):
                raise TypeError("scan_row_limit must be an integer or None")
            if self.scan_row_limit <= 0:
                raise ValueError("scan_row_limit must be positive")
        if not isinstance(self.on_parse_error, ErrorMode):
            raise TypeError("on_parse_error must be an ErrorMode instance")
        if not isinstance(self.on_invalid_pattern, ErrorMode):
            raise TypeError("on_invalid_pattern must be an ErrorMode instance")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanConfig":
        """Build a config from JSON-style data.

        Unknown keys are rejected; error modes may be given as their string
        values.

        Args:
            data: Mapping of field name to value.

        Returns:
            A validated ScanConfig.

        Raises:
            ValueError: If a key is unknown or an error mode value is invalid.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )

        values = dict(data)
        for key in ("on_parse_error", "on_invalid_pattern"):
            if key in values and not isinstance(values[key], ErrorMode):
                try:
                    values[key] = ErrorMode(str(values[key]).lower())
                except ValueError as e:
                    raise ValueError(
                        f"{key} must be one of {ErrorMode.values()}, "
                        f"got {values[key]!r}"
                    ) from e
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Export the config to a JSON-serializable dictionary."""
        data = asdict(self)
        data["on_parse_error"] = self.on_parse_error.value
        data["on_invalid_pattern"] = self.on_invalid_pattern.value
        return data
