"""
Sensitive data scanner.

This module defines the SensitiveScanner class, which samples the values of
a table or view and reports the columns whose values match one of an
ordered list of regular expressions.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Sequence

from sql_masker.driver.base import Driver, Rows
from sql_masker.exceptions import PatternError
from sql_masker.models.config import ErrorMode, ScanConfig
from sql_masker.models.sensitive_column import SensitiveColumn
from sql_masker.utils.warnings import WarningCollector


class SensitiveScanner:
    """Regex-driven sensitive column detection.

    Patterns are tried in list order and columns in catalog order. A column
    is attributed to at most one pattern: the first one that matches any of
    its sampled values. Each reported column keeps up to
    ``config.sample_limit`` of the values that matched, in row order.

    Attributes:
        driver: Driver used to read column names and sample rows.
        config: ScanConfig read on every call.
        warnings: Collector for skipped patterns.

    Usage:
        scanner = SensitiveScanner(driver)
        columns = scanner.scan("users", [EMAIL_REGEX, PHONE_REGEX])
        for column in columns:
            print(column.column, column.regex, column.match_data)
    """

    def __init__(self, driver: Driver, config: Optional[ScanConfig] = None) -> None:
        self.driver = driver
        self.config = config or ScanConfig()
        self.warnings = WarningCollector()

    def scan(
        self,
        table: str,
        regex_list: Sequence[str],
        schema: Optional[str] = None,
    ) -> list[SensitiveColumn]:
        """Scan a table or view for values matching ``regex_list``.

        Args:
            table: Table or view name.
            regex_list: Patterns, in priority order.
            schema: Optional schema name.

        Returns:
            One SensitiveColumn per matching column: all columns claimed by
            the first pattern, then those claimed by the second, and so on.

        Raises:
            FetchError: If the driver cannot read the table or view.
            PatternError: If a pattern fails to compile and
                ``config.on_invalid_pattern`` is ErrorMode.FAIL.
        """
        columns = self.driver.get_columns(table, schema=schema)
        rows = self.driver.fetch(
            table, columns=columns, limit=self.config.scan_row_limit, schema=schema
        )
        return self.scan_rows(rows, columns, regex_list, table=table, schema=schema)

    def scan_rows(
        self,
        rows: Rows,
        columns: Sequence[str],
        regex_list: Sequence[str],
        table: str = "",
        schema: Optional[str] = None,
    ) -> list[SensitiveColumn]:
        """Scan rows that were already fetched.

        Args:
            rows: Sampled rows as column-name to value mappings.
            columns: Column names in catalog order.
            regex_list: Patterns, in priority order.
            table: Table name recorded on the results.
            schema: Schema name recorded on the results.

        Returns:
            The matching columns, as described for ``scan``.
        """
        found: list[SensitiveColumn] = []
        claimed: set[str] = set()

        for regex in regex_list:
            pattern = self._compile(regex)
            if pattern is None:
                continue

            for column in columns:
                if column in claimed:
                    continue
                matches = self._matching_values(pattern, rows, column)
                if matches is None:
                    continue
                claimed.add(column)
                found.append(
                    SensitiveColumn(
                        schema=schema,
                        table=table,
                        column=column,
                        regex=regex,
                        match_data=matches,
                    )
                )

        return found

    def _matching_values(
        self, pattern: re.Pattern[str], rows: Rows, column: str
    ) -> Optional[list[Any]]:
        """Return sampled matches of ``column``, or None if nothing matched."""
        limit = self.config.sample_limit
        matches: list[Any] = []
        matched = False
        for row in rows:
            value = row.get(column)
            if value is None or not pattern.search(_as_text(value)):
                continue
            matched = True
            if len(matches) >= limit:
                break
            matches.append(value)
        return matches if matched else None

    def _compile(self, regex: str) -> Optional[re.Pattern[str]]:
        try:
            return re.compile(regex)
        except (re.error, TypeError) as e:
            if self.config.on_invalid_pattern == ErrorMode.FAIL:
                raise PatternError(
                    f"Invalid pattern {regex!r}: {e}", str(regex)
                ) from e
            if self.config.on_invalid_pattern == ErrorMode.WARN:
                self.warnings.add(
                    "WARNING", f"Skipping pattern that does not compile: {e}", str(regex)
                )
            return None


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)
