"""
Secure query service.

This module defines the SecureQueryService class, the entry point that ties
a Driver to masking and scanning: queries, table reads, paged reads and
scripts come back with obfuscation rules applied, and tables can be scanned
for sensitive data.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from sqlglot import expressions as exp

from sql_masker.driver.base import Driver, Rows
from sql_masker.masking.obfuscation_engine import ObfuscationEngine
from sql_masker.masking.orchestrator import MaskingOrchestrator
from sql_masker.models.config import ScanConfig
from sql_masker.models.obfuscation_rule import ObfuscationRule
from sql_masker.models.sensitive_column import SensitiveColumn
from sql_masker.parser.script_splitter import ScriptSplitter
from sql_masker.parser.sql_parser import is_select_shaped
from sql_masker.scanner.sensitive_scanner import SensitiveScanner
from sql_masker.utils.warnings import MaskingWarning, WarningCollector

NULL_DRIVER_ERROR = "Driver must not be None."
NULL_TABLE_OR_VIEW_NAME_ERROR = "Table or view name must not be None."
NULL_SQL_ERROR = "Sql must not be None."
NULL_SQL_SCRIPT_ERROR = "Sql script must not be None."
NULL_OBFUSCATION_RULES_ERROR = "Obfuscation rules must not be None."
NULL_REGEX_LIST_ERROR = "Regex list must not be None."


class SecureQueryService:
    """Masked data access and sensitive data scanning over a Driver.

    Attributes:
        driver: Driver used for every database access.
        config: ScanConfig shared by the orchestrator and the scanner.
        orchestrator: MaskingOrchestrator applying rules to results.
        scanner: SensitiveScanner used by ``scan_table_data``.

    Example:
        >>> service = SecureQueryService(driver)
        >>> rows = service.execute_query_with_mask(
        ...     "SELECT phone AS contact FROM users",
        ...     {"phone": MaskRule(start=3, end=7)},
        ... )
    """

    def __init__(
        self,
        driver: Driver,
        config: Optional[ScanConfig] = None,
        engine: Optional[ObfuscationEngine] = None,
    ) -> None:
        if driver is None:
            raise ValueError(NULL_DRIVER_ERROR)
        self.driver = driver
        self.config = config or ScanConfig()
        self.orchestrator = MaskingOrchestrator(self.config, engine)
        self.scanner = SensitiveScanner(driver, self.config)
        self.splitter = ScriptSplitter()

    def execute_query_with_mask(
        self, sql: str, rules: Mapping[str, ObfuscationRule]
    ) -> Rows:
        """Execute a query and mask its rows.

        Raises:
            ValueError: If ``sql`` or ``rules`` is None.
            FetchError: If the driver fails.
        """
        if sql is None:
            raise ValueError(NULL_SQL_ERROR)
        if rules is None:
            raise ValueError(NULL_OBFUSCATION_RULES_ERROR)

        result = self.driver.execute(sql)
        if isinstance(result, int):
            return [{"rows": result}]
        self.orchestrator.mask_rows(result, sql, rules)
        return result

    def get_data_with_mask(
        self,
        table: str,
        rules: Mapping[str, ObfuscationRule],
        schema: Optional[str] = None,
    ) -> Rows:
        """Return every row of a table or view with rules applied."""
        if table is None:
            raise ValueError(NULL_TABLE_OR_VIEW_NAME_ERROR)
        if rules is None:
            raise ValueError(NULL_OBFUSCATION_RULES_ERROR)

        rows = self.driver.fetch(table, schema=schema)
        # Plain table reads carry no aliases
        self.orchestrator.mask_rows(rows, None, rules)
        return rows

    def get_data_with_page_and_mask(
        self,
        table: str,
        rules: Mapping[str, ObfuscationRule],
        columns: Optional[Sequence[str]] = None,
        page_offset: int = 0,
        page_size: int = 0,
        schema: Optional[str] = None,
    ) -> dict[str, Any]:
        """Return one page of a table or view with rules applied.

        Args:
            table: Table or view name.
            rules: Obfuscation rule per base column name.
            columns: Columns to select; None or empty selects all.
            page_offset: 1-based page number. Values <= 0 disable paging.
            page_size: Rows per page. Values <= 0 disable paging.
            schema: Optional schema name.

        Returns:
            ``{"results": rows, "total_pages": n}``; without paging all rows
            are returned and ``total_pages`` is 1.
        """
        if table is None:
            raise ValueError(NULL_TABLE_OR_VIEW_NAME_ERROR)
        if rules is None:
            raise ValueError(NULL_OBFUSCATION_RULES_ERROR)

        if page_offset <= 0 or page_size <= 0:
            rows = self.driver.fetch(table, columns=columns, schema=schema)
            total_pages = 1
        else:
            total_records = self.driver.count(table, schema=schema)
            total_pages = -(-total_records // page_size)
            rows = self.driver.fetch(
                table,
                columns=columns,
                offset=(page_offset - 1) * page_size,
                limit=page_size,
                schema=schema,
            )

        self.orchestrator.mask_rows(rows, None, rules)
        return {"results": rows, "total_pages": total_pages}

    def execute_script_with_mask(
        self, script: str, rules: Mapping[str, ObfuscationRule]
    ) -> list[Rows]:
        """Execute every statement of a script and mask query results.

        Returns:
            One entry per statement: the masked rows of a query, or
            ``[{"rows": n}]`` for any other statement.

        Raises:
            ValueError: If ``script`` or ``rules`` is None.
            ParseError: If the script cannot be split into statements.
            FetchError: If the driver fails on a statement.
        """
        if script is None:
            raise ValueError(NULL_SQL_SCRIPT_ERROR)
        if rules is None:
            raise ValueError(NULL_OBFUSCATION_RULES_ERROR)

        results: list[Rows] = []
        for ast, sql in self.splitter.split(script, self.config.dialect):
            result = self.driver.execute(sql)
            if isinstance(result, int):
                results.append([{"rows": result}])
                continue
            if isinstance(ast, exp.Subquery) or is_select_shaped(ast):
                self.orchestrator.mask_rows(result, sql, rules)
            else:
                self.orchestrator.mask_rows(result, None, rules)
            results.append(result)
        return results

    def scan_table_data(
        self,
        table: str,
        regex_list: Sequence[str],
        schema: Optional[str] = None,
    ) -> list[SensitiveColumn]:
        """Scan a table or view for sensitive data.

        Raises:
            ValueError: If ``table`` or ``regex_list`` is None.
            FetchError: If the driver cannot read the table or view.
        """
        if table is None:
            raise ValueError(NULL_TABLE_OR_VIEW_NAME_ERROR)
        if regex_list is None:
            raise ValueError(NULL_REGEX_LIST_ERROR)
        return self.scanner.scan(table, regex_list, schema=schema)

    def get_warnings(self) -> list[MaskingWarning]:
        """Return every warning recorded by masking and scanning so far."""
        collected = WarningCollector()
        collected.extend(self.orchestrator.warnings)
        collected.extend(self.orchestrator.engine.warnings)
        collected.extend(self.scanner.warnings)
        return collected.get_all()
