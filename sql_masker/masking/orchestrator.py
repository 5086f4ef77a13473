"""
Masking orchestrator.

This module defines the MaskingOrchestrator class, which combines alias
resolution and the obfuscation engine: given the rows a query returned, the
query text and rules keyed by base column name, it rewrites every cell whose
result column traces back to a ruled base column.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional, Sequence

from sql_masker.analyzer.alias_graph_builder import AliasGraphBuilder
from sql_masker.analyzer.closure_resolver import ClosureResolver
from sql_masker.analyzer.column_matcher import ColumnMatcher
from sql_masker.exceptions import ParseError
from sql_masker.masking.obfuscation_engine import ObfuscationEngine
from sql_masker.models import ClosureMap
from sql_masker.models.config import ErrorMode, ScanConfig
from sql_masker.models.obfuscation_rule import ObfuscationRule
from sql_masker.utils.warnings import WarningCollector

Row = MutableMapping[str, Any]


class MaskingOrchestrator:
    """Apply obfuscation rules to query results, independent of aliasing.

    Responsibilities:
    1. Build the closure map of the query (when alias resolution is enabled)
    2. Pick, for every result column, the first rule whose base column it
       matches
    3. Rewrite matching cells in place

    Rules for base columns the query does not return are ignored. When a
    result column matches several rules, the first one in the mapping's
    iteration order is applied and the rest are skipped.

    Attributes:
        config: ScanConfig read on every call.
        engine: ObfuscationEngine applying the rules.
        warnings: Collector for tolerated problems (e.g. unparseable SQL).

    Usage:
        orchestrator = MaskingOrchestrator()
        rows = orchestrator.mask_rows(
            rows,
            "SELECT phone AS p FROM users",
            {"phone": MaskRule(start=3, end=7)},
        )
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        engine: Optional[ObfuscationEngine] = None,
    ) -> None:
        self.config = config or ScanConfig()
        self.engine = engine or ObfuscationEngine()
        self.builder = AliasGraphBuilder(self.config)
        self.resolver = ClosureResolver()
        self.matcher = ColumnMatcher(self.config)
        self.warnings = WarningCollector()

    def mask_rows(
        self,
        rows: Sequence[Row],
        sql: Optional[str],
        rules: Mapping[str, ObfuscationRule],
    ) -> Sequence[Row]:
        """Mask ``rows`` in place and return them.

        Args:
            rows: Result rows as column-name to value mappings.
            sql: The query that produced the rows. None disables alias
                resolution for this call.
            rules: Obfuscation rule per base column name.

        Returns:
            The same ``rows`` sequence, with matching cells overwritten.

        Raises:
            ParseError: If the query cannot be parsed and
                ``config.on_parse_error`` is ErrorMode.FAIL.
        """
        if not rows or not rules:
            return rows

        closure = self.closure_of(sql)
        selected: dict[str, Optional[ObfuscationRule]] = {}

        for row in rows:
            for column in list(row.keys()):
                if column not in selected:
                    selected[column] = self.rule_for_column(column, rules, closure)
                rule = selected[column]
                if rule is not None:
                    row[column] = self.engine.apply(row[column], rule)

        return rows

    def rule_for_column(
        self,
        column: str,
        rules: Mapping[str, ObfuscationRule],
        closure: Optional[ClosureMap] = None,
    ) -> Optional[ObfuscationRule]:
        """Return the first rule whose base column ``column`` matches."""
        for base_column, rule in rules.items():
            if self.matcher.matches(column, base_column, closure):
                return rule
        return None

    def closure_of(self, sql: Optional[str]) -> ClosureMap:
        """Return the closure map of ``sql``, honoring the configuration.

        An empty map is returned when alias resolution is disabled, when no
        SQL is given, or when the SQL cannot be parsed and the configured
        error mode tolerates it.
        """
        if not self.config.alias_resolution_enabled or not sql:
            return {}

        try:
            graph = self.builder.build(sql)
        except ParseError as e:
            if self.config.on_parse_error == ErrorMode.FAIL:
                raise
            if self.config.on_parse_error == ErrorMode.WARN:
                self.warnings.add(
                    "WARNING",
                    f"Alias resolution skipped, matching exact names only: {e.message}",
                    sql[:200],
                )
            return {}

        return self.resolver.close_over(graph)
