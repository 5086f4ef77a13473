"""
SQL Masker v1.0

Alias-aware data masking and sensitive data scanning for SQL query results.
Rules declared against base column names apply to any result column traced
back to them, however the query renamed it.

Example:
    >>> from sql_masker import MaskingOrchestrator, MaskRule
    >>> orchestrator = MaskingOrchestrator()
    >>> rows = [{"contact": "13812345678"}]
    >>> orchestrator.mask_rows(
    ...     rows, "SELECT phone AS contact FROM users", {"phone": MaskRule(3, 7)}
    ... )
    [{'contact': '138****5678'}]
"""

from sql_masker.version import __version__, __version_info__

__author__ = "SQL Masker Contributors"

from sql_masker.analyzer.alias_graph_builder import AliasGraphBuilder
from sql_masker.analyzer.closure_resolver import ClosureResolver
from sql_masker.analyzer.column_matcher import ColumnMatcher
from sql_masker.driver.base import Driver
from sql_masker.driver.dbapi import DBAPIDriver
from sql_masker.driver.memory import InMemoryDriver
from sql_masker.exceptions import (
    FetchError,
    InvalidRuleError,
    MaskingError,
    ParseError,
    PatternError,
)
from sql_masker.graph.rename_graph import RenameGraph
from sql_masker.masking.obfuscation_engine import ObfuscationEngine
from sql_masker.masking.orchestrator import MaskingOrchestrator
from sql_masker.models import ClosureMap
from sql_masker.models.config import ErrorMode, ScanConfig
from sql_masker.models.obfuscation_rule import (
    AddNoiseRule,
    GeneralizeRule,
    MaskRule,
    NoOpRule,
    ObfuscationMethod,
    ObfuscationRule,
    ReplaceRule,
    TruncateRule,
    load_rules,
    rule_from_dict,
    rule_to_dict,
)
from sql_masker.models.sensitive_column import SensitiveColumn
from sql_masker.parser.script_splitter import ScriptSplitter
from sql_masker.parser.sql_parser import SQLParser
from sql_masker.scanner.sensitive_scanner import SensitiveScanner
from sql_masker.service import SecureQueryService
from sql_masker.utils.warnings import MaskingWarning, WarningCollector

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Alias analysis
    "AliasGraphBuilder",
    "ClosureResolver",
    "ColumnMatcher",
    "RenameGraph",
    "ClosureMap",
    # Masking
    "MaskingOrchestrator",
    "ObfuscationEngine",
    # Scanning
    "SensitiveScanner",
    "SensitiveColumn",
    # Service
    "SecureQueryService",
    # Configuration
    "ScanConfig",
    "ErrorMode",
    # Rules
    "ObfuscationMethod",
    "ObfuscationRule",
    "NoOpRule",
    "MaskRule",
    "TruncateRule",
    "ReplaceRule",
    "GeneralizeRule",
    "AddNoiseRule",
    "load_rules",
    "rule_from_dict",
    "rule_to_dict",
    # Drivers
    "Driver",
    "DBAPIDriver",
    "InMemoryDriver",
    # Parser
    "SQLParser",
    "ScriptSplitter",
    # Warnings
    "MaskingWarning",
    "WarningCollector",
    # Exceptions
    "MaskingError",
    "ParseError",
    "PatternError",
    "InvalidRuleError",
    "FetchError",
]
