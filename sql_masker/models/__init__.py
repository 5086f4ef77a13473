"""
Data models for masking and scanning.

This package contains the core data structures of sql_masker: the scan
configuration, obfuscation rules, sensitive column records and the closure
map type.
"""

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

# Alias name -> every name reachable from it through rename edges.
ClosureMap = dict[str, set[str]]

__all__ = [
    "AddNoiseRule",
    "ClosureMap",
    "ErrorMode",
    "GeneralizeRule",
    "MaskRule",
    "NoOpRule",
    "ObfuscationMethod",
    "ObfuscationRule",
    "ReplaceRule",
    "ScanConfig",
    "SensitiveColumn",
    "TruncateRule",
    "load_rules",
    "rule_from_dict",
    "rule_to_dict",
]
