"""
Masking module.

This package contains the ObfuscationEngine that transforms single values
and the MaskingOrchestrator that applies rules to query results.
"""

from sql_masker.masking.obfuscation_engine import ObfuscationEngine
from sql_masker.masking.orchestrator import MaskingOrchestrator
from sql_masker.masking.replacement import compile_replacement, parse_template

__all__ = [
    "MaskingOrchestrator",
    "ObfuscationEngine",
    "compile_replacement",
    "parse_template",
]
