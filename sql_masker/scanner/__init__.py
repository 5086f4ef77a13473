"""
Scanner module.

This package contains the SensitiveScanner, which samples table data against
regular expressions to find sensitive columns.
"""

from sql_masker.scanner.sensitive_scanner import SensitiveScanner

__all__ = [
    "SensitiveScanner",
]
