"""
Utility functions and helpers for masking and scanning.

This package contains helper classes that support the sql_masker package,
such as the warning collector used to report tolerated problems.
"""

from sql_masker.utils.warnings import MaskingWarning, WarningCollector

__all__ = [
    "MaskingWarning",
    "WarningCollector",
]
