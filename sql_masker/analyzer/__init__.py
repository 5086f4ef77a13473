"""
Alias analysis module.

This package contains the components that trace result columns back to base
columns: the AliasGraphBuilder, the ClosureResolver and the ColumnMatcher.
"""

from sql_masker.analyzer.alias_graph_builder import AliasGraphBuilder
from sql_masker.analyzer.closure_resolver import ClosureResolver
from sql_masker.analyzer.column_matcher import ColumnMatcher

__all__ = [
    "AliasGraphBuilder",
    "ClosureResolver",
    "ColumnMatcher",
]
