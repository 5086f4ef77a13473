"""
SQL parser module.

This package contains SQL parsing functionality for sql_masker: the
SQLParser that turns a query into a sqlglot AST and the ScriptSplitter that
breaks scripts into statements.
"""

from sql_masker.parser.script_splitter import ScriptSplitter
from sql_masker.parser.sql_parser import SQLParser, is_select_shaped

__all__ = [
    "SQLParser",
    "ScriptSplitter",
    "is_select_shaped",
]
