"""
Rename graph module.

This package contains the graph representation of query aliases, the
RenameGraph class built on networkx.
"""

from sql_masker.graph.rename_graph import RenameGraph

__all__ = [
    "RenameGraph",
]
