"""
Rename graph for alias resolution.

This module defines the RenameGraph class, which uses networkx to hold the
one-hop ``alias -> source`` edges extracted from a query's projection lists.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

import networkx as nx


class RenameGraph:
    """Directed graph of alias renames.

    Nodes are names exactly as the graph builder collected them; an edge
    ``alias -> source`` records that a projection item renamed ``source`` to
    ``alias``. Self-renames are never stored. Names from every nesting level
    of a query share one node space.

    Attributes:
        graph: networkx DiGraph holding the edges.

    Example:
        >>> graph = RenameGraph()
        >>> graph.add_rename("fn1", "fn")
        True
        >>> graph.add_rename("fn", "col")
        True
        >>> graph.direct_sources("fn1")
        {'fn'}
        >>> graph.to_dict()
        {'fn1': ['fn'], 'fn': ['col']}
    """

    def __init__(self) -> None:
        """Initialize an empty RenameGraph."""
        self.graph = nx.DiGraph()

    @classmethod
    def from_dict(cls, edges: dict[str, Iterable[str]]) -> RenameGraph:
        """Build a graph from an ``alias -> sources`` mapping."""
        rename_graph = cls()
        for alias, sources in edges.items():
            for source in sources:
                rename_graph.add_rename(alias, source)
        return rename_graph

    def add_rename(self, alias: str, source: str) -> bool:
        """Record that ``source`` was renamed to ``alias``.

        Args:
            alias: Name introduced by ``AS``.
            source: Name the alias refers to.

        Returns:
            True if an edge was added, False for a self-rename.
        """
        if alias == source:
            return False
        self.graph.add_edge(alias, source)
        return True

    def merge(self, other: RenameGraph) -> None:
        """Add every edge of another graph to this one."""
        self.graph.add_edges_from(other.graph.edges())

    def direct_sources(self, name: str) -> set[str]:
        """Return the names ``name`` renames directly (one hop)."""
        if name not in self.graph:
            return set()
        return set(self.graph.successors(name))

    def aliases(self) -> list[str]:
        """Return every name with at least one outgoing edge."""
        return [node for node in self.graph.nodes if self.graph.out_degree(node) > 0]

    def edges(self) -> list[tuple[str, str]]:
        """Return all ``(alias, source)`` edges."""
        return list(self.graph.edges())

    def has_rename(self, alias: str, source: str) -> bool:
        return self.graph.has_edge(alias, source)

    def to_dict(self) -> dict[str, list[str]]:
        """Export the graph as an ``alias -> sorted sources`` mapping."""
        return {alias: sorted(self.graph.successors(alias)) for alias in self.aliases()}

    def statistics(self) -> dict[str, Any]:
        """Return node, edge and alias counts and whether a cycle exists."""
        return {
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
            "aliases": len(self.aliases()),
            "has_cycle": not nx.is_directed_acyclic_graph(self.graph),
        }

    def __contains__(self, name: object) -> bool:
        return name in self.graph

    def __iter__(self) -> Iterator[str]:
        return iter(self.graph.nodes)

    def __len__(self) -> int:
        return self.graph.number_of_edges()

    def __repr__(self) -> str:
        return f"RenameGraph({self.to_dict()!r})"
