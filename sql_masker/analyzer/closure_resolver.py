"""
Transitive closure of a rename graph.

This module defines the ClosureResolver class, which expands the one-hop
edges of a RenameGraph into, for every alias, the full set of names reachable
from it.
"""

from __future__ import annotations

from typing import Union

import networkx as nx

from sql_masker.graph.rename_graph import RenameGraph
from sql_masker.models import ClosureMap


class ClosureResolver:
    """Compute the transitive reachability set of every alias.

    For every node with at least one outgoing edge, each direct source and
    every node reachable from it are collected, intermediate aliases and
    terminal columns alike. A node reaches itself only through a genuine
    cycle; cycles never stop the traversal from terminating.

    Usage:
        resolver = ClosureResolver()
        closure = resolver.close_over(graph)
        # {"fn1": {"fn", "col"}, "fn": {"col"}}
    """

    def close_over(self, graph: Union[RenameGraph, ClosureMap]) -> ClosureMap:
        """Return the closure map of ``graph``.

        Args:
            graph: A RenameGraph, or an ``alias -> names`` mapping such as a
                closure map produced earlier. Closing a closure map returns
                an equal map.

        Returns:
            Mapping from every name with outgoing edges to the set of names
            reachable from it. Names without outgoing edges have no entry.
        """
        if not isinstance(graph, RenameGraph):
            graph = RenameGraph.from_dict(graph)

        digraph = graph.graph
        closure: ClosureMap = {}
        for alias in graph.aliases():
            reachable: set[str] = set()
            for source in digraph.successors(alias):
                if source in reachable:
                    continue
                reachable.add(source)
                reachable.update(nx.descendants(digraph, source))
            closure[alias] = reachable
        return closure

    def resolve_to_base(self, graph: RenameGraph, name: str) -> set[str]:
        """Return the terminal names (no outgoing edges) ``name`` leads to.

        A name that renames nothing resolves to itself.
        """
        if name not in graph or not graph.direct_sources(name):
            return {name}
        digraph = graph.graph
        return {
            node
            for node in nx.descendants(digraph, name)
            if digraph.out_degree(node) == 0
        }
