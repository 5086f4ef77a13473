"""
Alias graph builder.

This module defines the AliasGraphBuilder class, which walks the projection
lists of a SELECT statement (and of the sub-queries it selects from) and
records every ``column AS alias`` rename as an edge of a RenameGraph.
"""

from __future__ import annotations

from typing import Optional

from sqlglot import expressions as exp

from sql_masker.graph.rename_graph import RenameGraph
from sql_masker.models.config import ScanConfig
from sql_masker.parser.sql_parser import SET_OPERATIONS, SQLParser


class AliasGraphBuilder:
    """Build the one-hop rename graph of a query.

    Only projection items of the shape ``<column reference> AS <alias>`` add
    edges. The column reference may be qualified (``t.col``); the qualifier
    is dropped. Expressions, function calls and ``*`` add nothing.

    Sub-queries in the FROM clause, CTE bodies and the branches of a UNION,
    INTERSECT or EXCEPT are walked as well, and their edges are merged into
    the same graph without resolving them, so an outer alias may point at an
    inner alias.

    Attributes:
        config: ScanConfig supplying the dialect and name normalization.
        parser: SQLParser used to read the statement.

    Example:
        >>> builder = AliasGraphBuilder()
        >>> graph = builder.build(
        ...     "SELECT sub.fn AS fn1 FROM (SELECT col AS fn FROM t) sub"
        ... )
        >>> graph.to_dict()
        {'fn': ['col'], 'fn1': ['fn']}
    """

    def __init__(self, config: Optional[ScanConfig] = None) -> None:
        self.config = config or ScanConfig()
        self.parser = SQLParser(self.config)

    def build(self, sql: str) -> RenameGraph:
        """Parse ``sql`` and return its rename graph.

        Args:
            sql: A single SELECT statement.

        Returns:
            RenameGraph with one edge per renaming projection item found at
            any nesting level.

        Raises:
            ParseError: If the SQL cannot be parsed as a SELECT statement.
        """
        ast = self.parser.parse(sql)
        graph = RenameGraph()
        self._visit_query(ast, graph)
        return graph

    def _visit_query(self, node: Optional[exp.Expression], graph: RenameGraph) -> None:
        if node is None:
            return

        if isinstance(node, exp.Subquery):
            self._visit_query(node.this, graph)
            return

        if isinstance(node, SET_OPERATIONS):
            self._visit_ctes(node, graph)
            self._visit_query(node.this, graph)
            self._visit_query(node.expression, graph)
            return

        if not isinstance(node, exp.Select):
            return

        # Inner levels first
        self._visit_ctes(node, graph)

        from_clause = _child_of_type(node, exp.From)
        if from_clause is not None and isinstance(from_clause.this, exp.Subquery):
            self._visit_query(from_clause.this, graph)

        for projection in node.expressions:
            self._visit_projection(projection, graph)

    def _visit_ctes(self, node: exp.Expression, graph: RenameGraph) -> None:
        with_clause = _child_of_type(node, exp.With)
        if with_clause is None:
            return
        for cte in with_clause.expressions:
            self._visit_query(cte.this, graph)

    def _visit_projection(self, projection: exp.Expression, graph: RenameGraph) -> None:
        if not isinstance(projection, exp.Alias):
            return

        source = projection.this
        if not isinstance(source, exp.Column) or not isinstance(
            source.this, exp.Identifier
        ):
            return

        alias_identifier = projection.args.get("alias")
        if not isinstance(alias_identifier, exp.Identifier):
            return

        graph.add_rename(
            self._identifier_name(alias_identifier),
            self._identifier_name(source.this),
        )

    def _identifier_name(self, identifier: exp.Identifier) -> str:
        if identifier.quoted and not self.config.strip_identifier_quotes:
            name = identifier.sql(dialect=self.config.dialect)
        else:
            name = identifier.this
        if not self.config.case_sensitive:
            name = name.lower()
        return name


def _child_of_type(node: exp.Expression, kind: type) -> Optional[exp.Expression]:
    """Return the first direct child of ``node`` that is a ``kind``."""
    for child in node.iter_expressions():
        if isinstance(child, kind):
            return child
    return None
