"""
Dependency graph for module analysis.

This module defines the DependencyGraph class, which uses networkx to
analyze the built node list as a whole: cycle detection and statistics.
"""

from __future__ import annotations

from typing import Any, Iterable, List

import networkx as nx

from module_graph.models.graph_node import GraphNode


class DependencyGraph:
    """networkx view of a module dependency graph.

    Nodes are keyed by node id and carry ``path`` and ``platforms``
    attributes. An edge ``a -> b`` means module a depends on module b.

    Attributes:
        graph: networkx DiGraph object representing the dependencies.

    Example:
        >>> graph = DependencyGraph.from_nodes(nodes)
        >>> graph.find_cycles()
        []
        >>> graph.get_statistics()["is_dag"]
        True
    """

    def __init__(self) -> None:
        """Initialize a DependencyGraph."""
        self.graph = nx.DiGraph()

    @classmethod
    def from_nodes(cls, nodes: Iterable[GraphNode]) -> "DependencyGraph":
        """Build the networkx graph from graph nodes.

        Edges to ids with no node are still added, as bare nodes without
        attributes; integrity is checked by the resolver, not here.
        """
        result = cls()
        for node in nodes:
            result.add_node(node)
        return result

    def add_node(self, node: GraphNode) -> None:
        """Add a node and its outgoing edges."""
        self.graph.add_node(
            node.id, path=node.path, platforms=list(node.platforms)
        )
        for dep_id in node.dependencies:
            self.graph.add_edge(node.id, dep_id)

    def find_cycles(self) -> List[List[str]]:
        """Return all simple cycles.

        Each cycle is rotated to start at its smallest id and the list is
        sorted, so the result does not depend on insertion order.
        """
        cycles = []
        for cycle in nx.simple_cycles(self.graph):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
        return sorted(cycles)

    def get_statistics(self) -> dict[str, Any]:
        """Get graph statistics.

        Returns:
            Dictionary with node and edge counts, root modules (nothing
            depends on them), leaf modules (they depend on nothing), the
            longest dependency chain and whether the graph is acyclic.
        """
        is_dag = nx.is_directed_acyclic_graph(self.graph)
        return {
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
            "roots": sorted(
                n for n in self.graph.nodes if self.graph.in_degree(n) == 0
            ),
            "leaves": sorted(
                n for n in self.graph.nodes if self.graph.out_degree(n) == 0
            ),
            "max_depth": nx.dag_longest_path_length(self.graph) if is_dag else None,
            "is_dag": is_dag,
        }
