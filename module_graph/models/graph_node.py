"""
Graph node model.

This module defines the GraphNode class, one node of the module dependency
graph derived from a ModuleMetadata record.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GraphNode:
    """A module in the dependency graph.

    Nodes are never mutated after the graph is built.

    Attributes:
        id: Node identifier (module name, or "group:module" in qualified mode).
            Unique within a graph.
        path: Display path "group:module".
        platforms: Distinct platform/target labels across the module's
            variants, in order of first appearance.
        dependencies: Distinct ids of the modules this module depends on,
            in order of first appearance.

    Example:
        >>> node = GraphNode(
        ...     id="resources",
        ...     path="dev.icerock.moko:resources",
        ...     platforms=("common", "jvm"),
        ...     dependencies=("parcelize",),
        ... )
        >>> node.depends_directly_on("parcelize")
        True
    """

    id: str
    path: str
    platforms: Tuple[str, ...] = ()
    dependencies: Tuple[str, ...] = ()

    def depends_directly_on(self, node_id: str) -> bool:
        """Check if node_id is in this node's dependency list."""
        return node_id in self.dependencies

    def __repr__(self) -> str:
        return f"GraphNode({self.id!r})"
