"""
Transitive dependency resolver for module graphs.

This module defines the TransitiveDependencyResolver class, which answers
reachability questions over an already built, immutable node list: the
full transitive dependency set of a module, whether a module depends on
another one, and which modules depend on a given one.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from module_graph.exceptions import DuplicateNodeError, MissingDependencyError
from module_graph.models.graph_node import GraphNode


class TransitiveDependencyResolver:
    """Transitive dependency resolver.

    Responsibilities:
    1. Resolve dependency ids to nodes (resolve)
    2. Compute transitive dependencies (transitive_dependencies)
    3. Reachability test (is_depends_on)
    4. Reverse lookup for the filtered graph (dependents_of)

    Core algorithm: iterative Depth-First Search (DFS) with a visited set,
    so malformed cyclic input terminates instead of recursing forever.

    Every dependency id met during a traversal must match exactly one node;
    anything else raises a GraphIntegrityError.

    Usage:
        resolver = TransitiveDependencyResolver(nodes)

        deps = resolver.transitive_dependencies(node)
        if resolver.is_depends_on(node, "resources"):
            ...
    """

    def __init__(self, nodes: Iterable[GraphNode]) -> None:
        """Initialize a TransitiveDependencyResolver.

        Args:
            nodes: All nodes of the graph.
        """
        self.nodes: List[GraphNode] = list(nodes)
        self._index: Dict[str, List[GraphNode]] = {}
        for node in self.nodes:
            self._index.setdefault(node.id, []).append(node)
        # The graph is immutable for the resolver's lifetime.
        self._closures: Dict[GraphNode, List[GraphNode]] = {}

    def resolve(self, node_id: str, referrer: Optional[str] = None) -> GraphNode:
        """Return the single node with the given id.

        Args:
            node_id: Id to resolve.
            referrer: Id of the node holding the reference, for error messages.

        Raises:
            MissingDependencyError: If no node has this id.
            DuplicateNodeError: If more than one node has this id.
        """
        matches = self._index.get(node_id, [])
        if not matches:
            raise MissingDependencyError(referrer, node_id)
        if len(matches) > 1:
            raise DuplicateNodeError(
                referrer, node_id, [node.path for node in matches]
            )
        return matches[0]

    def direct_dependencies(self, node: GraphNode) -> List[GraphNode]:
        """Resolve the direct dependencies of a node."""
        return [self.resolve(dep_id, node.id) for dep_id in node.dependencies]

    def transitive_dependencies(self, node: GraphNode) -> List[GraphNode]:
        """Return every node reachable from node by one or more edges.

        The result is deduplicated by id, in depth-first pre-order. The start
        node is never part of its own dependencies, even when a cycle leads
        back to it.

        Args:
            node: Start node.

        Returns:
            List[GraphNode]: Transitive dependencies.

        Raises:
            GraphIntegrityError: If a reachable dependency id is dangling
                or ambiguous.
        """
        cached = self._closures.get(node)
        if cached is not None:
            return list(cached)

        visited: Set[str] = {node.id}
        result: List[GraphNode] = []
        stack = list(reversed(self.direct_dependencies(node)))

        while stack:
            current = stack.pop()
            if current.id in visited:
                continue
            visited.add(current.id)
            result.append(current)
            stack.extend(reversed(self.direct_dependencies(current)))

        self._closures[node] = result
        return list(result)

    def is_depends_on(self, node: GraphNode, target_id: str) -> bool:
        """Check if node transitively depends on target_id.

        A node never depends on itself, so this agrees with
        ``target_id in {d.id for d in transitive_dependencies(node)}``.
        The search stops at the first hit.

        Args:
            node: Start node.
            target_id: Id of the module looked for.

        Raises:
            GraphIntegrityError: If a dependency id met before the hit is
                dangling or ambiguous.
        """
        if target_id == node.id:
            return False

        cached = self._closures.get(node)
        if cached is not None:
            return any(dep.id == target_id for dep in cached)

        visited: Set[str] = {node.id}
        stack = [node]

        while stack:
            current = stack.pop()
            if current.depends_directly_on(target_id):
                return True
            for dependency in reversed(self.direct_dependencies(current)):
                if dependency.id not in visited:
                    visited.add(dependency.id)
                    stack.append(dependency)

        return False

    def dependents_of(self, target_id: str) -> List[GraphNode]:
        """Return all nodes that transitively depend on target_id.

        Nodes keep the order of the resolver's node list.
        """
        return [node for node in self.nodes if self.is_depends_on(node, target_id)]

    def validate(self) -> None:
        """Check that every id is unique and every edge resolves.

        Raises:
            DuplicateNodeError: If two nodes share an id.
            MissingDependencyError: If an edge points at no node.
        """
        for node_id, matches in self._index.items():
            if len(matches) > 1:
                raise DuplicateNodeError(
                    None, node_id, [node.path for node in matches]
                )
        for node in self.nodes:
            self.direct_dependencies(node)


def transitive_dependencies(
    node: GraphNode, all_nodes: Iterable[GraphNode]
) -> List[GraphNode]:
    """Return the transitive dependencies of node within all_nodes."""
    return TransitiveDependencyResolver(all_nodes).transitive_dependencies(node)


def is_depends_on(
    node: GraphNode, all_nodes: Iterable[GraphNode], target_id: str
) -> bool:
    """Check if node transitively depends on target_id within all_nodes."""
    return TransitiveDependencyResolver(all_nodes).is_depends_on(node, target_id)
