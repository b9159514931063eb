"""
Dependency graph module.

This package contains the networkx-backed DependencyGraph class used for
whole-graph analysis.
"""

from module_graph.graph.dependency_graph import DependencyGraph

__all__ = [
    "DependencyGraph",
]
