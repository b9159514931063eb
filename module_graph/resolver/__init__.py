"""
Resolver module for module graphs.

This module provides the transitive dependency resolver and its
function-style shortcuts.
"""

from module_graph.resolver.transitive_resolver import (
    TransitiveDependencyResolver,
    is_depends_on,
    transitive_dependencies,
)

__all__ = [
    "TransitiveDependencyResolver",
    "is_depends_on",
    "transitive_dependencies",
]
