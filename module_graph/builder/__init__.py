"""
Builder module for module graphs.

This module provides the GraphBuilder class, which derives graph nodes from
parsed module metadata.
"""

from module_graph.builder.graph_builder import GraphBuilder, build_graph

__all__ = ["GraphBuilder", "build_graph"]
