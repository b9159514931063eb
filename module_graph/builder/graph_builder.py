"""
Graph builder for module metadata.

This module turns a collection of ModuleMetadata records into the sorted
node list every later stage works on.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, List, Optional

from module_graph.models.config import GraphConfig
from module_graph.models.graph_node import GraphNode
from module_graph.models.metadata import DependencyRef, ModuleMetadata

logger = logging.getLogger(__name__)


def _distinct(items: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate, keeping the order of first appearance."""
    return tuple(dict.fromkeys(items))


class GraphBuilder:
    """Builds graph nodes from module metadata.

    Responsibilities:
    1. Drop modules without a common variant
    2. Derive one node per remaining module
    3. Keep only dependency edges inside the organization group
    4. Sort nodes by id

    Usage:
        builder = GraphBuilder(GraphConfig())
        nodes = builder.build(metadata)
    """

    def __init__(self, config: Optional[GraphConfig] = None) -> None:
        self.config = config or GraphConfig()

    def node_id(self, group: str, module: str) -> str:
        """Return the node id of a module."""
        if self.config.qualified_ids:
            return f"{group}:{module}"
        return module

    def is_eligible(self, metadata: ModuleMetadata) -> bool:
        """Check if the module has at least one common variant."""
        return metadata.has_platform(self.config.common_platform)

    def is_modeled(self, dependency: DependencyRef) -> bool:
        """Check if a dependency becomes a graph edge."""
        return dependency.group == self.config.organization_group

    def build_node(self, metadata: ModuleMetadata) -> GraphNode:
        """Derive the graph node of one module."""
        platforms = _distinct(
            label
            for label in (
                variant.native_target or variant.platform_type
                for variant in metadata.variants
            )
            if label is not None
        )
        dependencies = _distinct(
            self.node_id(dependency.group, dependency.module)
            for variant in metadata.variants
            for dependency in variant.dependencies or ()
            if self.is_modeled(dependency)
        )
        component = metadata.component
        return GraphNode(
            id=self.node_id(component.group, component.module),
            path=component.path,
            platforms=platforms,
            dependencies=dependencies,
        )

    def build(self, metadata_list: Iterable[ModuleMetadata]) -> List[GraphNode]:
        """Build the sorted node list.

        Args:
            metadata_list: Module metadata records, in any order.

        Returns:
            List[GraphNode]: One node per eligible module, ascending by id.
        """
        nodes: List[GraphNode] = []
        for metadata in metadata_list:
            if not self.is_eligible(metadata):
                logger.debug(
                    "Skipping %s: no '%s' variant",
                    metadata.path,
                    self.config.common_platform,
                )
                continue
            nodes.append(self.build_node(metadata))

        nodes.sort(key=lambda node: node.id)

        duplicates = [
            node_id
            for node_id, count in Counter(node.id for node in nodes).items()
            if count > 1
        ]
        for node_id in duplicates:
            logger.warning(
                "Node id '%s' is shared by %s",
                node_id,
                ", ".join(node.path for node in nodes if node.id == node_id),
            )

        logger.debug("Built graph with %d nodes", len(nodes))
        return nodes


def build_graph(
    metadata_list: Iterable[ModuleMetadata],
    config: Optional[GraphConfig] = None,
) -> List[GraphNode]:
    """Build the sorted node list from module metadata.

    Shortcut for ``GraphBuilder(config).build(metadata_list)``.
    """
    return GraphBuilder(config).build(metadata_list)
