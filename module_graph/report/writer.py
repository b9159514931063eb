"""
Report writer for module graphs.

This module renders the sorted node list into the three report files:
``full.txt`` and ``filtered.txt`` (Graphviz digraph descriptions) and
``deps.txt`` (transitive dependencies per module).

All renderings are deterministic: the same nodes always produce
byte-identical output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from module_graph.models.config import GraphConfig
from module_graph.models.graph_node import GraphNode
from module_graph.resolver.transitive_resolver import TransitiveDependencyResolver

logger = logging.getLogger(__name__)

FULL_GRAPH_FILE = "full.txt"
FILTERED_GRAPH_FILE = "filtered.txt"
DEPENDENCIES_FILE = "deps.txt"


def camel_case(identifier: str, qualified: bool = False) -> str:
    """Turn a module id into a bare DOT identifier.

    Each hyphen is removed and the character after it upper-cased, until no
    hyphen remains. A trailing hyphen is dropped. With ``qualified`` the
    "." and ":" of group:module ids also become "_"; otherwise every other
    character is kept as is.

    Example:
        >>> camel_case("foo-bar-baz")
        'fooBarBaz'
        >>> camel_case("dev.icerock.moko:mvvm-core", qualified=True)
        'dev_icerock_moko_mvvmCore'
    """
    result = identifier
    if qualified:
        result = result.replace(".", "_").replace(":", "_")
    while True:
        delim = result.find("-")
        if delim == -1:
            return result
        result = (
            result[:delim]
            + result[delim + 1 : delim + 2].upper()
            + result[delim + 2 :]
        )


def node_declaration(node: GraphNode, qualified: bool = False) -> str:
    """Render the declaration line of a node (without indentation)."""
    platforms = ", ".join(node.platforms)
    identifier = camel_case(node.id, qualified)
    return f'{identifier} [label="{node.path} ({platforms})"];'


def node_edges(node: GraphNode, qualified: bool = False) -> List[str]:
    """Render the distinct edge lines of a node (without indentation)."""
    source = camel_case(node.id, qualified)
    return list(
        dict.fromkeys(
            f"{source} -> {camel_case(dep, qualified)}" for dep in node.dependencies
        )
    )


def render_graph(
    nodes: Iterable[GraphNode], name: str = "MOKO", qualified_ids: bool = False
) -> str:
    """Render nodes as a Graphviz digraph.

    Args:
        nodes: Nodes to render, already in output order.
        name: Name of the digraph.
        qualified_ids: Node ids are group:module, see camel_case.

    Returns:
        The digraph description, one declaration per node, a blank line,
        then the edges of every node.
    """
    nodes = list(nodes)
    lines = [f"digraph {name} {{"]
    lines.extend(f"  {node_declaration(node, qualified_ids)}" for node in nodes)
    lines.append("")
    for node in nodes:
        lines.extend(f"  {edge}" for edge in node_edges(node, qualified_ids))
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_dependencies(
    nodes: Iterable[GraphNode], resolver: TransitiveDependencyResolver
) -> str:
    """Render the transitive dependency listing.

    Every node's path is followed by its transitive dependencies, one per
    line as ``  - <path>``, sorted by path.

    Raises:
        GraphIntegrityError: If a dependency id does not resolve.
    """
    lines: List[str] = []
    for node in nodes:
        lines.append(node.path)
        dependencies = sorted(
            resolver.transitive_dependencies(node), key=lambda dep: dep.path
        )
        lines.extend(f"  - {dep.path}" for dep in dependencies)
    return "".join(f"{line}\n" for line in lines)


@dataclass(frozen=True)
class ReportPaths:
    """Locations of the written report files."""

    full: Path
    filtered: Path
    dependencies: Path


class ReportWriter:
    """Writes the three report files.

    Usage:
        writer = ReportWriter("output", config)
        paths = writer.write(nodes, resolver)
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        config: Optional[GraphConfig] = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.config = config or GraphConfig()

    def filter_nodes(
        self, nodes: Sequence[GraphNode], resolver: TransitiveDependencyResolver
    ) -> List[GraphNode]:
        """Return the nodes that depend on the configured filter target.

        Selection is the resolver's ``dependents_of``; the result keeps the
        order of ``nodes``.
        """
        selected = {
            node.id for node in resolver.dependents_of(self.config.filter_target)
        }
        return [node for node in nodes if node.id in selected]

    def write(
        self,
        nodes: Sequence[GraphNode],
        resolver: Optional[TransitiveDependencyResolver] = None,
    ) -> ReportPaths:
        """Render and write full.txt, filtered.txt and deps.txt.

        Everything is rendered before the first file is written, so an
        integrity error leaves no partial report behind.

        Args:
            nodes: Sorted node list of the graph.
            resolver: Resolver over the same nodes. Created if omitted.

        Returns:
            ReportPaths: Paths of the written files.
        """
        resolver = resolver or TransitiveDependencyResolver(nodes)
        filtered = self.filter_nodes(nodes, resolver)
        contents = {
            FULL_GRAPH_FILE: render_graph(
                nodes, self.config.graph_name, self.config.qualified_ids
            ),
            FILTERED_GRAPH_FILE: render_graph(
                filtered, self.config.graph_name, self.config.qualified_ids
            ),
            DEPENDENCIES_FILE: render_dependencies(nodes, resolver),
        }

        self.output_dir.mkdir(parents=True, exist_ok=True)
        for filename, text in contents.items():
            path = self.output_dir / filename
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
            logger.debug("Wrote %s", path)

        logger.info(
            "Wrote reports for %d modules (%d depend on '%s') to %s",
            len(nodes),
            len(filtered),
            self.config.filter_target,
            self.output_dir,
        )
        return ReportPaths(
            full=self.output_dir / FULL_GRAPH_FILE,
            filtered=self.output_dir / FILTERED_GRAPH_FILE,
            dependencies=self.output_dir / DEPENDENCIES_FILE,
        )
