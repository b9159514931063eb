"""
End-to-end module graph run.

This module wires the stages together: obtain metadata (cache or
repository), build the graph, check its integrity and write the reports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from module_graph.builder.graph_builder import GraphBuilder
from module_graph.graph.dependency_graph import DependencyGraph
from module_graph.models.config import GraphConfig
from module_graph.models.graph_node import GraphNode
from module_graph.models.metadata import ModuleMetadata
from module_graph.report.writer import ReportPaths, ReportWriter
from module_graph.resolver.transitive_resolver import TransitiveDependencyResolver
from module_graph.source.maven_client import MavenClient
from module_graph.source.metadata_store import read_metadata, save_metadata

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a run.

    Attributes:
        nodes: Sorted node list of the full graph.
        filtered: Nodes depending on the configured filter target.
        reports: Paths of the written report files.
        cycles: Dependency cycles found in the graph (normally empty).
        statistics: Whole-graph figures from DependencyGraph.get_statistics.
        resolver: Resolver over ``nodes``, for further queries.
    """

    nodes: List[GraphNode]
    filtered: List[GraphNode]
    reports: ReportPaths
    cycles: List[List[str]] = field(default_factory=list)
    statistics: Dict[str, Any] = field(default_factory=dict)
    resolver: Optional[TransitiveDependencyResolver] = None


def load_metadata(config: GraphConfig) -> List[ModuleMetadata]:
    """Return metadata from the repository or the local cache.

    With ``config.fetch`` the repository is queried and the cache refreshed
    before it is read back, so both paths see the same merged records.
    """
    if config.fetch:
        with MavenClient(
            config.repo_url,
            timeout=config.request_timeout,
            workers=config.fetch_workers,
        ) as client:
            fetched = client.fetch_all(config.repo_root)
        save_metadata(fetched, config.metadata_dir)
    return read_metadata(config.metadata_dir)


def analyze(
    metadata: List[ModuleMetadata], config: Optional[GraphConfig] = None
) -> RunResult:
    """Build, check and report on already loaded metadata.

    Raises:
        GraphIntegrityError: If an id is duplicated or an edge dangles.
            Nothing is written in that case.
    """
    config = config or GraphConfig()

    nodes = GraphBuilder(config).build(metadata)
    resolver = TransitiveDependencyResolver(nodes)
    resolver.validate()

    graph = DependencyGraph.from_nodes(nodes)
    cycles = graph.find_cycles()
    for cycle in cycles:
        logger.debug("Dependency cycle: %s", " -> ".join(cycle + cycle[:1]))

    writer = ReportWriter(config.output_dir, config)
    reports = writer.write(nodes, resolver)

    return RunResult(
        nodes=nodes,
        filtered=writer.filter_nodes(nodes, resolver),
        reports=reports,
        cycles=cycles,
        statistics=graph.get_statistics(),
        resolver=resolver,
    )


def run(config: Optional[GraphConfig] = None) -> RunResult:
    """Run the full pipeline: load, build, validate, write."""
    config = config or GraphConfig()
    metadata = load_metadata(config)
    logger.info("Loaded %d metadata documents", len(metadata))
    return analyze(metadata, config)
