"""
Module Dependency Graph v1.0

Builds the dependency graph of the libraries an organization publishes to a
Maven repository, from their Gradle module metadata, and renders it as
Graphviz digraphs and a transitive dependency listing.

Example:
    >>> from module_graph import (
    ...     GraphConfig, TransitiveDependencyResolver, build_graph, read_metadata
    ... )
    >>> nodes = build_graph(read_metadata("metadata"), GraphConfig())
    >>> resolver = TransitiveDependencyResolver(nodes)
    >>> resolver.dependents_of("resources")
"""

from module_graph.version import __version__, __version_info__

__author__ = "Module Graph Contributors"

from module_graph.builder.graph_builder import GraphBuilder, build_graph
from module_graph.exceptions import (
    DuplicateNodeError,
    FetchError,
    GraphIntegrityError,
    MetadataFormatError,
    MissingDependencyError,
    ModuleGraphError,
)
from module_graph.graph.dependency_graph import DependencyGraph
from module_graph.models.config import GraphConfig
from module_graph.models.graph_node import GraphNode
from module_graph.models.maven_metadata import MavenMetadata, Versioning
from module_graph.models.metadata import (
    Attributes,
    Component,
    Creator,
    DependencyRef,
    FileRef,
    Location,
    ModuleMetadata,
    Variant,
    VersionSpec,
)
from module_graph.pipeline import RunResult, analyze, run
from module_graph.report.writer import (
    ReportPaths,
    ReportWriter,
    camel_case,
    render_dependencies,
    render_graph,
)
from module_graph.resolver.transitive_resolver import (
    TransitiveDependencyResolver,
    is_depends_on,
    transitive_dependencies,
)
from module_graph.source.maven_client import MavenClient
from module_graph.source.metadata_store import read_metadata, save_metadata

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Pipeline
    "run",
    "analyze",
    "RunResult",
    # Configuration
    "GraphConfig",
    # Metadata model
    "Attributes",
    "Component",
    "Creator",
    "DependencyRef",
    "FileRef",
    "Location",
    "ModuleMetadata",
    "Variant",
    "VersionSpec",
    "MavenMetadata",
    "Versioning",
    # Graph
    "GraphNode",
    "GraphBuilder",
    "build_graph",
    "DependencyGraph",
    # Resolver
    "TransitiveDependencyResolver",
    "is_depends_on",
    "transitive_dependencies",
    # Reports
    "ReportWriter",
    "ReportPaths",
    "camel_case",
    "render_graph",
    "render_dependencies",
    # Sources
    "MavenClient",
    "read_metadata",
    "save_metadata",
    # Exceptions
    "ModuleGraphError",
    "MetadataFormatError",
    "GraphIntegrityError",
    "MissingDependencyError",
    "DuplicateNodeError",
    "FetchError",
]
