"""
Data models for module graph construction.

This package contains the parsed metadata records, the graph node type and
the run configuration.
"""

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

__all__ = [
    "Attributes",
    "Component",
    "Creator",
    "DependencyRef",
    "FileRef",
    "GraphConfig",
    "GraphNode",
    "Location",
    "MavenMetadata",
    "ModuleMetadata",
    "Variant",
    "Versioning",
    "VersionSpec",
]
