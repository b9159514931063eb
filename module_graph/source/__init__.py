"""
Metadata sources.

This package provides the local metadata cache and the Maven repository
client that refreshes it.
"""

from module_graph.source.maven_client import MavenClient
from module_graph.source.metadata_store import (
    load_metadata_file,
    merge_metadata,
    read_metadata,
    save_metadata,
)

__all__ = [
    "MavenClient",
    "load_metadata_file",
    "merge_metadata",
    "read_metadata",
    "save_metadata",
]
