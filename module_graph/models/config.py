"""
Configuration model for module graph runs.

This module defines the GraphConfig class, which carries every setting of a
run: which organization group is modeled, which variants count as common,
which module the filtered report is built around and where metadata and
reports live.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

DEFAULT_ORGANIZATION_GROUP = "dev.icerock.moko"
DEFAULT_COMMON_PLATFORM = "common"
DEFAULT_FILTER_TARGET = "resources"
DEFAULT_GRAPH_NAME = "MOKO"
DEFAULT_REPO_URL = "https://repo1.maven.org/maven2/"


@dataclass
class GraphConfig:
    """Configuration settings for a module graph run.

    Attributes:
        organization_group: Group whose dependencies become graph edges.
            Dependencies on other groups are treated as external leaves and
            not modeled. Defaults to "dev.icerock.moko".
        common_platform: Platform type marking a cross-platform variant.
            Only modules with at least one such variant enter the graph.
            Defaults to "common".
        filter_target: Node id the filtered report is built around.
            Defaults to "resources".
        graph_name: Name of the emitted digraph. Defaults to "MOKO".
        qualified_ids: If True, node ids are full "group:module" paths
            instead of bare module names. Defaults to False.
        metadata_dir: Directory of cached metadata documents.
        output_dir: Directory the reports are written to.
        repo_url: Root of the Maven repository to fetch from.
        fetch: If True, fetch fresh metadata and refresh the cache instead
            of reading the cache. Defaults to False.
        fetch_workers: Number of parallel fetch threads. Defaults to 8.
        request_timeout: HTTP timeout in seconds. Defaults to 30.

    Example:
        >>> config = GraphConfig(filter_target="mvvm-core")
        >>> config.repo_root
        'https://repo1.maven.org/maven2/dev/icerock/moko/'
    """

    organization_group: str = DEFAULT_ORGANIZATION_GROUP
    common_platform: str = DEFAULT_COMMON_PLATFORM
    filter_target: str = DEFAULT_FILTER_TARGET
    graph_name: str = DEFAULT_GRAPH_NAME
    qualified_ids: bool = False
    metadata_dir: Union[str, Path] = "metadata"
    output_dir: Union[str, Path] = "output"
    repo_url: str = DEFAULT_REPO_URL
    fetch: bool = False
    fetch_workers: int = 8
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        for name in (
            "organization_group",
            "common_platform",
            "filter_target",
            "graph_name",
            "repo_url",
        ):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string")
            if not value:
                raise ValueError(f"{name} cannot be empty")
        if not isinstance(self.qualified_ids, bool):
            raise TypeError("qualified_ids must be a boolean")
        if not isinstance(self.fetch, bool):
            raise TypeError("fetch must be a boolean")
        if not isinstance(self.fetch_workers, int) or self.fetch_workers < 1:
            raise ValueError("fetch_workers must be a positive integer")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

        self.metadata_dir = Path(self.metadata_dir)
        self.output_dir = Path(self.output_dir)
        if not self.repo_url.endswith("/"):
            self.repo_url += "/"

    @property
    def repo_root(self) -> str:
        """Return the repository directory of the organization group."""
        return self.repo_url + self.organization_group.replace(".", "/") + "/"
