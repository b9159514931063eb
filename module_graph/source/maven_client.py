"""
Maven repository client.

This module fetches module metadata of one organization group from a
Maven repository: the artifact listing of the group directory, each
artifact's ``maven-metadata.xml`` for its latest version, and the Gradle
``.module`` document of that version.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

import requests

from module_graph.exceptions import FetchError, MetadataFormatError
from module_graph.models.maven_metadata import MavenMetadata
from module_graph.models.metadata import ModuleMetadata

logger = logging.getLogger(__name__)

LINK_PATTERN = re.compile(r'<a href="(.*)" title="(.*)">')


class MavenClient:
    """Client for a Maven repository.

    Usage:
        with MavenClient("https://repo1.maven.org/maven2/") as client:
            records = client.fetch_all(client.group_root("dev.icerock.moko"))

    Attributes:
        repo_url: Repository root, ending with "/".
        timeout: Request timeout in seconds.
        workers: Number of parallel fetch threads.
    """

    def __init__(
        self,
        repo_url: str,
        timeout: float = 30.0,
        workers: int = 8,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.repo_url = repo_url if repo_url.endswith("/") else repo_url + "/"
        self.timeout = timeout
        self.workers = workers
        self.session = session or requests.Session()

    def __enter__(self) -> "MavenClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def group_root(self, group: str) -> str:
        """Return the directory URL of a group."""
        return self.repo_url + group.replace(".", "/") + "/"

    def _get(self, url: str) -> requests.Response:
        try:
            return self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Request failed: {e}", url) from e

    def _get_text(self, url: str) -> str:
        response = self._get(url)
        if response.status_code != 200:
            raise FetchError(
                f"Unexpected status {response.status_code}",
                url,
                status_code=response.status_code,
            )
        return response.text

    def list_artifacts(self, group_root: str) -> Dict[str, str]:
        """Parse the directory listing of a group.

        Returns:
            Dict[str, str]: Artifact name -> artifact directory URL.
        """
        body = self._get_text(group_root)
        links: Dict[str, str] = {}
        for match in LINK_PATTERN.finditer(body):
            href, title = match.group(1), match.group(2)
            links[title[:-1]] = group_root + href
        return links

    def get_maven_metadata(self, artifact_url: str) -> MavenMetadata:
        """Fetch and parse ``maven-metadata.xml`` of an artifact directory.

        Raises:
            FetchError: On a non-200 response.
            MetadataFormatError: If the XML is malformed.
        """
        url = artifact_url + "maven-metadata.xml"
        return MavenMetadata.from_xml(self._get_text(url), source=url)

    def module_url(self, group: str, artifact: str, version: str) -> str:
        base = f"{self.repo_url}{group.replace('.', '/')}/{artifact}/{version}"
        return f"{base}/{artifact}-{version}.module"

    def get_gradle_metadata(
        self, group: str, artifact: str, version: str
    ) -> Optional[ModuleMetadata]:
        """Fetch the ``.module`` document of one version.

        Returns:
            The parsed document, or None if the repository does not answer
            200 (e.g. artifacts published without Gradle metadata).
        """
        url = self.module_url(group, artifact, version)
        response = self._get(url)
        if response.status_code != 200:
            logger.debug("No module metadata at %s (%d)", url, response.status_code)
            return None
        try:
            data = response.json()
        except ValueError as e:
            raise MetadataFormatError(f"invalid JSON: {e}", source=url) from e
        return ModuleMetadata.from_dict(data, source=url)

    def fetch_latest(self, title: str, artifact_url: str) -> Optional[ModuleMetadata]:
        """Fetch the metadata document of an artifact's latest version."""
        logger.debug("start load %s", title)
        maven_metadata = self.get_maven_metadata(artifact_url)
        metadata = self.get_gradle_metadata(
            group=maven_metadata.group_id,
            artifact=maven_metadata.artifact_id,
            version=maven_metadata.versioning.latest,
        )
        if metadata is None:
            logger.warning("Skipping %s: no Gradle module metadata", title)
            return None
        logger.debug("load %s complete", title)
        return metadata

    def fetch_all(self, group_root: str) -> List[ModuleMetadata]:
        """Fetch the latest metadata of every artifact in a group.

        Artifacts are fetched in parallel; the call returns once all of
        them are done. Artifacts without module metadata are skipped.
        Results keep the order of the listing.
        """
        links = self.list_artifacts(group_root)
        logger.info("Fetching %d artifacts from %s", len(links), group_root)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [
                executor.submit(self.fetch_latest, title, link)
                for title, link in links.items()
            ]
            results = [future.result() for future in futures]

        return [metadata for metadata in results if metadata is not None]
