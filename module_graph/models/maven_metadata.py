"""
Maven repository metadata model.

This module defines the MavenMetadata class, which represents the
``maven-metadata.xml`` file published next to every artifact directory,
and the parser that reads it.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List

from module_graph.exceptions import MetadataFormatError


@dataclass(frozen=True)
class Versioning:
    """Version listing of an artifact.

    Attributes:
        latest: Most recently deployed version.
        release: Most recent release version.
        last_updated: Timestamp in yyyyMMddHHmmss form.
        versions: All published versions, oldest first.
    """

    latest: str
    release: str
    last_updated: int
    versions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MavenMetadata:
    """Parsed ``maven-metadata.xml``.

    Example:
        >>> metadata = MavenMetadata.from_xml(text)
        >>> metadata.coordinates
        'dev.icerock.moko:resources'
        >>> metadata.versioning.latest
        '0.23.0'
    """

    group_id: str
    artifact_id: str
    versioning: Versioning

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @classmethod
    def from_xml(cls, text: str, source: str | None = None) -> "MavenMetadata":
        """Parse the XML document.

        Args:
            text: Content of maven-metadata.xml.
            source: Optional URL, used in error messages.

        Raises:
            MetadataFormatError: If the document is not well formed or a
                required element is missing.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise MetadataFormatError(f"invalid XML: {e}", source=source) from e

        if root.tag != "metadata":
            raise MetadataFormatError(
                f"unexpected root element <{root.tag}>", source=source
            )

        versioning = root.find("versioning")
        if versioning is None:
            raise MetadataFormatError("missing <versioning>", source=source)

        last_updated = _child_text(versioning, "lastUpdated", source)
        try:
            last_updated_value = int(last_updated)
        except ValueError as e:
            raise MetadataFormatError(
                f"<lastUpdated> is not a number: {last_updated!r}", source=source
            ) from e

        versions_element = versioning.find("versions")
        versions = (
            [(v.text or "").strip() for v in versions_element.findall("version")]
            if versions_element is not None
            else []
        )

        return cls(
            group_id=_child_text(root, "groupId", source),
            artifact_id=_child_text(root, "artifactId", source),
            versioning=Versioning(
                latest=_child_text(versioning, "latest", source),
                release=_child_text(versioning, "release", source),
                last_updated=last_updated_value,
                versions=versions,
            ),
        )


def _child_text(element: ET.Element, tag: str, source: str | None) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        raise MetadataFormatError(
            f"missing <{tag}> in <{element.tag}>", source=source
        )
    return child.text.strip()
