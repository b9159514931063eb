"""
Gradle module metadata model.

This module defines the in-memory representation of one published
``.module`` document: the component identity, the tools that created it
and its variants with their dependencies, files and redirects.

Records are immutable once parsed. Unknown JSON keys are ignored, missing
required keys raise MetadataFormatError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from module_graph.exceptions import MetadataFormatError


class Attributes(str, Enum):
    """Well-known variant and component attribute keys."""

    USAGE = "org.gradle.usage"
    STATUS = "org.gradle.status"
    KOTLIN_PLATFORM_TYPE = "org.jetbrains.kotlin.platform.type"
    KOTLIN_NATIVE_TARGET = "org.jetbrains.kotlin.native.target"
    ARTIFACT_TYPE = "artifactType"


def _require(data: Dict[str, Any], key: str, kind: type, what: str) -> Any:
    if not isinstance(data, dict):
        raise MetadataFormatError(f"{what} must be an object")
    if key not in data:
        raise MetadataFormatError(f"{what} is missing required field '{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise MetadataFormatError(
            f"{what}.{key} must be of type {kind.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _optional(data: Dict[str, Any], key: str, kind: type, what: str) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, kind):
        raise MetadataFormatError(
            f"{what}.{key} must be of type {kind.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _attribute_text(value: Any) -> Optional[str]:
    """Return the content of a JSON scalar attribute as a string."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Component:
    """Identity of a published module.

    Attributes:
        group: Organization group, e.g. "dev.icerock.moko".
        module: Module name, e.g. "resources".
        version: Published version string.
        attributes: Component-level attributes.
    """

    group: str
    module: str
    version: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        """Return "group:module"."""
        return f"{self.group}:{self.module}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Component":
        return cls(
            group=_require(data, "group", str, "component"),
            module=_require(data, "module", str, "component"),
            version=_require(data, "version", str, "component"),
            attributes=dict(
                _optional(data, "attributes", dict, "component") or {}
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "module": self.module,
            "version": self.version,
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True)
class Creator:
    """Tool that produced the metadata document."""

    version: str
    build_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Creator":
        return cls(
            version=_require(data, "version", str, "createdBy"),
            build_id=_optional(data, "buildId", str, "createdBy"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"version": self.version}
        if self.build_id is not None:
            result["buildId"] = self.build_id
        return result


@dataclass(frozen=True)
class VersionSpec:
    """Declared version of a dependency.

    Gradle allows three forms. The effective version is the first one set
    in the order strictly, requires, prefers.
    """

    requires: Optional[str] = None
    strictly: Optional[str] = None
    prefers: Optional[str] = None

    @property
    def resolved(self) -> Optional[str]:
        """Return the effective version, or None if no form is set."""
        for candidate in (self.strictly, self.requires, self.prefers):
            if candidate is not None:
                return candidate
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionSpec":
        what = "dependency.version"
        if not isinstance(data, dict):
            raise MetadataFormatError(f"{what} must be an object")
        return cls(
            requires=_optional(data, "requires", str, what),
            strictly=_optional(data, "strictly", str, what),
            prefers=_optional(data, "prefers", str, what),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.requires is not None:
            result["requires"] = self.requires
        if self.strictly is not None:
            result["strictly"] = self.strictly
        if self.prefers is not None:
            result["prefers"] = self.prefers
        return result


@dataclass(frozen=True)
class DependencyRef:
    """A dependency declared by a variant."""

    group: str
    module: str
    version: Optional[VersionSpec] = None

    @property
    def path(self) -> str:
        """Return "group:module"."""
        return f"{self.group}:{self.module}"

    @property
    def resolved_version(self) -> Optional[str]:
        return self.version.resolved if self.version else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependencyRef":
        group = _require(data, "group", str, "dependency")
        module = _require(data, "module", str, "dependency")
        version = _optional(data, "version", dict, f"dependency '{group}:{module}'")
        return cls(
            group=group,
            module=module,
            version=VersionSpec.from_dict(version) if version is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"group": self.group, "module": self.module}
        if self.version is not None:
            result["version"] = self.version.to_dict()
        return result


@dataclass(frozen=True)
class FileRef:
    """An artifact file published by a variant."""

    name: str
    url: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileRef":
        return cls(
            name=_require(data, "name", str, "file"),
            url=_require(data, "url", str, "file"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class Location:
    """Coordinates of the component a variant's artifacts live in."""

    url: str
    group: str
    module: str
    version: str

    @property
    def path(self) -> str:
        return f"{self.group}:{self.module}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        what = "available-at"
        return cls(
            url=_require(data, "url", str, what),
            group=_require(data, "group", str, what),
            module=_require(data, "module", str, what),
            version=_require(data, "version", str, what),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "group": self.group,
            "module": self.module,
            "version": self.version,
        }


@dataclass(frozen=True)
class Variant:
    """One build/target-specific artifact set of a module.

    Attributes:
        name: Variant name, e.g. "iosArm64ApiElements-published".
        attributes: Attribute map used to classify the variant.
        dependencies: Declared dependencies, or None if the key is absent.
        files: Published files, or None if the key is absent.
        available_at: Redirect to another component holding the artifacts.
    """

    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    dependencies: Optional[Tuple[DependencyRef, ...]] = None
    files: Optional[Tuple[FileRef, ...]] = None
    available_at: Optional[Location] = None

    @property
    def platform_type(self) -> Optional[str]:
        return _attribute_text(
            self.attributes.get(Attributes.KOTLIN_PLATFORM_TYPE.value)
        )

    @property
    def native_target(self) -> Optional[str]:
        return _attribute_text(
            self.attributes.get(Attributes.KOTLIN_NATIVE_TARGET.value)
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Variant":
        name = _require(data, "name", str, "variant")
        what = f"variant '{name}'"
        attributes = _optional(data, "attributes", dict, what) or {}
        dependencies = _optional(data, "dependencies", list, what)
        files = _optional(data, "files", list, what)
        available_at = _optional(data, "available-at", dict, what)
        return cls(
            name=name,
            attributes=dict(attributes),
            dependencies=(
                tuple(DependencyRef.from_dict(d) for d in dependencies)
                if dependencies is not None
                else None
            ),
            files=(
                tuple(FileRef.from_dict(f) for f in files)
                if files is not None
                else None
            ),
            available_at=(
                Location.from_dict(available_at)
                if available_at is not None
                else None
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "attributes": dict(self.attributes),
        }
        if self.dependencies is not None:
            result["dependencies"] = [d.to_dict() for d in self.dependencies]
        if self.files is not None:
            result["files"] = [f.to_dict() for f in self.files]
        if self.available_at is not None:
            result["available-at"] = self.available_at.to_dict()
        return result


@dataclass(frozen=True)
class ModuleMetadata:
    """A parsed Gradle module metadata document.

    Attributes:
        component: Identity of the module.
        created_by: Map of tool name (e.g. "gradle") to Creator.
        variants: All variants declared by the module.

    Example:
        >>> metadata = ModuleMetadata.from_dict(json.loads(text))
        >>> metadata.component.path
        'dev.icerock.moko:resources'
        >>> metadata.has_platform("common")
        True
    """

    component: Component
    created_by: Dict[str, Creator] = field(default_factory=dict)
    variants: Tuple[Variant, ...] = ()

    @property
    def path(self) -> str:
        return self.component.path

    def has_platform(self, platform_type: str) -> bool:
        """Check if any variant declares the given platform type."""
        return any(v.platform_type == platform_type for v in self.variants)

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], source: Optional[str] = None
    ) -> "ModuleMetadata":
        """Build a record from a decoded ``.module`` JSON document.

        Args:
            data: Decoded JSON object.
            source: Optional file name or URL, used in error messages.

        Raises:
            MetadataFormatError: If a required field is missing or malformed.
        """
        try:
            component = Component.from_dict(
                _require(data, "component", dict, "document")
            )
            created_by = _optional(data, "createdBy", dict, "document") or {}
            variants = _optional(data, "variants", list, "document") or []
            return cls(
                component=component,
                created_by={
                    tool: Creator.from_dict(creator)
                    for tool, creator in created_by.items()
                },
                variants=tuple(Variant.from_dict(v) for v in variants),
            )
        except MetadataFormatError as e:
            if source is None or e.source is not None:
                raise
            raise MetadataFormatError(e.message, source=source) from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component.to_dict(),
            "createdBy": {
                tool: creator.to_dict()
                for tool, creator in self.created_by.items()
            },
            "variants": [v.to_dict() for v in self.variants],
        }
