"""
Tests for the metadata models.

This module contains tests for ModuleMetadata parsing, VersionSpec
resolution and maven-metadata.xml parsing.
"""

import pytest

from module_graph import (
    Attributes,
    MavenMetadata,
    MetadataFormatError,
    ModuleMetadata,
    VersionSpec,
)

RESOURCES_DOCUMENT = {
    "formatVersion": "1.1",
    "component": {
        "group": "dev.icerock.moko",
        "module": "resources",
        "version": "0.23.0",
        "attributes": {"org.gradle.status": "release"},
    },
    "createdBy": {"gradle": {"version": "7.6", "buildId": "abc"}},
    "variants": [
        {
            "name": "metadataApiElements",
            "attributes": {
                "org.gradle.usage": "kotlin-metadata",
                "org.jetbrains.kotlin.platform.type": "common",
            },
            "dependencies": [
                {
                    "group": "dev.icerock.moko",
                    "module": "parcelize",
                    "version": {"requires": "0.9.0"},
                },
                {
                    "group": "org.jetbrains.kotlin",
                    "module": "kotlin-stdlib-common",
                    "version": {"strictly": "1.8.10", "prefers": "1.8.0"},
                },
            ],
            "files": [
                {"name": "resources-metadata-0.23.0.jar", "url": "resources-metadata-0.23.0.jar"}
            ],
        },
        {
            "name": "iosArm64ApiElements-published",
            "attributes": {
                "org.jetbrains.kotlin.platform.type": "native",
                "org.jetbrains.kotlin.native.target": "ios_arm64",
            },
            "available-at": {
                "url": "../../resources-iosarm64/0.23.0/resources-iosarm64-0.23.0.module",
                "group": "dev.icerock.moko",
                "module": "resources-iosarm64",
                "version": "0.23.0",
            },
        },
    ],
}


class TestModuleMetadata:
    """Tests for ModuleMetadata.from_dict."""

    def setup_method(self):
        self.metadata = ModuleMetadata.from_dict(RESOURCES_DOCUMENT)

    def test_component(self):
        """Test component identity and path."""
        component = self.metadata.component
        assert component.group == "dev.icerock.moko"
        assert component.module == "resources"
        assert component.version == "0.23.0"
        assert component.path == "dev.icerock.moko:resources"
        assert self.metadata.path == "dev.icerock.moko:resources"

    def test_created_by(self):
        """Test creator parsing."""
        creator = self.metadata.created_by["gradle"]
        assert creator.version == "7.6"
        assert creator.build_id == "abc"

    def test_variants(self):
        """Test variant classification."""
        common, native = self.metadata.variants

        assert common.platform_type == "common"
        assert common.native_target is None
        assert len(common.dependencies) == 2
        assert common.files[0].name == "resources-metadata-0.23.0.jar"
        assert common.available_at is None

        assert native.platform_type == "native"
        assert native.native_target == "ios_arm64"
        assert native.dependencies is None
        assert native.files is None
        assert native.available_at.path == "dev.icerock.moko:resources-iosarm64"

    def test_has_platform(self):
        """Test platform lookup across variants."""
        assert self.metadata.has_platform("common")
        assert self.metadata.has_platform("native")
        assert not self.metadata.has_platform("jvm")

    def test_dependency_versions(self):
        """Test resolved dependency versions."""
        parcelize, stdlib = self.metadata.variants[0].dependencies
        assert parcelize.path == "dev.icerock.moko:parcelize"
        assert parcelize.resolved_version == "0.9.0"
        assert stdlib.resolved_version == "1.8.10"

    def test_to_dict_keeps_gradle_keys(self):
        """Test serialization back to the Gradle document layout."""
        data = self.metadata.to_dict()

        assert data["component"]["module"] == "resources"
        assert data["createdBy"] == {"gradle": {"version": "7.6", "buildId": "abc"}}
        assert "available-at" in data["variants"][1]
        assert "dependencies" not in data["variants"][1]
        assert ModuleMetadata.from_dict(data) == self.metadata

    def test_unknown_keys_ignored(self):
        """Test that unknown keys such as formatVersion are ignored."""
        assert not hasattr(self.metadata, "formatVersion")

    def test_missing_component(self):
        """Test document without component."""
        with pytest.raises(MetadataFormatError, match="component"):
            ModuleMetadata.from_dict({"variants": []})

    def test_missing_dependency_module(self):
        """Test dependency without module name."""
        document = {
            "component": {"group": "g", "module": "m", "version": "1"},
            "variants": [
                {"name": "v", "attributes": {}, "dependencies": [{"group": "g"}]}
            ],
        }
        with pytest.raises(MetadataFormatError, match="module"):
            ModuleMetadata.from_dict(document)

    def test_wrong_shape(self):
        """Test variants that are not a list."""
        document = {
            "component": {"group": "g", "module": "m", "version": "1"},
            "variants": {"name": "v"},
        }
        with pytest.raises(MetadataFormatError, match="variants"):
            ModuleMetadata.from_dict(document, source="m.json")

    def test_error_carries_source(self):
        """Test that the source name is reported."""
        with pytest.raises(MetadataFormatError) as exc_info:
            ModuleMetadata.from_dict({}, source="broken.json")
        assert exc_info.value.source == "broken.json"
        assert "broken.json" in str(exc_info.value)


class TestVersionSpec:
    """Tests for VersionSpec.resolved."""

    def test_strictly_wins(self):
        spec = VersionSpec(requires="1.0", strictly="2.0", prefers="3.0")
        assert spec.resolved == "2.0"

    def test_requires_before_prefers(self):
        spec = VersionSpec(requires="1.0", prefers="3.0")
        assert spec.resolved == "1.0"

    def test_prefers_only(self):
        assert VersionSpec(prefers="3.0").resolved == "3.0"

    def test_empty(self):
        assert VersionSpec().resolved is None


class TestAttributes:
    """Tests for the attribute key enum."""

    def test_keys(self):
        assert Attributes.KOTLIN_PLATFORM_TYPE.value == "org.jetbrains.kotlin.platform.type"
        assert Attributes.KOTLIN_NATIVE_TARGET.value == "org.jetbrains.kotlin.native.target"
        assert Attributes.USAGE.value == "org.gradle.usage"


MAVEN_METADATA_XML = """<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <groupId>dev.icerock.moko</groupId>
  <artifactId>resources</artifactId>
  <versioning>
    <latest>0.23.0</latest>
    <release>0.23.0</release>
    <versions>
      <version>0.22.0</version>
      <version>0.23.0</version>
    </versions>
    <lastUpdated>20230601120000</lastUpdated>
  </versioning>
</metadata>
"""


class TestMavenMetadata:
    """Tests for MavenMetadata.from_xml."""

    def test_parse(self):
        metadata = MavenMetadata.from_xml(MAVEN_METADATA_XML)

        assert metadata.coordinates == "dev.icerock.moko:resources"
        assert metadata.versioning.latest == "0.23.0"
        assert metadata.versioning.release == "0.23.0"
        assert metadata.versioning.versions == ["0.22.0", "0.23.0"]
        assert metadata.versioning.last_updated == 20230601120000

    def test_missing_latest(self):
        text = MAVEN_METADATA_XML.replace("<latest>0.23.0</latest>", "")
        with pytest.raises(MetadataFormatError, match="latest"):
            MavenMetadata.from_xml(text)

    def test_invalid_xml(self):
        with pytest.raises(MetadataFormatError, match="invalid XML"):
            MavenMetadata.from_xml("<metadata>", source="maven-metadata.xml")

    def test_bad_timestamp(self):
        text = MAVEN_METADATA_XML.replace("20230601120000", "yesterday")
        with pytest.raises(MetadataFormatError, match="lastUpdated"):
            MavenMetadata.from_xml(text)
