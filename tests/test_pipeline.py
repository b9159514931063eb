"""
End-to-end tests: metadata cache in, report files out.
"""

import json
import logging
from unittest.mock import patch

import pytest

from module_graph import GraphConfig, MissingDependencyError, analyze, run
from module_graph.pipeline import load_metadata

MOKO = "dev.icerock.moko"


def document(module, dependencies=(), platforms=("common", "jvm")):
    deps = [{"group": MOKO, "module": d, "version": {"requires": "1.0"}} for d in dependencies]
    deps.append({"group": "org.jetbrains.kotlin", "module": "kotlin-stdlib", "version": {"requires": "1.8.10"}})
    return {
        "component": {"group": MOKO, "module": module, "version": "1.0"},
        "createdBy": {"gradle": {"version": "7.6"}},
        "variants": [
            {
                "name": f"{platform}ApiElements",
                "attributes": {"org.jetbrains.kotlin.platform.type": platform},
                "dependencies": deps,
            }
            for platform in platforms
        ],
    }


def write_cache(directory, documents):
    directory.mkdir(parents=True, exist_ok=True)
    for doc in documents:
        component = doc["component"]
        path = directory / f"{component['group']}:{component['module']}.json"
        path.write_text(json.dumps(doc), encoding="utf-8")


class TestPipeline:
    """End-to-end scenarios."""

    def setup_method(self):
        self.documents = [
            document("parcelize"),
            document("graphics", ["parcelize"]),
            document("resources", ["graphics", "parcelize"]),
            document("mvvm-core"),
            document("mvvm-livedata", ["mvvm-core"]),
            document("mvvm-livedata-resources", ["mvvm-livedata", "resources"]),
            document("resources-compose", ["resources"]),
            document("resources-android", platforms=("androidJvm",)),
        ]

    def config(self, tmp_path, **kwargs):
        return GraphConfig(
            metadata_dir=tmp_path / "metadata", output_dir=tmp_path / "output", **kwargs
        )

    def test_run_from_cache(self, tmp_path):
        write_cache(tmp_path / "metadata", self.documents)

        result = run(self.config(tmp_path))

        assert [n.id for n in result.nodes] == [
            "graphics",
            "mvvm-core",
            "mvvm-livedata",
            "mvvm-livedata-resources",
            "parcelize",
            "resources",
            "resources-compose",
        ]
        assert [n.id for n in result.filtered] == [
            "mvvm-livedata-resources",
            "resources-compose",
        ]
        assert result.cycles == []

        full = result.reports.full.read_text(encoding="utf-8")
        assert "mvvmLivedataResources -> mvvmLivedata" in full
        assert "resourcesAndroid" not in full
        assert "kotlinStdlib" not in full

        deps = result.reports.dependencies.read_text(encoding="utf-8")
        assert (
            "dev.icerock.moko:mvvm-livedata-resources\n"
            "  - dev.icerock.moko:graphics\n"
            "  - dev.icerock.moko:mvvm-core\n"
            "  - dev.icerock.moko:mvvm-livedata\n"
            "  - dev.icerock.moko:parcelize\n"
            "  - dev.icerock.moko:resources\n"
        ) in deps

    def test_identical_runs_are_byte_identical(self, tmp_path):
        write_cache(tmp_path / "metadata", self.documents)

        first = run(self.config(tmp_path))
        contents = [
            p.read_bytes()
            for p in (first.reports.full, first.reports.filtered, first.reports.dependencies)
        ]
        second = run(self.config(tmp_path))

        assert contents == [
            p.read_bytes()
            for p in (second.reports.full, second.reports.filtered, second.reports.dependencies)
        ]

    def test_platform_only_dependency_is_integrity_error(self, tmp_path):
        """Test a dependency on a module excluded for lack of a common variant."""
        self.documents.append(document("widgets", ["resources-android"]))
        write_cache(tmp_path / "metadata", self.documents)

        with pytest.raises(MissingDependencyError) as exc_info:
            run(self.config(tmp_path))

        assert exc_info.value.node_id == "widgets"
        assert exc_info.value.reference == "resources-android"
        assert not (tmp_path / "output").exists()

    def test_cycles_reported_not_fatal(self, tmp_path):
        from module_graph import ModuleMetadata

        metadata = [
            ModuleMetadata.from_dict(document("a", ["b"])),
            ModuleMetadata.from_dict(document("b", ["a"])),
            ModuleMetadata.from_dict(document("resources")),
        ]

        result = analyze(metadata, self.config(tmp_path))

        assert result.cycles == [["a", "b"]]
        assert result.reports.full.exists()
        assert result.statistics["is_dag"] is False
        assert result.statistics["max_depth"] is None

    def test_cycles_not_logged_as_warnings(self, tmp_path, caplog):
        from module_graph import ModuleMetadata

        metadata = [
            ModuleMetadata.from_dict(document("a", ["b"])),
            ModuleMetadata.from_dict(document("b", ["a"])),
        ]

        with caplog.at_level(logging.WARNING, logger="module_graph"):
            result = analyze(metadata, self.config(tmp_path))

        assert result.cycles == [["a", "b"]]
        assert not [r for r in caplog.records if "cycle" in r.getMessage()]

    def test_statistics(self, tmp_path):
        write_cache(tmp_path / "metadata", self.documents)

        result = run(self.config(tmp_path))

        stats = result.statistics
        assert stats["total_nodes"] == 7
        assert stats["total_edges"] == 7
        assert stats["roots"] == ["mvvm-livedata-resources", "resources-compose"]
        assert stats["leaves"] == ["mvvm-core", "parcelize"]
        assert stats["max_depth"] == 3
        assert stats["is_dag"] is True

    def test_fetch_refreshes_cache(self, tmp_path):
        from module_graph import ModuleMetadata

        fetched = [ModuleMetadata.from_dict(document("resources"))]
        config = self.config(tmp_path, fetch=True)

        with patch("module_graph.pipeline.MavenClient") as client_class:
            client = client_class.return_value.__enter__.return_value
            client.fetch_all.return_value = fetched

            metadata = load_metadata(config)

        client.fetch_all.assert_called_once_with(config.repo_root)
        assert metadata == fetched
        assert (tmp_path / "metadata" / "dev.icerock.moko:resources.json").exists()
