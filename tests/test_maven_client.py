"""
Tests for the Maven repository client.

This module contains tests for MavenClient with a mocked requests session.
"""

from unittest.mock import MagicMock

import pytest
import requests

from module_graph import FetchError, MavenClient

REPO = "https://repo.example.org/maven2/"
GROUP_ROOT = REPO + "dev/icerock/moko/"

LISTING = """<html><body>
<a href="../">../</a>
<a href="graphics/" title="graphics/">graphics/</a>
<a href="resources/" title="resources/">resources/</a>
</body></html>
"""


def maven_metadata_xml(artifact, latest):
    return f"""<metadata>
  <groupId>dev.icerock.moko</groupId>
  <artifactId>{artifact}</artifactId>
  <versioning>
    <latest>{latest}</latest>
    <release>{latest}</release>
    <versions><version>{latest}</version></versions>
    <lastUpdated>20230601120000</lastUpdated>
  </versioning>
</metadata>"""


def module_document(artifact, version):
    return {
        "component": {"group": "dev.icerock.moko", "module": artifact, "version": version},
        "createdBy": {"gradle": {"version": "7.6"}},
        "variants": [
            {
                "name": "metadataApiElements",
                "attributes": {"org.jetbrains.kotlin.platform.type": "common"},
            }
        ],
    }


def response(status_code=200, text="", json_data=None):
    mock = MagicMock()
    mock.status_code = status_code
    mock.text = text
    mock.json.return_value = json_data
    return mock


def fake_session(routes):
    """Session whose get() answers from a url -> response map, 404 otherwise."""
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = lambda url, timeout=None: routes.get(url, response(404))
    return session


class TestMavenClient:
    """Tests for MavenClient."""

    def setup_method(self):
        self.routes = {
            GROUP_ROOT: response(text=LISTING),
            GROUP_ROOT + "graphics/maven-metadata.xml": response(
                text=maven_metadata_xml("graphics", "0.9.0")
            ),
            GROUP_ROOT + "resources/maven-metadata.xml": response(
                text=maven_metadata_xml("resources", "0.23.0")
            ),
            GROUP_ROOT + "resources/0.23.0/resources-0.23.0.module": response(
                json_data=module_document("resources", "0.23.0")
            ),
        }
        self.session = fake_session(self.routes)
        self.client = MavenClient(REPO, workers=2, session=self.session)

    def test_group_root(self):
        assert self.client.group_root("dev.icerock.moko") == GROUP_ROOT

    def test_list_artifacts(self):
        links = self.client.list_artifacts(GROUP_ROOT)

        assert links == {
            "graphics": GROUP_ROOT + "graphics/",
            "resources": GROUP_ROOT + "resources/",
        }

    def test_get_maven_metadata(self):
        metadata = self.client.get_maven_metadata(GROUP_ROOT + "resources/")

        assert metadata.artifact_id == "resources"
        assert metadata.versioning.latest == "0.23.0"

    def test_get_maven_metadata_not_found(self):
        with pytest.raises(FetchError) as exc_info:
            self.client.get_maven_metadata(GROUP_ROOT + "missing/")

        assert exc_info.value.status_code == 404

    def test_module_url(self):
        url = self.client.module_url("dev.icerock.moko", "resources", "0.23.0")
        assert url == GROUP_ROOT + "resources/0.23.0/resources-0.23.0.module"

    def test_get_gradle_metadata(self):
        metadata = self.client.get_gradle_metadata("dev.icerock.moko", "resources", "0.23.0")

        assert metadata.component.version == "0.23.0"

    def test_get_gradle_metadata_miss(self):
        """Test that a non-200 answer is a recoverable miss."""
        assert self.client.get_gradle_metadata("dev.icerock.moko", "graphics", "0.9.0") is None

    def test_fetch_all_skips_misses(self):
        records = self.client.fetch_all(GROUP_ROOT)

        assert [r.component.module for r in records] == ["resources"]

    def test_timeout_passed(self):
        client = MavenClient(REPO, timeout=5, session=self.session)
        client.list_artifacts(GROUP_ROOT)

        self.session.get.assert_called_with(GROUP_ROOT, timeout=5)

    def test_connection_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.side_effect = requests.ConnectionError("refused")
        client = MavenClient(REPO, session=session)

        with pytest.raises(FetchError, match="refused"):
            client.list_artifacts(GROUP_ROOT)

    def test_context_manager_closes_session(self):
        with MavenClient(REPO, session=self.session):
            pass

        self.session.close.assert_called_once()
