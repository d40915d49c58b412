"""Pytest configuration and shared fixtures for buildinfo tests."""

import pytest

from buildinfo.core.errors import VersionLookupError
from buildinfo.core.store import PropertyStore

PROJECT_YAML = """\
artifact_id: demo-app
group_id: com.example
version: 1.2.3
properties:
  build.team: platform
  build.empty:
  other.setting: ignored
active_profiles:
  - dev
  - ci
"""


@pytest.fixture
def project_file(tmp_path):
    """
    Write a sample project descriptor to a temporary directory.

    The descriptor uses the default build settings, so the properties file
    lands in <tmp_path>/build/build-info.properties.
    """
    path = tmp_path / "buildinfo.yaml"
    path.write_text(PROJECT_YAML)
    return path


@pytest.fixture
def failing_lookup():
    """Version lookup that always fails."""

    def lookup():
        raise VersionLookupError("runtime information unavailable")

    return lookup


@pytest.fixture
def sample_store():
    """Store populated out of key order."""
    store = PropertyStore()
    store.put("build.os.name", "TestOS")
    store.put("artifact.id", "demo-app")
    store.put("build.maven.activeProfiles", "")
    return store


@pytest.fixture
def read_properties():
    """Parse a key=value properties file written by buildinfo."""

    def read(path):
        props = {}
        for line in path.read_text(encoding="utf-8").splitlines():
            key, _, value = line.partition("=")
            props[key] = value
        return props

    return read
