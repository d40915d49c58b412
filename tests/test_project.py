"""Tests for project descriptor loading."""

from pathlib import Path

import pytest

from buildinfo.core.errors import ProjectDescriptorError
from buildinfo.core.project import BuildSettings, ProjectDescriptor


class TestProjectDescriptor:
    """Test descriptor schema and YAML loading."""

    def test_minimal_descriptor(self):
        project = ProjectDescriptor(
            artifact_id="demo-app", group_id="com.example", version="1.0"
        )

        assert project.properties == {}
        assert project.active_profiles == []
        assert project.build.prefix == "build."
        assert project.build.file_name == "build-info.properties"
        assert project.build.target_path == Path("build") / "build-info.properties"

    def test_from_file(self, project_file):
        project = ProjectDescriptor.from_file(project_file)

        assert project.artifact_id == "demo-app"
        assert project.group_id == "com.example"
        assert project.version == "1.2.3"
        assert project.active_profiles == ["dev", "ci"]
        assert project.properties["build.team"] == "platform"

    def test_missing_property_value_is_empty(self, project_file):
        project = ProjectDescriptor.from_file(project_file)

        assert project.properties["build.empty"] == ""

    def test_relative_output_directory_resolved(self, project_file):
        """Test output directory is relative to the project file."""
        project = ProjectDescriptor.from_file(project_file)

        assert project.build.output_directory == project_file.parent / "build"

    def test_absolute_output_directory_kept(self, tmp_path):
        out = tmp_path / "elsewhere"
        path = tmp_path / "buildinfo.yaml"
        path.write_text(
            "artifact_id: a\ngroup_id: g\nversion: '1'\n"
            f"build:\n  output_directory: {out}\n  prefix: info.\n"
        )

        project = ProjectDescriptor.from_file(path)

        assert project.build.output_directory == out
        assert project.build.prefix == "info."

    def test_scalar_values_stringified(self):
        project = ProjectDescriptor.from_yaml(
            "artifact_id: a\ngroup_id: g\nversion: 2.0\n"
            "properties:\n  build.count: 3\n  build.flag: true\n"
        )

        assert project.version == "2.0"
        assert project.properties == {"build.count": "3", "build.flag": "true"}

    def test_null_sections(self):
        project = ProjectDescriptor.from_yaml(
            "artifact_id: a\ngroup_id: g\nversion: '1'\nproperties:\nactive_profiles:\n"
        )

        assert project.properties == {}
        assert project.active_profiles == []


class TestProjectDescriptorErrors:
    """Test invalid descriptors."""

    def test_missing_required_field(self):
        with pytest.raises(ProjectDescriptorError, match="Invalid project descriptor"):
            ProjectDescriptor.from_yaml("artifact_id: a\nversion: '1'\n")

    def test_malformed_yaml(self):
        with pytest.raises(ProjectDescriptorError, match="Malformed"):
            ProjectDescriptor.from_yaml("artifact_id: [unclosed\n")

    def test_not_a_mapping(self):
        with pytest.raises(ProjectDescriptorError, match="mapping"):
            ProjectDescriptor.from_yaml("- just\n- a list\n")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProjectDescriptorError, match="Cannot read"):
            ProjectDescriptor.from_file(tmp_path / "nope.yaml")

    def test_empty_file_name_rejected(self):
        with pytest.raises(ValueError):
            BuildSettings(file_name="  ")


class TestOverrides:
    """Test command-line overrides."""

    def test_overrides_applied(self, project_file, tmp_path):
        project = ProjectDescriptor.from_file(project_file)
        updated = project.with_overrides(
            output_directory=tmp_path / "out",
            file_name="info.properties",
            prefix="meta.",
            active_profiles=["release"],
        )

        assert updated.build.target_path == tmp_path / "out" / "info.properties"
        assert updated.build.prefix == "meta."
        assert updated.active_profiles == ["release"]
        # Original is unchanged
        assert project.build.prefix == "build."
        assert project.active_profiles == ["dev", "ci"]

    def test_no_overrides(self, project_file):
        project = ProjectDescriptor.from_file(project_file)

        assert project.with_overrides() == project
