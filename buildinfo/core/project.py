"""Project descriptor schema and loading for buildinfo."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .collectors import DEFAULT_PREFIX
from .errors import ProjectDescriptorError
from .writer import DEFAULT_FILE_NAME

DEFAULT_PROJECT_FILE = "buildinfo.yaml"
DEFAULT_OUTPUT_DIRECTORY = "build"


def _stringify(value: Any) -> str:
    """Coerce a YAML scalar to its properties-file string form."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class BuildSettings(BaseModel):
    """Where and how the properties file is written."""

    output_directory: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIRECTORY), description="Build output directory"
    )
    file_name: str = Field(
        default=DEFAULT_FILE_NAME, description="Properties file name"
    )
    prefix: str = Field(default=DEFAULT_PREFIX, description="Property key prefix")

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """Validate file name is not empty."""
        if not v.strip():
            raise ValueError("file_name must not be empty")
        return v

    @property
    def target_path(self) -> Path:
        return self.output_directory / self.file_name


class ProjectDescriptor(BaseModel):
    """Project model supplied by the build."""

    artifact_id: str = Field(..., description="Artifact id")
    group_id: str = Field(..., description="Group id")
    version: str = Field(..., description="Artifact version")
    properties: dict[str, str] = Field(
        default_factory=dict, description="Declared project properties"
    )
    active_profiles: list[str] = Field(
        default_factory=list, description="Active profile ids in activation order"
    )
    build: BuildSettings = Field(
        default_factory=BuildSettings, description="Build output settings"
    )

    @field_validator("artifact_id", "group_id", "version", mode="before")
    @classmethod
    def coerce_identity(cls, v: Any) -> Any:
        """Accept numeric versions such as `1.0` written unquoted in YAML."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("properties", mode="before")
    @classmethod
    def coerce_properties(cls, v: Any) -> Any:
        """Coerce property values to strings; missing values become ''."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(key): _stringify(value) for key, value in v.items()}
        return v

    @field_validator("active_profiles", mode="before")
    @classmethod
    def coerce_profiles(cls, v: Any) -> Any:
        if v is None:
            return []
        return v

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ProjectDescriptor":
        """
        Deserialize a project descriptor from a YAML string.

        Raises:
            ProjectDescriptorError: If the YAML is malformed or invalid
        """
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ProjectDescriptorError(f"Malformed project YAML: {e}") from e

        if not isinstance(data, dict):
            raise ProjectDescriptorError("Project descriptor must be a YAML mapping")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ProjectDescriptorError(f"Invalid project descriptor: {e}") from e

    @classmethod
    def from_file(cls, path: Path) -> "ProjectDescriptor":
        """
        Load a project descriptor from a YAML file.

        A relative build.output_directory is resolved against the directory
        containing the project file.

        Raises:
            ProjectDescriptorError: If the file cannot be read or is invalid
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ProjectDescriptorError(f"Cannot read project file {path}: {e}") from e

        descriptor = cls.from_yaml(text)
        if not descriptor.build.output_directory.is_absolute():
            descriptor.build.output_directory = (
                path.parent / descriptor.build.output_directory
            )
        return descriptor

    def with_overrides(
        self,
        output_directory: Optional[Path] = None,
        file_name: Optional[str] = None,
        prefix: Optional[str] = None,
        active_profiles: Optional[list[str]] = None,
    ) -> "ProjectDescriptor":
        """Return a copy with command-line overrides applied."""
        build_updates: dict[str, Any] = {}
        if output_directory is not None:
            build_updates["output_directory"] = Path(output_directory)
        if file_name is not None:
            build_updates["file_name"] = file_name
        if prefix is not None:
            build_updates["prefix"] = prefix

        updates: dict[str, Any] = {"build": self.build.model_copy(update=build_updates)}
        if active_profiles:
            updates["active_profiles"] = list(active_profiles)
        return self.model_copy(update=updates)
