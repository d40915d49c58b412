"""Build information generation: collect properties, then write them."""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Optional

from .collectors import (
    DEFAULT_PREFIX,
    ArtifactCollector,
    BuildToolCollector,
    PrefixedPropertiesCollector,
    SystemPropertiesCollector,
    VersionLookup,
)
from .project import ProjectDescriptor
from .store import PropertyStore
from .writer import PropertiesWriter, WriteResult

logger = logging.getLogger(__name__)


class BuildInfoGenerator:
    """
    Collect build information into one store and write it as properties.

    Collectors run in a fixed order so that later sources overwrite earlier
    ones on key collisions: build tool, artifact, default system properties,
    prefixed project properties, then prefixed environment properties.

    All external state is passed in explicitly. Nothing is read from the
    process environment during collection.
    """

    def __init__(
        self,
        artifact_id: str,
        group_id: str,
        version: str,
        version_lookup: VersionLookup,
        active_profiles: Optional[Iterable[str]] = None,
        project_properties: Optional[Mapping[str, str]] = None,
        system_properties: Optional[Mapping[str, str]] = None,
        environment_properties: Optional[Mapping[str, str]] = None,
        prefix: str = DEFAULT_PREFIX,
    ):
        """
        Initialize build information generator.

        Args:
            artifact_id: Artifact id of the project
            group_id: Group id of the project
            version: Version of the project
            version_lookup: Callable returning the build tool version
            active_profiles: Active profile ids in activation order
            project_properties: Properties declared by the project
            system_properties: Snapshot of system properties
            environment_properties: Snapshot of process environment properties
            prefix: Key prefix (default: "build.")
        """
        self.prefix = prefix
        self.collectors = [
            BuildToolCollector(version_lookup, active_profiles, prefix=prefix),
            ArtifactCollector(artifact_id, group_id, version),
            SystemPropertiesCollector(system_properties or {}, prefix=prefix),
            PrefixedPropertiesCollector(
                project_properties or {}, prefix=prefix, source="project properties"
            ),
            PrefixedPropertiesCollector(
                environment_properties or {},
                prefix=prefix,
                source="environment properties",
            ),
        ]

    @classmethod
    def from_project(
        cls,
        project: ProjectDescriptor,
        version_lookup: VersionLookup,
        system_properties: Optional[Mapping[str, str]] = None,
        environment_properties: Optional[Mapping[str, str]] = None,
    ) -> "BuildInfoGenerator":
        """Create a generator from a project descriptor."""
        return cls(
            artifact_id=project.artifact_id,
            group_id=project.group_id,
            version=project.version,
            version_lookup=version_lookup,
            active_profiles=project.active_profiles,
            project_properties=project.properties,
            system_properties=system_properties,
            environment_properties=environment_properties,
            prefix=project.build.prefix,
        )

    def prepare_properties(self) -> PropertyStore:
        """Run every collector, in order, into a fresh store."""
        store = PropertyStore()
        for collector in self.collectors:
            collector.collect(store)
        logger.debug(
            "Collected %d build properties (prefix %r)", len(store), self.prefix
        )
        return store

    def generate(self, output_path: Path) -> WriteResult:
        """
        Collect build information and write it to output_path.

        Returns:
            WriteResult from the properties writer

        Raises:
            TargetIsDirectoryError: If output_path exists as a directory
        """
        store = self.prepare_properties()
        return PropertiesWriter(output_path).write(store)


def write_build_info(
    project: ProjectDescriptor,
    version_lookup: VersionLookup,
    system_properties: Optional[Mapping[str, str]] = None,
    environment_properties: Optional[Mapping[str, str]] = None,
) -> WriteResult:
    """
    Write the build information file described by a project descriptor.

    The target is project.build.output_directory / project.build.file_name.
    """
    generator = BuildInfoGenerator.from_project(
        project,
        version_lookup,
        system_properties=system_properties,
        environment_properties=environment_properties,
    )
    return generator.generate(project.build.target_path)
