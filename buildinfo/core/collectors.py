"""Property collectors feeding the build information store."""

import logging
import os
import platform
import sys
from collections.abc import Callable, Iterable, Mapping
from importlib import metadata
from typing import Optional

from .errors import VersionLookupError
from .store import PropertyStore

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "build."

# System property keys copied (prefixed) into every properties file
DEFAULT_SYSTEM_PROPERTIES = (
    "os.arch",
    "os.name",
    "os.version",
    "java.vm.name",
    "java.vm.vendor",
    "java.version",
)

VersionLookup = Callable[[], str]


class BuildToolCollector:
    """
    Collect build tool identity: tool version and active profiles.

    A failing version lookup is recoverable: the version is recorded as an
    empty string and a warning is logged.
    """

    def __init__(
        self,
        version_lookup: VersionLookup,
        active_profiles: Optional[Iterable[str]] = None,
        prefix: str = DEFAULT_PREFIX,
    ):
        """
        Initialize build tool collector.

        Args:
            version_lookup: Callable returning the tool version, raising
                VersionLookupError when the version is unavailable
            active_profiles: Active profile ids in activation order
            prefix: Key prefix for the written properties
        """
        self.version_lookup = version_lookup
        self.active_profiles = list(active_profiles or [])
        self.prefix = prefix

    def _lookup_version(self) -> str:
        try:
            return self.version_lookup()
        except VersionLookupError as e:
            logger.warning("Unable to look up build tool version: %s", e)
            return ""

    def collect(self, store: PropertyStore) -> None:
        store.put(f"{self.prefix}maven.version", self._lookup_version())
        store.put(f"{self.prefix}maven.activeProfiles", ", ".join(self.active_profiles))


class ArtifactCollector:
    """Collect artifact identity under fixed, unprefixed keys."""

    def __init__(self, artifact_id: str, group_id: str, version: str):
        self.artifact_id = artifact_id
        self.group_id = group_id
        self.version = version

    def collect(self, store: PropertyStore) -> None:
        store.put("artifact.id", self.artifact_id)
        store.put("artifact.groupId", self.group_id)
        store.put("artifact.version", self.version)


class SystemPropertiesCollector:
    """Copy an allowlist of system properties into the store under the prefix."""

    def __init__(
        self,
        system_properties: Mapping[str, str],
        prefix: str = DEFAULT_PREFIX,
        keys: Iterable[str] = DEFAULT_SYSTEM_PROPERTIES,
    ):
        """
        Initialize system properties collector.

        Args:
            system_properties: Snapshot of the process system properties
            prefix: Key prefix for the written properties
            keys: Allowlisted property names (default: DEFAULT_SYSTEM_PROPERTIES)
        """
        self.system_properties = system_properties
        self.prefix = prefix
        self.keys = tuple(keys)

    def collect(self, store: PropertyStore) -> None:
        for key in self.keys:
            store.put(f"{self.prefix}{key}", self.system_properties.get(key) or "")


class PrefixedPropertiesCollector:
    """
    Copy every property whose name starts with the prefix.

    Matching keys are stored verbatim since they already carry the prefix.
    """

    def __init__(
        self,
        properties: Mapping[str, Optional[str]],
        prefix: str = DEFAULT_PREFIX,
        source: str = "properties",
    ):
        self.properties = properties
        self.prefix = prefix
        self.source = source

    def collect(self, store: PropertyStore) -> None:
        matched = 0
        for key, value in self.properties.items():
            if key.startswith(self.prefix):
                store.put(key, value or "")
                matched += 1
        logger.debug(
            "Collected %d prefixed %s (prefix %r)", matched, self.source, self.prefix
        )


def host_system_properties() -> dict[str, str]:
    """
    Describe the running Python process with the default system property keys.

    The runtime keys carry the Python interpreter's identity: name from
    platform.python_implementation(), vendor from sys.implementation.name and
    version from platform.python_version().

    Returns:
        Dictionary keyed by DEFAULT_SYSTEM_PROPERTIES
    """
    return {
        "os.arch": platform.machine(),
        "os.name": platform.system(),
        "os.version": platform.release(),
        "java.vm.name": platform.python_implementation(),
        "java.vm.vendor": sys.implementation.name,
        "java.version": platform.python_version(),
    }


def snapshot_environment(
    environ: Optional[Mapping[str, str]] = None,
    defines: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """
    Take a read-only copy of the process environment.

    Args:
        environ: Mapping to copy (default: os.environ)
        defines: Explicit KEY=VALUE definitions overlaid on the copy

    Returns:
        Plain dictionary; later changes to os.environ do not affect it
    """
    snapshot = dict(os.environ if environ is None else environ)
    if defines:
        snapshot.update(defines)
    return snapshot


def distribution_version_lookup(distribution: str) -> VersionLookup:
    """
    Build a version lookup backed by installed distribution metadata.

    Args:
        distribution: Name of the installed distribution (e.g. "pip")

    Returns:
        Callable returning the version, raising VersionLookupError when the
        distribution is not installed
    """

    def lookup() -> str:
        try:
            return metadata.version(distribution)
        except metadata.PackageNotFoundError as e:
            raise VersionLookupError(
                f"Distribution not installed: {distribution}", original_exception=e
            ) from e

    return lookup


def static_version_lookup(version: str) -> VersionLookup:
    """Build a version lookup that always returns the given version."""
    return lambda: version
