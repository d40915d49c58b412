"""Exception types raised by buildinfo."""

from pathlib import Path
from typing import Optional


class BuildInfoError(Exception):
    """Base exception for all buildinfo errors."""


class TargetIsDirectoryError(BuildInfoError):
    """
    The properties file target already exists as a directory.

    This is the one write failure that aborts the whole invocation.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Target must be a file and not a directory: {self.path}")


class VersionLookupError(BuildInfoError):
    """The build tool version could not be looked up."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        self.original_exception = original_exception
        super().__init__(message)


class ProjectDescriptorError(BuildInfoError):
    """The project descriptor could not be read or failed validation."""
