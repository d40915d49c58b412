"""Properties file writer for build information."""

import logging
import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .errors import TargetIsDirectoryError
from .store import PropertyStore

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "build-info.properties"


class WriteOutcome(str, Enum):
    """Outcome of a properties file write."""

    WRITTEN = "written"
    WRITTEN_WITH_WARNING = "written-with-warning"
    ABORTED = "aborted"


class WriteResult(BaseModel):
    """Result of writing a properties file."""

    outcome: WriteOutcome = Field(..., description="Write outcome")
    path: Path = Field(..., description="Target file path")
    lines_written: int = Field(default=0, description="Lines written before any error")
    warnings: list[str] = Field(
        default_factory=list, description="I/O problems reported during the write"
    )

    @property
    def ok(self) -> bool:
        """Whether the file was written without any warning."""
        return self.outcome is WriteOutcome.WRITTEN


def format_line(key: str, value: str) -> str:
    """Format one property as a key=value line (without terminator)."""
    return f"{key}={value}"


def render_lines(store: PropertyStore) -> list[str]:
    """Render the store as key=value lines in ascending key order."""
    return [format_line(key, value) for key, value in store.entries_sorted_by_key()]


class PropertiesWriter:
    """
    Write a PropertyStore as a flat key=value properties file.

    Lines are written in ascending key order using the platform line
    terminator and UTF-8 encoding. Undecodable environment bytes carried as
    surrogates are written back out unchanged. The file is overwritten in full.

    I/O failures are best-effort: they are logged as warnings and reported in
    the returned WriteResult instead of being raised. A target path that
    exists as a directory is the exception and raises TargetIsDirectoryError.
    """

    def __init__(self, output_path: Path, line_separator: str = os.linesep):
        """
        Initialize properties writer.

        Args:
            output_path: Path of the properties file to write
            line_separator: Line terminator (default: os.linesep)
        """
        self.output_path = Path(output_path)
        self.line_separator = line_separator

    def prepare_target(self) -> None:
        """
        Validate the target path and create its parent directories.

        Raises:
            TargetIsDirectoryError: If the target exists as a directory
            OSError: If the parent directories cannot be created
        """
        if self.output_path.is_dir():
            raise TargetIsDirectoryError(self.output_path)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def _warn(self, result: WriteResult, message: str) -> None:
        logger.warning(message)
        result.warnings.append(message)

    def write(self, store: PropertyStore) -> WriteResult:  # noqa: C901
        """
        Write the store to the target file.

        Args:
            store: Properties to write

        Returns:
            WriteResult describing the outcome

        Raises:
            TargetIsDirectoryError: If the target exists as a directory
        """
        result = WriteResult(outcome=WriteOutcome.WRITTEN, path=self.output_path)

        try:
            self.prepare_target()
        except OSError as e:
            self._warn(result, f"Cannot create directory for {self.output_path}: {e}")
            result.outcome = WriteOutcome.ABORTED
            return result

        logger.info("Writing to the file %s", self.output_path)

        try:
            out = open(
                self.output_path,
                "w",
                encoding="utf-8",
                errors="surrogateescape",
                newline="",
            )
        except OSError as e:
            self._warn(result, f"Cannot open {self.output_path}: {e}")
            result.outcome = WriteOutcome.ABORTED
            return result

        try:
            for key, value in store.entries_sorted_by_key():
                line = format_line(key, value)
                out.write(line)
                out.write(self.line_separator)
                result.lines_written += 1
                logger.info(line)
            out.flush()
        except (OSError, UnicodeError) as e:
            self._warn(result, f"Error writing {self.output_path}: {e}")
            result.outcome = WriteOutcome.WRITTEN_WITH_WARNING
        finally:
            try:
                out.close()
            except (OSError, UnicodeError) as e:
                self._warn(result, f"Error closing {self.output_path}: {e}")
                result.outcome = WriteOutcome.WRITTEN_WITH_WARNING

        return result
