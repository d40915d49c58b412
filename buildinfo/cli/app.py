"""Typer-based CLI application for buildinfo."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from buildinfo import __version__
from buildinfo.core.build_info import BuildInfoGenerator
from buildinfo.core.collectors import (
    VersionLookup,
    distribution_version_lookup,
    host_system_properties,
    snapshot_environment,
    static_version_lookup,
)
from buildinfo.core.errors import ProjectDescriptorError, TargetIsDirectoryError
from buildinfo.core.project import DEFAULT_PROJECT_FILE, ProjectDescriptor
from buildinfo.core.writer import WriteOutcome, render_lines

app = typer.Typer(
    name="buildinfo",
    help="Write build metadata to a properties file for runtime use",
    add_completion=False,
)

DEFAULT_TOOL = "pip"


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        typer.echo(f"buildinfo v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
):
    """Buildinfo - build metadata as a properties file.

    Collects the build tool version, active profiles, artifact identity,
    system properties and prefixed project/environment properties into one
    sorted key=value file.
    """
    pass


def configure_logging(log_level: str) -> None:
    """Configure root logging from a CLI log level name.

    Raises:
        typer.Exit: If the level name is not recognised
    """
    log_level_upper = log_level.upper()
    if log_level_upper not in ["DEBUG", "INFO", "WARN", "WARNING", "ERROR"]:
        typer.echo(
            f"❌ Invalid log level: {log_level}. "
            "Must be debug, info, warn, or error.",
            err=True,
        )
        raise typer.Exit(1)

    # Map WARN to WARNING for Python logging
    if log_level_upper == "WARN":
        log_level_upper = "WARNING"

    logging.basicConfig(
        level=getattr(logging, log_level_upper),
        format="%(message)s",
    )


def parse_defines(defines: Optional[list[str]]) -> dict[str, str]:
    """Parse repeated KEY=VALUE definitions.

    A definition without '=' sets the key to an empty string.

    Raises:
        typer.Exit: If a definition has an empty key
    """
    parsed: dict[str, str] = {}
    for define in defines or []:
        key, _, value = define.partition("=")
        if not key:
            typer.echo(f"❌ Invalid definition (expected KEY=VALUE): {define}", err=True)
            raise typer.Exit(1)
        parsed[key] = value
    return parsed


def load_project(
    project_file: Path,
    output_dir: Optional[Path],
    file_name: Optional[str],
    prefix: Optional[str],
    profiles: Optional[list[str]],
) -> ProjectDescriptor:
    """Load the project descriptor and apply command-line overrides.

    Raises:
        typer.Exit: If the descriptor cannot be loaded
    """
    try:
        project = ProjectDescriptor.from_file(project_file)
    except ProjectDescriptorError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    return project.with_overrides(
        output_directory=output_dir,
        file_name=file_name,
        prefix=prefix,
        active_profiles=profiles,
    )


def build_generator(
    project: ProjectDescriptor,
    defines: Optional[list[str]],
    tool: str,
    tool_version: Optional[str],
) -> BuildInfoGenerator:
    """Create a generator with snapshots of the current process."""
    parsed_defines = parse_defines(defines)

    system_properties = host_system_properties()
    system_properties.update(parsed_defines)
    environment = snapshot_environment(defines=parsed_defines)

    version_lookup: VersionLookup
    if tool_version is not None:
        version_lookup = static_version_lookup(tool_version)
    else:
        version_lookup = distribution_version_lookup(tool)

    return BuildInfoGenerator.from_project(
        project,
        version_lookup,
        system_properties=system_properties,
        environment_properties=environment,
    )


ProjectFileArg = Annotated[
    Path, typer.Argument(help="Project descriptor (YAML)")
]
DefineOpt = Annotated[
    Optional[list[str]],
    typer.Option("--define", "-D", help="Property definition KEY=VALUE (repeatable)"),
]
ProfileOpt = Annotated[
    Optional[list[str]],
    typer.Option("--profile", help="Active profile id (repeatable, replaces project)"),
]
PrefixOpt = Annotated[
    Optional[str], typer.Option(help="Property key prefix (default: build.)")
]
ToolOpt = Annotated[
    str, typer.Option(help="Installed distribution whose version is recorded")
]
ToolVersionOpt = Annotated[
    Optional[str], typer.Option(help="Fixed build tool version (skips lookup)")
]
LogLevelOpt = Annotated[
    str,
    typer.Option(
        help="Logging level (debug, info, warn, error)",
        case_sensitive=False,
        hidden=True,
    ),
]


@app.command()
def write(
    project_file: ProjectFileArg = Path(DEFAULT_PROJECT_FILE),
    output_dir: Annotated[
        Optional[Path], typer.Option(help="Build output directory")
    ] = None,
    file_name: Annotated[
        Optional[str], typer.Option(help="Properties file name")
    ] = None,
    prefix: PrefixOpt = None,
    profile: ProfileOpt = None,
    define: DefineOpt = None,
    tool: ToolOpt = DEFAULT_TOOL,
    tool_version: ToolVersionOpt = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Collect and print, do not write")
    ] = False,
    log_level: LogLevelOpt = "info",
):
    """Collect build information and write the properties file."""
    configure_logging(log_level)

    project = load_project(project_file, output_dir, file_name, prefix, profile)
    generator = build_generator(project, define, tool, tool_version)
    target = project.build.target_path

    if dry_run:
        typer.echo(f"Target: {target} (dry run, not written)")
        for line in render_lines(generator.prepare_properties()):
            typer.echo(line)
        return

    try:
        result = generator.generate(target)
    except TargetIsDirectoryError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    if result.outcome is WriteOutcome.ABORTED:
        typer.echo(f"❌ Build info not written: {target}", err=True)
        for warning in result.warnings:
            typer.echo(f"   • {warning}", err=True)
        raise typer.Exit(1)

    if result.outcome is WriteOutcome.WRITTEN_WITH_WARNING:
        typer.echo(f"⚠️  Build info written with warnings: {target}", err=True)
        for warning in result.warnings:
            typer.echo(f"   • {warning}", err=True)
        return

    typer.echo(f"✅ Wrote {result.lines_written} properties to {target}")


@app.command()
def show(
    project_file: ProjectFileArg = Path(DEFAULT_PROJECT_FILE),
    prefix: PrefixOpt = None,
    profile: ProfileOpt = None,
    define: DefineOpt = None,
    tool: ToolOpt = DEFAULT_TOOL,
    tool_version: ToolVersionOpt = None,
    log_level: LogLevelOpt = "info",
):
    """Print the collected build information without writing it."""
    configure_logging(log_level)

    project = load_project(project_file, None, None, prefix, profile)
    generator = build_generator(project, define, tool, tool_version)

    for line in render_lines(generator.prepare_properties()):
        typer.echo(line)


if __name__ == "__main__":
    app()
