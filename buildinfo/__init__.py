"""Buildinfo - Write build metadata to a properties file for runtime use."""

__version__ = "0.1.0"

from .core.build_info import BuildInfoGenerator, write_build_info

__all__ = ["BuildInfoGenerator", "write_build_info"]
