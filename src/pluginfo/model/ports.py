"""Capabilities supplied by the host environment."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Protocol, runtime_checkable

from pluginfo.model.metadata import PackageDescriptor


@runtime_checkable
class PackageMetadataSource(Protocol):
    """Reads the descriptor of a package archive on disk."""

    def describe(self, path: str) -> PackageDescriptor | None:
        """Return the descriptor of the package at ``path``, None if unreadable."""
        ...


@runtime_checkable
class PathResolver(Protocol):
    """Maps a plugin kind to the directories the host keeps its files in."""

    def artifact_dir(self, plugin_type: int, storage_root: Path) -> Path:
        """Directory holding the extracted package."""
        ...

    def compiled_dir(self, plugin_type: int, storage_root: Path) -> Path:
        """Directory holding ahead-of-time compiled output."""
        ...

    def native_libs_dir(self, plugin_type: int, storage_root: Path) -> Path:
        """Directory native libraries are extracted into."""
        ...


class ArtifactDirs(NamedTuple):
    artifact: Path
    compiled: Path
    native_libs: Path
