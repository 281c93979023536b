"""Plugin record model."""

from pluginfo.model.metadata import ApplicationInfo, MetadataKeys, PackageDescriptor
from pluginfo.model.ports import ArtifactDirs, PackageMetadataSource, PathResolver
from pluginfo.model.record import PluginRecord, newest, version_key
from pluginfo.model.traversal import (
    TrackedRecord,
    enter_pending_update,
    top_level,
    walk_pending_updates,
)
from pluginfo.model.types import FRAMEWORK_VERSION_UNKNOWN, PluginType, make_name

__all__ = [
    "FRAMEWORK_VERSION_UNKNOWN",
    "ApplicationInfo",
    "ArtifactDirs",
    "MetadataKeys",
    "PackageDescriptor",
    "PackageMetadataSource",
    "PathResolver",
    "PluginRecord",
    "PluginType",
    "TrackedRecord",
    "enter_pending_update",
    "make_name",
    "newest",
    "top_level",
    "version_key",
    "walk_pending_updates",
]
