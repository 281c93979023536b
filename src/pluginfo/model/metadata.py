"""Package descriptors and the metadata bundle they carry.

A host package manager describes an installed or downloaded package with a
package name and, when the package declares an application section, a flat
metadata bundle. Plugins declare their alias and protocol range there under
well-known keys.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ApplicationInfo(BaseModel):
    """Application section of a package descriptor."""

    metadata: dict[str, Any] | None = Field(
        default=None, description="Flat metadata bundle, None when the package declares none"
    )


class PackageDescriptor(BaseModel):
    """What the host package manager reports for one package."""

    package_name: str
    application_info: ApplicationInfo | None = None

    @property
    def metadata(self) -> dict[str, Any] | None:
        if self.application_info is None:
            return None
        return self.application_info.metadata


class MetadataKeys:
    """Well-known metadata keys under a namespace prefix."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    @property
    def alias(self) -> str:
        return f"{self.namespace}.plugin.name"

    @property
    def low(self) -> str:
        return f"{self.namespace}.plugin.version.low"

    @property
    def high(self) -> str:
        return f"{self.namespace}.plugin.version.high"

    @property
    def version(self) -> str:
        return f"{self.namespace}.plugin.version.ver"

    @property
    def framework_version(self) -> str:
        return f"{self.namespace}.framework.ver"


def read_int(meta: Mapping[str, Any] | None, key: str, default: int = 0) -> int:
    """Read an integer from a metadata bundle.

    Missing keys and values of another type yield ``default``.
    """
    if meta is None:
        return default
    value = meta.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        logger.debug("Metadata key %s is not an int (%r), using %d", key, value, default)
        return default
    return value


def read_str(meta: Mapping[str, Any] | None, key: str) -> str | None:
    """Read a string from a metadata bundle, None when absent or not a string."""
    if meta is None:
        return None
    value = meta.get(key)
    if value is not None and not isinstance(value, str):
        logger.debug("Metadata key %s is not a string (%r), ignoring", key, value)
        return None
    return value
