"""Pydantic models for pluginfo.yaml configuration."""

from pydantic import BaseModel, Field

from pluginfo.model.types import FRAMEWORK_VERSION_UNKNOWN, MAX_PENDING_DEPTH


class MetadataConfig(BaseModel):
    """How package metadata bundles are read."""

    namespace: str = Field(
        default="pluginfo",
        description="Prefix of metadata keys, e.g. '<namespace>.plugin.version.ver'",
        min_length=1,
    )
    default_framework_version: int = Field(
        default=FRAMEWORK_VERSION_UNKNOWN,
        description="Framework version stored when a package does not declare one",
        ge=0,
    )


class RecordConfig(BaseModel):
    """Limits applied when rebuilding records from serialized text."""

    max_pending_depth: int = Field(
        default=MAX_PENDING_DEPTH,
        description="Deepest chain of nested pending update/delete records accepted",
        ge=1,
        le=MAX_PENDING_DEPTH,
    )


class PluginInfoConfig(BaseModel):
    """Root configuration model for pluginfo."""

    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    records: RecordConfig = Field(default_factory=RecordConfig)
