"""Plugin metadata record.

A record describes one loadable plugin package: identity, version, where its
archive lives, how far it got installed and which update or removal is
scheduled for it. Records serialize to a compact JSON document. Keys this
version does not know about are kept and written back unchanged.
"""

from __future__ import annotations

import copy
import json
import logging
import math
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    ValidationError,
    model_serializer,
    model_validator,
)

from pluginfo.config.schema import PluginInfoConfig
from pluginfo.errors import IncompleteRecordError, MalformedInputError, PendingChainTooDeepError
from pluginfo.model.metadata import MetadataKeys, PackageDescriptor, read_int, read_str
from pluginfo.model.ports import ArtifactDirs, PackageMetadataSource, PathResolver
from pluginfo.model.types import (
    FRAMEWORK_VERSION_UNKNOWN,
    INT64_MAX,
    INT64_MIN,
    KEY_ALIAS,
    KEY_FRAMEWORK_VERSION,
    KEY_HIGH,
    KEY_LOW,
    KEY_NAME,
    KEY_PACKAGE_NAME,
    KEY_PATH,
    KEY_PENDING_DELETE,
    KEY_PENDING_UPDATE,
    KEY_TYPE,
    KEY_USED,
    KEY_VERSION,
    KEY_VERSION_VALUE,
    MAX_DOCUMENT_DEPTH,
    MAX_PENDING_DEPTH,
    REQUIRED_KEYS,
    PluginType,
    build_version_value,
    make_name,
)

logger = logging.getLogger(__name__)


def _as_int(value: Any, default: int = 0) -> Any:
    # Numbers truncate, numeric strings parse, other scalars read as the default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return default
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if value is None:
        return default
    return value


def _as_long(value: Any) -> Any:
    value = _as_int(value)
    if isinstance(value, int) and not INT64_MIN <= value <= INT64_MAX:
        return 0
    return value


def _as_str(value: Any, default: str = "") -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if value is None:
        return default
    return value


def _as_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    if value is None or isinstance(value, (int, float)):
        return False
    return value


# Known scalar keys and how a value of another scalar type is read.
# Objects and arrays are left alone so validation rejects them.
_SCALAR_READERS: dict[str, Callable[[Any], Any]] = {
    KEY_PACKAGE_NAME: _as_str,
    KEY_ALIAS: _as_str,
    KEY_NAME: _as_str,
    KEY_PATH: _as_str,
    KEY_LOW: _as_int,
    KEY_HIGH: _as_int,
    KEY_VERSION: _as_int,
    KEY_VERSION_VALUE: _as_long,
    KEY_TYPE: _as_int,
    KEY_USED: _as_bool,
    KEY_FRAMEWORK_VERSION: lambda value: _as_int(value, FRAMEWORK_VERSION_UNKNOWN),
}


class PluginRecord(BaseModel):
    """Metadata of one plugin package, backed by a JSON document.

    Every setter writes through immediately. Keys that were never written
    stay absent from the serialized form. Known keys are written in a fixed
    order; unknown keys follow in the order they were read.
    """

    model_config = ConfigDict(
        extra="allow", validate_assignment=True, ser_json_inf_nan="constants"
    )

    package_name: str = Field(default="", alias="pkgname")
    alias: str = Field(default="", alias="ali")
    name: str = ""
    low: int = 0
    high: int = 0
    version: int = Field(default=0, alias="ver")
    version_value: int = Field(default=0, alias="verv", ge=INT64_MIN, le=INT64_MAX)
    path: str = ""
    type: int = 0
    used: bool = False
    framework_version: int = Field(default=FRAMEWORK_VERSION_UNKNOWN, alias="frm_ver")
    update_info: PluginRecord | None = Field(default=None, alias="upinfo")
    delete_info: PluginRecord | None = Field(default=None, alias="delinfo")

    @model_validator(mode="before")
    @classmethod
    def coerce_scalars(cls, data: Any) -> Any:
        """Read mistyped scalar values the lenient way stored records expect."""
        if not isinstance(data, dict):
            return data
        coerced = dict(data)
        for key, reader in _SCALAR_READERS.items():
            if key in coerced:
                coerced[key] = reader(coerced[key])
        return coerced

    @model_serializer(mode="wrap")
    def serialize_document(self, handler: Any, info: SerializationInfo) -> dict[str, Any]:
        # A cleared pending slot is an absent key, not null
        data = handler(self)
        for field_name, key in (
            ("update_info", KEY_PENDING_UPDATE),
            ("delete_info", KEY_PENDING_DELETE),
        ):
            if getattr(self, field_name) is None:
                data.pop(key if info.by_alias else field_name, None)
        return data

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        pkg_name: str,
        alias: str | None = None,
        low: int = 0,
        high: int = 0,
        version: int = 0,
        path: str = "",
        plugin_type: int = PluginType.NOT_INSTALLED,
    ) -> PluginRecord:
        """Build a record from the fields found on a freshly discovered package.

        The lookup name is derived here and stored; it is never recomputed.
        An alias of None leaves the ``ali`` key out of the document.
        """
        doc: dict[str, Any] = {KEY_PACKAGE_NAME: pkg_name}
        if alias is not None:
            doc[KEY_ALIAS] = alias
        doc[KEY_NAME] = make_name(pkg_name, alias)
        doc[KEY_LOW] = low
        doc[KEY_HIGH] = high

        record = cls.model_validate(doc)
        record._set_version(version)
        record.set_path(path)
        record.set_type(plugin_type)
        return record

    @classmethod
    def create_legacy(cls, name: str, low: int, high: int, version: int) -> PluginRecord:
        """Build a name-only record in the old format (no package name or type)."""
        return cls.model_validate(
            {KEY_NAME: name, KEY_LOW: low, KEY_HIGH: high, KEY_VERSION: version}
        )

    @classmethod
    def from_package_metadata(
        cls,
        descriptor: PackageDescriptor,
        path: str,
        config: PluginInfoConfig | None = None,
    ) -> PluginRecord | None:
        """Build a not-yet-installed record from a package descriptor.

        Alias, protocol range and version come from the metadata bundle when
        present; missing keys read as absent or zero.

        Args:
            descriptor: Descriptor reported by the host package manager
            path: Where the package archive currently lives
            config: Settings for metadata key names and defaults

        Returns:
            The record, or None when the descriptor has no application section
        """
        if descriptor.application_info is None:
            logger.debug("Package %s has no application info, skipping", descriptor.package_name)
            return None

        config = config or PluginInfoConfig()
        keys = MetadataKeys(config.metadata.namespace)
        meta = descriptor.metadata

        record = cls.create(
            descriptor.package_name,
            read_str(meta, keys.alias),
            read_int(meta, keys.low),
            read_int(meta, keys.high),
            read_int(meta, keys.version),
            path,
            PluginType.NOT_INSTALLED,
        )
        record.set_framework_version_by_meta(meta, config)
        return record

    @classmethod
    def from_package_file(
        cls,
        source: PackageMetadataSource,
        path: str,
        config: PluginInfoConfig | None = None,
    ) -> PluginRecord | None:
        """Describe the package at ``path`` through ``source`` and build its record."""
        descriptor = source.describe(path)
        if descriptor is None:
            logger.debug("No package descriptor for %s", path)
            return None
        return cls.from_package_metadata(descriptor, path, config)

    @classmethod
    def parse(cls, text: str, config: PluginInfoConfig | None = None) -> PluginRecord:
        """Rebuild a record from its serialized text.

        Raises:
            MalformedInputError: If the text is not a JSON object of the
                expected shape
            IncompleteRecordError: If ``pkgname``, ``type`` or ``ver`` is missing
        """
        try:
            doc = json.loads(text)
        except RecursionError as e:
            raise MalformedInputError("Record text is nested too deeply") from e
        except (TypeError, ValueError) as e:
            raise MalformedInputError(f"Record text is not valid JSON: {e}") from e

        if not isinstance(doc, dict):
            raise MalformedInputError(f"Record text holds {type(doc).__name__}, not an object")
        return cls._build(doc, config)

    @classmethod
    def from_serialized_text(
        cls, text: str, config: PluginInfoConfig | None = None
    ) -> PluginRecord | None:
        """Like :meth:`parse`, but returns None for unusable text."""
        try:
            return cls.parse(text, config)
        except (MalformedInputError, IncompleteRecordError) as e:
            logger.debug("Rejected plugin record text: %s", e)
            return None

    @classmethod
    def validate_document(
        cls, doc: Mapping[str, Any], config: PluginInfoConfig | None = None
    ) -> PluginRecord:
        """Build a record from an already decoded document.

        The document is copied; later changes to ``doc`` do not reach the record.

        Raises:
            MalformedInputError: If a value has the wrong type
            IncompleteRecordError: If a mandatory key is missing or the stored
                name is empty
        """
        _check_document_depth(doc, MAX_DOCUMENT_DEPTH)
        record = cls._build(copy.deepcopy(dict(doc)), config)
        if not record.name:
            raise IncompleteRecordError("Record has neither alias nor package name", (KEY_NAME,))
        return record

    @classmethod
    def from_document(
        cls, doc: Mapping[str, Any], config: PluginInfoConfig | None = None
    ) -> PluginRecord | None:
        """Like :meth:`validate_document`, but returns None for unusable documents."""
        try:
            return cls.validate_document(doc, config)
        except (MalformedInputError, IncompleteRecordError) as e:
            logger.debug("Rejected plugin record document: %s", e)
            return None

    @classmethod
    def _build(cls, doc: dict[str, Any], config: PluginInfoConfig | None) -> PluginRecord:
        missing = tuple(key for key in REQUIRED_KEYS if key not in doc)
        if missing:
            raise IncompleteRecordError(f"Record lacks {', '.join(missing)}", missing)

        config = config or PluginInfoConfig()
        _check_document_depth(doc, MAX_DOCUMENT_DEPTH)
        _check_pending_depth(doc, config.records.max_pending_depth)

        try:
            return cls.model_validate(doc)
        except ValidationError as e:
            raise MalformedInputError(f"Record document is invalid: {e}") from e

    def clone(self, *, _depth: int = 0) -> PluginRecord:
        """Return a fully independent deep copy, pending chains included."""
        if _depth > MAX_PENDING_DEPTH:
            raise PendingChainTooDeepError(MAX_PENDING_DEPTH)

        own = self.model_dump(
            by_alias=True, exclude_unset=True, exclude={"update_info", "delete_info"}
        )
        copied = type(self).model_validate(copy.deepcopy(own))
        if self.update_info is not None:
            copied.update_info = self.update_info.clone(_depth=_depth + 1)
        if self.delete_info is not None:
            copied.delete_info = self.delete_info.clone(_depth=_depth + 1)
        return copied

    def __copy__(self) -> PluginRecord:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> PluginRecord:
        return self.clone()

    # ------------------------------------------------------------------
    # Accessors and setters
    # ------------------------------------------------------------------

    @property
    def kind(self) -> PluginType | None:
        """The installation kind, or None for a value this version does not know."""
        try:
            return PluginType(self.type)
        except ValueError:
            return None

    @property
    def is_used(self) -> bool:
        return self.used

    def set_is_used(self, used: bool) -> None:
        self.used = used

    def set_path(self, path: str) -> None:
        self.path = path

    def set_type(self, plugin_type: int) -> None:
        self.type = int(plugin_type)

    def set_framework_version(self, version: int) -> None:
        self.framework_version = version

    def set_framework_version_by_meta(
        self, meta: Mapping[str, Any] | None, config: PluginInfoConfig | None = None
    ) -> None:
        """Store the framework version a package declares in its metadata.

        Packages declaring nothing, or a value below 1, get the configured
        default framework version.
        """
        config = config or PluginInfoConfig()
        default = config.metadata.default_framework_version
        key = MetadataKeys(config.metadata.namespace).framework_version
        version = read_int(meta, key, default)
        if version < 1:
            version = default
        self.set_framework_version(version)

    def _set_version(self, version: int) -> None:
        self.version = version
        self.version_value = build_version_value(self.low, self.high, version)

    # ------------------------------------------------------------------
    # Pending update / delete
    # ------------------------------------------------------------------

    def is_need_update(self) -> bool:
        return self.update_info is not None

    def pending_update(self) -> PluginRecord | None:
        """Record of the version waiting to replace this one, if any."""
        return self.update_info

    def set_pending_update(self, info: PluginRecord | None) -> None:
        """Schedule ``info`` as the next version, or clear the schedule with None.

        The record keeps its own copy of ``info``.

        Raises:
            PendingChainTooDeepError: If the resulting chain would be deeper
                than a parser accepts
        """
        self.update_info = info.clone(_depth=1) if info is not None else None

    def is_need_uninstall(self) -> bool:
        return self.delete_info is not None

    def pending_delete(self) -> PluginRecord | None:
        return self.delete_info

    def set_pending_delete(self, info: PluginRecord | None) -> None:
        self.delete_info = info.clone(_depth=1) if info is not None else None

    def apply_update(self, new_info: PluginRecord) -> None:
        """Take over version, path and type of a newly installed version.

        Name, alias and protocol range stay as they are.
        """
        self._set_version(new_info.version)
        self.set_path(new_info.path)
        self.set_type(new_info.type)

    # ------------------------------------------------------------------
    # Versions and locations
    # ------------------------------------------------------------------

    def is_newer_than(self, other: PluginRecord) -> bool:
        return self.version_value > other.version_value

    def artifact_dirs(self, resolver: PathResolver, storage_root: Path) -> ArtifactDirs:
        """Ask ``resolver`` where this record's files live for its kind."""
        return ArtifactDirs(
            artifact=resolver.artifact_dir(self.type, storage_root),
            compiled=resolver.compiled_dir(self.type, storage_root),
            native_libs=resolver.native_libs_dir(self.type, storage_root),
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_document(self) -> dict[str, Any]:
        """Return the backing document as a fresh nested dict."""
        return self.model_dump(by_alias=True, exclude_unset=True)

    def to_text(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_unset=True)

    def __str__(self) -> str:
        kind = self.kind
        parts = [f"<{self.name}:{self.version}>", f"[{kind.name if kind else self.type}]"]
        if self.path:
            parts.append(self.path)
        if self.update_info is not None:
            parts.append(f"upinfo=<{self.update_info.name}:{self.update_info.version}>")
        if self.delete_info is not None:
            parts.append("delinfo")
        return f"PluginRecord {{ {' '.join(parts)} }}"


def version_key(record: PluginRecord) -> int:
    """Sort key ordering records from oldest to newest."""
    return record.version_value


def newest(records: Iterable[PluginRecord]) -> PluginRecord | None:
    return max(records, key=version_key, default=None)


def _check_document_depth(doc: Mapping[str, Any], limit: int) -> None:
    stack: list[tuple[Any, int]] = [(doc, 1)]
    while stack:
        node, depth = stack.pop()
        children = node.values() if isinstance(node, Mapping) else node
        for child in children:
            if isinstance(child, (Mapping, list)):
                if depth + 1 > limit:
                    raise MalformedInputError(f"Record document nests deeper than {limit} levels")
                stack.append((child, depth + 1))


def _check_pending_depth(doc: Mapping[str, Any], limit: int) -> None:
    stack: list[tuple[Mapping[str, Any], int]] = [(doc, 0)]
    while stack:
        node, depth = stack.pop()
        for key in (KEY_PENDING_UPDATE, KEY_PENDING_DELETE):
            child = node.get(key)
            if isinstance(child, Mapping):
                if depth + 1 > limit:
                    raise PendingChainTooDeepError(limit)
                stack.append((child, depth + 1))
