"""Plugin kinds, document keys and derived identity values."""

from __future__ import annotations

from enum import IntEnum


class PluginType(IntEnum):
    """Installation kind of a plugin, stored under the ``type`` key."""

    # Downloaded package, path points at the archive as fetched
    NOT_INSTALLED = 10
    # Copied into the managed plugin directory, not activated yet
    EXTRACTED = 11

    # Older on-disk format; kept so stored records round-trip
    LEGACY_INSTALLED = 1
    LEGACY_BUILTIN = 2
    LEGACY_RAW = 3

    @property
    def is_legacy(self) -> bool:
        return self in _LEGACY_TYPES


_LEGACY_TYPES = frozenset(
    {PluginType.LEGACY_INSTALLED, PluginType.LEGACY_BUILTIN, PluginType.LEGACY_RAW}
)

# Framework version not known yet (legacy packages only learn it at load time)
FRAMEWORK_VERSION_UNKNOWN = 0

KEY_PACKAGE_NAME = "pkgname"
KEY_ALIAS = "ali"
KEY_NAME = "name"
KEY_LOW = "low"
KEY_HIGH = "high"
KEY_VERSION = "ver"
KEY_VERSION_VALUE = "verv"
KEY_PATH = "path"
KEY_TYPE = "type"
KEY_USED = "used"
KEY_FRAMEWORK_VERSION = "frm_ver"
KEY_PENDING_UPDATE = "upinfo"
KEY_PENDING_DELETE = "delinfo"

REQUIRED_KEYS = (KEY_PACKAGE_NAME, KEY_TYPE, KEY_VERSION)
PENDING_KEYS = (KEY_PENDING_UPDATE, KEY_PENDING_DELETE)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def make_name(pkg_name: str | None, alias: str | None) -> str:
    """Resolve the lookup name of a plugin.

    The alias wins when set, then the package name. Old plugins are looked up
    by this value, so it is computed once and stored with the record.
    """
    if alias:
        return alias
    if pkg_name:
        return pkg_name
    return ""


def build_version_value(low: int, high: int, version: int) -> int:
    """Pack the protocol range and version into one comparable integer.

    Layout: 15 bits of ``high``, 16 bits of ``low``, 32 bits of ``version``.
    """
    value = (high & 0x7FFF) << 48
    value |= (low & 0xFFFF) << 32
    value |= version & 0xFFFFFFFF
    return value

# Deepest chain of nested pending update/delete records, for parsing and copying
MAX_PENDING_DEPTH = 64

# Deepest nesting of objects and arrays in a whole record document. Stays
# below the serializer's own limit so any accepted document can be written back.
MAX_DOCUMENT_DEPTH = 128
