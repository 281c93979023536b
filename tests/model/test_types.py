"""Tests for plugin kinds, naming and version values."""

from pluginfo.model.types import (
    FRAMEWORK_VERSION_UNKNOWN,
    INT64_MAX,
    PluginType,
    build_version_value,
    make_name,
)


class TestMakeName:
    def test_both_empty(self):
        assert make_name("", "") == ""

    def test_package_name_only(self):
        assert make_name("pkg", "") == "pkg"

    def test_alias_wins(self):
        assert make_name("pkg", "alias") == "alias"

    def test_none_values(self):
        assert make_name(None, None) == ""
        assert make_name("pkg", None) == "pkg"
        assert make_name(None, "alias") == "alias"


class TestPluginType:
    def test_values(self):
        assert PluginType.NOT_INSTALLED == 10
        assert PluginType.EXTRACTED == 11
        assert PluginType.LEGACY_INSTALLED == 1
        assert PluginType.LEGACY_BUILTIN == 2
        assert PluginType.LEGACY_RAW == 3

    def test_is_legacy(self):
        assert PluginType.LEGACY_INSTALLED.is_legacy
        assert PluginType.LEGACY_BUILTIN.is_legacy
        assert PluginType.LEGACY_RAW.is_legacy
        assert not PluginType.NOT_INSTALLED.is_legacy
        assert not PluginType.EXTRACTED.is_legacy

    def test_unknown_framework_version_is_zero(self):
        assert FRAMEWORK_VERSION_UNKNOWN == 0


class TestBuildVersionValue:
    def test_layout(self):
        assert build_version_value(1, 5, 3) == (5 << 48) | (1 << 32) | 3

    def test_version_dominates_within_same_range(self):
        assert build_version_value(1, 5, 4) > build_version_value(1, 5, 3)

    def test_high_dominates_version(self):
        assert build_version_value(0, 6, 0) > build_version_value(0, 5, 0xFFFFFFFF)

    def test_fits_signed_64_bit(self):
        value = build_version_value(-1, -1, -1)
        assert 0 <= value <= INT64_MAX
