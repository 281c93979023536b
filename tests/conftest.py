"""Pytest configuration and shared fixtures."""

import pytest

from pluginfo.config.schema import PluginInfoConfig
from pluginfo.model.record import PluginRecord
from pluginfo.model.types import PluginType


@pytest.fixture
def default_config() -> PluginInfoConfig:
    """Provide a default configuration for tests."""
    return PluginInfoConfig()


@pytest.fixture
def record() -> PluginRecord:
    """A freshly discovered, not yet installed plugin."""
    return PluginRecord.create(
        "com.example.plug", "", 1, 5, 3, "/data/p.apk", PluginType.NOT_INSTALLED
    )


@pytest.fixture
def update_record() -> PluginRecord:
    """A newer build of the same plugin, extracted and waiting."""
    return PluginRecord.create(
        "com.example.plug", "", 2, 6, 4, "/data/plugins/p-4.apk", PluginType.EXTRACTED
    )


@pytest.fixture
def chained_record(record: PluginRecord, update_record: PluginRecord) -> PluginRecord:
    """A record whose pending update has a pending update of its own."""
    newest = PluginRecord.create(
        "com.example.plug", "", 2, 6, 5, "/data/plugins/p-5.apk", PluginType.EXTRACTED
    )
    update_record.set_pending_update(newest)
    record.set_pending_update(update_record)
    return record
