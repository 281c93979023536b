"""Tests for the transient pending-update context."""

from __future__ import annotations

from pluginfo.model.record import PluginRecord
from pluginfo.model.traversal import (
    TrackedRecord,
    enter_pending_update,
    top_level,
    walk_pending_updates,
)


class TestTrackedRecord:
    def test_top_level_not_flagged(self, record: PluginRecord):
        assert top_level(record).is_pending_update is False
        assert top_level(record).record is record

    def test_enter_pending_update(self, record: PluginRecord, update_record: PluginRecord):
        assert enter_pending_update(record) is None

        record.set_pending_update(update_record)
        tracked = enter_pending_update(record)

        assert tracked.is_pending_update is True
        assert tracked.record is record.pending_update()

    def test_clone_keeps_flag(self, record: PluginRecord):
        tracked = TrackedRecord(record, is_pending_update=True)
        copied = tracked.clone()

        assert copied.is_pending_update is True
        assert copied.record == record
        assert copied.record is not record

    def test_flag_not_serialized(self, record: PluginRecord, update_record: PluginRecord):
        record.set_pending_update(update_record)
        tracked = enter_pending_update(record)
        text = tracked.record.to_text()

        assert "pending" not in text
        parsed = PluginRecord.from_serialized_text(text)
        assert top_level(parsed).is_pending_update is False


class TestWalkPendingUpdates:
    def test_single(self, record: PluginRecord):
        walked = list(walk_pending_updates(record))
        assert [t.is_pending_update for t in walked] == [False]

    def test_chain(self, chained_record: PluginRecord):
        walked = list(walk_pending_updates(chained_record))

        assert [t.record.version for t in walked] == [3, 4, 5]
        assert [t.is_pending_update for t in walked] == [False, True, True]
