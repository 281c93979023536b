"""Walking into pending update slots.

Whether a record was reached through another record's ``upinfo`` slot is a
property of how it was found, not of the record, so it travels next to the
record in a :class:`TrackedRecord` and is never serialized.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from pluginfo.model.record import MAX_PENDING_DEPTH, PluginRecord


@dataclass(frozen=True)
class TrackedRecord:
    """A record plus whether it sits in some other record's pending update slot."""

    record: PluginRecord
    is_pending_update: bool = False

    def clone(self) -> TrackedRecord:
        return TrackedRecord(self.record.clone(), self.is_pending_update)


def top_level(record: PluginRecord) -> TrackedRecord:
    return TrackedRecord(record)


def enter_pending_update(parent: PluginRecord) -> TrackedRecord | None:
    """Step into the pending update of ``parent``, None when nothing is scheduled."""
    pending = parent.pending_update()
    if pending is None:
        return None
    return TrackedRecord(pending, is_pending_update=True)


def walk_pending_updates(record: PluginRecord) -> Iterator[TrackedRecord]:
    """Yield ``record`` and then every pending update nested below it."""
    current = top_level(record)
    for _ in range(MAX_PENDING_DEPTH + 1):
        yield current
        nested = enter_pending_update(current.record)
        if nested is None:
            return
        current = nested
