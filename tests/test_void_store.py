from __future__ import annotations

from datetime import datetime

from voidsync.schemas import SyncPayload
from voidsync.void.store import DEFAULT_SLOT, VoidStore


def test_write_fills_defaults_and_stamps_last_update():
    store = VoidStore()
    doc = store.write(SyncPayload(role='sender'))
    assert doc.patterns == {}
    assert doc.consciousness == []
    assert doc.timestamp > 0
    assert datetime.fromisoformat(doc.last_update)
    assert 'lastUpdate' in doc.to_wire()


def test_zero_timestamp_is_replaced_with_now():
    doc = VoidStore().write(SyncPayload(timestamp=0))
    assert doc.timestamp > 0


def test_single_slot_holds_one_document():
    store = VoidStore()
    store.write(SyncPayload(role='a', timestamp=1))
    store.write(SyncPayload(role='b', timestamp=2))
    assert store.read().role == 'b'
    assert store.read(DEFAULT_SLOT).timestamp == 2


def test_clear_empties_slot():
    store = VoidStore()
    store.write(SyncPayload(role='a', timestamp=1))
    store.clear()
    assert store.read() is None
    store.clear()
