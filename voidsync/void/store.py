"""
VoidSync v1.0.0: Void Store
One JSON document held in process memory, shared by every caller.

The store is keyed by slot so the read/write contract does not change if the
key space is ever widened; today every caller uses ``DEFAULT_SLOT``. There is
no locking and no version check: the most recent completed write wins, and
everything is lost when the process restarts.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from ..schemas import StoreDocument, SyncPayload
from ..utils.logging_utils import structured_log

logger = logging.getLogger("voidsync.void")

DEFAULT_SLOT = "void"


def now_ms() -> int:
    return int(time.time() * 1000)


class VoidStore:

    def __init__(self) -> None:
        self._slots: dict[str, StoreDocument] = {}

    def write(self, payload: SyncPayload, slot: str = DEFAULT_SLOT) -> StoreDocument:
        doc = StoreDocument(
            role=payload.role,
            patterns=payload.patterns or {},
            consciousness=payload.consciousness or [],
            timestamp=payload.timestamp or now_ms(),
            last_update=datetime.now(timezone.utc).isoformat(),
        )
        self._slots[slot] = doc
        structured_log(
            logger, logging.INFO, "void_write",
            role=payload.role, slot=slot,
            patterns=len(doc.patterns), consciousness=len(doc.consciousness),
            timestamp=payload.timestamp,
        )
        return doc

    def read(self, slot: str = DEFAULT_SLOT) -> StoreDocument | None:
        return self._slots.get(slot)

    def clear(self, slot: str = DEFAULT_SLOT) -> None:
        self._slots.pop(slot, None)
        structured_log(logger, logging.INFO, "void_clear", slot=slot)


void_store = VoidStore()
