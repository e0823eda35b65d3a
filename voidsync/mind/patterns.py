"""
Pattern table: naive per-hour frequency counters keyed ``{type}_{hour}``.

Hours are local hour-of-day only, so the same hour on different days lands in
the same bucket. Confidence is a saturating counter, ``min(count / 10, 1)``;
there is no decay and no windowing.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from ..schemas import Moment, PatternEntry

logger = logging.getLogger("voidsync.mind.patterns")

_KEY_RE = re.compile(r".*_(\d{1,2})", re.DOTALL)


def pattern_key(event_type: str, hour: int) -> str:
    return f"{event_type}_{hour}"


def is_pattern_key(key: str) -> bool:
    m = _KEY_RE.fullmatch(key)
    return bool(m) and 0 <= int(m.group(1)) <= 23


@dataclass
class PatternSignal:
    key: str
    count: int
    confidence: float


class PatternTable:

    def __init__(self, entries: dict[str, PatternEntry] | None = None, saturation: int = 10):
        self._entries: dict[str, PatternEntry] = dict(entries or {})
        self.saturation = max(1, int(saturation))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, key: str) -> PatternEntry | None:
        return self._entries.get(key)

    def confidence(self, count: int) -> float:
        return min(count / self.saturation, 1)

    def observe(self, moment: Moment, hour: int) -> PatternSignal:
        key = pattern_key(moment.type, hour)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = PatternEntry()
        entry.count += 1
        entry.occurrences.append(moment.timestamp)
        return PatternSignal(key=key, count=entry.count, confidence=self.confidence(entry.count))

    def merge(self, remote: Mapping[str, Any]) -> dict[str, int]:
        """Fold a remote table in: adopt unknown keys, add counts for shared ones.

        Occurrence lists of shared keys are left alone. Applying the same remote
        table twice counts it twice.
        """
        adopted = combined = skipped = 0
        for key, raw in (remote or {}).items():
            if not isinstance(key, str) or not is_pattern_key(key):
                logger.warning("skipping remote pattern with malformed key: %r", key)
                skipped += 1
                continue
            try:
                incoming = PatternEntry.model_validate(raw)
            except ValidationError as exc:
                logger.warning("skipping malformed remote pattern %s: %s", key, exc.errors()[:1])
                skipped += 1
                continue
            local = self._entries.get(key)
            if local is None:
                self._entries[key] = incoming
                adopted += 1
            else:
                local.count += incoming.count
                combined += 1
        return {"adopted": adopted, "combined": combined, "skipped": skipped}

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {k: v.model_dump() for k, v in self._entries.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None, saturation: int = 10) -> "PatternTable":
        """Load a table this Mind saved earlier; only unreadable entries are dropped."""
        table = cls(saturation=saturation)
        for key, raw in (data or {}).items():
            try:
                table._entries[str(key)] = PatternEntry.model_validate(raw)
            except ValidationError as exc:
                logger.warning("dropping unreadable stored pattern %r: %s", key, exc.errors()[:1])
        return table
