"""
Mind senses: turning raw interaction signals into moments.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Mapping

from ..schemas import Moment, MomentContext

DEFAULT_MEANING = "presence"


class MindRole(str, Enum):
    SOLITARY = "solitary"   # observe and learn only, no network
    SENDER = "sender"       # push state to the void
    RECEIVER = "receiver"   # pull state from the void

    @classmethod
    def parse(cls, value: "str | MindRole") -> "MindRole":
        if isinstance(value, MindRole):
            return value
        key = (value or "").strip().lower()
        key = _ROLE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown mind role: {value!r}") from None


_ROLE_ALIASES = {
    "single": MindRole.SOLITARY.value,
    "scout": MindRole.SENDER.value,
    "primary": MindRole.RECEIVER.value,
}


def extract_meaning(raw: Any) -> str:
    """Reduce a raw signal to a short label.

    Strings pass through; otherwise a truthy ``type`` then ``key`` field (mapping
    item or attribute) is used; anything else is plain presence.
    """
    if isinstance(raw, str):
        return raw
    for field in ("type", "key"):
        if isinstance(raw, Mapping):
            value = raw.get(field)
        else:
            value = getattr(raw, field, None)
        if value:
            return str(value)
    return DEFAULT_MEANING


def to_millis(moment_time: datetime) -> int:
    return int(moment_time.timestamp() * 1000)


def build_moment(event_type: str, raw: Any, now: datetime,
                 online_probe: Callable[[], bool] | None = None) -> Moment:
    online = True
    if online_probe is not None:
        try:
            online = bool(online_probe())
        except Exception:
            online = False
    return Moment(
        type=str(event_type),
        timestamp=to_millis(now),
        data=extract_meaning(raw),
        context=MomentContext(time=now.strftime("%H:%M:%S"), battery="unknown", online=online),
    )
