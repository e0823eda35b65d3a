from __future__ import annotations

from typing import Sequence

from ..schemas import Moment


def generate_insight(moments: Sequence[Moment]) -> str | None:
    if not moments:
        return None
    types = {m.type for m in moments}
    if len(types) == 1:
        return f"Focused on {next(iter(types))}"
    if len(moments) > 5:
        return f"Active - {len(moments)} interactions"
    return None
