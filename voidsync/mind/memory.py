from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from ..utils.file_utils import atomic_write_json, read_json

logger = logging.getLogger("voidsync.mind.memory")

PATTERNS_KEY = "mind_patterns"
ROLE_KEY = "mind_role"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalMemory:
    """
    Small key/value store for agent state that outlives the process:
    - one JSON file per key under ``state_dir``
    - writes are atomic (temp file + rename)
    - with no ``state_dir`` values live in a dict for the life of the object
    """

    def __init__(self, state_dir: str | Path | None = None):
        self.state_dir = Path(state_dir).expanduser() if state_dir else None
        self._mem: dict[str, Any] = {}

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"invalid memory key: {key!r}")
        assert self.state_dir is not None
        return self.state_dir / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        if self.state_dir is None:
            return self._mem.get(key, default)
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return read_json(path)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("unreadable local memory %s: %s", path, exc)
            return default

    def set(self, key: str, value: Any) -> None:
        if self.state_dir is None:
            self._mem[key] = json.loads(json.dumps(value))
            return
        atomic_write_json(self._path(key), value)
