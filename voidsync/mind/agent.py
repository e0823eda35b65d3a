"""
VoidSync v1.0.0: Mind
Observes moments, learns per-hour patterns and, depending on its role,
shares them through the Void.

Roles are fixed for the life of a Mind:
  solitary  → observe + insight only
  sender    → also push state every sync interval
  receiver  → also pull and merge remote state every sync interval
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime
from typing import Any, Callable, Optional

from ..config import settings
from ..schemas import Moment, SyncPayload
from ..runtime.scheduler import TaskScheduler
from ..utils.logging_utils import bind_runtime_context, structured_log
from .client import VoidClient
from .insight import generate_insight
from .memory import PATTERNS_KEY, ROLE_KEY, LocalMemory
from .patterns import PatternSignal, PatternTable
from .senses import MindRole, build_moment, to_millis

logger = logging.getLogger("voidsync.mind")


class Mind:

    def __init__(
        self,
        role: "str | MindRole" = MindRole.SOLITARY,
        *,
        memory: Optional[LocalMemory] = None,
        client: Optional[VoidClient] = None,
        endpoint: Optional[str] = None,
        scheduler: Optional[TaskScheduler] = None,
        clock: Callable[[], datetime] = datetime.now,
        online_probe: Optional[Callable[[], bool]] = None,
        on_display: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.role = MindRole.parse(role)
        self.memory = memory if memory is not None else LocalMemory(settings.mind_state_dir or None)
        self.scheduler = scheduler or TaskScheduler()
        self._clock = clock
        self._online_probe = online_probe
        self._on_display = on_display
        self._lock = threading.RLock()

        self.consciousness: deque[Moment] = deque(maxlen=max(1, int(settings.mind_consciousness_limit)))
        self.patterns = self._load_patterns()
        self.last_sync: int = 0
        self.last_thought: Optional[str] = None
        self.awake = False

        if self.role is MindRole.SOLITARY:
            self.client = None
        else:
            self.client = client or VoidClient(endpoint or settings.mind_sync_endpoint)
        self.memory.set(ROLE_KEY, self.role.value)

    @classmethod
    def resume(cls, memory: Optional[LocalMemory] = None, **kwargs: Any) -> "Mind":
        """Build a Mind in the role it last ran with, else the configured default."""
        memory = memory if memory is not None else LocalMemory(settings.mind_state_dir or None)
        saved = memory.get(ROLE_KEY)
        role = settings.mind_role
        if saved:
            try:
                role = MindRole.parse(saved)
            except ValueError:
                logger.warning("ignoring unknown saved role: %r", saved)
        return cls(role, memory=memory, **kwargs)

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def awaken(self) -> None:
        logger.info("MIND awakening as: %s", self.role.value)
        self.display("MIND is here")

        def bind():
            bind_runtime_context(role=self.role.value)

        self.scheduler.schedule("insight", settings.mind_insight_interval_s, self.periodic_insight, bind)
        if self.role is MindRole.SENDER:
            self.scheduler.schedule("push", settings.mind_sync_interval_s, self.push_state, bind)
            self.display("Scout mode - Learning and sharing")
        elif self.role is MindRole.RECEIVER:
            self.scheduler.schedule("pull", settings.mind_sync_interval_s, self.pull_state, bind)
            self.display("Primary mode - Absorbing knowledge")
        self.awake = True

    def sleep(self) -> None:
        self.scheduler.cancel_all()
        self.awake = False
        logger.info("MIND resting: role=%s moments=%d patterns=%d",
                    self.role.value, len(self.consciousness), len(self.patterns))

    # ── Observation ──────────────────────────────────────────────────────────

    def sense(self, event_type: str, raw: Any = None) -> Moment:
        moment = build_moment(event_type, raw, self._clock(), self._online_probe)
        with self._lock:
            self.consciousness.append(moment)
            self._process(moment)
        return moment

    def _process(self, moment: Moment) -> None:
        signal = self.detect_pattern(moment)
        if signal.confidence > settings.mind_pattern_threshold:
            self.display(f"Pattern recognized: {signal.key}")
        self._save_patterns()

    def detect_pattern(self, moment: Moment) -> PatternSignal:
        hour = datetime.fromtimestamp(moment.timestamp / 1000).hour
        with self._lock:
            return self.patterns.observe(moment, hour)

    def recent(self, n: int) -> list[Moment]:
        with self._lock:
            if n <= 0:
                return []
            return list(self.consciousness)[-n:]

    def periodic_insight(self) -> Optional[str]:
        insight = generate_insight(self.recent(settings.mind_insight_window))
        if insight:
            self.display(insight)
        return insight

    # ── Sync ─────────────────────────────────────────────────────────────────

    def build_payload(self) -> SyncPayload:
        with self._lock:
            return SyncPayload(
                role=self.role.value,
                patterns=self.patterns.to_dict(),
                consciousness=[m.model_dump() for m in self.recent(settings.mind_sync_window)],
                timestamp=to_millis(self._clock()),
            )

    def push_state(self) -> bool:
        if self.client is None:
            return False
        return self.client.push(self.build_payload())

    def pull_state(self) -> bool:
        """Fetch the Void document and merge it if it is newer than the last one seen."""
        if self.client is None:
            return False
        data = self.client.pull()
        if data is None:
            return False
        remote_ts = data.get("timestamp")
        if isinstance(remote_ts, bool) or not isinstance(remote_ts, (int, float)):
            logger.warning("Void document has no usable timestamp: %r", remote_ts)
            return False
        with self._lock:
            if remote_ts <= (self.last_sync or 0):
                return False
            self.merge_remote(data)
            self.last_sync = int(remote_ts)
        logger.info("Pulled from void: timestamp=%s", remote_ts)
        return True

    def merge_remote(self, remote_doc: dict[str, Any]) -> dict[str, int]:
        patterns = remote_doc.get("patterns") or {}
        if not isinstance(patterns, dict):
            logger.warning("Void document patterns is not a mapping: %s", type(patterns).__name__)
            return {"adopted": 0, "combined": 0, "skipped": 0}
        with self._lock:
            stats = self.patterns.merge(patterns)
            self._save_patterns()
        structured_log(logger, logging.INFO, "mind_merge", role=self.role.value,
                       remote_role=remote_doc.get("role"), **stats)
        return stats

    # ── Display / persistence ────────────────────────────────────────────────

    def display(self, message: str) -> None:
        self.last_thought = message
        logger.info("MIND: %s", message)
        if self._on_display is not None:
            self._on_display(message)

    def _load_patterns(self) -> PatternTable:
        saturation = settings.mind_pattern_saturation
        data = self.memory.get(PATTERNS_KEY)
        if data is None:
            return PatternTable(saturation=saturation)
        if not isinstance(data, dict):
            logger.warning("discarding stored patterns of type %s", type(data).__name__)
            return PatternTable(saturation=saturation)
        return PatternTable.from_dict(data, saturation=saturation)

    def _save_patterns(self) -> None:
        self.memory.set(PATTERNS_KEY, self.patterns.to_dict())
