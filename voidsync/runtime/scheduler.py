from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger("voidsync.scheduler")


class RepeatingTask:
    """Run ``fn`` every ``interval_s`` seconds on a daemon thread until cancelled.

    The first run happens one interval after ``start()``. An exception raised
    by ``fn`` is logged and the loop keeps going.
    """

    def __init__(self, name: str, interval_s: float, fn: Callable[[], object],
                 on_thread_start: Callable[[], None] | None = None):
        self.name = name
        self.interval_s = float(interval_s)
        self._fn = fn
        self._on_thread_start = on_thread_start
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _loop(self):
        if self._on_thread_start is not None:
            self._on_thread_start()
        while not self._stop.wait(timeout=self.interval_s):
            try:
                self._fn()
            except Exception:
                logger.exception("scheduled task failed: name=%s", self.name)

    def start(self):
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name=f"voidsync-{self.name}", daemon=True)
        self._thread.start()

    def cancel(self, join_timeout: float = 2.0):
        self._stop.set()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=join_timeout)

    @property
    def alive(self) -> bool:
        return bool(self._thread and self._thread.is_alive())


class TaskScheduler:
    """Named repeating tasks; scheduling a taken name replaces the old task."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: dict[str, RepeatingTask] = {}

    def schedule(self, name: str, interval_s: float, fn: Callable[[], object],
                 on_thread_start: Callable[[], None] | None = None) -> RepeatingTask:
        task = RepeatingTask(name, interval_s, fn, on_thread_start=on_thread_start)
        with self._lock:
            previous = self._tasks.pop(name, None)
            self._tasks[name] = task
        if previous is not None:
            previous.cancel()
            logger.debug("scheduled task replaced: name=%s", name)
        task.start()
        logger.info("scheduled task started: name=%s interval_s=%s", name, interval_s)
        return task

    def cancel(self, name: str) -> bool:
        with self._lock:
            task = self._tasks.pop(name, None)
        if task is None:
            return False
        task.cancel()
        logger.info("scheduled task cancelled: name=%s", name)
        return True

    def cancel_all(self) -> None:
        with self._lock:
            tasks = list(self._tasks.values())
            self._tasks.clear()
        for task in tasks:
            task.cancel()

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._tasks)
