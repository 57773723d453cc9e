"""In-memory task checklist shown next to the timer."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

MAX_TASK_TITLE_LENGTH = 120


class TaskChecklist:
    """Ordered list of task titles; independent from the timer engine."""

    def __init__(
        self,
        tasks: Optional[Iterable[str]] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger("runtime.tasks")
        self._lock = threading.Lock()
        self._tasks: list[str] = []
        if tasks is not None:
            self.load(tasks)

    def items(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._tasks)

    def add(self, title: str) -> str:
        normalized = _normalize_title(title)
        if not normalized:
            raise ValueError("Task title cannot be empty")
        with self._lock:
            self._tasks.append(normalized)
            count = len(self._tasks)
        self._logger.debug("Task added: %r (%d total)", normalized, count)
        return normalized

    def load(self, tasks: Iterable[str]) -> None:
        loaded = [title for title in (_normalize_title(raw) for raw in tasks) if title]
        with self._lock:
            self._tasks = loaded
        self._logger.info("Loaded %d tasks", len(loaded))


def _normalize_title(title: str) -> str:
    compact = " ".join(str(title).split())
    return compact[:MAX_TASK_TITLE_LENGTH]
