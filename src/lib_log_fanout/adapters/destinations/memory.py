"""In-memory destination retaining the most recent records."""

from __future__ import annotations

from collections import deque
from threading import Lock
from typing import Any, Deque

from lib_log_fanout.domain.events import LogRecord

from .base import BaseDestination


class MemoryDestination(BaseDestination):
    """Keep up to ``max_records`` records for inspection by tests or demos."""

    def __init__(self, *, max_records: int = 1024, **options: Any) -> None:
        if max_records <= 0:
            raise ValueError("max_records must be positive")
        super().__init__(**options)
        self._records: Deque[LogRecord] = deque(maxlen=max_records)
        self._lock = Lock()

    @property
    def records(self) -> list[LogRecord]:
        """Return a copy of the retained records, oldest first."""

        with self._lock:
            return list(self._records)

    @property
    def messages(self) -> list[str]:
        return [record.message for record in self.records]

    def write(self, record: LogRecord) -> None:
        with self._lock:
            self._records.append(record)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["MemoryDestination"]
