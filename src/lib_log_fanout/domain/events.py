"""Event shapes travelling through one dispatch call.

Purpose
-------
Separate the *pending* event the dispatcher works with (message still lazy)
from the *resolved* record a destination writes.

Contents
--------
* :class:`LogEvent` - ephemeral dispatch input carrying a :class:`LazyMessage`.
* :class:`LogRecord` - immutable, fully resolved payload built by destinations.

System Role
-----------
Neither type is stored by the core; both live only for the duration of a
dispatch call (or, for :class:`LogRecord`, inside a destination).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .call_site import CallSite
from .levels import Level
from .message import LazyMessage


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Pending event assembled once per dispatch call.

    Attributes
    ----------
    level:
        Severity of the event.
    message:
        :class:`LazyMessage` resolved at most once for all destinations.
    thread:
        Caller thread label; empty for the main thread.
    call_site:
        Caller location with the function already canonicalised.
    context:
        Opaque caller value passed through unmodified.
    """

    level: Level
    message: LazyMessage
    thread: str
    call_site: CallSite
    context: Any = None


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Resolved event handed to a destination's writer.

    Examples
    --------
    >>> record = LogRecord(Level.INFO, "ready", "", "/srv/app/main.py", "boot()", 12)
    >>> record.file_name, record.thread_label
    ('main.py', 'main')
    """

    level: Level
    message: str
    thread: str
    file: str
    function: str
    line: int
    context: Any = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def file_name(self) -> str:
        """Return the final path component of :attr:`file`."""

        return self.file.replace("\\", "/").rsplit("/", 1)[-1]

    @property
    def thread_label(self) -> str:
        """Return the thread label, naming the main thread explicitly."""

        return self.thread or "main"

    def to_dict(self) -> dict[str, Any]:
        """Serialise the record into plain values."""

        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "message": self.message,
            "thread": self.thread,
            "file": self.file,
            "function": self.function,
            "line": self.line,
            "context": self.context,
        }


__all__ = ["LogEvent", "LogRecord"]
