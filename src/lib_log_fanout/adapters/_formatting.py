"""Utilities that normalise log records into template-friendly dictionaries.

Why
---
Console and file destinations accept the same ``str.format`` placeholders.
Producing the payload in one place keeps both destinations in sync.

Contents
--------
* :data:`DEFAULT_TEMPLATE` - line layout used when no template is configured.
* :func:`build_format_payload` - placeholder values for a record.
* :func:`format_line` - render a record with a template.
"""

from __future__ import annotations

from typing import Any

from lib_log_fanout.domain.events import LogRecord


DEFAULT_TEMPLATE = "{timestamp} {level_code} [{thread}] {file_name}:{line} {function} - {message}"


def build_format_payload(record: LogRecord) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates."""

    ts = record.timestamp
    level_text = record.level.severity.upper()
    return {
        "timestamp": ts.isoformat(),
        "YYYY": f"{ts.year:04d}",
        "MM": f"{ts.month:02d}",
        "DD": f"{ts.day:02d}",
        "hh": f"{ts.hour:02d}",
        "mm": f"{ts.minute:02d}",
        "ss": f"{ts.second:02d}",
        "level": level_text,
        "LEVEL": level_text,
        "level_name": record.level.name,
        "level_code": record.level.code,
        "level_icon": record.level.icon,
        "message": record.message,
        "thread": record.thread_label,
        "file": record.file,
        "file_name": record.file_name,
        "function": record.function,
        "line": record.line,
        "context": "" if record.context is None else record.context,
    }


def format_line(record: LogRecord, template: str | None = None) -> str:
    """Render ``record`` with ``template`` (or :data:`DEFAULT_TEMPLATE`).

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_fanout.domain.levels import Level
    >>> ts = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    >>> record = LogRecord(Level.WARNING, "disk low", "", "/srv/app.py", "check()", 7, timestamp=ts)
    >>> format_line(record)
    '2025-01-02T03:04:05+00:00 WARN [main] app.py:7 check() - disk low'
    >>> format_line(record, "{level_icon} {message}")
    '⚠ disk low'
    """

    return (template or DEFAULT_TEMPLATE).format(**build_format_payload(record))


__all__ = ["DEFAULT_TEMPLATE", "build_format_payload", "format_line"]
