"""Destination appending rendered lines to a UTF-8 text file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from lib_log_fanout.domain.events import LogRecord

from .base import BaseDestination


class FileDestination(BaseDestination):
    """Append one line per record to ``path``.

    The file is opened per write so external rotation (``logrotate`` moving
    the file away) is picked up without coordination. Parent directories are
    created on first write.

    Examples
    --------
    >>> import tempfile
    >>> from lib_log_fanout.domain.levels import Level
    >>> target = Path(tempfile.mkdtemp()) / "logs" / "app.log"
    >>> dest = FileDestination(target, asynchronous=False, template="{level_code} {message}")
    >>> _ = dest.send(Level.ERROR, "disk full", "", "app.py", "save()", 9, None)
    >>> target.read_text(encoding="utf-8")
    'ERRO disk full\\n'
    """

    def __init__(self, path: str | Path, *, encoding: str = "utf-8", **options: Any) -> None:
        options.setdefault("name", f"file:{Path(path).name}")
        super().__init__(**options)
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def write(self, record: LogRecord) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding=self._encoding) as fh:
            fh.write(self.format(record))
            fh.write("\n")


__all__ = ["FileDestination"]
