"""Rich-powered console destination.

Purpose
-------
Render log records on an interactive terminal with per-level styles, so the
most common destination works out of the box.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`ConsoleDestination`.
"""

from __future__ import annotations

from typing import Any, Mapping

from rich.console import Console

from lib_log_fanout.domain.events import LogRecord
from lib_log_fanout.domain.levels import Level

from .base import BaseDestination


#: Default Rich styles keyed by :class:`Level`.
_STYLE_MAP: Mapping[Level, str] = {
    Level.VERBOSE: "dim",
    Level.DEBUG: "blue",
    Level.INFO: "cyan",
    Level.WARNING: "yellow",
    Level.ERROR: "bold red",
}

CONSOLE_TEMPLATE = "{hh}:{mm}:{ss} {level_icon} {level:>7} [{thread}] {file_name}:{line} {function} - {message}"


class ConsoleDestination(BaseDestination):
    """Print records through a :class:`rich.console.Console`.

    Examples
    --------
    >>> from io import StringIO
    >>> console = Console(file=StringIO(), record=True, width=200)
    >>> dest = ConsoleDestination(console=console, asynchronous=False, template="{level} {message}")
    >>> dest.send(Level.INFO, "ready", "", "app.py", "boot()", 3, None).message
    'ready'
    >>> console.export_text().strip()
    'INFO ready'
    >>> dest.close()
    """

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[Level | str, str] | None = None,
        template: str | None = None,
        **options: Any,
    ) -> None:
        """Configure the console, colour switches, and style overrides.

        Remaining keyword arguments are forwarded to :class:`BaseDestination`.
        """
        options.setdefault("asynchronous", False)
        super().__init__(template=template or CONSOLE_TEMPLATE, **options)
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color, stderr=True)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = Level.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    @property
    def console(self) -> Console:
        return self._console

    def style_for(self, level: Level) -> str:
        """Return the Rich style used for ``level``."""

        return "" if self._no_color else self._style_map.get(level, "")

    def write(self, record: LogRecord) -> None:
        self._console.print(
            self.format(record),
            style=self.style_for(record.level),
            highlight=False,
            markup=False,
            soft_wrap=True,
        )


__all__ = ["ConsoleDestination"]
