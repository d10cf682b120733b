"""Severity scale shared by every layer of the fan-out engine.

Purpose
-------
Offer an ordered, integer-backed representation of log severities so
destination thresholds reduce to a plain ``>=`` comparison.

Contents
--------
* :class:`Level` enum with conversion helpers and presentation metadata.
* ``_ICON_TABLE`` / ``_CODE_TABLE`` constants mapping levels to glyphs and
  four-letter codes.

System Role
-----------
Used by the dispatcher for threshold checks, by message filters for their
optional minimum level, and by the destinations when rendering lines.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class Level(IntEnum):
    """Ordered severity scale, lowest to highest."""

    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4

    @property
    def severity(self) -> str:
        """Return the lowercase severity name."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on colored consoles."""

        return _ICON_TABLE[self]

    @property
    def code(self) -> str:
        """Return the fixed-width four-letter code used in plain text lines."""

        return _CODE_TABLE[self]

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Return the level named ``name`` (case insensitive).

        Examples
        --------
        >>> Level.from_name(" Warning ")
        <Level.WARNING: 3>
        """
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "Level":
        """Return the :class:`Level` whose value is ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "Level":
        """Translate a stdlib :mod:`logging` level into the closest :class:`Level`.

        Anything below ``logging.DEBUG`` maps to :attr:`VERBOSE`; ``CRITICAL``
        folds into :attr:`ERROR`.

        Examples
        --------
        >>> Level.from_python_level(logging.CRITICAL)
        <Level.ERROR: 4>
        >>> Level.from_python_level(5)
        <Level.VERBOSE: 0>
        """
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARNING
        if level >= logging.INFO:
            return cls.INFO
        if level >= logging.DEBUG:
            return cls.DEBUG
        return cls.VERBOSE


def coerce_level(value: "Level | str | int") -> Level:
    """Normalise a level given as enum member, name, or numeric value."""

    if isinstance(value, Level):
        return value
    if isinstance(value, str):
        return Level.from_name(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Level.from_numeric(value)
    raise TypeError(f"Cannot interpret {value!r} as a log level")


_ICON_TABLE = {
    Level.VERBOSE: "…",
    Level.DEBUG: "🐞",
    Level.INFO: "ℹ",
    Level.WARNING: "⚠",
    Level.ERROR: "✖",
}
# Console glyphs displayed by the console destination per level.

_CODE_TABLE = {
    Level.VERBOSE: "VERB",
    Level.DEBUG: "DEBG",
    Level.INFO: "INFO",
    Level.WARNING: "WARN",
    Level.ERROR: "ERRO",
}


__all__ = ["Level", "coerce_level"]
