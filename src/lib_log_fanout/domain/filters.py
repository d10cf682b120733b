"""Content filters that narrow which events a destination accepts.

Purpose
-------
Let a destination accept or reject events based on the caller's source path,
function name, or message text, in addition to its level threshold.

Contents
--------
* :class:`FilterTarget` / :class:`Comparison` enums.
* :class:`MessageFilter` frozen predicate.
* ``path_filter`` / ``function_filter`` / ``message_filter`` constructors.

System Role
-----------
Evaluated by :meth:`BaseDestination.should_log` on the dispatching thread.
Filters targeting the message only ever see the resolved string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .levels import Level


class FilterTarget(Enum):
    """Which part of the event a filter inspects."""

    PATH = "path"
    FUNCTION = "function"
    MESSAGE = "message"


class Comparison(Enum):
    """How a filter compares the inspected text with its values."""

    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    EQUALS = "equals"
    MATCHES = "matches"


@dataclass(slots=True, frozen=True)
class MessageFilter:
    """Predicate over one field of a log event.

    Attributes
    ----------
    target:
        Field inspected by the filter.
    comparison:
        Comparison applied between the field and each value.
    values:
        Candidate values; the filter matches when any of them matches.
    case_sensitive:
        When ``False`` both sides are casefolded before comparing. Regular
        expressions compile with :data:`re.IGNORECASE` instead.
    exclude:
        Invert the outcome: matching events are rejected.
    min_level:
        Restrict the filter to events at or above this level; lower events
        pass it untouched.
    """

    target: FilterTarget
    comparison: Comparison
    values: tuple[str, ...]
    case_sensitive: bool = False
    exclude: bool = False
    min_level: Level | None = None
    _patterns: tuple[re.Pattern[str], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        values = tuple(self.values)
        if not values:
            raise ValueError("filter values must not be empty")
        object.__setattr__(self, "values", values)
        if self.comparison is Comparison.MATCHES:
            flags = 0 if self.case_sensitive else re.IGNORECASE
            object.__setattr__(self, "_patterns", tuple(re.compile(value, flags) for value in values))

    @property
    def targets_message(self) -> bool:
        """Return ``True`` when the filter needs the resolved message."""

        return self.target is FilterTarget.MESSAGE

    def applies_to(self, level: Level) -> bool:
        """Return ``True`` when the filter participates for ``level``."""

        return self.min_level is None or level >= self.min_level

    def passes(self, level: Level, path: str, function: str, message: str | None) -> bool:
        """Return ``True`` when the event is acceptable to this filter.

        Examples
        --------
        >>> f = path_filter(Comparison.CONTAINS, "billing")
        >>> f.passes(Level.INFO, "/srv/app/billing/api.py", "charge()", None)
        True
        >>> f.passes(Level.INFO, "/srv/app/auth.py", "login()", None)
        False
        """
        if not self.applies_to(level):
            return True
        subject = self._subject(path, function, message)
        if subject is None:
            return True
        return self._matches(subject) != self.exclude

    def _subject(self, path: str, function: str, message: str | None) -> str | None:
        if self.target is FilterTarget.PATH:
            return path
        if self.target is FilterTarget.FUNCTION:
            return function
        return message

    def _matches(self, subject: str) -> bool:
        if self.comparison is Comparison.MATCHES:
            return any(pattern.search(subject) for pattern in self._patterns)
        text = subject if self.case_sensitive else subject.casefold()
        for value in self.values:
            candidate = value if self.case_sensitive else value.casefold()
            if _COMPARATORS[self.comparison](text, candidate):
                return True
        return False


_COMPARATORS = {
    Comparison.CONTAINS: lambda text, value: value in text,
    Comparison.STARTS_WITH: lambda text, value: text.startswith(value),
    Comparison.ENDS_WITH: lambda text, value: text.endswith(value),
    Comparison.EQUALS: lambda text, value: text == value,
}


def _build(target: FilterTarget, comparison: Comparison, values: Iterable[str], **options: object) -> MessageFilter:
    return MessageFilter(target=target, comparison=comparison, values=tuple(values), **options)  # type: ignore[arg-type]


def path_filter(comparison: Comparison, *values: str, **options: object) -> MessageFilter:
    """Return a filter over the caller's source path."""

    return _build(FilterTarget.PATH, comparison, values, **options)


def function_filter(comparison: Comparison, *values: str, **options: object) -> MessageFilter:
    """Return a filter over the canonical function name."""

    return _build(FilterTarget.FUNCTION, comparison, values, **options)


def message_filter(comparison: Comparison, *values: str, **options: object) -> MessageFilter:
    """Return a filter over the resolved message text.

    Examples
    --------
    >>> f = message_filter(Comparison.MATCHES, r"user=\\d+", exclude=True)
    >>> f.passes(Level.INFO, "a.py", "f()", "login user=42")
    False
    >>> f.passes(Level.INFO, "a.py", "f()", None)
    True
    """

    return _build(FilterTarget.MESSAGE, comparison, values, **options)


__all__ = [
    "Comparison",
    "FilterTarget",
    "MessageFilter",
    "function_filter",
    "message_filter",
    "path_filter",
]
