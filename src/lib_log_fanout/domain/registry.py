"""Identity-keyed set of active destinations.

Purpose
-------
Hold the destinations a logger fans out to. Membership is decided by object
identity, so two equally configured destinations are still distinct.

Contents
--------
* :class:`DestinationRegistry` guarded by a single re-entrant lock.

System Role
-----------
Shared mutable state read by the dispatcher on every log call. The
dispatcher iterates :meth:`DestinationRegistry.snapshot`, never the live
mapping, so concurrent add/remove calls cannot tear an iteration.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Generic, Iterator, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class DestinationRegistry(Generic[T]):
    """Set of destinations compared by identity.

    Iteration order is an implementation detail; callers must not depend on
    it for cross-destination ordering.

    Examples
    --------
    >>> registry = DestinationRegistry()
    >>> sink = object()
    >>> registry.add(sink), registry.add(sink)
    (True, False)
    >>> registry.count()
    1
    >>> registry.remove(object())
    False
    """

    def __init__(self) -> None:
        self._members: dict[int, T] = {}
        self._lock = RLock()

    def add(self, destination: T) -> bool:
        """Register ``destination``; return ``False`` when already present."""

        with self._lock:
            key = id(destination)
            if key in self._members:
                return False
            self._members[key] = destination
        LOGGER.debug("Registered destination %r", destination)
        return True

    def remove(self, destination: T) -> bool:
        """Unregister ``destination``; return ``False`` when it was absent."""

        with self._lock:
            key = id(destination)
            if key not in self._members:
                return False
            del self._members[key]
        LOGGER.debug("Unregistered destination %r", destination)
        return True

    def clear(self) -> None:
        """Remove every destination."""

        with self._lock:
            self._members.clear()

    def count(self) -> int:
        """Return the number of registered destinations."""

        with self._lock:
            return len(self._members)

    def snapshot(self) -> tuple[T, ...]:
        """Return a consistent copy of the current members."""

        with self._lock:
            return tuple(self._members.values())

    def __contains__(self, destination: object) -> bool:
        with self._lock:
            return self._members.get(id(destination)) is destination

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[T]:
        return iter(self.snapshot())


__all__ = ["DestinationRegistry"]
