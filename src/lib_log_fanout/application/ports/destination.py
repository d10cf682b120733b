"""Capability contract every log destination fulfils.

Purpose
-------
Define the narrow surface the dispatcher relies on so console, file, or
network destinations plug in without the core knowing their internals.

Contents
--------
* :class:`DeliveryQueuePort` - serialized execution context owned by a
  destination.
* :class:`DestinationPort` - threshold, filters, delivery mode, and ``send``.

System Role
-----------
The dispatcher imports only these protocols. Concrete destinations live in
:mod:`lib_log_fanout.adapters.destinations`.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from lib_log_fanout.domain.levels import Level


@runtime_checkable
class DeliveryQueuePort(Protocol):
    """Run callables one at a time, in the order they were handed over."""

    def submit(self, fn: Callable[[], Any]) -> None:
        """Schedule ``fn`` and return immediately."""

    def run(self, fn: Callable[[], Any]) -> None:
        """Execute ``fn`` on the queue and block until it finished."""


@runtime_checkable
class DestinationPort(Protocol):
    """Log sink with its own threshold, filters, and delivery mode."""

    min_level: Level
    asynchronous: bool

    @property
    def queue(self) -> DeliveryQueuePort | None:
        """Return the bound delivery queue, or ``None`` while inactive."""

    def has_message_filters(self) -> bool:
        """Return ``True`` when a filter inspects the message text."""

    def should_log(self, level: Level, path: str, function: str, message: str | None) -> bool:
        """Return ``True`` when the event passes the threshold and every filter."""

    def send(
        self,
        level: Level,
        message: str,
        thread: str,
        file: str,
        function: str,
        line: int,
        context: Any,
    ) -> Any:
        """Write one resolved event; the return value is not inspected."""


__all__ = ["DeliveryQueuePort", "DestinationPort"]
