"""Reusable destination implementing the capability contract.

Purpose
-------
Carry the bookkeeping every destination shares (threshold, delivery mode,
content filters, private delivery queue) so concrete destinations only
implement :meth:`BaseDestination.write`.

Contents
--------
* :class:`BaseDestination`.

System Role
-----------
Sits between the dispatcher, which talks to it through
:class:`~lib_log_fanout.application.ports.DestinationPort`, and the concrete
console/file/memory writers.
"""

from __future__ import annotations

from typing import Any, Iterable

from lib_log_fanout.application.ports.destination import DeliveryQueuePort, DestinationPort
from lib_log_fanout.domain.events import LogRecord
from lib_log_fanout.domain.filters import MessageFilter
from lib_log_fanout.domain.levels import Level, coerce_level

from .._formatting import format_line
from ..queue import DiagnosticHook, SerialQueue


class BaseDestination(DestinationPort):
    """Destination skeleton; subclasses implement :meth:`write`.

    Destinations compare by identity: registering two equally configured
    instances yields two destinations.
    """

    def __init__(
        self,
        *,
        min_level: Level | str | int = Level.VERBOSE,
        asynchronous: bool = True,
        queue: DeliveryQueuePort | None = None,
        active: bool = True,
        filters: Iterable[MessageFilter] = (),
        name: str | None = None,
        template: str | None = None,
        diagnostic: DiagnosticHook | None = None,
    ) -> None:
        """Configure threshold, delivery mode, filters, and queue binding.

        Parameters
        ----------
        min_level:
            Lowest severity accepted (enum member, name, or number).
        asynchronous:
            ``True`` schedules writes without blocking the caller; ``False``
            blocks the caller until the write finished.
        queue:
            Delivery queue to bind. ``None`` creates a private
            :class:`SerialQueue` unless ``active`` is ``False``.
        active:
            ``False`` leaves the destination unbound; the dispatcher skips it
            until :meth:`bind_queue` is called.
        filters:
            Initial content filters; all of them must pass.
        name:
            Label used for the queue thread and ``repr``.
        template:
            ``str.format`` template for rendered lines.
        diagnostic:
            Hook forwarded to the private queue.
        """
        self.min_level = coerce_level(min_level)
        self.asynchronous = asynchronous
        self.name = name or type(self).__name__
        self.template = template
        self._owns_queue = queue is None and active
        if self._owns_queue:
            queue = SerialQueue(name=f"lib_log_fanout.{self.name}", diagnostic=diagnostic)
        self._queue = queue
        self._filters: tuple[MessageFilter, ...] = tuple(filters)

    @property
    def queue(self) -> DeliveryQueuePort | None:
        """Return the bound delivery queue, or ``None`` while inactive."""

        return self._queue

    def bind_queue(self, queue: DeliveryQueuePort) -> None:
        """Bind ``queue``; the dispatcher delivers through it from now on."""

        self._queue = queue
        self._owns_queue = False

    def deactivate(self) -> DeliveryQueuePort | None:
        """Unbind the queue so the dispatcher skips this destination.

        Returns the previously bound queue.
        """
        previous, self._queue = self._queue, None
        return previous

    @property
    def filters(self) -> tuple[MessageFilter, ...]:
        return self._filters

    def add_filter(self, message_filter: MessageFilter) -> bool:
        """Attach ``message_filter``; ``False`` when an equal filter exists."""

        if message_filter in self._filters:
            return False
        self._filters = (*self._filters, message_filter)
        return True

    def remove_filter(self, message_filter: MessageFilter) -> bool:
        """Detach ``message_filter``; ``False`` when it was not attached."""

        if message_filter not in self._filters:
            return False
        self._filters = tuple(item for item in self._filters if item != message_filter)
        return True

    def clear_filters(self) -> None:
        self._filters = ()

    def has_message_filters(self) -> bool:
        return any(item.targets_message for item in self._filters)

    def should_log(self, level: Level, path: str, function: str, message: str | None) -> bool:
        """Return ``True`` when ``level`` meets the threshold and every filter passes."""

        if level < self.min_level:
            return False
        return all(item.passes(level, path, function, message) for item in self._filters)

    def send(
        self,
        level: Level,
        message: str,
        thread: str,
        file: str,
        function: str,
        line: int,
        context: Any,
    ) -> LogRecord:
        """Build a :class:`LogRecord` and hand it to :meth:`write`."""

        record = LogRecord(
            level=level,
            message=message,
            thread=thread,
            file=file,
            function=function,
            line=line,
            context=context,
        )
        self.write(record)
        return record

    def write(self, record: LogRecord) -> None:
        """Persist ``record``; implemented by concrete destinations."""

        raise NotImplementedError

    def format(self, record: LogRecord) -> str:
        """Render ``record`` with the configured template."""

        return format_line(record, self.template)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until queued writes finished; ``False`` on timeout."""

        waiter = getattr(self._queue, "wait_until_idle", None)
        if waiter is None:
            return True
        return bool(waiter(timeout))

    def close(self, timeout: float | None = None) -> None:
        """Drain and stop the private queue; a no-op for borrowed queues."""

        if self._owns_queue and isinstance(self._queue, SerialQueue):
            self._queue.stop(drain=True, timeout=timeout)

    def __repr__(self) -> str:
        mode = "async" if self.asynchronous else "sync"
        state = "active" if self._queue is not None else "inactive"
        return f"<{type(self).__name__} {self.name!r} min_level={self.min_level.name} {mode} {state}>"


__all__ = ["BaseDestination"]
