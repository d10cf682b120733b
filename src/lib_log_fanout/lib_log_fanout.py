"""Logging façade that wires the registry, dispatcher, and adapters together.

Purpose
-------
Expose a small, ergonomic API for host applications: register destinations,
then log through five fixed-severity entry points or the generic
:meth:`Logger.log`. This module is the composition point between the domain
registry, the dispatch use case, and the thread-label adapter.

Contents
--------
* :class:`Logger` - explicitly constructed logging context.
* :data:`default_logger` - the process-wide default instance.
* :func:`summary_info` - metadata banner used by the CLI.

System Role
-----------
Outer shell of the engine. Code that wants isolation (tests, plugins,
embedded libraries) constructs its own :class:`Logger`; everything else uses
:data:`default_logger` through the package-level shortcuts.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from .adapters.identity import ThreadLabelProvider
from .application.ports import DestinationPort, ThreadLabelPort
from .application.use_cases.dispatch import create_dispatch
from .domain import CallSite, DestinationRegistry, Level, capture_call_site, coerce_level

LOGGER = logging.getLogger(__name__)

Message = Callable[[], Any] | Any


class Logger:
    """Route leveled log calls to every registered destination.

    Messages may be plain values or zero-argument callables. Callables run
    at most once per call, and only when some destination accepts the event.

    Examples
    --------
    >>> from lib_log_fanout.adapters import MemoryDestination
    >>> log = Logger()
    >>> sink = MemoryDestination(min_level="info", asynchronous=False)
    >>> log.add(sink), log.add(sink)
    (True, False)
    >>> log.debug("hidden")
    >>> log.error(lambda: "computed " + "lazily")
    >>> sink.messages
    ['computed lazily']
    >>> log.shutdown()
    >>> log.count()
    0
    """

    def __init__(
        self,
        *,
        registry: DestinationRegistry[DestinationPort] | None = None,
        thread_label: ThreadLabelPort | None = None,
    ) -> None:
        """Create a logger with its own registry unless one is supplied.

        Parameters
        ----------
        registry:
            Registry to share with other loggers; ``None`` creates a fresh one.
        thread_label:
            Provider of caller thread labels; defaults to
            :class:`ThreadLabelProvider`.
        """
        self._registry: DestinationRegistry[DestinationPort] = registry if registry is not None else DestinationRegistry()
        self._dispatch = create_dispatch(
            registry=self._registry,
            thread_label=thread_label if thread_label is not None else ThreadLabelProvider(),
        )

    @property
    def registry(self) -> DestinationRegistry[DestinationPort]:
        return self._registry

    @property
    def destinations(self) -> tuple[DestinationPort, ...]:
        """Return a snapshot of the registered destinations."""

        return self._registry.snapshot()

    # Destination handling

    def add(self, destination: DestinationPort) -> bool:
        """Register ``destination``; ``False`` when the instance is already registered."""

        return self._registry.add(destination)

    def remove(self, destination: DestinationPort) -> bool:
        """Unregister ``destination``; ``False`` when it was not registered."""

        return self._registry.remove(destination)

    def remove_all(self) -> None:
        """Unregister every destination to start fresh."""

        self._registry.clear()

    def count(self) -> int:
        """Return the number of registered destinations."""

        return self._registry.count()

    # Levels

    def verbose(
        self,
        message: Message,
        file: str | None = None,
        function: str | None = None,
        line: int | None = None,
        context: Any = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        """Log something generally unimportant (lowest priority)."""
        self._emit(Level.VERBOSE, message, file, function, line, context, stacklevel)

    def debug(
        self,
        message: Message,
        file: str | None = None,
        function: str | None = None,
        line: int | None = None,
        context: Any = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        """Log something that helps during debugging."""
        self._emit(Level.DEBUG, message, file, function, line, context, stacklevel)

    def info(
        self,
        message: Message,
        file: str | None = None,
        function: str | None = None,
        line: int | None = None,
        context: Any = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        """Log something interesting that is not an issue."""
        self._emit(Level.INFO, message, file, function, line, context, stacklevel)

    def warning(
        self,
        message: Message,
        file: str | None = None,
        function: str | None = None,
        line: int | None = None,
        context: Any = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        """Log something that may cause trouble soon."""
        self._emit(Level.WARNING, message, file, function, line, context, stacklevel)

    def error(
        self,
        message: Message,
        file: str | None = None,
        function: str | None = None,
        line: int | None = None,
        context: Any = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        """Log a failure (highest priority)."""
        self._emit(Level.ERROR, message, file, function, line, context, stacklevel)

    def log(
        self,
        level: Level | str | int,
        message: Message,
        file: str | None = None,
        function: str | None = None,
        line: int | None = None,
        context: Any = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        """Log at an explicit ``level`` (enum member, name, or number).

        Raises
        ------
        ValueError
            When ``level`` names no known severity.
        """
        self._emit(coerce_level(level), message, file, function, line, context, stacklevel)

    custom = log

    def _emit(
        self,
        level: Level,
        message: Message,
        file: str | None,
        function: str | None,
        line: int | None,
        context: Any,
        stacklevel: int,
    ) -> None:
        call_site = _resolve_call_site(file, function, line, stacklevel + 2)
        self._dispatch(level, message, call_site, context)

    # Lifecycle

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every destination finished its queued writes.

        Destinations whose ``flush`` takes no argument are flushed without a
        deadline. Returns ``False`` when any destination did not drain in
        ``timeout`` or its ``flush`` raised.
        """
        drained = True
        for destination in self._registry.snapshot():
            flush = getattr(destination, "flush", None)
            if not callable(flush):
                continue
            try:
                result = _call_with_timeout(flush, timeout)
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Destination %r failed to flush", destination, exc_info=exc)
                drained = False
                continue
            if result is not None and not result:
                drained = False
        return drained

    def shutdown(self, timeout: float | None = None) -> None:
        """Drain and close every destination, then clear the registry.

        A destination failing to close is logged; the others are still
        closed and the registry is cleared regardless.
        """
        try:
            for destination in self._registry.snapshot():
                close = getattr(destination, "close", None)
                if not callable(close):
                    continue
                try:
                    _call_with_timeout(close, timeout)
                except Exception as exc:  # noqa: BLE001
                    LOGGER.error("Destination %r did not shut down cleanly", destination, exc_info=exc)
        finally:
            self._registry.clear()


def _call_with_timeout(method: Callable[..., Any], timeout: float | None) -> Any:
    """Call ``method`` with ``timeout`` when its signature accepts an argument."""

    try:
        accepts_argument = bool(inspect.signature(method).parameters)
    except (TypeError, ValueError):
        accepts_argument = True
    return method(timeout) if accepts_argument else method()


def _resolve_call_site(file: str | None, function: str | None, line: int | None, stacklevel: int) -> CallSite:
    """Fill missing call-site fields from the caller's frame."""

    if file is not None and function is not None and line is not None:
        return CallSite(file=file, function=function, line=line)
    captured = capture_call_site(stacklevel + 1)
    return CallSite(
        file=file if file is not None else captured.file,
        function=function if function is not None else captured.function,
        line=line if line is not None else captured.line,
    )


default_logger = Logger()
"""Process-wide default :class:`Logger` used by the package-level shortcuts."""


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> banner = summary_info()
    >>> "version" in banner
    True
    """
    from . import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = ["Logger", "Message", "default_logger", "summary_info"]
