"""Use case routing one log event to every eligible destination.

Purpose
-------
Implement the fan-out loop: skip inactive destinations, evaluate thresholds
and content filters, materialise the message at most once, and hand the
``send`` call to each destination's queue in its declared delivery mode.

Contents
--------
* :func:`create_dispatch` factory returning the runtime callable.
* :class:`DispatchCallable` protocol describing that callable.

System Role
-----------
Application-layer orchestrator invoked by :class:`lib_log_fanout.Logger` for
every log call. Runs entirely on the calling thread; only synchronous
deliveries block it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from lib_log_fanout.application.ports import DestinationPort, ThreadLabelPort
from lib_log_fanout.domain import CallSite, DestinationRegistry, LazyMessage, Level, LogEvent, canonical_function

logger = logging.getLogger(__name__)


class DispatchCallable(Protocol):
    def __call__(
        self,
        level: Level,
        message: Callable[[], Any] | Any,
        call_site: CallSite,
        context: Any = None,
    ) -> None: ...


def create_dispatch(
    *,
    registry: DestinationRegistry[DestinationPort],
    thread_label: ThreadLabelPort,
) -> DispatchCallable:
    """Build the dispatch callable bound to ``registry``.

    Parameters
    ----------
    registry:
        Destinations to fan out to; read through :meth:`snapshot` per call.
    thread_label:
        Provider of the caller thread label.

    Examples
    --------
    >>> class Direct:
    ...     def submit(self, fn): fn()
    ...     def run(self, fn): fn()
    >>> class Sink:
    ...     min_level = Level.INFO
    ...     asynchronous = False
    ...     queue = Direct()
    ...     def __init__(self): self.seen = []
    ...     def has_message_filters(self): return False
    ...     def should_log(self, level, path, function, message): return level >= self.min_level
    ...     def send(self, level, message, thread, file, function, line, context):
    ...         self.seen.append((level.name, message, function))
    >>> registry = DestinationRegistry()
    >>> sink = Sink()
    >>> _ = registry.add(sink)
    >>> dispatch = create_dispatch(registry=registry, thread_label=lambda: "")
    >>> dispatch(Level.DEBUG, lambda: "hidden", CallSite("app.py", "work(x:)", 3))
    >>> dispatch(Level.ERROR, lambda: "boom", CallSite("app.py", "work(x:)", 4))
    >>> sink.seen
    [('ERROR', 'boom', 'work()')]
    """

    return _DispatchPipeline(_DispatchToolkit(registry=registry, thread_label=thread_label))


@dataclass(frozen=True)
class _DispatchToolkit:
    registry: DestinationRegistry[DestinationPort]
    thread_label: ThreadLabelPort


class _DispatchPipeline:
    def __init__(self, toolkit: _DispatchToolkit) -> None:
        self._toolkit = toolkit

    def __call__(
        self,
        level: Level,
        message: Callable[[], Any] | Any,
        call_site: CallSite,
        context: Any = None,
    ) -> None:
        event = _craft_event(self._toolkit, level, message, call_site, context)
        for destination in self._toolkit.registry.snapshot():
            try:
                _offer_event(destination, event)
            except Exception as exc:  # noqa: BLE001
                logger.error("Destination %r failed during dispatch; continuing", destination, exc_info=exc)


def _craft_event(
    toolkit: _DispatchToolkit,
    level: Level,
    message: Callable[[], Any] | Any,
    call_site: CallSite,
    context: Any,
) -> LogEvent:
    canonical_site = CallSite(
        file=call_site.file,
        function=canonical_function(call_site.function),
        line=call_site.line,
    )
    return LogEvent(
        level=level,
        message=LazyMessage(message),
        thread=_resolve_thread_label(toolkit.thread_label),
        call_site=canonical_site,
        context=context,
    )


def _resolve_thread_label(provider: ThreadLabelPort) -> str:
    try:
        return provider()
    except Exception as exc:  # noqa: BLE001
        logger.debug("Thread label unavailable; using empty label", exc_info=exc)
        return ""


def _offer_event(destination: DestinationPort, event: LogEvent) -> None:
    queue = destination.queue
    if queue is None:
        return
    if event.level < destination.min_level:
        return
    message = event.message
    if not message.resolved and destination.has_message_filters():
        message.resolve()
    site = event.call_site
    # Filters see the path and the caller's canonical function name.
    if not destination.should_log(event.level, site.file, site.function, message.value):
        return
    text = message.resolve()

    def deliver() -> None:
        destination.send(
            event.level,
            text,
            event.thread,
            site.file,
            site.function,
            site.line,
            event.context,
        )

    if destination.asynchronous:
        queue.submit(deliver)
    else:
        queue.run(deliver)


__all__ = ["DispatchCallable", "create_dispatch"]
