"""Thread-backed serialized delivery queue for a single destination.

Purpose
-------
Give each destination a private execution context so its ``send`` calls run
one at a time, in submission order, without blocking callers that log to
asynchronous destinations.

Contents
--------
* :class:`SerialQueue` - worker-thread implementation of
  :class:`~lib_log_fanout.application.ports.DeliveryQueuePort`.

System Role
-----------
Bound to every :class:`~lib_log_fanout.adapters.destinations.BaseDestination`
unless the host supplies its own queue. ``submit`` backs asynchronous
delivery, ``run`` backs synchronous delivery; both share the same FIFO so
mixed-mode use on one queue keeps its order.

Alignment Notes
---------------
The queue is unbounded: a slow destination accumulates pending work instead
of pushing back on the caller. Failures inside a work item are logged and
reported through the optional diagnostic hook; the worker keeps running.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable

from lib_log_fanout.application.ports.destination import DeliveryQueuePort


LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None]


@dataclass(slots=True)
class _WorkItem:
    fn: Callable[[], Any]
    done: threading.Event | None = None


class SerialQueue(DeliveryQueuePort):
    """Execute callables on a dedicated worker thread, strictly in order.

    Examples
    --------
    >>> seen = []
    >>> q = SerialQueue(name="doc-queue")
    >>> q.submit(lambda: seen.append("first"))
    >>> q.run(lambda: seen.append("second"))
    >>> seen
    ['first', 'second']
    >>> q.stop()
    >>> q.is_running
    False
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        stop_timeout: float | None = 5.0,
        diagnostic: DiagnosticHook | None = None,
    ) -> None:
        """Create an idle queue; the worker starts on first use.

        Parameters
        ----------
        name:
            Worker thread name, also used in diagnostics.
        stop_timeout:
            Default deadline (seconds) applied by :meth:`stop` when no
            explicit ``timeout`` is given. ``None`` waits indefinitely.
        diagnostic:
            Optional callback receiving ``(event_name, payload)`` for worker
            failures, dropped work, and shutdown timeouts.
        """
        self._name = name or "lib_log_fanout-queue"
        self._queue: queue.Queue[_WorkItem | None] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._lifecycle = threading.RLock()
        self._local = threading.local()
        self._drop_pending = False
        self._stop_timeout = stop_timeout
        self._diagnostic = diagnostic
        self._worker_failed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_running(self) -> bool:
        """Return ``True`` while a worker thread is attached."""

        with self._lifecycle:
            return self._thread is not None and self._thread.is_alive()

    @property
    def pending(self) -> int:
        """Return the approximate number of queued work items."""

        return self._queue.qsize()

    @property
    def worker_failed(self) -> bool:
        """Return ``True`` once a work item raised; cleared by :meth:`start`."""

        return self._worker_failed

    def start(self) -> None:
        """Start the worker thread if it is not already running."""
        with self._lifecycle:
            if self._thread is not None and self._thread.is_alive():
                return
            self._drop_pending = False
            self._worker_failed = False
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()

    def submit(self, fn: Callable[[], Any]) -> None:
        """Schedule ``fn`` behind every previously queued item."""

        self._enqueue(_WorkItem(fn))

    def run(self, fn: Callable[[], Any]) -> None:
        """Schedule ``fn`` and block until it finished.

        Called from the worker thread itself (for example when a destination
        logs while writing), ``fn`` executes inline to avoid waiting on
        itself.
        """
        if self._on_worker_thread():
            self._execute(_WorkItem(fn))
            return
        done = threading.Event()
        self._enqueue(_WorkItem(fn, done))
        done.wait()

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until everything queued so far has run.

        Returns ``False`` when ``timeout`` elapsed first.
        """
        if self._on_worker_thread():
            return self._queue.empty()
        with self._lifecycle:
            if self._thread is None and self._queue.empty():
                return True
        done = threading.Event()
        self._enqueue(_WorkItem(_noop, done))
        return done.wait(timeout)

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the worker thread, optionally draining queued work.

        Parameters
        ----------
        drain:
            When ``True`` queued items run before the worker exits. When
            ``False`` they are dropped; blocked :meth:`run` callers are
            released.
        timeout:
            Per-call override of the stop deadline configured on the queue.

        Raises
        ------
        RuntimeError
            When the worker is still alive after the deadline.
        """
        with self._lifecycle:
            thread = self._thread
            if thread is None:
                return
            if not drain:
                self._drop_pending = True
            self._queue.put(None)
        if self._on_worker_thread():
            return

        effective_timeout = timeout if timeout is not None else self._stop_timeout
        thread.join(effective_timeout)
        if thread.is_alive():
            self._emit_diagnostic(
                "queue_shutdown_timeout",
                {"queue": self._name, "timeout": effective_timeout, "pending": self._queue.qsize()},
            )
            raise RuntimeError("Delivery queue worker failed to stop within the allotted timeout")
        with self._lifecycle:
            if self._thread is thread:
                self._thread = None

    def _enqueue(self, item: _WorkItem) -> None:
        with self._lifecycle:
            self.start()
            self._queue.put(item)

    def _on_worker_thread(self) -> bool:
        return getattr(self._local, "is_worker", False)

    def _run(self) -> None:
        """Internal worker loop draining the queue until stopped."""
        self._local.is_worker = True
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    if self._retire_if_idle():
                        break
                    continue
                if self._drop_pending:
                    self._drop(item)
                    continue
                self._execute(item)
            finally:
                self._queue.task_done()

    def _retire_if_idle(self) -> bool:
        """Detach this worker when nothing follows the stop signal."""

        with self._lifecycle:
            if any(entry is not None for entry in self._queue.queue):
                # Work arrived behind the stop signal; stop again after it.
                self._queue.put(None)
                return False
            self._discard_stop_signals()
            if self._thread is threading.current_thread():
                self._thread = None
            return True

    def _discard_stop_signals(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return
            self._queue.task_done()

    def _execute(self, item: _WorkItem) -> None:
        try:
            item.fn()
        except Exception as exc:  # noqa: BLE001
            self._worker_failed = True
            self._report_worker_exception(exc)
        finally:
            if item.done is not None:
                item.done.set()

    def _drop(self, item: _WorkItem) -> None:
        if item.done is not None:
            item.done.set()
        if item.fn is not _noop:
            self._emit_diagnostic("queue_item_dropped", {"queue": self._name})

    def _report_worker_exception(self, exc: Exception) -> None:
        """Log and surface worker failures without tearing down the thread."""

        LOGGER.error("Delivery queue %s: work item raised an exception; continuing", self._name, exc_info=exc)
        self._emit_diagnostic("queue_worker_error", {"queue": self._name, "exception": repr(exc)})

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Queue diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


def _noop() -> None:
    return None


__all__ = ["DiagnosticHook", "SerialQueue"]
