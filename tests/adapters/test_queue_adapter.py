from __future__ import annotations

import logging
import threading
import time
from typing import Any

import pytest

from lib_log_fanout.adapters.queue import SerialQueue
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_queue_processes_submissions_in_order() -> None:
    processed: list[int] = []
    queue = SerialQueue(name="order")

    for index in range(50):
        queue.submit(lambda index=index: processed.append(index))
    queue.stop()

    assert processed == list(range(50))


def test_submit_does_not_block_the_caller() -> None:
    release = threading.Event()
    queue = SerialQueue(name="nonblocking")

    started = time.perf_counter()
    queue.submit(release.wait)
    elapsed = time.perf_counter() - started
    release.set()
    queue.stop()

    assert elapsed < 1.0


def test_run_blocks_until_the_work_finished() -> None:
    seen: list[str] = []
    queue = SerialQueue(name="blocking")

    def slow() -> None:
        time.sleep(0.05)
        seen.append("slow")

    queue.submit(slow)
    queue.run(lambda: seen.append("sync"))

    assert seen == ["slow", "sync"]
    queue.stop()


def test_run_from_the_worker_thread_executes_inline() -> None:
    seen: list[str] = []
    queue = SerialQueue(name="reentrant")

    def outer() -> None:
        queue.run(lambda: seen.append("inner"))
        seen.append("outer")

    queue.run(outer)
    queue.stop()

    assert seen == ["inner", "outer"]


def test_work_runs_on_a_single_named_worker_thread() -> None:
    names: list[str] = []
    queue = SerialQueue(name="lib_log_fanout.test-worker")

    for _ in range(3):
        queue.submit(lambda: names.append(threading.current_thread().name))
    queue.run(lambda: names.append(threading.current_thread().name))
    queue.stop()

    assert set(names) == {"lib_log_fanout.test-worker"}


def test_failing_work_item_is_logged_and_worker_survives(caplog: pytest.LogCaptureFixture) -> None:
    diagnostics: list[tuple[str, dict[str, Any]]] = []
    seen: list[str] = []
    queue = SerialQueue(name="failing", diagnostic=lambda name, payload: diagnostics.append((name, payload)))

    def boom() -> None:
        raise RuntimeError("sink unavailable")

    with caplog.at_level(logging.ERROR, logger="lib_log_fanout.adapters.queue"):
        queue.submit(boom)
        queue.run(lambda: seen.append("after"))

    assert seen == ["after"]
    assert queue.worker_failed is True
    assert any("work item raised" in record.getMessage() for record in caplog.records)
    assert diagnostics[0][0] == "queue_worker_error"
    assert "sink unavailable" in diagnostics[0][1]["exception"]
    queue.stop()


def test_failing_sync_work_still_releases_the_caller() -> None:
    queue = SerialQueue(name="sync-failure")

    def boom() -> None:
        raise ValueError("nope")

    queue.run(boom)
    queue.stop()

    assert queue.worker_failed is True


def test_broken_diagnostic_hook_does_not_escape(caplog: pytest.LogCaptureFixture) -> None:
    def hook(name: str, payload: dict[str, Any]) -> None:
        raise RuntimeError("hook down")

    queue = SerialQueue(name="broken-hook", diagnostic=hook)

    def boom() -> None:
        raise RuntimeError("sink down")

    with caplog.at_level(logging.ERROR, logger="lib_log_fanout.adapters.queue"):
        queue.run(boom)
    queue.stop()

    assert any("diagnostic hook raised" in record.getMessage() for record in caplog.records)


def test_wait_until_idle_covers_queued_work() -> None:
    seen: list[int] = []
    queue = SerialQueue(name="idle")

    for index in range(10):
        queue.submit(lambda index=index: (time.sleep(0.001), seen.append(index)))

    assert queue.wait_until_idle(timeout=5.0) is True
    assert seen == list(range(10))
    queue.stop()


def test_wait_until_idle_on_an_unused_queue_returns_immediately() -> None:
    queue = SerialQueue(name="unused")

    assert queue.wait_until_idle(timeout=0.01) is True
    assert queue.is_running is False


def test_wait_until_idle_times_out_behind_blocked_work() -> None:
    release = threading.Event()
    queue = SerialQueue(name="stuck")
    queue.submit(release.wait)

    assert queue.wait_until_idle(timeout=0.05) is False

    release.set()
    queue.stop()


def test_stop_drains_pending_work_by_default() -> None:
    seen: list[int] = []
    queue = SerialQueue(name="drain")
    release = threading.Event()
    queue.submit(release.wait)
    for index in range(3):
        queue.submit(lambda index=index: seen.append(index))

    release.set()
    queue.stop()

    assert seen == [0, 1, 2]
    assert queue.is_running is False


def test_stop_without_drain_drops_work_and_releases_waiters() -> None:
    diagnostics: list[str] = []
    seen: list[str] = []
    queue = SerialQueue(name="drop", diagnostic=lambda name, payload: diagnostics.append(name))
    gate = threading.Event()
    queue.submit(gate.wait)
    queue.submit(lambda: seen.append("dropped"))

    released = threading.Event()

    def blocked_caller() -> None:
        queue.run(lambda: seen.append("also dropped"))
        released.set()

    caller = threading.Thread(target=blocked_caller)
    caller.start()
    time.sleep(0.05)

    stopper = threading.Thread(target=lambda: queue.stop(drain=False))
    stopper.start()
    time.sleep(0.05)
    gate.set()
    stopper.join(timeout=5.0)
    caller.join(timeout=5.0)

    assert released.is_set()
    assert seen == []
    assert diagnostics.count("queue_item_dropped") == 2


def test_stop_timeout_raises_and_reports() -> None:
    diagnostics: list[str] = []
    release = threading.Event()
    queue = SerialQueue(name="slow-stop", diagnostic=lambda name, payload: diagnostics.append(name))
    queue.submit(release.wait)

    with pytest.raises(RuntimeError, match="failed to stop"):
        queue.stop(timeout=0.05)

    assert diagnostics == ["queue_shutdown_timeout"]
    release.set()
    queue.stop(timeout=5.0)
    assert queue.is_running is False


def test_stop_on_an_idle_queue_is_a_noop() -> None:
    queue = SerialQueue(name="never-started")

    queue.stop()

    assert queue.is_running is False


def test_queue_restarts_after_stop() -> None:
    seen: list[str] = []
    queue = SerialQueue(name="restart")

    queue.run(lambda: seen.append("first"))
    queue.stop()
    queue.run(lambda: seen.append("second"))
    queue.stop()

    assert seen == ["first", "second"]


def test_concurrent_producers_keep_per_producer_order() -> None:
    seen: list[tuple[int, int]] = []
    queue = SerialQueue(name="producers")
    start = threading.Barrier(4)

    def produce(producer: int) -> None:
        start.wait()
        for index in range(100):
            queue.submit(lambda index=index: seen.append((producer, index)))

    threads = [threading.Thread(target=produce, args=(producer,)) for producer in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5.0)
    queue.stop()

    assert len(seen) == 400
    for producer in range(4):
        assert [index for owner, index in seen if owner == producer] == list(range(100))
