from __future__ import annotations

from collections.abc import Callable, Iterator
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from lib_log_fanout import Logger, MemoryDestination


class ImmediateQueue:
    """Delivery queue running work inline, recording how it was handed over."""

    def __init__(self) -> None:
        self.modes: list[str] = []

    def submit(self, fn: Callable[[], Any]) -> None:
        self.modes.append("submit")
        fn()

    def run(self, fn: Callable[[], Any]) -> None:
        self.modes.append("run")
        fn()


@pytest.fixture
def immediate_queue() -> ImmediateQueue:
    return ImmediateQueue()


@pytest.fixture
def logger() -> Iterator[Logger]:
    instance = Logger()
    try:
        yield instance
    finally:
        instance.shutdown(timeout=2.0)


@pytest.fixture
def memory_factory(immediate_queue: ImmediateQueue) -> Callable[..., MemoryDestination]:
    def build(**options: Any) -> MemoryDestination:
        options.setdefault("queue", immediate_queue)
        return MemoryDestination(**options)

    return build


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200, color_system="truecolor", force_terminal=True)
