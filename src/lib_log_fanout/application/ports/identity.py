"""Port resolving the label of the thread issuing a log call."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ThreadLabelPort(Protocol):
    """Return an opaque label for the current caller thread."""

    def __call__(self) -> str:
        """Return the label; empty when it cannot be determined."""


__all__ = ["ThreadLabelPort"]
