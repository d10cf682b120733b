"""Application use cases orchestrating the fan-out engine."""

from __future__ import annotations

from .dispatch import DispatchCallable, create_dispatch

__all__ = ["DispatchCallable", "create_dispatch"]
