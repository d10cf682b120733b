"""Domain entities and value objects used by the fan-out engine."""

from __future__ import annotations

from .call_site import CallSite, canonical_function, capture_call_site
from .events import LogEvent, LogRecord
from .filters import Comparison, FilterTarget, MessageFilter, function_filter, message_filter, path_filter
from .levels import Level, coerce_level
from .message import LazyMessage
from .registry import DestinationRegistry

__all__ = [
    "CallSite",
    "Comparison",
    "DestinationRegistry",
    "FilterTarget",
    "LazyMessage",
    "Level",
    "LogEvent",
    "LogRecord",
    "MessageFilter",
    "canonical_function",
    "capture_call_site",
    "coerce_level",
    "function_filter",
    "message_filter",
    "path_filter",
]
