"""Adapters binding the fan-out engine to threads, terminals, and files."""

from __future__ import annotations

from .destinations import BaseDestination, ConsoleDestination, FileDestination, MemoryDestination
from .identity import ThreadLabelProvider
from .queue import SerialQueue

__all__ = [
    "BaseDestination",
    "ConsoleDestination",
    "FileDestination",
    "MemoryDestination",
    "SerialQueue",
    "ThreadLabelProvider",
]
