"""Concrete destinations shipped with the fan-out engine."""

from __future__ import annotations

from .base import BaseDestination
from .console import ConsoleDestination
from .file import FileDestination
from .memory import MemoryDestination

__all__ = ["BaseDestination", "ConsoleDestination", "FileDestination", "MemoryDestination"]
