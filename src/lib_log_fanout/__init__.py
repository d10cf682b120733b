"""Public package surface of the log fan-out engine.

Application code logs through the package-level shortcuts, which are bound
to :data:`default_logger`, or constructs its own :class:`Logger` when it
needs an isolated registry::

    import lib_log_fanout as log

    log.add(log.ConsoleDestination(min_level="info"))
    log.info("service ready")
    log.debug(lambda: expensive_dump())  # evaluated only if someone wants it
"""

from __future__ import annotations

from .adapters import BaseDestination, ConsoleDestination, FileDestination, MemoryDestination, SerialQueue, ThreadLabelProvider
from .application.ports import DeliveryQueuePort, DestinationPort, ThreadLabelPort
from .domain import (
    CallSite,
    Comparison,
    DestinationRegistry,
    FilterTarget,
    Level,
    LogRecord,
    MessageFilter,
    function_filter,
    message_filter,
    path_filter,
)
from .lib_log_fanout import Logger, default_logger, summary_info

verbose = default_logger.verbose
debug = default_logger.debug
info = default_logger.info
warning = default_logger.warning
error = default_logger.error
log = default_logger.log
custom = default_logger.custom
add = default_logger.add
remove = default_logger.remove
remove_all = default_logger.remove_all
count = default_logger.count
flush = default_logger.flush
shutdown = default_logger.shutdown

__all__ = [
    "BaseDestination",
    "CallSite",
    "Comparison",
    "ConsoleDestination",
    "DeliveryQueuePort",
    "DestinationPort",
    "DestinationRegistry",
    "FileDestination",
    "FilterTarget",
    "Level",
    "LogRecord",
    "Logger",
    "MemoryDestination",
    "MessageFilter",
    "SerialQueue",
    "ThreadLabelPort",
    "ThreadLabelProvider",
    "add",
    "count",
    "custom",
    "debug",
    "default_logger",
    "error",
    "flush",
    "function_filter",
    "info",
    "log",
    "message_filter",
    "path_filter",
    "remove",
    "remove_all",
    "shutdown",
    "summary_info",
    "verbose",
    "warning",
]
