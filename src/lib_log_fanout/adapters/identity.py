"""Thread label provider backed by :mod:`threading`."""

from __future__ import annotations

import threading

from lib_log_fanout.application.ports.identity import ThreadLabelPort


class ThreadLabelProvider(ThreadLabelPort):
    """Label the calling thread for log output.

    The main thread yields an empty label, a named worker thread its name,
    and a thread still carrying the interpreter's default ``Thread-N`` name
    its hexadecimal identity.

    Examples
    --------
    >>> ThreadLabelProvider()()
    ''
    """

    def __call__(self) -> str:
        try:
            current = threading.current_thread()
            if current is threading.main_thread():
                return ""
            name = current.name
            if name and not _is_default_name(name):
                return name
            return hex(current.ident or id(current))
        except Exception:  # noqa: BLE001 - degrade to an anonymous label
            return ""


def _is_default_name(name: str) -> bool:
    """Return ``True`` for names generated by :class:`threading.Thread`."""

    head, _, _ = name.partition(" ")
    prefix, _, suffix = head.partition("-")
    return prefix == "Thread" and suffix.isdigit()


__all__ = ["ThreadLabelProvider"]
