"""Deferred message materialisation shared across one dispatch call."""

from __future__ import annotations

import logging
from typing import Any, Callable

LOGGER = logging.getLogger(__name__)


class LazyMessage:
    """Memoise the string form of a log message for a single dispatch.

    The producer runs at most once; every later :meth:`resolve` returns the
    cached string. Non-callable payloads are converted with :func:`str`
    on first use.

    Examples
    --------
    >>> calls = []
    >>> msg = LazyMessage(lambda: calls.append(1) or "expensive")
    >>> msg.resolved
    False
    >>> msg.resolve(), msg.resolve()
    ('expensive', 'expensive')
    >>> len(calls)
    1
    """

    __slots__ = ("_producer", "_value", "_resolved")

    def __init__(self, producer: Callable[[], Any] | Any) -> None:
        self._producer = producer
        self._value: str | None = None
        self._resolved = False

    @property
    def resolved(self) -> bool:
        """Return ``True`` once the producer has been evaluated."""

        return self._resolved

    @property
    def value(self) -> str | None:
        """Return the cached string, or ``None`` while unresolved."""

        return self._value

    def resolve(self) -> str:
        """Evaluate the producer once and return the cached string.

        A producer that raises yields a placeholder text; the failure is
        reported through the module logger so the log call still returns.
        """
        if self._resolved:
            return self._value  # type: ignore[return-value]
        payload = self._producer
        try:
            raw = payload() if callable(payload) else payload
            text = raw if isinstance(raw, str) else str(raw)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Log message producer raised; substituting placeholder", exc_info=exc)
            text = f"<unresolvable message: {type(exc).__name__}: {exc}>"
        self._value = text
        self._resolved = True
        self._producer = None
        return text


__all__ = ["LazyMessage"]
