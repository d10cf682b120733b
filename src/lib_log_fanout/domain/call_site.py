"""Call-site metadata attached to every dispatched event.

Purpose
-------
Describe *where* a log call happened (file, function, line) and keep the
function label stable regardless of how the caller spelled its signature.

Contents
--------
* :class:`CallSite` value object.
* :func:`canonical_function` signature normaliser.
* :func:`capture_call_site` helper reading the caller's frame.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CallSite:
    """Where a log call originated.

    Attributes
    ----------
    file:
        Source path of the caller.
    function:
        Function signature as reported by the caller; canonicalised by the
        dispatcher before delivery.
    line:
        Line number of the call.
    """

    file: str
    function: str
    line: int

    @property
    def file_name(self) -> str:
        """Return the final path component of :attr:`file`."""

        return self.file.replace("\\", "/").rsplit("/", 1)[-1]


def canonical_function(signature: str) -> str:
    """Truncate ``signature`` at its parameter list and append ``()``.

    Examples
    --------
    >>> canonical_function("doWork(x:y:)")
    'doWork()'
    >>> canonical_function("run")
    'run()'
    >>> canonical_function("")
    '()'
    """

    head, _, _ = signature.partition("(")
    return f"{head}()"


def capture_call_site(stacklevel: int = 1) -> CallSite:
    """Return the :class:`CallSite` ``stacklevel`` frames above the caller.

    ``stacklevel=1`` describes the function that called
    :func:`capture_call_site`. When the interpreter exposes no frames the
    result carries placeholder values instead of failing.

    Examples
    --------
    >>> def where():
    ...     return capture_call_site()
    >>> where().function
    'where'
    """

    try:
        frame = sys._getframe(stacklevel)
    except (AttributeError, ValueError):
        return CallSite(file="<unknown>", function="<unknown>", line=0)
    code = frame.f_code
    return CallSite(file=code.co_filename, function=code.co_name, line=frame.f_lineno)


__all__ = ["CallSite", "canonical_function", "capture_call_site"]
