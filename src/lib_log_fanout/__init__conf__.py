"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from importlib import metadata
from typing import Callable

name = "lib_log_fanout"
title = "Process-wide log fan-out engine with per-destination filters and serialized sync/async delivery"
author = "lib_log_fanout maintainers"
shell_command = "lib_log_fanout"


def _resolve_version() -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "0.1.0"


version = _resolve_version()


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner through ``writer`` (defaults to ``print``).

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_log_fanout:
    ...
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)


__all__ = ["author", "name", "print_info", "shell_command", "title", "version"]
