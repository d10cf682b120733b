"""Environment-driven configuration for hosts and the CLI.

Purpose
-------
Translate ``LOG_*`` environment variables (optionally loaded from a ``.env``
file) into a :class:`FanoutSettings` value, and register the destinations it
describes on a :class:`~lib_log_fanout.Logger`.

Contents
--------
* ``.env`` helpers: :func:`enable_dotenv`, :func:`should_use_dotenv`,
  :data:`DOTENV_ENV_VAR`.
* :class:`FanoutSettings` plus :func:`load_settings`.
* :func:`configure` wiring settings into destinations.

System Role
-----------
Optional outer layer. The engine itself never reads the environment; hosts
opt in by calling :func:`load_settings` / :func:`configure`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from .adapters.destinations import BaseDestination, ConsoleDestination, FileDestination
from .domain.levels import Level, coerce_level

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_FANOUT_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED: Path | None = None
_DOTENV_ATTEMPTED = False


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    _DOTENV_LOADED = None
    _DOTENV_ATTEMPTED = False


def enable_dotenv(path: str | Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file without overriding existing variables.

    The search starts in the working directory and walks upwards. The file
    is loaded once per process; later calls return the cached result.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, ``None`` when none was found.
    """
    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    if _DOTENV_ATTEMPTED:
        return _DOTENV_LOADED
    _DOTENV_ATTEMPTED = True
    candidate = str(path) if path is not None else find_dotenv(usecwd=True)
    if not candidate or not Path(candidate).is_file():
        LOGGER.debug("No .env file found")
        return None
    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = Path(candidate).resolve()
    LOGGER.debug("Loaded environment from %s", _DOTENV_LOADED)
    return _DOTENV_LOADED


def parse_bool(value: str, *, name: str = "value") -> bool:
    """Interpret ``1/true/yes/on`` and ``0/false/no/off`` (case insensitive).

    Examples
    --------
    >>> parse_bool("Yes"), parse_bool("off")
    (True, False)
    """
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag beats the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="1")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None or not env_value.strip():
        return False
    return env_value.strip().lower() in _TRUTHY


@dataclass(slots=True, frozen=True)
class FanoutSettings:
    """Destinations a host wants registered on its logger.

    Attributes
    ----------
    console_enabled / console_level / console_async:
        Whether to register a :class:`ConsoleDestination`, its threshold,
        and its delivery mode.
    file_path / file_level / file_async:
        Optional :class:`FileDestination` target, threshold, and mode.
    force_color / no_color:
        Console colour overrides.
    """

    console_enabled: bool = True
    console_level: Level = Level.INFO
    console_async: bool = False
    file_path: Path | None = None
    file_level: Level = Level.VERBOSE
    file_async: bool = True
    force_color: bool = False
    no_color: bool = False


_ENV_FIELDS: Mapping[str, str] = {
    "console_enabled": "LOG_CONSOLE_ENABLED",
    "console_level": "LOG_CONSOLE_LEVEL",
    "console_async": "LOG_CONSOLE_ASYNC",
    "file_path": "LOG_FILE_PATH",
    "file_level": "LOG_FILE_LEVEL",
    "file_async": "LOG_FILE_ASYNC",
    "force_color": "LOG_FORCE_COLOR",
    "no_color": "LOG_NO_COLOR",
}


def load_settings(environ: Mapping[str, str] | None = None, **overrides: Any) -> FanoutSettings:
    """Resolve :class:`FanoutSettings` from keyword values and the environment.

    Environment variables take precedence over keyword arguments, which in
    turn override the dataclass defaults.

    Raises
    ------
    ValueError
        For unknown level names, malformed booleans, or unknown keywords.

    Examples
    --------
    >>> settings = load_settings({"LOG_CONSOLE_LEVEL": "warning"}, console_async=True)
    >>> settings.console_level.name, settings.console_async
    ('WARNING', True)
    """
    env = os.environ if environ is None else environ
    unknown = set(overrides) - set(_ENV_FIELDS)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

    values: dict[str, Any] = dict(overrides)
    for field_name, env_name in _ENV_FIELDS.items():
        raw = env.get(env_name)
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()

    resolved: dict[str, Any] = {}
    for field_name, value in values.items():
        if value is None:
            continue
        if field_name.endswith("_level"):
            resolved[field_name] = coerce_level(value)
        elif field_name == "file_path":
            resolved[field_name] = Path(value)
        elif isinstance(value, str):
            resolved[field_name] = parse_bool(value, name=_ENV_FIELDS[field_name])
        else:
            resolved[field_name] = bool(value)
    return FanoutSettings(**resolved)


def build_destinations(settings: FanoutSettings) -> list[BaseDestination]:
    """Instantiate the destinations described by ``settings``."""

    destinations: list[BaseDestination] = []
    if settings.console_enabled:
        destinations.append(
            ConsoleDestination(
                min_level=settings.console_level,
                asynchronous=settings.console_async,
                force_color=settings.force_color,
                no_color=settings.no_color,
                name="console",
            )
        )
    if settings.file_path is not None:
        destinations.append(
            FileDestination(
                settings.file_path,
                min_level=settings.file_level,
                asynchronous=settings.file_async,
            )
        )
    return destinations


def configure(logger: Any, settings: FanoutSettings | None = None) -> list[BaseDestination]:
    """Register the destinations described by ``settings`` on ``logger``.

    ``settings`` defaults to :func:`load_settings` over the current
    environment. Returns the destinations that were registered.
    """
    resolved = settings if settings is not None else load_settings()
    destinations = build_destinations(resolved)
    for destination in destinations:
        logger.add(destination)
    LOGGER.debug("Configured %d destination(s)", len(destinations))
    return destinations


__all__ = [
    "DOTENV_ENV_VAR",
    "FanoutSettings",
    "build_destinations",
    "configure",
    "enable_dotenv",
    "load_settings",
    "parse_bool",
    "should_use_dotenv",
]
