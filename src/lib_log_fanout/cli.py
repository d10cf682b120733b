"""Click command group exposing metadata and a fan-out demo.

Purpose
-------
Give operators a quick way to verify an installation (``info``) and to see
level thresholds and sync/async delivery in action (``logdemo``).

Contents
--------
* :func:`cli` - root group with traceback and ``.env`` switches.
* :func:`cli_info` / :func:`cli_logdemo` - subcommands.
* :func:`main` - entry point restoring global traceback preferences.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from .domain.levels import Level
from .lib_log_fanout import Logger, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICES = [level.severity for level in Level]


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    env_toggle = os.getenv(log_config.DOTENV_ENV_VAR)
    if log_config.should_use_dotenv(explicit=explicit, env_value=env_toggle):
        log_config.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the package metadata banner."""

    click.echo(summary_info(), nl=False)


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--console-level", type=click.Choice(_LEVEL_CHOICES, case_sensitive=False), default=None, help="Console threshold.")
@click.option("--file", "file_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also write every event to this file.")
@click.option("--async/--sync", "asynchronous", default=False, help="Deliver to the console asynchronously.")
@click.option("--no-color", is_flag=True, default=False, help="Disable console colours.")
def cli_logdemo(console_level: str | None, file_path: Path | None, asynchronous: bool, no_color: bool) -> None:
    """Emit one message per level through a freshly configured logger."""

    summary = _logdemo(
        console_level=console_level,
        file_path=file_path,
        console_async=asynchronous,
        no_color=no_color,
    )
    click.echo(f"emitted {summary['events']} events to {summary['destinations']} destinations")


def _logdemo(**options: Any) -> dict[str, Any]:
    """Run the demo on an isolated :class:`Logger` and return a summary."""

    settings = log_config.load_settings(**{key: value for key, value in options.items() if value is not None})
    logger = Logger()
    destinations = log_config.configure(logger, settings)
    samples = [
        (Level.VERBOSE, "Verbose message"),
        (Level.DEBUG, "Debug message"),
        (Level.INFO, "Information message"),
        (Level.WARNING, "Warning message"),
        (Level.ERROR, "Error message"),
    ]
    try:
        for level, text in samples:
            logger.log(level, text, context={"demo": True})
        logger.flush(timeout=5.0)
    finally:
        logger.shutdown(timeout=5.0)
    return {"events": len(samples), "destinations": len(destinations)}


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through :func:`lib_cli_exit_tools.run_cli`.

    Global traceback preferences are restored afterwards so embedding hosts
    (and tests) observe no lasting change.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "cli_info", "cli_logdemo", "main"]
