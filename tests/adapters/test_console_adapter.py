from __future__ import annotations

import pytest
from rich.console import Console

from lib_log_fanout.adapters.destinations.console import CONSOLE_TEMPLATE, ConsoleDestination
from lib_log_fanout.domain.levels import Level
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def _send(destination: ConsoleDestination, level: Level = Level.ERROR, message: str = "hello") -> None:
    destination.send(level, message, "worker", "/srv/app/jobs.py", "run()", 17, None)


def test_console_destination_renders_expected_line(record_console: Console) -> None:
    destination = ConsoleDestination(console=record_console)

    _send(destination)

    output = record_console.export_text()
    assert "ERROR" in output
    assert "[worker] jobs.py:17 run() - hello" in output


def test_console_destination_is_synchronous_by_default(record_console: Console) -> None:
    assert ConsoleDestination(console=record_console).asynchronous is False
    assert ConsoleDestination(console=record_console, asynchronous=True).asynchronous is True


def test_console_destination_colours_by_level(record_console: Console) -> None:
    destination = ConsoleDestination(console=record_console)

    _send(destination, Level.ERROR)

    assert "\x1b[" in record_console.export_text(styles=True)


def test_console_destination_respects_no_color(record_console: Console) -> None:
    destination = ConsoleDestination(console=record_console, no_color=True)

    _send(destination, Level.ERROR)

    assert destination.style_for(Level.ERROR) == ""
    assert "\x1b[" not in record_console.export_text(styles=True)


def test_console_destination_does_not_interpret_markup(record_console: Console) -> None:
    destination = ConsoleDestination(console=record_console, template="{message}")

    _send(destination, message="[bold]literal[/bold]")

    assert record_console.export_text().strip() == "[bold]literal[/bold]"


@pytest.mark.parametrize("key", [Level.WARNING, "warning", "Warning"])
def test_style_overrides_accept_levels_and_names(record_console: Console, key: Level | str) -> None:
    destination = ConsoleDestination(console=record_console, styles={key: "magenta"})

    assert destination.style_for(Level.WARNING) == "magenta"
    assert destination.style_for(Level.INFO) == "cyan"


def test_console_destination_uses_console_template(record_console: Console) -> None:
    assert ConsoleDestination(console=record_console).template == CONSOLE_TEMPLATE
