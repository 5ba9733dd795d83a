"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits structured log
messages, fixtures to register that command, obtain a CliRunner, and run
tests within an isolated filesystem, plus `agenda_env`, an environment
pointing the CLI at a freshly migrated SQLite file.
"""

import logging
import re

import click
import pytest
from click.testing import CliRunner

from agenda import config
from agenda.entrypoints.cli.main import agenda

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests.

    Emits DEBUG/INFO/WARNING/ERROR/CRITICAL messages on the 'agenda.demo'
    logger and additional messages on a 'some.thirdparty' logger to exercise
    logger-level filtering and flight-recorder behavior.
    """
    logger = logging.getLogger("agenda.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    agenda.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(agenda, "log-demo")


@pytest.fixture
def runner(tmp_path):
    """Return a CliRunner whose flight recorder writes under the test's temp dir."""
    return CliRunner(env={"AGENDA_LOG_PATH": str(tmp_path / "flight.log")})


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def agenda_env(sqlite_url, sqlite_engine_file):
    """Environment for a CLI run against a migrated, empty SQLite database.

    Auto-creation is explicitly off so the host environment cannot leak in.
    """
    return {
        config.DB_URL_ENV: sqlite_url,
        config.AUTO_CREATE_CATEGORY_ENV: "false",
    }


EVENT_LINE = re.compile(r"^(?P<id>\S+)\t(?P<start>\S+)\t(?P<end>\S+)\t(?P<category>[^\t]+)\t(?P<name>.+)$")


def event_lines(output: str) -> list[dict[str, str]]:
    """Parse the tab-separated event lines out of CLI output."""
    return [
        match.groupdict()
        for line in output.splitlines()
        if (match := EVENT_LINE.match(line))
    ]
