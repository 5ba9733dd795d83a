"""AGENDA CLI entry point.

Defines the top-level ``agenda`` command (via Click-Extra) and registers its
subcommand groups:

- ``agenda db``: forward-only database management (upgrade/current/heads/history/status).
- ``agenda event``: create, list, filter by date, reschedule, revise and delete events.
- ``agenda category``: add, list and remove categories.

Notes
- The CLI version is sourced from `agenda.__version__` and displayed
  automatically by Click-Extra (``--version``).
- Logging is configured here once per invocation: a Rich console handler on
  stderr plus an optional in-memory flight recorder.

Examples
    $ agenda --version
    $ agenda db upgrade
    $ agenda category add work
    $ agenda event create "Team sync" --start 2030-01-10T09:00 -c work
    $ agenda event between 2030-01-01 2030-01-31
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from agenda import __version__
from agenda.logging import (
    FlightRecorderOptions,
    LoggingOptions,
    configure_logging,
    effective_level,
    log_startup,
)

from .app import CliState
from .categories import category as category_group
from .db import db as db_group
from .events import event as event_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """AGENDA command-line interface.

    Keep an agenda of scheduled events filed under categories: create events
    with a start and optional end, list them page by page, find everything
    happening on a day or within a date range, and reschedule, revise or
    delete them.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Alembic   : " + hyperlink("https://alembic.sqlalchemy.org/"),
        "  DB URLs   : "
        + hyperlink("https://docs.sqlalchemy.org/en/20/core/engines.html"),
    ]
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=Path(user_log_dir("agenda", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="AGENDA_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="AGENDA_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "(tunable via AGENDA_FLIGHT_RECORDER_CAPACITY) at DEBUG granularity "
        "(unaffected by -v/-q) and writes them to --log-path when a "
        "WARNING/ERROR occurs, or on clean exit if --force-flush is set. "
        "Use --no-flight-recorder to disable."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Force-flush the flight recorder buffer to --log-path on program exit. "
        "Normally the buffer only dumps on WARNING/ERROR; console output is unaffected."
    ),
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). This changes the "
        "logger's own level, so it applies to BOTH console and flight-recorder. "
        "Repeatable (e.g. -L sqlalchemy=INFO -L alembic=WARNING)."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--auto-create-category/--no-auto-create-category",
    "auto_create_category",
    default=None,
    help=(
        "Create a category referenced by an event if it does not exist yet, "
        "instead of rejecting the request. Defaults to AGENDA_AUTO_CREATE_CATEGORY "
        "(off when unset)."
    ),
)
@clickx.pass_context
def agenda(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
    auto_create_category: bool | None,
) -> None:
    """AGENDA command-line interface."""

    options = LoggingOptions(
        level=effective_level(verbose_count, quiet_count),
        debug_mode=debug,
        color=ctx.color is not False,  # None or True => allow color
        flight_recorder=(
            FlightRecorderOptions(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
            if flight_recorder
            else None
        ),
        logger_levels=logger_levels,
    )
    handlers = configure_logging(options)
    log_startup(logger, app_version=__version__, options=options, handlers=handlers)

    # per-invocation state; the application itself is wired lazily
    state = ctx.ensure_object(CliState)
    if auto_create_category is not None:
        state.auto_create_category = auto_create_category

    ctx.call_on_close(logging.shutdown)


agenda.add_command(db_group)
agenda.add_command(event_group)
agenda.add_command(category_group)
