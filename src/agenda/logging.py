"""Logging setup for AGENDA.

Logging is configured once per CLI invocation from a `LoggingOptions`
value. Two handlers hang off the root logger:

- a Rich console handler on stderr, whose level follows ``-v``/``-q``;
- an optional flight recorder: a `MemoryHandler` that keeps the last
  ``capacity`` records at DEBUG and dumps them to a file when a WARNING or
  worse is logged (or at exit, when forced).

The root logger itself is left at DEBUG so that the flight recorder sees
everything; per-logger levels (``-L sqlalchemy=INFO``) narrow what both
handlers receive.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "agenda"
BASE_LEVEL = logging.WARNING
LEVEL_STEP = 10

FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)

# Keep consistent with click-extra's --color / --no-color option
ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


def effective_level(verbose_count: int = 0, quiet_count: int = 0) -> int:
    """Console level after applying ``-v`` and ``-q`` repetitions to WARNING."""
    level = BASE_LEVEL - LEVEL_STEP * verbose_count + LEVEL_STEP * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True)
class FlightRecorderOptions:
    """Where and how much the flight recorder keeps."""

    path: Path
    capacity: int = 2000
    flush_level: int = logging.WARNING
    flush_on_close: bool = False


@dataclass(frozen=True)
class LoggingOptions:
    """Everything the CLI's logging flags decide.

    Attributes:
        level: Console level (see `effective_level`).
        debug_mode: Show timestamps, logger names and source paths.
        color: Allow colored console output.
        flight_recorder: Flight recorder settings, or None when disabled.
        logger_levels: Per-logger minimum levels, applied to the loggers.
    """

    level: int = BASE_LEVEL
    debug_mode: bool = False
    color: bool = True
    flight_recorder: FlightRecorderOptions | None = None
    logger_levels: dict[str, int] = field(default_factory=dict)


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from outside AGENDA with their library, e.g. ``[alembic]``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    In debug mode the handler drops to DEBUG and shows source locations;
    otherwise third-party records get a short library prefix.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(options: FlightRecorderOptions) -> MemoryHandler:
    """Build the flight recorder: a memory buffer over a truncating file."""
    target = logging.FileHandler(options.path, mode="w", encoding="utf-8", delay=True)
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))
    return MemoryHandler(
        capacity=options.capacity,
        flushLevel=options.flush_level,
        target=target,
        flushOnClose=options.flush_on_close,
    )


def configure_logging(options: LoggingOptions) -> list[logging.Handler]:
    """Install AGENDA's handlers on the root logger and return them.

    Replaces any handlers installed by a previous invocation in the same
    process (tests run many invocations).
    """
    handlers: list[logging.Handler] = [
        config_console_handler(
            level=options.level, debug_mode=options.debug_mode, color=options.color
        )
    ]
    if options.flight_recorder is not None:
        handlers.append(config_flight_recorder(options.flight_recorder))

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in options.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    options: LoggingOptions,
    handlers: list[logging.Handler],
) -> None:
    """Log a one-line startup summary, then environment details at DEBUG."""
    recorder = options.flight_recorder
    logger.info(
        "AGENDA %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(options.level),
        "ON" if recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if recorder is not None:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            recorder.path,
            recorder.capacity,
            recorder.flush_on_close,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in options.logger_levels.items()}
        or "<none>",
    )
