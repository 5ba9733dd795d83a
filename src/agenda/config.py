"""Configuration utilities for AGENDA.

This module centralizes small helpers and constants related to application
configuration. Everything is read from environment variables:

| Variable                      | Meaning                                  | Default |
|-------------------------------|------------------------------------------|---------|
| ``AGENDA_DB_URL``             | SQLAlchemy URL of the agenda database    | (none)  |
| ``AGENDA_AUTO_CREATE_CATEGORY`` | create unknown categories on reference | false   |
| ``AGENDA_LEAD_TIME_HOURS``    | minimum lead time for new events         | 24      |
| ``AGENDA_MAX_PAGE_SIZE``      | largest page size accepted by listings   | 100     |
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV = "AGENDA_DB_URL"
AUTO_CREATE_CATEGORY_ENV = "AGENDA_AUTO_CREATE_CATEGORY"
LEAD_TIME_HOURS_ENV = "AGENDA_LEAD_TIME_HOURS"
MAX_PAGE_SIZE_ENV = "AGENDA_MAX_PAGE_SIZE"

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate

DEFAULT_LEAD_TIME = timedelta(days=1)
DEFAULT_MAX_PAGE_SIZE = 100

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class DatabaseUrlNotSetError(Exception):
    """Raised when the AGENDA_DB_URL environment variable is not set."""


class InvalidSettingError(ValueError):
    """Raised when an AGENDA_* environment variable holds an unusable value."""

    def __init__(self, variable: str, value: str, expected: str) -> None:
        super().__init__(f"{variable}={value!r} is invalid: expected {expected}.")
        self.variable = variable
        self.value = value


@dataclass(frozen=True, slots=True)
class AgendaSettings:
    """Behavioural settings handed to the service layer.

    Attributes:
        auto_create_category: Create a referenced category that does not
            exist instead of rejecting the request.
        lead_time: Minimum time between "now" and the start of a new event.
        max_page_size: Largest ``page_size`` a listing accepts.
    """

    auto_create_category: bool = False
    lead_time: timedelta = DEFAULT_LEAD_TIME
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `AGENDA_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `AGENDA_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV)):
        raise DatabaseUrlNotSetError
    return url


def _parse_bool(variable: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidSettingError(variable, raw, "a boolean (true/false, 1/0, yes/no)")


def _parse_positive_int(variable: str, raw: str, *, allow_zero: bool = False) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidSettingError(variable, raw, "an integer") from None
    if value < 0 or (value == 0 and not allow_zero):
        raise InvalidSettingError(
            variable, raw, "a non-negative integer" if allow_zero else "a positive integer"
        )
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> AgendaSettings:
    """Build `AgendaSettings` from environment variables.

    Unset variables fall back to the defaults on `AgendaSettings`.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Raises:
        InvalidSettingError: If a variable is set to an unparsable value.
    """
    env = os.environ if environ is None else environ
    settings = AgendaSettings()

    auto_create = settings.auto_create_category
    if (raw := env.get(AUTO_CREATE_CATEGORY_ENV)) is not None:
        auto_create = _parse_bool(AUTO_CREATE_CATEGORY_ENV, raw)

    lead_time = settings.lead_time
    if (raw := env.get(LEAD_TIME_HOURS_ENV)) is not None:
        hours = _parse_positive_int(LEAD_TIME_HOURS_ENV, raw, allow_zero=True)
        lead_time = timedelta(hours=hours)

    max_page_size = settings.max_page_size
    if (raw := env.get(MAX_PAGE_SIZE_ENV)) is not None:
        max_page_size = _parse_positive_int(MAX_PAGE_SIZE_ENV, raw)

    return AgendaSettings(
        auto_create_category=auto_create,
        lead_time=lead_time,
        max_page_size=max_page_size,
    )


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for AGENDA's migrations.

    Sets only Alembic "main" options:
    - `sqlalchemy.url` → the database URL you pass
    - `script_location` → AGENDA's packaged Alembic scripts

    Args:
        db_url: SQLAlchemy database URL (e.g., `sqlite:///agenda.db`). Can be
            `None` (default) only in contexts where Alembic won't need to
            connect to the DB.
        stdout: Text stream Alembic will write status lines to. Defaults to
            `sys.stdout`; override in tests to capture output.

    Returns:
        An `alembic.config.Config` pointing to AGENDA's migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("agenda.adapters.db.alembic")),
    )
    return cfg
