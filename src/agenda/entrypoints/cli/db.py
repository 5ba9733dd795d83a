"""AGENDA DB CLI: forward-only Alembic wrappers.

Provides a minimal interface over Alembic for creating and inspecting the
agenda schema. Destructive operations (``downgrade``, ``stamp``) are
intentionally omitted.

Behavior
- Uses programmatic Alembic configuration; human-oriented notices go to **stderr**,
  Alembic output to **stdout** to keep machine-readable flows intact.
- Schema-changing actions prompt for confirmation unless explicitly bypassed.

Requirements
- ``AGENDA_DB_URL`` must be set.

Failure modes
- Missing/invalid ``AGENDA_DB_URL`` or unreachable DB → ``ClickException`` with guidance.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import func, select, text
from sqlalchemy.exc import ArgumentError, OperationalError

from agenda import config
from agenda.adapters.db import schema
from agenda.adapters.db.dialects import UnsupportedDialect
from agenda.adapters.db.engine import make_engine

from .app import (
    INVALID_URL_FORMAT_MSG,
    MISSING_DB_URL_MSG,
    UNSUPPORTED_BACKEND_MSG,
)
from .helpers import error, sanitize_url, success, warn

if TYPE_CHECKING:
    from alembic.config import Config
    from sqlalchemy.engine import Engine

CANNOT_CONNECT_MSG = (
    "AGENDA_DB_URL is set, but the database is not reachable.\n"
    "Please ensure the database is running and the URL is correct."
)

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the database schema to the latest version.\n"
    "Please ensure you have a backup before proceeding."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'agenda db upgrade' to update the schema."



verbose_option = click.option(
    "--verbose",
    "-v",
    "verbose",
    is_flag=True,
    help="Show alembic's more verbose output.",
)


def _check_connection(url: str) -> None:
    engine = make_engine(url)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))  # pragma: no mutate
    finally:
        engine.dispose()


def _get_url() -> str:
    """Return a reachable ``AGENDA_DB_URL`` or raise a ClickException."""
    try:
        url = config.get_db_url()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e
    try:
        _check_connection(url)
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    except UnsupportedDialect as e:
        raise click.ClickException(UNSUPPORTED_BACKEND_MSG) from e
    return url


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Create and inspect the agenda schema."""


@db.command()
@verbose_option
def current(verbose: bool) -> None:
    """Show the revision the database is at (empty before the first upgrade)."""
    command.current(
        config.build_alembic_config(db_url=_get_url(), stdout=sys.stdout),
        verbose=verbose,
    )


@db.command()
@verbose_option
def heads(verbose: bool) -> None:
    """Show the newest revision shipped with AGENDA. Needs no database."""
    command.heads(config.build_alembic_config(stdout=sys.stdout), verbose=verbose)


@db.command()
@verbose_option
@click.option(
    "--indicate-current",
    "-i",
    "indicate_current",
    is_flag=True,
    help="Mark the revision the database is at (needs AGENDA_DB_URL).",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """Show the revision history."""
    db_url = _get_url() if indicate_current else None
    command.history(
        config.build_alembic_config(db_url=db_url, stdout=sys.stdout),
        verbose=verbose,
        indicate_current=indicate_current,
    )


@db.command()
@click.option("--sql", is_flag=True, help="Print the SQL instead of running it.")
@click.option("--force", is_flag=True, help="Upgrade without confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Bring the schema up to the newest revision."""
    url = _get_url()
    if not force and not sql:
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"db: {click.style(sanitize_url(url), underline=True)}")
        click.confirm("Are you sure you want to proceed?", abort=True)
    command.upgrade(
        config.build_alembic_config(db_url=url, stdout=sys.stdout),
        revision="head",
        sql=sql,
    )
    success("Upgrade complete!")


class MigrationStatus(Enum):
    """Where the schema stands relative to the shipped head revision."""

    UP_TO_DATE = "up to date"
    OUT_OF_DATE = "out of date"
    UNINITIALIZED = "uninitialized"


def _get_current_revision(engine: Engine) -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def _get_head_revision(cfg: Config) -> str | None:
    return ScriptDirectory.from_config(cfg).get_current_head()


def _migration_status(rev: str | None, head: str | None) -> MigrationStatus:
    if rev == head:
        return MigrationStatus.UP_TO_DATE
    if rev is None:
        return MigrationStatus.UNINITIALIZED
    return MigrationStatus.OUT_OF_DATE  # pragma: nocover


def _row_counts(engine: Engine) -> dict[str, int]:
    """Number of stored events and categories."""
    with engine.connect() as conn:
        return {
            table.name: conn.execute(select(func.count()).select_from(table)).scalar_one()
            for table in (schema.events, schema.categories)
        }


@db.command()
def status() -> None:
    """Show connectivity, schema state and how much is stored."""
    url = _get_url()
    engine = make_engine(url)
    success("Database reachable")
    click.echo(f"Backend : {engine.dialect.name}")
    click.echo(f"URL     : {sanitize_url(url)}")

    try:
        rev = _get_current_revision(engine)
        migration_status = _migration_status(
            rev, _get_head_revision(config.build_alembic_config(db_url=url))
        )
        counts = (
            _row_counts(engine)
            if migration_status is MigrationStatus.UP_TO_DATE
            else None
        )
    finally:
        engine.dispose()

    click.echo(
        f"Schema  : {rev} ({migration_status.value})"
        if rev is not None
        else f"Schema  : {migration_status.value}"
    )
    if counts is not None:
        click.echo(f"Events  : {counts['events']}")
        click.echo(f"Categories: {counts['categories']}")
        return

    warn(UPGRADE_SCHEMA_INSTRUCTIONS)
    if migration_status is MigrationStatus.UNINITIALIZED:
        error("The agenda tables do not exist yet.")
