"""Application access and command dispatch for CLI commands.

Commands build a service-layer command, hand it to `dispatch`, and render the
returned value. `dispatch` turns every failure into a rendered message and
an exit code:

| outcome                        | rendering                          | exit |
|--------------------------------|------------------------------------|------|
| ``Ok(value)``                  | returned to the command            | 0    |
| enumerated error kind          | ``<status> <title>: <detail>``     | 1    |
| anything raised (unclassified) | ``500 Internal Server Error: ...`` | 2    |
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import click
from sqlalchemy.exc import ArgumentError

from agenda import config
from agenda.adapters.db.dialects import UnsupportedDialect
from agenda.bootstrap import AppContainer, bootstrap
from agenda.domain.errors import ErrorKind
from agenda.domain.result import Ok
from agenda.service_layer.error_classifier import (
    UnclassifiedFaultError,
    classify,
    unclassified_fault,
)

from .render import echo_failure

if TYPE_CHECKING:
    from agenda.service_layer.commands import Command

logger = logging.getLogger(__name__)

EXIT_CLASSIFIED_ERROR = 1
EXIT_UNCLASSIFIED_FAULT = 2

MISSING_DB_URL_MSG = (
    "AGENDA_DB_URL is not set.\n\n"
    "Set it before running this command, e.g.:\n"
    "  export AGENDA_DB_URL='sqlite:///agenda.db'\n"
    "and create the schema with 'agenda db upgrade'."
)

INVALID_URL_FORMAT_MSG = "The value of AGENDA_DB_URL is not a valid SQLAlchemy database URL."

UNSUPPORTED_BACKEND_MSG = "AGENDA_DB_URL must point at a PostgreSQL or SQLite database."


@dataclass
class CliState:
    """Per-invocation state stored on the root Click context.

    Attributes:
        auto_create_category: ``--auto-create-category`` override, or None
            to use ``AGENDA_AUTO_CREATE_CATEGORY``.
        app: The wired application, built on first use.
    """

    auto_create_category: bool | None = None
    app: AppContainer | None = None


def get_app(ctx: click.Context) -> AppContainer:
    """Return the wired application, bootstrapping it on first use."""
    state = ctx.ensure_object(CliState)
    if state.app is None:
        try:
            settings = config.load_settings()
            if state.auto_create_category is not None:
                settings = replace(
                    settings, auto_create_category=state.auto_create_category
                )
            state.app = bootstrap(settings=settings)
        except config.DatabaseUrlNotSetError as e:
            raise click.ClickException(MISSING_DB_URL_MSG) from e
        except config.InvalidSettingError as e:
            raise click.ClickException(str(e)) from e
        except ArgumentError as e:
            raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
        except UnsupportedDialect as e:
            raise click.ClickException(UNSUPPORTED_BACKEND_MSG) from e
    return state.app


def dispatch(ctx: click.Context, cmd: Command) -> object:
    """Run ``cmd`` through the message bus and unwrap its result.

    Exits the process with a rendered message on any failure.
    """
    app = get_app(ctx)
    try:
        result = app.message_bus.handle(cmd)
    except Exception as e:  # pylint: disable=broad-except
        # Already logged with traceback by the message bus.
        echo_failure(unclassified_fault(e))
        ctx.exit(EXIT_UNCLASSIFIED_FAULT)

    match result:
        case Ok(value=value):
            return value
        case ErrorKind():
            try:
                response = classify(
                    result, auto_create_category=app.settings.auto_create_category
                )
            except UnclassifiedFaultError as e:
                logger.exception("Cannot classify result of %s", type(cmd).__name__)
                echo_failure(unclassified_fault(e))
                ctx.exit(EXIT_UNCLASSIFIED_FAULT)
            echo_failure(response)
            ctx.exit(EXIT_CLASSIFIED_ERROR)
        case _:
            logger.error("Unexpected result %r from %s", result, type(cmd).__name__)
            echo_failure(unclassified_fault(TypeError(type(result).__name__)))
            ctx.exit(EXIT_UNCLASSIFIED_FAULT)
    return None  # pragma: no cover
