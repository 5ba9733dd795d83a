"""Bootstrap the message bus with handlers and their collaborators."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from agenda import config
from agenda.adapters.clock import SystemClock
from agenda.adapters.db.engine import make_engine
from agenda.adapters.db.repositories import (
    SqlAlchemyCategoryRepository,
    SqlAlchemyEventRepository,
)
from agenda.adapters.id_generators import ULIDGenerator
from agenda.adapters.memory import (
    InMemoryAgendaData,
    InMemoryCategoryRepository,
    InMemoryEventRepository,
)
from agenda.service_layer.handlers import COMMAND_HANDLERS
from agenda.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from agenda.config import AgendaSettings
    from agenda.interfaces.clock import Clock
    from agenda.interfaces.id_generator import IdGenerator
    from agenda.interfaces.repositories import CategoryRepository, EventRepository
    from agenda.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus
    settings: AgendaSettings


def build_sql_repositories(
    engine: Engine, id_generator: IdGenerator
) -> tuple[EventRepository, CategoryRepository]:
    """Build SQLAlchemy-backed repositories sharing one engine."""
    return (
        SqlAlchemyEventRepository(engine, id_generator),
        SqlAlchemyCategoryRepository(engine),
    )


def build_memory_repositories(
    id_generator: IdGenerator,
) -> tuple[EventRepository, CategoryRepository]:
    """Build in-memory repositories sharing one backing store."""
    data = InMemoryAgendaData()
    return (
        InMemoryEventRepository(data, id_generator),
        InMemoryCategoryRepository(data),
    )


def build_message_bus(
    dependencies: Mapping[str, object],
    command_handlers: Mapping[type[Command], Callable[..., object]],
) -> MessageBus:
    """Build a message bus with each handler bound to its dependencies."""
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }
    return MessageBus(command_handlers=injected_command_handlers)


def inject_dependencies(
    handler: Callable[..., object], dependencies: Mapping[str, object]
) -> Callable[..., object]:
    """Bind the dependencies a handler declares by parameter name."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return partial(handler, **deps)


def _assemble(
    events: EventRepository,
    categories: CategoryRepository,
    clock: Clock,
    settings: AgendaSettings,
) -> AppContainer:
    dependencies = {
        "events": events,
        "categories": categories,
        "clock": clock,
        "settings": settings,
    }
    return AppContainer(
        message_bus=build_message_bus(dependencies, COMMAND_HANDLERS),
        settings=settings,
    )


def bootstrap(
    db_url: str | None = None,
    *,
    settings: AgendaSettings | None = None,
    clock: Clock | None = None,
    id_generator: IdGenerator | None = None,
) -> AppContainer:
    """Wire the application against a SQL database.

    Args:
        db_url: SQLAlchemy URL; defaults to ``AGENDA_DB_URL``.
        settings: Behavioural settings; defaults to `config.load_settings()`.
        clock: Source of the current moment; defaults to the system clock.
        id_generator: Event id source; defaults to monotonic ULIDs.

    Raises:
        DatabaseUrlNotSetError: If no URL is given and ``AGENDA_DB_URL`` is unset.
        InvalidSettingError: If an ``AGENDA_*`` variable is malformed.
    """
    engine = make_engine(db_url or config.get_db_url())
    events, categories = build_sql_repositories(
        engine, id_generator or ULIDGenerator()
    )
    return _assemble(
        events,
        categories,
        clock or SystemClock(),
        settings or config.load_settings(),
    )


def bootstrap_in_memory(
    *,
    settings: AgendaSettings | None = None,
    clock: Clock | None = None,
    id_generator: IdGenerator | None = None,
) -> AppContainer:
    """Wire the application against throwaway in-memory repositories."""
    events, categories = build_memory_repositories(id_generator or ULIDGenerator())
    return _assemble(
        events,
        categories,
        clock or SystemClock(),
        settings or config.AgendaSettings(),
    )
