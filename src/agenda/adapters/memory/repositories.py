"""In-memory implementations of the repository contracts.

These adapters are intended for tests and throwaway sessions. They do not
persist data and are not suitable for production use.
"""

from dataclasses import dataclass, field

from agenda.domain.date_range import DateWindow, select_overlapping, sort_by_start
from agenda.domain.model import AgendaEvent, EventCategory
from agenda.interfaces.id_generator import IdGenerator
from agenda.interfaces.repositories import (
    CategoryReferencedError,
    CategoryRepository,
    DuplicateCategoryError,
    EventRepository,
    UnknownCategoryError,
    UnknownEventError,
)


@dataclass(slots=True)
class InMemoryAgendaData:
    """Shared backing store for the in-memory repositories.

    A single instance should be passed to both repositories so that category
    deletion can see the events referencing it, the way a foreign key would.
    """

    # keyed by category name
    categories: dict[str, EventCategory] = field(default_factory=dict)

    # keyed by event_id
    events: dict[str, AgendaEvent] = field(default_factory=dict)


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of the CategoryRepository interface."""

    def __init__(self, data: InMemoryAgendaData) -> None:
        self._data = data

    def get(self, name: str) -> EventCategory | None:
        return self._data.categories.get(name)

    def add(self, category: EventCategory) -> None:
        if category.name in self._data.categories:
            raise DuplicateCategoryError(category.name)
        self._data.categories[category.name] = category

    def list_all(self) -> list[EventCategory]:
        return [self._data.categories[name] for name in sorted(self._data.categories)]

    def delete(self, name: str) -> None:
        if name not in self._data.categories:
            raise UnknownCategoryError(name)
        if any(event.category == name for event in self._data.events.values()):
            raise CategoryReferencedError(name)
        del self._data.categories[name]


class InMemoryEventRepository(EventRepository):
    """In-memory implementation of the EventRepository interface."""

    def __init__(self, data: InMemoryAgendaData, id_generator: IdGenerator) -> None:
        self._data = data
        self._id_generator = id_generator

    def _ordered(self) -> list[AgendaEvent]:
        return sort_by_start(self._data.events.values())

    def insert(self, event: AgendaEvent) -> AgendaEvent:
        if event.event_id is not None:
            raise ValueError(f"Event already has an identifier: {event.event_id}")
        stored = event.with_id(self._id_generator.new_id())
        self._data.events[stored.event_id] = stored  # type: ignore[index]
        return stored

    def get_by_id(self, event_id: str) -> AgendaEvent | None:
        return self._data.events.get(event_id)

    def get_many(self, offset: int, limit: int) -> list[AgendaEvent]:
        return self._ordered()[offset : offset + limit]

    def count(self) -> int:
        return len(self._data.events)

    def update(self, event: AgendaEvent) -> None:
        if event.event_id is None or event.event_id not in self._data.events:
            raise UnknownEventError(str(event.event_id))
        self._data.events[event.event_id] = event

    def delete(self, event_id: str) -> None:
        if event_id not in self._data.events:
            raise UnknownEventError(event_id)
        del self._data.events[event_id]

    def find_in_window(self, window: DateWindow) -> list[AgendaEvent]:
        return select_overlapping(window, self._ordered())

    def count_in_category(self, name: str) -> int:
        return sum(1 for event in self._data.events.values() if event.category == name)
