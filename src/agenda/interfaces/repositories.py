"""Persistence contracts for events and categories.

Repositories store and return domain values (`AgendaEvent`,
`EventCategory`). They are request-scoped: each call is its own
transaction, and there is no unit of work spanning several calls.

Expected outcomes (absent rows) are signalled with ``None`` from lookups.
Contract violations raise the `RepositoryError` subclasses below; a backend
outage raises `StoreUnavailableError`, which callers must not interpret as
a business outcome.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agenda.domain.date_range import DateWindow
    from agenda.domain.model import AgendaEvent, EventCategory

# ============================================================================
#                               Errors
# ============================================================================


class RepositoryError(Exception):
    """Base class for repository errors."""


class StoreUnavailableError(RepositoryError):
    """Raised when the storage backend cannot be reached or fails."""


class UnknownEventError(RepositoryError):
    """Raised when updating or deleting an event id that is not stored.

    Attributes:
        event_id (str): The identifier that was not found.
    """

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event '{event_id}' is not stored.")
        self.event_id = event_id


class UnknownCategoryError(RepositoryError):
    """Raised when deleting a category name that is not stored."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Category '{name}' is not stored.")
        self.name = name


class DuplicateCategoryError(RepositoryError):
    """Raised when adding a category whose name is already stored."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Category '{name}' already exists.")
        self.name = name


class CategoryReferencedError(RepositoryError):
    """Raised when the backend refuses to delete a referenced category."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Category '{name}' is still referenced by events.")
        self.name = name


# ============================================================================
#                               Contracts
# ============================================================================


class CategoryRepository(abc.ABC):
    """Storage for event categories, keyed by exact name."""

    @abc.abstractmethod
    def get(self, name: str) -> EventCategory | None:
        """Return the category with exactly this name, or None."""

    @abc.abstractmethod
    def add(self, category: EventCategory) -> None:
        """Store a new category.

        Raises:
            DuplicateCategoryError: If a category with the same name exists.
        """

    @abc.abstractmethod
    def list_all(self) -> list[EventCategory]:
        """Return all categories ordered by name."""

    @abc.abstractmethod
    def delete(self, name: str) -> None:
        """Delete a category.

        Raises:
            UnknownCategoryError: If no such category is stored.
            CategoryReferencedError: If events still reference it.
        """


class EventRepository(abc.ABC):
    """Storage for agenda events.

    Listings (`get_many`, `find_in_window`) are ordered by start ascending,
    then by identifier.
    """

    @abc.abstractmethod
    def insert(self, event: AgendaEvent) -> AgendaEvent:
        """Store a new event and return it with its assigned identifier.

        Raises:
            ValueError: If the event already carries an identifier.
        """

    @abc.abstractmethod
    def get_by_id(self, event_id: str) -> AgendaEvent | None:
        """Return the event with this identifier, or None."""

    @abc.abstractmethod
    def get_many(self, offset: int, limit: int) -> list[AgendaEvent]:
        """Return up to ``limit`` events, skipping the first ``offset``."""

    @abc.abstractmethod
    def count(self) -> int:
        """Return the number of stored events."""

    @abc.abstractmethod
    def update(self, event: AgendaEvent) -> None:
        """Replace the stored event that has the same identifier.

        Raises:
            UnknownEventError: If the identifier is not stored.
        """

    @abc.abstractmethod
    def delete(self, event_id: str) -> None:
        """Delete an event.

        Raises:
            UnknownEventError: If the identifier is not stored.
        """

    @abc.abstractmethod
    def find_in_window(self, window: DateWindow) -> list[AgendaEvent]:
        """Return the events overlapping ``window``."""

    @abc.abstractmethod
    def count_in_category(self, name: str) -> int:
        """Return how many events reference the category ``name``."""
