"""Module defining Commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class _UnsetType:
    """Sentinel for fields intentionally left unchanged by a command.

    Distinct from ``None``, which explicitly clears a value.
    """

    def __bool__(self) -> bool:  # falsy to simplify conditionals
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _UnsetType()


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


# ============================================================================
#                               Events
# ============================================================================


@dataclass(frozen=True)
class CreateEvent(Command):
    """Create a new event under an existing (or auto-created) category."""

    name: str
    start: datetime
    category: str
    end: datetime | None = None
    description: str | None = None


@dataclass(frozen=True)
class GetEvent(Command):
    """Fetch a single event by identifier."""

    event_id: str


@dataclass(frozen=True)
class ListEvents(Command):
    """Fetch one page of events ordered by start."""

    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class ListEventsInWindow(Command):
    """Fetch events overlapping ``[start, end]``; no end means "onward"."""

    start: datetime
    end: datetime | None = None


@dataclass(frozen=True)
class ListEventsOnDay(Command):
    """Fetch events overlapping one calendar day (UTC)."""

    day: date


@dataclass(frozen=True)
class RescheduleEvent(Command):
    """Move an event to a new start and optional end."""

    event_id: str
    start: datetime
    end: datetime | None = None


@dataclass(frozen=True)
class ReviseEvent(Command):
    """Change an event's name, description and/or category.

    Fields left as ``UNSET`` are kept; ``description=None`` clears it.
    """

    event_id: str
    name: str = UNSET
    description: str | None = UNSET
    category: str = UNSET


@dataclass(frozen=True)
class DeleteEvent(Command):
    """Delete an event."""

    event_id: str


# ============================================================================
#                               Categories
# ============================================================================


@dataclass(frozen=True)
class AddCategory(Command):
    """Register a category (idempotent)."""

    name: str


@dataclass(frozen=True)
class ListCategories(Command):
    """List every category by name."""


@dataclass(frozen=True)
class RemoveCategory(Command):
    """Delete a category that no event references."""

    name: str
