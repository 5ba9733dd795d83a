"""Service layer handlers.

Each handler takes a command plus the collaborators it needs (bound by
`agenda.bootstrap`) and returns ``Ok(result)`` or an error kind. Handlers
read the clock at most once and pass the moment down as a value.

Event creation runs its checks in a fixed order: structural invariants
(entity factory), then the lead-time rule, then category resolution. The
category is resolved last so that a rejected event never auto-creates one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from agenda.domain.date_range import DateWindow
from agenda.domain.errors import (
    CategoryInUseError,
    CategoryNotFoundError,
    CreateTooSoonError,
    InvalidPaginationError,
    NotFound,
    StructuralValidationError,
)
from agenda.domain.model import AgendaEvent, EventCategory
from agenda.domain.result import Ok
from agenda.interfaces.repositories import (
    CategoryReferencedError,
    DuplicateCategoryError,
    UnknownCategoryError,
    UnknownEventError,
)

from . import commands
from .commands import UNSET
from .validation import (
    Page,
    check_category_deletable,
    check_lead_time,
    paginate,
    resolve_category,
)

if TYPE_CHECKING:
    from agenda.config import AgendaSettings
    from agenda.interfaces.clock import Clock
    from agenda.interfaces.repositories import CategoryRepository, EventRepository

# pylint: disable=too-many-return-statements

logger = logging.getLogger(__name__)

EVENT = "Event"
CATEGORY = "Category"


# ============================================================================
#                               Event Handlers
# ============================================================================


def create_event(
    cmd: commands.CreateEvent,
    events: EventRepository,
    categories: CategoryRepository,
    clock: Clock,
    settings: AgendaSettings,
) -> (
    Ok[AgendaEvent]
    | StructuralValidationError
    | CreateTooSoonError
    | CategoryNotFoundError
):
    """Validate and store a new event."""

    match AgendaEvent.create(
        cmd.name,
        cmd.start,
        cmd.category,
        end=cmd.end,
        description=cmd.description,
    ):
        case StructuralValidationError() as error:
            logger.debug("CreateEvent rejected: %s", error.message)
            return error
        case Ok(value=event):
            pass

    match check_lead_time(event, clock.now(), settings.lead_time):
        case CreateTooSoonError() as error:
            logger.debug("CreateEvent rejected: %s", error.message)
            return error

    match resolve_category(event.category, categories, settings.auto_create_category):
        case CategoryNotFoundError() | StructuralValidationError() as error:
            logger.debug("CreateEvent rejected: %s", error.message)
            return error

    stored = events.insert(event)
    logger.info("Created event %s (%r)", stored.event_id, stored.name)
    return Ok(stored)


def get_event(cmd: commands.GetEvent, events: EventRepository) -> Ok[AgendaEvent] | NotFound:
    """Fetch a single event."""
    if (event := events.get_by_id(cmd.event_id)) is None:
        return NotFound(EVENT, cmd.event_id)
    return Ok(event)


def list_events(
    cmd: commands.ListEvents, events: EventRepository, settings: AgendaSettings
) -> Ok[Page[AgendaEvent]] | InvalidPaginationError:
    """Fetch one page of events, ordered by start."""
    match paginate(cmd.page, cmd.page_size, settings.max_page_size):
        case InvalidPaginationError() as error:
            logger.debug("ListEvents rejected: %s", error.message)
            return error
        case Ok(value=request):
            pass

    return Ok(
        Page(
            items=events.get_many(request.offset, request.limit),
            page=request.page,
            page_size=request.page_size,
            total=events.count(),
        )
    )


def list_events_in_window(
    cmd: commands.ListEventsInWindow, events: EventRepository
) -> Ok[list[AgendaEvent]] | StructuralValidationError:
    """Fetch the events overlapping the requested window."""
    match DateWindow.create(cmd.start, cmd.end):
        case StructuralValidationError() as error:
            logger.debug("ListEventsInWindow rejected: %s", error.message)
            return error
        case Ok(value=window):
            return Ok(events.find_in_window(window))


def list_events_on_day(
    cmd: commands.ListEventsOnDay, events: EventRepository
) -> Ok[list[AgendaEvent]]:
    """Fetch the events overlapping one calendar day."""
    return Ok(events.find_in_window(DateWindow.for_day(cmd.day)))


def reschedule_event(
    cmd: commands.RescheduleEvent, events: EventRepository
) -> Ok[AgendaEvent] | NotFound | StructuralValidationError:
    """Move an existing event. The lead-time rule does not apply."""
    if (current := events.get_by_id(cmd.event_id)) is None:
        return NotFound(EVENT, cmd.event_id)

    match current.change_schedule(cmd.start, cmd.end):
        case StructuralValidationError() as error:
            logger.debug("RescheduleEvent %s rejected: %s", cmd.event_id, error.message)
            return error
        case Ok(value=updated):
            pass

    try:
        events.update(updated)
    except UnknownEventError:
        return NotFound(EVENT, cmd.event_id)
    logger.info("Rescheduled event %s to %s", cmd.event_id, updated.start.isoformat())
    return Ok(updated)


def revise_event(
    cmd: commands.ReviseEvent,
    events: EventRepository,
    categories: CategoryRepository,
    settings: AgendaSettings,
) -> (
    Ok[AgendaEvent] | NotFound | StructuralValidationError | CategoryNotFoundError
):
    """Rename, re-describe and/or recategorize an existing event."""
    if (current := events.get_by_id(cmd.event_id)) is None:
        return NotFound(EVENT, cmd.event_id)

    changes = {
        field: value
        for field, value in (("name", cmd.name), ("description", cmd.description))
        if value is not UNSET
    }
    match current.revise(**changes):
        case StructuralValidationError() as error:
            logger.debug("ReviseEvent %s rejected: %s", cmd.event_id, error.message)
            return error
        case Ok(value=updated):
            pass

    if cmd.category is not UNSET:
        match resolve_category(cmd.category, categories, settings.auto_create_category):
            case CategoryNotFoundError() | StructuralValidationError() as error:
                logger.debug("ReviseEvent %s rejected: %s", cmd.event_id, error.message)
                return error
            case Ok(value=category):
                pass
        match updated.recategorize(category):
            case StructuralValidationError() as error:
                return error
            case Ok(value=updated):
                pass

    if updated == current:
        logger.debug("ReviseEvent %s: no changes; noop", cmd.event_id)
        return Ok(current)

    try:
        events.update(updated)
    except UnknownEventError:
        return NotFound(EVENT, cmd.event_id)
    logger.info("Revised event %s", cmd.event_id)
    return Ok(updated)


def delete_event(cmd: commands.DeleteEvent, events: EventRepository) -> Ok[str] | NotFound:
    """Delete an event by identifier."""
    try:
        events.delete(cmd.event_id)
    except UnknownEventError:
        return NotFound(EVENT, cmd.event_id)
    logger.info("Deleted event %s", cmd.event_id)
    return Ok(cmd.event_id)


# ============================================================================
#                               Category Handlers
# ============================================================================


def add_category(
    cmd: commands.AddCategory, categories: CategoryRepository
) -> Ok[EventCategory] | StructuralValidationError:
    """Register a category; adding an existing name is a no-op."""
    match EventCategory.create(cmd.name):
        case StructuralValidationError() as error:
            logger.debug("AddCategory rejected: %s", error.message)
            return error
        case Ok(value=category):
            pass

    if (existing := categories.get(category.name)) is not None:
        logger.debug("AddCategory %r: already exists; noop", category.name)
        return Ok(existing)

    try:
        categories.add(category)
    except DuplicateCategoryError:
        logger.debug("AddCategory %r: already exists; noop", category.name)
        return Ok(category)
    logger.info("Added category %r", category.name)
    return Ok(category)


def list_categories(
    cmd: commands.ListCategories,  # pylint: disable=unused-argument
    categories: CategoryRepository,
) -> Ok[list[EventCategory]]:
    """List every category by name."""
    return Ok(categories.list_all())


def remove_category(
    cmd: commands.RemoveCategory,
    categories: CategoryRepository,
    events: EventRepository,
) -> Ok[EventCategory] | NotFound | CategoryInUseError:
    """Delete a category unless events still reference it."""
    match check_category_deletable(cmd.name, categories, events):
        case NotFound() | CategoryInUseError() as error:
            logger.debug("RemoveCategory rejected: %s", error.message)
            return error
        case Ok(value=category):
            pass

    try:
        categories.delete(category.name)
    except UnknownCategoryError:
        return NotFound(CATEGORY, cmd.name)
    except CategoryReferencedError:
        # An event was filed under the category after the check above.
        return CategoryInUseError(
            name=category.name,
            reference_count=events.count_in_category(category.name),
        )
    logger.info("Removed category %r", category.name)
    return Ok(category)


# ============================================================================
#                       Handler Registry
# ============================================================================


COMMAND_HANDLERS: dict[type[commands.Command], Callable[..., object]] = {
    commands.CreateEvent: create_event,
    commands.GetEvent: get_event,
    commands.ListEvents: list_events,
    commands.ListEventsInWindow: list_events_in_window,
    commands.ListEventsOnDay: list_events_on_day,
    commands.RescheduleEvent: reschedule_event,
    commands.ReviseEvent: revise_event,
    commands.DeleteEvent: delete_event,
    commands.AddCategory: add_category,
    commands.ListCategories: list_categories,
    commands.RemoveCategory: remove_category,
}
