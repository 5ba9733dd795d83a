"""Agenda entities: `EventCategory` and `AgendaEvent`.

Both entities are immutable. They are built through validating factories
(`EventCategory.create`, `AgendaEvent.create`) and changed through named
operations (`change_schedule`, `revise`, `recategorize`) that return a new
validated value. Every path returns either ``Ok(entity)`` or a
`StructuralValidationError`; nothing here reads a clock.

Invariants (checked on every construction and mutation):
  - event name is 3 to 50 characters after stripping whitespace;
  - event description, when present, is at most 500 characters;
  - when an end timestamp is present, ``end >= start``;
  - the category reference is never empty.

The lead-time rule for new events is time-dependent and lives in
`agenda.service_layer.validation`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from agenda.domain.errors import (
    InvariantViolation,
    StructuralReason,
    StructuralValidationError,
)
from agenda.domain.result import Ok
from agenda.domain.utils import as_utc, clean_text

EVENT_NAME_MIN_LENGTH = 3
EVENT_NAME_MAX_LENGTH = 50
EVENT_DESCRIPTION_MAX_LENGTH = 500
CATEGORY_NAME_MAX_LENGTH = 50

# Sentinel for "argument not supplied" in `AgendaEvent.revise`.
_KEEP: Any = object()


# ============================================================================
#                               Category
# ============================================================================


def _check_category_name(name: str | None) -> StructuralValidationError | None:
    if not name:
        return StructuralValidationError(
            StructuralReason.INVALID_NAME, "category name must not be empty"
        )
    if len(name) > CATEGORY_NAME_MAX_LENGTH:
        return StructuralValidationError(
            StructuralReason.INVALID_NAME,
            f"category name must be at most {CATEGORY_NAME_MAX_LENGTH} characters",
        )
    return None


@dataclass(frozen=True, slots=True)
class EventCategory:
    """A named category events are filed under. The name is its identity."""

    name: str

    def __post_init__(self) -> None:
        if (violation := _check_category_name(self.name)) is not None:
            raise InvariantViolation(violation)

    @classmethod
    def create(cls, name: str) -> Ok[EventCategory] | StructuralValidationError:
        """Validate ``name`` and build a category.

        Surrounding whitespace is stripped; the remaining name must be
        non-empty and at most 50 characters long.
        """
        normalized = clean_text(name)
        if (violation := _check_category_name(normalized)) is not None:
            return violation
        return Ok(cls(name=normalized))  # type: ignore[arg-type]


# ============================================================================
#                               Event
# ============================================================================


def _check_event(
    name: str | None,
    description: str | None,
    start: datetime,
    end: datetime | None,
    category: str | None,
) -> StructuralValidationError | None:
    """Return the first violated structural invariant, or None."""
    if not name or not EVENT_NAME_MIN_LENGTH <= len(name) <= EVENT_NAME_MAX_LENGTH:
        return StructuralValidationError(
            StructuralReason.INVALID_NAME,
            f"event name must be between {EVENT_NAME_MIN_LENGTH} and "
            f"{EVENT_NAME_MAX_LENGTH} characters",
        )
    if description is not None and len(description) > EVENT_DESCRIPTION_MAX_LENGTH:
        return StructuralValidationError(
            StructuralReason.INVALID_DESCRIPTION,
            f"description must be at most {EVENT_DESCRIPTION_MAX_LENGTH} characters",
        )
    if end is not None and end < start:
        return StructuralValidationError(
            StructuralReason.INVALID_DATE_RANGE,
            f"end ({end.isoformat()}) must not be before start ({start.isoformat()})",
        )
    if not category:
        return StructuralValidationError(
            StructuralReason.MISSING_CATEGORY, "an event must reference a category"
        )
    return None


def _category_name(category: EventCategory | str | None) -> str | None:
    if isinstance(category, EventCategory):
        return category.name
    return clean_text(category)


@dataclass(frozen=True, slots=True)
class AgendaEvent:
    """A scheduled event.

    Attributes:
        name: Display name, 3 to 50 characters.
        start: UTC start timestamp.
        category: Name of the `EventCategory` this event is filed under.
        end: Optional UTC end timestamp (``None`` means open-ended).
        description: Optional free text, at most 500 characters.
        event_id: Identifier assigned by storage; ``None`` before first save.
    """

    name: str
    start: datetime
    category: str
    end: datetime | None = None
    description: str | None = None
    event_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", as_utc(self.end))
        violation = _check_event(
            self.name, self.description, self.start, self.end, self.category
        )
        if violation is not None:
            raise InvariantViolation(violation)

    # --- Construction Paths ---

    @classmethod
    def create(  # pylint: disable=too-many-arguments
        cls,
        name: str,
        start: datetime,
        category: EventCategory | str,
        *,
        end: datetime | None = None,
        description: str | None = None,
    ) -> Ok[AgendaEvent] | StructuralValidationError:
        """Validate the inputs and build a new, unsaved event.

        Naive timestamps are interpreted as UTC. Name and description are
        stripped; a blank description is stored as ``None``.

        Returns:
            ``Ok(event)`` with ``event_id=None``, or the first violated
            structural invariant.
        """
        return cls._validated(
            name=clean_text(name),
            start=as_utc(start),
            end=as_utc(end) if end is not None else None,
            category=_category_name(category),
            description=clean_text(description),
            event_id=None,
        )

    @classmethod
    def _validated(cls, **values: Any) -> Ok[AgendaEvent] | StructuralValidationError:
        violation = _check_event(
            values["name"],
            values["description"],
            values["start"],
            values["end"],
            values["category"],
        )
        if violation is not None:
            return violation
        return Ok(cls(**values))

    def _fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "category": self.category,
            "description": self.description,
            "event_id": self.event_id,
        }

    # --- State Transitions ---

    def change_schedule(
        self, start: datetime, end: datetime | None = None
    ) -> Ok[AgendaEvent] | StructuralValidationError:
        """Move the event to a new start (and optional end).

        The lead-time rule is not re-applied here: it only governs creation.
        """
        return self._validated(
            **{
                **self._fields(),
                "start": as_utc(start),
                "end": as_utc(end) if end is not None else None,
            }
        )

    def revise(
        self, *, name: str = _KEEP, description: str | None = _KEEP
    ) -> Ok[AgendaEvent] | StructuralValidationError:
        """Change the name and/or description; omitted arguments are kept.

        Passing ``description=None`` clears the description.
        """
        values = self._fields()
        if name is not _KEEP:
            values["name"] = clean_text(name)
        if description is not _KEEP:
            values["description"] = clean_text(description)
        return self._validated(**values)

    def recategorize(
        self, category: EventCategory | str
    ) -> Ok[AgendaEvent] | StructuralValidationError:
        """File the event under another category."""
        return self._validated(
            **{**self._fields(), "category": _category_name(category)}
        )

    # --- Plumbing ---

    def with_id(self, event_id: str) -> AgendaEvent:
        """Return a copy carrying the storage-assigned identifier."""
        return replace(self, event_id=event_id)
