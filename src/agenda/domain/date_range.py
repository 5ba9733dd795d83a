"""Date-range matching for filtered event retrieval.

Events are selected by **overlap**, not containment: an event matches a
requested window when its interval intersects the window. Absent ends, on
either side, mean "open-ended" and are treated as +infinity:

    matches  <=>  event.start <= window.end  and  event.end >= window.start

The single predicate covers every case: an event that starts before the
window and ends inside it, one that starts inside it, one that covers the
whole window, and zero-length windows (``start == end``), which match events
covering that instant.

The SQL repository applies the same predicate in its query (see
`agenda.adapters.db.repositories`); the in-memory repository calls
`select_overlapping` directly.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from agenda.domain.errors import (
    InvariantViolation,
    StructuralReason,
    StructuralValidationError,
)
from agenda.domain.model import AgendaEvent
from agenda.domain.result import Ok
from agenda.domain.utils import as_utc

_ONE_MICROSECOND = timedelta(microseconds=1)


def _check_window(
    start: datetime, end: datetime | None
) -> StructuralValidationError | None:
    if end is not None and end < start:
        return StructuralValidationError(
            StructuralReason.INVALID_DATE_RANGE,
            f"window end ({end.isoformat()}) must not be before "
            f"window start ({start.isoformat()})",
        )
    return None


@dataclass(frozen=True, slots=True)
class DateWindow:
    """A requested time window. ``end=None`` means "from start onward"."""

    start: datetime
    end: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", as_utc(self.end))
        if (violation := _check_window(self.start, self.end)) is not None:
            raise InvariantViolation(violation)

    @classmethod
    def create(
        cls, start: datetime, end: datetime | None = None
    ) -> Ok[DateWindow] | StructuralValidationError:
        """Build a window, rejecting ``end < start``.

        Naive timestamps are interpreted as UTC.
        """
        start = as_utc(start)
        end = as_utc(end) if end is not None else None
        if (violation := _check_window(start, end)) is not None:
            return violation
        return Ok(cls(start=start, end=end))

    @classmethod
    def for_day(cls, day: date, tz: tzinfo = timezone.utc) -> DateWindow:
        """The closed window covering one calendar day in ``tz``."""
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = start + timedelta(days=1) - _ONE_MICROSECOND
        return cls(start=as_utc(start), end=as_utc(end))

    def overlaps(self, start: datetime, end: datetime | None = None) -> bool:
        """Return True if the interval ``[start, end]`` intersects the window."""
        return overlaps(self, start, end)


def overlaps(window: DateWindow, start: datetime, end: datetime | None) -> bool:
    """Overlap predicate; a missing end on either side is +infinity."""
    start = as_utc(start)
    end = as_utc(end) if end is not None else None
    starts_before_window_ends = window.end is None or start <= window.end
    ends_after_window_starts = end is None or end >= window.start
    return starts_before_window_ends and ends_after_window_starts


def select_overlapping(
    window: DateWindow, events: Iterable[AgendaEvent]
) -> list[AgendaEvent]:
    """Return the events that overlap ``window``, in the order given."""
    return [event for event in events if overlaps(window, event.start, event.end)]


def sort_by_start(events: Iterable[AgendaEvent]) -> list[AgendaEvent]:
    """Canonical ordering for listings: start ascending, then identifier."""
    return sorted(events, key=lambda event: (event.start, event.event_id or ""))
