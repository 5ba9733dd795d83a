"""Contract tests for EventRepository implementations."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from agenda.domain.date_range import DateWindow
from agenda.domain.model import EventCategory
from agenda.interfaces.repositories import UnknownEventError
from tests.fixtures.datagen import NOW, unwrap, utc

# pylint: disable=unused-argument, magic-value-comparison, redefined-outer-name


def test_insert_assigns_identifier(repos, work, make_event):
    """insert returns the event with a fresh identifier."""
    first = repos.events.insert(make_event())
    second = repos.events.insert(make_event())
    assert first.event_id is not None
    assert first.event_id != second.event_id


def test_insert_rejects_stored_event(repos, work, make_event):
    """An event that already has an identifier cannot be inserted again."""
    with pytest.raises(ValueError):
        repos.events.insert(make_event(event_id="E1"))


def test_round_trip_preserves_every_field(repos, work, make_event):
    """What goes in comes back equal, timestamps in UTC."""
    event = make_event(
        start=NOW + timedelta(days=3),
        end=NOW + timedelta(days=3, hours=1, microseconds=5),
        description="Quarterly planning",
    )
    stored = repos.events.insert(event)
    loaded = repos.events.get_by_id(stored.event_id)
    assert loaded == stored
    assert loaded.start.utcoffset() == timedelta(0)


def test_open_ended_event_round_trip(repos, work, make_event):
    """A missing end is stored as such."""
    stored = repos.events.insert(make_event())
    assert repos.events.get_by_id(stored.event_id).end is None


def test_get_unknown_returns_none(repos):
    """Absent events are None, not an error."""
    assert repos.events.get_by_id("nope") is None


def test_get_many_pages_in_start_order(repos, work, make_event):
    """Listings are ordered by start, then identifier."""
    late = repos.events.insert(make_event(name="Late", start=NOW + timedelta(days=5)))
    early = repos.events.insert(make_event(name="Early", start=NOW + timedelta(days=1)))
    tie = repos.events.insert(make_event(name="Tie", start=NOW + timedelta(days=1)))
    assert repos.events.get_many(0, 10) == [early, tie, late]
    assert repos.events.get_many(1, 1) == [tie]
    assert repos.events.get_many(3, 10) == []
    assert repos.events.count() == 3


def test_update_replaces_event(repos, work, make_event):
    """update stores the new state under the same identifier."""
    stored = repos.events.insert(make_event())
    renamed = unwrap(stored.revise(name="Retro", description="notes"))
    repos.events.update(renamed)
    assert repos.events.get_by_id(stored.event_id) == renamed


def test_update_unknown_raises(repos, work, make_event):
    """Updating an event that is not stored raises."""
    with pytest.raises(UnknownEventError):
        repos.events.update(make_event(event_id="nope"))


def test_delete(repos, work, make_event):
    """Deleted events are gone; deleting again raises."""
    stored = repos.events.insert(make_event())
    repos.events.delete(stored.event_id)
    assert repos.events.get_by_id(stored.event_id) is None
    with pytest.raises(UnknownEventError):
        repos.events.delete(stored.event_id)


def test_count_in_category(repos, work, make_event):
    """Only events filed under the category are counted."""
    repos.categories.add(EventCategory("home"))
    repos.events.insert(make_event())
    repos.events.insert(make_event(category="home"))
    repos.events.insert(make_event(category="home"))
    assert repos.events.count_in_category("work") == 1
    assert repos.events.count_in_category("home") == 2
    assert repos.events.count_in_category("errands") == 0


# --- Date-window queries ---


@pytest.fixture
def stored_overlap(repos, work, overlap_events):
    """Insert the A/B/C/D scenario and map letters to stored events."""
    return {
        key: repos.events.insert(replace(event, event_id=None))
        for key, event in overlap_events.items()
    }


def test_find_in_window_uses_overlap(repos, stored_overlap):
    """Window 2026-01-10..2026-01-20 returns D, A and B, ordered by start."""
    found = repos.events.find_in_window(DateWindow(utc(2026, 1, 10), utc(2026, 1, 20)))
    assert found == [stored_overlap["D"], stored_overlap["A"], stored_overlap["B"]]


def test_find_in_window_inclusive_bounds(repos, stored_overlap):
    """An event ending exactly at the window start matches."""
    found = repos.events.find_in_window(DateWindow(utc(2026, 1, 12), utc(2026, 1, 13)))
    assert stored_overlap["A"] in found


def test_find_in_zero_length_window(repos, stored_overlap):
    """An instant window matches the events covering that instant."""
    instant = utc(2026, 1, 3, 12)
    found = repos.events.find_in_window(DateWindow(instant, instant))
    assert found == [stored_overlap["C"], stored_overlap["D"]]


def test_find_in_open_window(repos, stored_overlap):
    """Without an end, everything still running at the start matches."""
    found = repos.events.find_in_window(DateWindow(utc(2026, 2, 1)))
    assert found == [stored_overlap["B"]]


def test_find_in_window_across_timezones(repos, work, make_event):
    """Stored instants compare as instants whatever offset they were given in."""
    plus_two = timezone(timedelta(hours=2))
    stored = repos.events.insert(
        make_event(
            start=datetime(2026, 1, 11, 0, tzinfo=plus_two),
            end=datetime(2026, 1, 11, 1, tzinfo=plus_two),
        )
    )
    day = DateWindow.for_day(utc(2026, 1, 11).date())
    assert repos.events.find_in_window(day) == []
    assert repos.events.find_in_window(
        DateWindow(utc(2026, 1, 10, 22, 30), utc(2026, 1, 10, 22, 30))
    ) == [stored]
