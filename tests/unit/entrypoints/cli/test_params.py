"""Unit tests for the CLI timestamp parameter types."""

from datetime import date, datetime, timedelta, timezone

import click
import pytest

from agenda.entrypoints.cli.params import ISO_DATE, ISO_DATETIME
from tests.fixtures.datagen import utc


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2026-01-10", utc(2026, 1, 10)),
        ("2026-01-10T09:30", utc(2026, 1, 10, 9, 30)),
        ("2026-01-10T11:30:00+02:00", utc(2026, 1, 10, 9, 30)),
        ("2026-01-10T09:30:00Z", utc(2026, 1, 10, 9, 30)),
    ],
)
def test_iso_datetime_converts_to_utc(raw, expected):
    """Naive input is UTC; offsets are converted."""
    value = ISO_DATETIME.convert(raw, None, None)
    assert value == expected
    assert value.utcoffset() == timedelta(0)


def test_iso_datetime_passes_datetimes_through():
    """Already-parsed values (e.g. defaults) are normalized, not reparsed."""
    aware = datetime(2026, 1, 10, 11, tzinfo=timezone(timedelta(hours=2)))
    assert ISO_DATETIME.convert(aware, None, None) == utc(2026, 1, 10, 9)


def test_iso_datetime_rejects_garbage():
    """Unparsable input is a usage error naming the value."""
    with pytest.raises(click.BadParameter, match="'next tuesday' is not an ISO 8601"):
        ISO_DATETIME.convert("next tuesday", None, None)


def test_iso_date():
    """Dates parse from YYYY-MM-DD."""
    assert ISO_DATE.convert("2026-01-10", None, None) == date(2026, 1, 10)
    with pytest.raises(click.BadParameter):
        ISO_DATE.convert("10/01/2026", None, None)
