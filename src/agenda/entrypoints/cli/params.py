"""Click parameter types for agenda timestamps."""

from __future__ import annotations

from datetime import date, datetime

import click

from agenda.domain.utils import as_utc


class IsoDateTime(click.ParamType):
    """An ISO 8601 timestamp; naive values are read as UTC.

    Accepts anything `datetime.fromisoformat` does, e.g. ``2026-01-10``,
    ``2026-01-10T09:30``, ``2026-01-10T09:30:00+02:00`` or a ``Z`` suffix.
    """

    name = "iso-datetime"

    def convert(
        self, value: object, param: click.Parameter | None, ctx: click.Context | None
    ) -> datetime:
        if isinstance(value, datetime):
            return as_utc(value)
        try:
            return as_utc(datetime.fromisoformat(str(value)))
        except ValueError:
            self.fail(f"{value!r} is not an ISO 8601 timestamp.", param, ctx)


class IsoDate(click.ParamType):
    """An ISO 8601 calendar date (``YYYY-MM-DD``)."""

    name = "iso-date"

    def convert(
        self, value: object, param: click.Parameter | None, ctx: click.Context | None
    ) -> date:
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError:
            self.fail(f"{value!r} is not an ISO 8601 date (YYYY-MM-DD).", param, ctx)


ISO_DATETIME = IsoDateTime()
ISO_DATE = IsoDate()
