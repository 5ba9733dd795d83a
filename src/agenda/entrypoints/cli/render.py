"""Output rendering for the agenda CLI.

Listings go to **stdout** as tab-separated lines so they can be piped;
status and error messages go to **stderr** through `helpers.messages`.

Event line format::

    <event_id>\t<start>\t<end or ->\t<category>\t<name>
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import click

from agenda.domain.model import AgendaEvent, EventCategory
from agenda.service_layer.validation import Page

from .helpers import error

NO_VALUE = "-"


def _stamp(value: datetime | None) -> str:
    return value.isoformat() if value is not None else NO_VALUE


def event_line(event: AgendaEvent) -> str:
    """Render one event as a tab-separated line."""
    return "\t".join(
        [
            event.event_id or NO_VALUE,
            _stamp(event.start),
            _stamp(event.end),
            event.category,
            event.name,
        ]
    )


def echo_events(events: Iterable[AgendaEvent]) -> None:
    """Write one line per event to stdout."""
    for event in events:
        click.echo(event_line(event))


def echo_event_detail(event: AgendaEvent) -> None:
    """Write every field of one event to stdout, one per line."""
    fields = [
        ("id", event.event_id or NO_VALUE),
        ("name", event.name),
        ("category", event.category),
        ("start", _stamp(event.start)),
        ("end", _stamp(event.end)),
        ("description", event.description or NO_VALUE),
    ]
    for label, value in fields:
        click.echo(f"{label:<12}: {value}")


def echo_page(page: Page[AgendaEvent]) -> None:
    """Write a page of events, with a page summary on stderr."""
    echo_events(page.items)
    click.echo(
        f"page {page.page}/{max(page.page_count, 1)} ({page.total} event(s))",
        err=True,
    )


def echo_categories(categories: Iterable[EventCategory]) -> None:
    """Write one category name per line to stdout."""
    for category in categories:
        click.echo(category.name)


def echo_failure(response: object) -> None:
    """Write a classified failure (``<status> <title>: <detail>``) to stderr."""
    error(str(response))
