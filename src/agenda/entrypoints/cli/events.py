"""``agenda event``: create, inspect and change scheduled events."""

from __future__ import annotations

from datetime import date, datetime

import click
import click_extra as clickx

from agenda.service_layer import commands
from agenda.service_layer.commands import UNSET

from .app import dispatch
from .helpers import success
from .params import ISO_DATE, ISO_DATETIME
from .render import echo_event_detail, echo_events, echo_page, event_line


@click.group(cls=clickx.ExtraGroup)
def event() -> None:
    """Manage agenda events."""


@event.command()
@click.argument("name")
@click.option("--start", required=True, type=ISO_DATETIME, help="Start (ISO 8601).")
@click.option("--end", type=ISO_DATETIME, help="Optional end (ISO 8601).")
@click.option("--category", "-c", required=True, help="Category name.")
@click.option("--description", "-d", help="Optional free-text description.")
@click.pass_context
def create(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    ctx: click.Context,
    name: str,
    start: datetime,
    end: datetime | None,
    category: str,
    description: str | None,
) -> None:
    """Create an event. Prints the new event's line."""
    created = dispatch(
        ctx,
        commands.CreateEvent(
            name=name,
            start=start,
            end=end,
            category=category,
            description=description,
        ),
    )
    click.echo(event_line(created))
    success(f"Event {created.event_id} created.")


@event.command()
@click.argument("event_id")
@click.pass_context
def show(ctx: click.Context, event_id: str) -> None:
    """Show every field of one event."""
    echo_event_detail(dispatch(ctx, commands.GetEvent(event_id=event_id)))


@event.command(name="list")
@click.option("--page", default=1, show_default=True, type=int, help="1-based page.")
@click.option(
    "--page-size", default=10, show_default=True, type=int, help="Events per page."
)
@click.pass_context
def list_(ctx: click.Context, page: int, page_size: int) -> None:
    """List events by start time, one page at a time."""
    echo_page(dispatch(ctx, commands.ListEvents(page=page, page_size=page_size)))


@event.command()
@click.argument("start", type=ISO_DATETIME)
@click.argument("end", type=ISO_DATETIME, required=False)
@click.pass_context
def between(ctx: click.Context, start: datetime, end: datetime | None) -> None:
    """List events overlapping START..END (or from START onward)."""
    echo_events(dispatch(ctx, commands.ListEventsInWindow(start=start, end=end)))


@event.command()
@click.argument("day", type=ISO_DATE)
@click.pass_context
def on(ctx: click.Context, day: date) -> None:
    """List events overlapping the calendar DAY (UTC)."""
    echo_events(dispatch(ctx, commands.ListEventsOnDay(day=day)))


@event.command()
@click.argument("event_id")
@click.option("--start", required=True, type=ISO_DATETIME, help="New start.")
@click.option("--end", type=ISO_DATETIME, help="New end; omit for open-ended.")
@click.pass_context
def reschedule(
    ctx: click.Context, event_id: str, start: datetime, end: datetime | None
) -> None:
    """Move an event to a new start and optional end."""
    updated = dispatch(
        ctx, commands.RescheduleEvent(event_id=event_id, start=start, end=end)
    )
    click.echo(event_line(updated))
    success(f"Event {event_id} rescheduled.")


@event.command()
@click.argument("event_id")
@click.option("--name", help="New name.")
@click.option("--description", "-d", help="New description.")
@click.option(
    "--clear-description", is_flag=True, help="Remove the current description."
)
@click.option("--category", "-c", help="Move the event to another category.")
@click.pass_context
def revise(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    ctx: click.Context,
    event_id: str,
    name: str | None,
    description: str | None,
    clear_description: bool,
    category: str | None,
) -> None:
    """Rename, re-describe or recategorize an event."""
    if clear_description and description is not None:
        raise click.UsageError(
            "--description and --clear-description are mutually exclusive."
        )
    updated = dispatch(
        ctx,
        commands.ReviseEvent(
            event_id=event_id,
            name=name if name is not None else UNSET,
            description=(
                None
                if clear_description
                else description if description is not None else UNSET
            ),
            category=category if category is not None else UNSET,
        ),
    )
    click.echo(event_line(updated))
    success(f"Event {event_id} revised.")


@event.command()
@click.argument("event_id")
@click.pass_context
def delete(ctx: click.Context, event_id: str) -> None:
    """Delete an event."""
    dispatch(ctx, commands.DeleteEvent(event_id=event_id))
    success(f"Event {event_id} deleted.")
