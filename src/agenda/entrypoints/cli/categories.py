"""``agenda category``: manage the categories events are filed under."""

import click
import click_extra as clickx

from agenda.service_layer import commands

from .app import dispatch
from .helpers import success
from .render import echo_categories


@click.group(cls=clickx.ExtraGroup)
def category() -> None:
    """Manage event categories."""


@category.command()
@click.argument("name")
@click.pass_context
def add(ctx: click.Context, name: str) -> None:
    """Add a category (no-op if it already exists)."""
    added = dispatch(ctx, commands.AddCategory(name=name))
    success(f"Category {added.name!r} is available.")


@category.command(name="list")
@click.pass_context
def list_(ctx: click.Context) -> None:
    """List categories by name."""
    echo_categories(dispatch(ctx, commands.ListCategories()))


@category.command()
@click.argument("name")
@click.pass_context
def remove(ctx: click.Context, name: str) -> None:
    """Remove a category that no event references."""
    removed = dispatch(ctx, commands.RemoveCategory(name=name))
    success(f"Category {removed.name!r} removed.")
