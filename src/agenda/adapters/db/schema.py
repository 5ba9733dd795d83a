"""Agenda schema.

Defines the ``categories`` and ``events`` tables.

Constraints (enforced here):

| Constraint                                   | Purpose                               |
|----------------------------------------------|---------------------------------------|
| PK(categories.name)                          | category names are unique identities  |
| FK(events.category) ON DELETE RESTRICT       | referenced categories cannot be dropped |
| CHECK(end_at IS NULL OR end_at >= start_at)  | no inverted date ranges               |
| CHECK(length(name) BETWEEN 3 AND 50)         | event name bounds                     |

The entity model enforces the same rules; the database repeats them so rows
written by other tools cannot break the invariants.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    String,
    Table,
)

from agenda.adapters.db.metadata import metadata
from agenda.adapters.db.sa_types import UTCDateTime

__all__ = ["categories", "events"]

categories = Table(
    "categories",
    metadata,
    Column(
        "name",
        String(50),
        primary_key=True,
        comment="Category name; the category's identity.",
    ),
    comment="Event categories.",
)

events = Table(
    "events",
    metadata,
    Column(
        "event_id",
        String(26),
        primary_key=True,
        comment="Identifier assigned on insert (ULID).",
    ),
    Column("name", String(50), nullable=False, comment="Event name (3-50 chars)."),
    Column(
        "description",
        String(500),
        nullable=True,
        comment="Optional free text (max 500 chars).",
    ),
    Column("start_at", UTCDateTime(), nullable=False, comment="UTC start."),
    Column(
        "end_at",
        UTCDateTime(),
        nullable=True,
        comment="UTC end; NULL means open-ended.",
    ),
    Column(
        "category",
        String(50),
        ForeignKey("categories.name", ondelete="RESTRICT"),
        nullable=False,
        comment="Name of the category the event is filed under.",
    ),
    CheckConstraint("end_at IS NULL OR end_at >= start_at", name="end_not_before_start"),
    CheckConstraint("length(name) BETWEEN 3 AND 50", name="name_length"),
    Index(None, "start_at", "event_id"),
    Index(None, "category"),
    comment="Scheduled agenda events.",
)
