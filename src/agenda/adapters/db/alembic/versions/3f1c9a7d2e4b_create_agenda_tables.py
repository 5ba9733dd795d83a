"""Create categories and events tables

Revision ID: 3f1c9a7d2e4b
Revises:
Create Date: 2026-10-16

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from agenda.adapters.db.sa_types import UTCDateTime

# deal with alembic stuff
# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2e4b"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "categories",
        sa.Column(
            "name",
            sa.String(length=50),
            nullable=False,
            comment="Category name; the category's identity.",
        ),
        sa.PrimaryKeyConstraint("name", name=op.f("pk_categories")),
        comment="Event categories.",
    )
    op.create_table(
        "events",
        sa.Column(
            "event_id",
            sa.String(length=26),
            nullable=False,
            comment="Identifier assigned on insert (ULID).",
        ),
        sa.Column(
            "name",
            sa.String(length=50),
            nullable=False,
            comment="Event name (3-50 chars).",
        ),
        sa.Column(
            "description",
            sa.String(length=500),
            nullable=True,
            comment="Optional free text (max 500 chars).",
        ),
        sa.Column("start_at", UTCDateTime(), nullable=False, comment="UTC start."),
        sa.Column(
            "end_at",
            UTCDateTime(),
            nullable=True,
            comment="UTC end; NULL means open-ended.",
        ),
        sa.Column(
            "category",
            sa.String(length=50),
            nullable=False,
            comment="Name of the category the event is filed under.",
        ),
        sa.CheckConstraint(
            "end_at IS NULL OR end_at >= start_at",
            name=op.f("ck_events_end_not_before_start"),
        ),
        sa.CheckConstraint(
            "length(name) BETWEEN 3 AND 50", name=op.f("ck_events_name_length")
        ),
        sa.ForeignKeyConstraint(
            ["category"],
            ["categories.name"],
            name=op.f("fk_events_category_categories"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("event_id", name=op.f("pk_events")),
        comment="Scheduled agenda events.",
    )
    op.create_index(
        op.f("ix_events_events_start_at_events_event_id"),
        "events",
        ["start_at", "event_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_events_events_category"), "events", ["category"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_events_events_category"), table_name="events")
    op.drop_index(
        op.f("ix_events_events_start_at_events_event_id"), table_name="events"
    )
    op.drop_table("events")
    op.drop_table("categories")
