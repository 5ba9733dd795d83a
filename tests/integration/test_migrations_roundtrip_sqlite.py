"""Alembic round-trip smoke test for SQLite.

Runs *upgrade → downgrade* against a temporary file-backed SQLite database
and checks that the migrated schema matches what the SQLAlchemy metadata
declares: same tables, same indexes, and a working category restriction.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from alembic import command
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from agenda import config
from agenda.adapters.db.engine import make_engine
from agenda.adapters.db.metadata import metadata

# pylint: disable=magic-value-comparison

TABLES = {"categories", "events"}


def _tables(engine) -> set[str]:
    return set(inspect(engine).get_table_names()) - {"alembic_version"}


def test_upgrade_then_downgrade(tmp_path: Path):
    """upgrade head creates both tables; downgrade base drops them."""
    url = f"sqlite:///{tmp_path / 'agenda.db'}"
    command.upgrade(config.build_alembic_config(url), "head")
    engine = make_engine(url)
    try:
        assert _tables(engine) == TABLES

        command.downgrade(config.build_alembic_config(url), "base")
        assert _tables(engine) == set()
    finally:
        engine.dispose()


def test_migrated_schema_matches_metadata(sqlite_engine_file):
    """Columns and index names agree between the migration and the metadata."""
    inspector = inspect(sqlite_engine_file)
    for table in metadata.sorted_tables:
        migrated = {col["name"] for col in inspector.get_columns(table.name)}
        assert migrated == {col.name for col in table.columns}, table.name
        migrated_indexes = {ix["name"] for ix in inspector.get_indexes(table.name)}
        assert {ix.name for ix in table.indexes} <= migrated_indexes


def test_migrated_schema_enforces_constraints(sqlite_engine_file):
    """Unknown categories and inverted ranges are refused by the database."""
    with pytest.raises(IntegrityError):
        with sqlite_engine_file.begin() as conn:
            conn.execute(
                text(
                    "INSERT INTO events (event_id, name, start_at, category) "
                    "VALUES ('E1', 'Planning', '2026-01-10 09:00:00', 'missing')"
                )
            )

    with sqlite_engine_file.begin() as conn:
        conn.execute(text("INSERT INTO categories (name) VALUES ('work')"))
    with pytest.raises(IntegrityError):
        with sqlite_engine_file.begin() as conn:
            conn.execute(
                text(
                    "INSERT INTO events (event_id, name, start_at, end_at, category) "
                    "VALUES ('E2', 'Planning', '2026-01-10 09:00:00', "
                    "'2026-01-09 09:00:00', 'work')"
                )
            )
