"""sqlite-specific fixtures"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from alembic import command
from sqlalchemy.engine import URL

from agenda import config
from agenda.adapters.db.engine import make_engine
from agenda.adapters.db.metadata import metadata

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine_memory() -> Iterator[Engine]:
    """In-memory SQLite engine for unit-style tests.

    Uses `make_engine()` so SQLite PRAGMAs (notably ``foreign_keys=ON``) are
    applied. Creates/drops tables with `metadata.create_all()` / `drop_all()`,
    so no Alembic migrations are run here.

    Yields:
        Engine: SQLAlchemy engine bound to an in-memory DB.
    """
    url = "sqlite+pysqlite:///:memory:"
    test_engine = make_engine(url)
    metadata.create_all(test_engine)
    yield test_engine
    metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of a fresh, empty SQLite file under the test's temp dir."""
    return str(URL.create("sqlite+pysqlite", database=str(tmp_path / "agenda.db")))


@pytest.fixture
def sqlite_engine_file(sqlite_url: str) -> Iterator[Engine]:
    """File-backed SQLite engine migrated via Alembic (per test).

    This fixture:
      - runs `alembic upgrade head` for a temp-file URL,
      - returns an Engine from `make_engine()` (so PRAGMAs apply),
      - disposes the engine at teardown.

    We do **not** downgrade on teardown; each test uses its own DB file.

    Yields:
        Engine: SQLAlchemy engine pointing at a temp file DB.
    """
    command.upgrade(config.build_alembic_config(sqlite_url), "head")
    test_engine = make_engine(sqlite_url)
    try:
        yield test_engine
    finally:
        test_engine.dispose()
