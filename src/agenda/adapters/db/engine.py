"""Engine construction for the agenda store.

Every Engine used by AGENDA (repositories, ``agenda db`` commands, Alembic
online migrations) is created here, so connection setup is identical across
them. SQLite connections get per-connection PRAGMAs; the one that matters for
correctness is ``foreign_keys``, without which SQLite silently ignores the
``events.category`` → ``categories.name`` restriction. File databases are
additionally switched to WAL so that a CLI read can proceed while another
process writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

from agenda.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

# Applied to every SQLite connection, in order.
SQLITE_PRAGMAS: tuple[str, ...] = (
    "foreign_keys=ON",
    "synchronous=NORMAL",
    "temp_store=MEMORY",
)
# Only meaningful for file databases; in-memory ones report "memory".
SQLITE_FILE_PRAGMAS: tuple[str, ...] = ("journal_mode=WAL",)


def is_sqlite(url: str | URL) -> bool:
    """Return True if ``url`` points at a SQLite database."""
    return make_url(str(url)).get_backend_name() == DialectName.SQLITE.value


def _is_in_memory(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def _pragmas_for(url: URL) -> tuple[str, ...]:
    if _is_in_memory(url):
        return SQLITE_PRAGMAS
    return SQLITE_PRAGMAS + SQLITE_FILE_PRAGMAS


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create the Engine for an agenda database.

    Args:
        url: SQLAlchemy database URL, e.g. ``sqlite:///agenda.db``.
        echo: Log every SQL statement (SQLAlchemy's ``echo``).

    Returns:
        Engine: An Engine whose SQLite connections, if any, enforce foreign
        keys.

    Raises:
        sqlalchemy.exc.ArgumentError: If ``url`` cannot be parsed.
        UnsupportedDialect: If ``url`` names a backend other than PostgreSQL
            or SQLite.
    """
    parsed = make_url(str(url))
    dialect = DialectName.from_string(parsed.get_backend_name())
    engine = create_engine(parsed, echo=echo)

    if dialect is DialectName.SQLITE:
        pragmas = _pragmas_for(parsed)

        @event.listens_for(engine, "connect")
        def _apply_pragmas(dbapi_conn: SQLiteConnection, _record) -> None:  # type: ignore[no-untyped-def]
            cursor = dbapi_conn.cursor()
            try:
                for pragma in pragmas:
                    cursor.execute(f"PRAGMA {pragma};")
            finally:
                cursor.close()

    return engine
