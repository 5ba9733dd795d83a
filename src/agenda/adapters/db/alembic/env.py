"""Alembic environment for AGENDA.

Policy defaults:
  - compare_type=True (catch column type drift)
  - compare_server_default=True (catch server default drift)
  - render_as_batch=True on SQLite (safe ALTER TABLE emulation)
  - URL precedence: `-x url=...` > config sqlalchemy.url > AGENDA_DB_URL
"""

from logging.config import fileConfig

from alembic import context

# Ensure the tables are imported so autogenerate sees them
import agenda.adapters.db.schema  # noqa: F401 # pylint: disable=unused-import
from agenda import config as agenda_config
from agenda.adapters.db.dialects import DialectName
from agenda.adapters.db.engine import make_engine
from agenda.adapters.db.metadata import metadata

# disable warning to deal with alembic context
# pylint: disable=no-member

config = context.config

# Only configure logging from an .ini file; the CLI configures its own.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = metadata


def get_url() -> str:
    """Resolve DB URL with precedence: `-x url` > config > env."""

    # 1) `alembic -x url=...`
    xargs = context.get_x_argument(as_dictionary=True)
    url = xargs.get("url")

    # 2) alembic.ini / programmatic config
    if not url:
        url = config.get_main_option("sqlalchemy.url")

    # 3) environment variable
    if not url or "%(" in url:  # treat placeholder as unset # pylint: disable=R2004
        url = agenda_config.get_db_url()  # raises DatabaseUrlNotSetError
    return url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL to the script output."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations over an engine built like the application's own."""
    engine = make_engine(get_url())
    try:
        with engine.connect() as connection:
            is_sqlite = connection.dialect.name == DialectName.SQLITE.value
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                compare_type=True,
                compare_server_default=True,
                render_as_batch=is_sqlite,  # SQLite ALTER TABLE emulation
            )

            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
