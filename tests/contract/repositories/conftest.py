"""Fixtures for repository contract tests.

Every test in this package runs once per backend: the in-memory adapters,
SQLAlchemy over an in-memory SQLite database (schema from metadata), and
SQLAlchemy over a migrated SQLite file (schema from Alembic).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import pytest

from agenda.adapters.id_generators import SimpleIdGenerator
from agenda.bootstrap.bootstrap import build_memory_repositories, build_sql_repositories
from agenda.interfaces.repositories import CategoryRepository, EventRepository

# pylint: disable=redefined-outer-name


@dataclass
class Repositories:
    """An event and a category repository sharing one store."""

    events: EventRepository
    categories: CategoryRepository


@pytest.fixture(params=["memory", "sqlite-memory", "sqlite-file"])
def repos(request: pytest.FixtureRequest) -> Iterator[Repositories]:
    """Return a fresh pair of repositories for the requested backend.

    Supported params:
      - `"memory"` → in-memory adapters
      - `"sqlite-memory"` → SQLAlchemy adapters on `sqlite_engine_memory`
      - `"sqlite-file"` → SQLAlchemy adapters on `sqlite_engine_file`
    """
    match request.param:
        case "memory":
            events, categories = build_memory_repositories(SimpleIdGenerator())
        case "sqlite-memory":
            engine = request.getfixturevalue("sqlite_engine_memory")
            events, categories = build_sql_repositories(engine, SimpleIdGenerator())
        case "sqlite-file":
            engine = request.getfixturevalue("sqlite_engine_file")
            events, categories = build_sql_repositories(engine, SimpleIdGenerator())
        case _:
            raise ValueError(f"unknown repository backend: {request.param}")
    yield Repositories(events=events, categories=categories)


@pytest.fixture
def work(repos, make_category):
    """Register the "work" category in the backend under test."""
    category = make_category("work")
    repos.categories.add(category)
    return category
