"""SQLAlchemy-backed repositories.

Each repository call opens its own transaction on the engine (request-scoped
persistence; there is no unit of work spanning calls). Listings are ordered
by ``start_at`` then ``event_id``. The date-window query is the SQL form of
the overlap predicate in `agenda.domain.date_range`, with ``NULL`` ends
treated as open-ended.

Driver errors are mapped as follows:
  - IntegrityError on category insert  -> DuplicateCategoryError
  - IntegrityError on category delete  -> CategoryReferencedError
  - any other DBAPIError               -> StoreUnavailableError
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import ColumnElement, and_, delete, func, insert, or_, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError

from agenda.domain.model import AgendaEvent, EventCategory
from agenda.interfaces.repositories import (
    CategoryReferencedError,
    CategoryRepository,
    DuplicateCategoryError,
    EventRepository,
    StoreUnavailableError,
    UnknownCategoryError,
    UnknownEventError,
)

from .schema import categories, events

if TYPE_CHECKING:
    from sqlalchemy import RowMapping
    from sqlalchemy.engine import Connection, Engine

    from agenda.domain.date_range import DateWindow
    from agenda.interfaces.id_generator import IdGenerator


@contextmanager
def _transaction(engine: Engine) -> Iterator[Connection]:
    """Open a transaction, mapping driver failures to StoreUnavailableError."""
    try:
        with engine.begin() as connection:
            yield connection
    except DBAPIError as e:
        raise StoreUnavailableError(str(e)) from e


def overlap_clause(window: DateWindow) -> ColumnElement[bool]:
    """SQL predicate selecting events that overlap ``window``."""
    clause = or_(events.c.end_at.is_(None), events.c.end_at >= window.start)
    if window.end is not None:
        clause = and_(events.c.start_at <= window.end, clause)
    return clause


def _row_to_event(row: RowMapping) -> AgendaEvent:
    return AgendaEvent(
        event_id=row["event_id"],
        name=row["name"],
        description=row["description"],
        start=row["start_at"],
        end=row["end_at"],
        category=row["category"],
    )


def _event_to_row(event: AgendaEvent) -> dict[str, object]:
    return {
        "event_id": event.event_id,
        "name": event.name,
        "description": event.description,
        "start_at": event.start,
        "end_at": event.end,
        "category": event.category,
    }


class SqlAlchemyCategoryRepository(CategoryRepository):
    """CategoryRepository over the ``categories`` table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def get(self, name: str) -> EventCategory | None:
        stmt = select(categories.c.name).where(categories.c.name == name)
        with _transaction(self.engine) as conn:
            found = conn.execute(stmt).scalar_one_or_none()
        return EventCategory(name=found) if found is not None else None

    def add(self, category: EventCategory) -> None:
        with _transaction(self.engine) as conn:
            try:
                conn.execute(insert(categories).values(name=category.name))
            except IntegrityError as e:
                raise DuplicateCategoryError(category.name) from e

    def list_all(self) -> list[EventCategory]:
        stmt = select(categories.c.name).order_by(categories.c.name.asc())
        with _transaction(self.engine) as conn:
            names = conn.execute(stmt).scalars().all()
        return [EventCategory(name=name) for name in names]

    def delete(self, name: str) -> None:
        with _transaction(self.engine) as conn:
            try:
                result = conn.execute(
                    delete(categories).where(categories.c.name == name)
                )
            except IntegrityError as e:
                raise CategoryReferencedError(name) from e
            if result.rowcount == 0:
                raise UnknownCategoryError(name)


class SqlAlchemyEventRepository(EventRepository):
    """EventRepository over the ``events`` table."""

    def __init__(self, engine: Engine, id_generator: IdGenerator) -> None:
        self.engine = engine
        self._id_generator = id_generator

    def insert(self, event: AgendaEvent) -> AgendaEvent:
        if event.event_id is not None:
            raise ValueError(f"Event already has an identifier: {event.event_id}")
        stored = event.with_id(self._id_generator.new_id())
        with _transaction(self.engine) as conn:
            conn.execute(insert(events).values(**_event_to_row(stored)))
        return stored

    def get_by_id(self, event_id: str) -> AgendaEvent | None:
        stmt = select(events).where(events.c.event_id == event_id)
        with _transaction(self.engine) as conn:
            row = conn.execute(stmt).mappings().one_or_none()
        return _row_to_event(row) if row is not None else None

    def get_many(self, offset: int, limit: int) -> list[AgendaEvent]:
        stmt = (
            select(events)
            .order_by(events.c.start_at.asc(), events.c.event_id.asc())
            .offset(offset)
            .limit(limit)
        )
        with _transaction(self.engine) as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_row_to_event(row) for row in rows]

    def count(self) -> int:
        with _transaction(self.engine) as conn:
            return conn.execute(select(func.count()).select_from(events)).scalar_one()

    def update(self, event: AgendaEvent) -> None:
        row = _event_to_row(event)
        event_id = row.pop("event_id")
        with _transaction(self.engine) as conn:
            result = conn.execute(
                update(events).where(events.c.event_id == event_id).values(**row)
            )
            if result.rowcount == 0:
                raise UnknownEventError(str(event_id))

    def delete(self, event_id: str) -> None:
        with _transaction(self.engine) as conn:
            result = conn.execute(delete(events).where(events.c.event_id == event_id))
            if result.rowcount == 0:
                raise UnknownEventError(event_id)

    def find_in_window(self, window: DateWindow) -> list[AgendaEvent]:
        stmt = (
            select(events)
            .where(overlap_clause(window))
            .order_by(events.c.start_at.asc(), events.c.event_id.asc())
        )
        with _transaction(self.engine) as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_row_to_event(row) for row in rows]

    def count_in_category(self, name: str) -> int:
        stmt = select(func.count()).select_from(events).where(events.c.category == name)
        with _transaction(self.engine) as conn:
            return conn.execute(stmt).scalar_one()
