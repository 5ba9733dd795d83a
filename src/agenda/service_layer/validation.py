"""Business rule validation.

Rules that depend on the current moment or on stored state, and therefore
cannot live on the entities themselves:

- lead time: a new event must not start before ``now + lead_time``;
- pagination: ``page`` and ``page_size`` are positive, and ``page_size`` is
  capped;
- category resolution: an event must reference an existing category, or one
  that is created on the fly when auto-creation is enabled;
- category deletion: a category still referenced by events cannot be
  deleted.

Each rule returns ``Ok(value)`` or an error kind. Structural errors raised
by entity factories pass through unchanged; they are never reported as
business failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Generic, TypeVar

from agenda.config import DEFAULT_LEAD_TIME, DEFAULT_MAX_PAGE_SIZE
from agenda.domain.errors import (
    CategoryInUseError,
    CategoryNotFoundError,
    CreateTooSoonError,
    InvalidPaginationError,
    NotFound,
    StructuralValidationError,
)
from agenda.domain.model import EventCategory
from agenda.domain.result import Ok
from agenda.domain.utils import as_utc, clean_text
from agenda.interfaces.repositories import DuplicateCategoryError

if TYPE_CHECKING:
    from agenda.domain.model import AgendaEvent
    from agenda.interfaces.repositories import CategoryRepository, EventRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest offset a SQL backend can bind (signed 64-bit).
MAX_OFFSET = 2**63 - 1


# ============================================================================
#                               Lead time
# ============================================================================


def check_lead_time(
    event: AgendaEvent, now: datetime, lead_time: timedelta = DEFAULT_LEAD_TIME
) -> Ok[AgendaEvent] | CreateTooSoonError:
    """Reject events starting before ``now + lead_time``.

    The boundary is inclusive: an event starting exactly at
    ``now + lead_time`` is accepted. Only event creation is subject to this
    rule.
    """
    earliest_start = as_utc(now) + lead_time
    if event.start < earliest_start:
        return CreateTooSoonError(start=event.start, earliest_start=earliest_start)
    return Ok(event)


# ============================================================================
#                               Pagination
# ============================================================================


@dataclass(frozen=True, slots=True)
class PageRequest:
    """A validated page request and its storage window."""

    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def paginate(
    page: int, page_size: int, max_page_size: int = DEFAULT_MAX_PAGE_SIZE
) -> Ok[PageRequest] | InvalidPaginationError:
    """Validate a 1-based page request.

    ``page=1, page_size=10`` maps to ``offset=0, limit=10``; ``page=3`` to
    ``offset=20``.
    """
    if page < 1:
        return InvalidPaginationError(page, page_size, "page must be at least 1")
    if page_size < 1:
        return InvalidPaginationError(page, page_size, "page_size must be at least 1")
    if page_size > max_page_size:
        return InvalidPaginationError(
            page, page_size, f"page_size must be at most {max_page_size}"
        )
    if (page - 1) * page_size > MAX_OFFSET:
        return InvalidPaginationError(
            page, page_size, f"offset must be at most {MAX_OFFSET}"
        )
    return Ok(PageRequest(page=page, page_size=page_size))


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of a listing, with the total number of stored items."""

    items: list[T]
    page: int
    page_size: int
    total: int

    @property
    def page_count(self) -> int:
        return -(-self.total // self.page_size)


# ============================================================================
#                               Categories
# ============================================================================


def resolve_category(
    name: str, categories: CategoryRepository, auto_create: bool
) -> Ok[EventCategory] | CategoryNotFoundError | StructuralValidationError:
    """Look up the category an event references.

    The lookup is by exact name after stripping surrounding whitespace. When
    the category is missing and ``auto_create`` is true, the name is validated
    and the category is stored; otherwise `CategoryNotFoundError` is
    returned.
    """
    match EventCategory.create(name):
        case StructuralValidationError() as error:
            return error
        case Ok(value=candidate):
            pass

    if (existing := categories.get(candidate.name)) is not None:
        return Ok(existing)

    if not auto_create:
        return CategoryNotFoundError(candidate.name)

    try:
        categories.add(candidate)
    except DuplicateCategoryError:
        # Created concurrently by another request; the category exists now.
        logger.debug("Category %r appeared during auto-create", candidate.name)
    else:
        logger.info("Auto-created category %r", candidate.name)
    return Ok(candidate)


def check_category_deletable(
    name: str, categories: CategoryRepository, events: EventRepository
) -> Ok[EventCategory] | NotFound | CategoryInUseError:
    """Confirm that the category exists and no event references it."""
    name = clean_text(name) or name
    if (category := categories.get(name)) is None:
        return NotFound("Category", name)
    if (references := events.count_in_category(name)) > 0:
        return CategoryInUseError(name=name, reference_count=references)
    return Ok(category)

