"""Domain error kinds.

Error kinds are plain immutable values, not exceptions. Operations return them
alongside ``Ok`` results so that callers must branch on every outcome, and the
set of kinds is closed: `ERROR_KINDS` lists all of them and the error
classifier maps each one to exactly one caller-visible status.

Unrecoverable conditions (a storage outage, a programming error) are *not*
error kinds; they are raised as ordinary exceptions and reported as
unclassified faults.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# ============================================================================
#                               Base
# ============================================================================


@dataclass(frozen=True, slots=True)
class ErrorKind:
    """Base class for all enumerated error kinds."""

    @property
    def message(self) -> str:
        """Human-readable description of the failure."""
        raise NotImplementedError


# ============================================================================
#                       Structural (caller input)
# ============================================================================


class StructuralReason(str, Enum):
    """Which structural invariant a value violated."""

    INVALID_NAME = "InvalidName"
    INVALID_DESCRIPTION = "InvalidDescription"
    INVALID_DATE_RANGE = "InvalidDateRange"
    MISSING_CATEGORY = "MissingCategory"


@dataclass(frozen=True, slots=True)
class StructuralValidationError(ErrorKind):
    """Caller-supplied data violates an entity invariant.

    Attributes:
        reason: The violated invariant.
        detail: What exactly was wrong with the value.
    """

    reason: StructuralReason
    detail: str

    @property
    def message(self) -> str:
        return f"{self.reason.value}: {self.detail}"


# ============================================================================
#                       Business (time / state)
# ============================================================================


@dataclass(frozen=True, slots=True)
class CreateTooSoonError(ErrorKind):
    """A new event starts before the required lead time has elapsed."""

    start: datetime
    earliest_start: datetime

    @property
    def message(self) -> str:
        return (
            f"Event starts at {self.start.isoformat()}, but new events must not "
            f"start before {self.earliest_start.isoformat()}."
        )


@dataclass(frozen=True, slots=True)
class InvalidPaginationError(ErrorKind):
    """A page request is outside the allowed range."""

    page: int
    page_size: int
    reason: str

    @property
    def message(self) -> str:
        return (
            f"Invalid page request (page={self.page}, "
            f"page_size={self.page_size}): {self.reason}"
        )


# ============================================================================
#                   Referential (cross-entity integrity)
# ============================================================================


@dataclass(frozen=True, slots=True)
class CategoryNotFoundError(ErrorKind):
    """A referenced category does not exist."""

    name: str

    @property
    def message(self) -> str:
        return f"Category '{self.name}' does not exist."


@dataclass(frozen=True, slots=True)
class CategoryInUseError(ErrorKind):
    """A category cannot be deleted while events still reference it."""

    name: str
    reference_count: int

    @property
    def message(self) -> str:
        return (
            f"Category '{self.name}' is referenced by "
            f"{self.reference_count} event(s) and cannot be deleted."
        )


# ============================================================================
#                       Not found (identity lookup)
# ============================================================================


@dataclass(frozen=True, slots=True)
class NotFound(ErrorKind):
    """No entity exists for the given identifier."""

    entity: str
    key: str

    @property
    def message(self) -> str:
        return f"{self.entity} ({self.key}) not found."


# ============================================================================
#                   Guard for bypassed factories
# ============================================================================


class InvariantViolation(ValueError):
    """Raised when an entity is constructed directly with invalid data.

    The validating factories return a `StructuralValidationError` instead of
    raising; this exception only surfaces when code bypasses them (for
    example a storage adapter rehydrating a corrupt row).
    """

    def __init__(self, kind: StructuralValidationError) -> None:
        super().__init__(kind.message)
        self.kind = kind


ERROR_KINDS: tuple[type[ErrorKind], ...] = (
    NotFound,
    StructuralValidationError,
    CreateTooSoonError,
    InvalidPaginationError,
    CategoryNotFoundError,
    CategoryInUseError,
)
"""Every enumerated error kind, in classification-table order."""
