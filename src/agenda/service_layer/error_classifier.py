"""Error Classifier: maps error kinds to caller-visible outcomes.

The mapping is total over the closed set `agenda.domain.errors.ERROR_KINDS`
and stable: the same kind always yields the same status and title.

| kind                       | status | title                  |
|----------------------------|--------|------------------------|
| NotFound                   | 404    | Not Found              |
| StructuralValidationError  | 400    | Bad Request            |
| CreateTooSoonError         | 422    | Unprocessable Entity   |
| InvalidPaginationError     | 400    | Bad Request            |
| CategoryNotFoundError      | 422    | Unprocessable Entity   |
|   (auto_create_category)   | 404    | Not Found              |
| CategoryInUseError         | 409    | Conflict               |

Anything outside the taxonomy is an unclassified fault: `classify` raises
`UnclassifiedFaultError` instead of guessing, and presentation reports such
faults through `unclassified_fault` (500).
"""

from __future__ import annotations

from dataclasses import dataclass

from agenda.domain.errors import (
    CategoryInUseError,
    CategoryNotFoundError,
    CreateTooSoonError,
    ErrorKind,
    InvalidPaginationError,
    NotFound,
    StructuralValidationError,
)


class UnclassifiedFaultError(TypeError):
    """Raised when asked to classify a value that is not an error kind."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"{type(value).__name__} is not an enumerated error kind and "
            "cannot be classified."
        )
        self.value = value


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """The caller-visible rendering of a failed request."""

    status: int
    title: str
    detail: str

    def __str__(self) -> str:
        return f"{self.status} {self.title}: {self.detail}"


NOT_FOUND = 404
BAD_REQUEST = 400
CONFLICT = 409
UNPROCESSABLE_ENTITY = 422
INTERNAL_SERVER_ERROR = 500

TITLES: dict[int, str] = {
    BAD_REQUEST: "Bad Request",
    NOT_FOUND: "Not Found",
    CONFLICT: "Conflict",
    UNPROCESSABLE_ENTITY: "Unprocessable Entity",
    INTERNAL_SERVER_ERROR: "Internal Server Error",
}


def _response(status: int, detail: str) -> ErrorResponse:
    return ErrorResponse(status=status, title=TITLES[status], detail=detail)


def classify(kind: ErrorKind, *, auto_create_category: bool = False) -> ErrorResponse:
    """Map an error kind to its `ErrorResponse`.

    Args:
        kind: One of the enumerated error kinds.
        auto_create_category: Whether categories are created on reference.
            Decides whether `CategoryNotFoundError` is a 404 or a 422.

    Raises:
        UnclassifiedFaultError: If ``kind`` is not an enumerated error kind.
    """
    match kind:
        case NotFound():
            status = NOT_FOUND
        case StructuralValidationError() | InvalidPaginationError():
            status = BAD_REQUEST
        case CreateTooSoonError():
            status = UNPROCESSABLE_ENTITY
        case CategoryNotFoundError():
            status = NOT_FOUND if auto_create_category else UNPROCESSABLE_ENTITY
        case CategoryInUseError():
            status = CONFLICT
        case _:
            raise UnclassifiedFaultError(kind)
    return _response(status, kind.message)


def unclassified_fault(exc: BaseException) -> ErrorResponse:
    """Render an unexpected exception as a generic 500 response.

    The exception text is not exposed; only its type name is reported.
    """
    return _response(
        INTERNAL_SERVER_ERROR,
        f"unexpected {type(exc).__name__}; see the log for details",
    )
