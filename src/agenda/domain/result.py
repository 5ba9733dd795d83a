"""Success wrapper for operations that return either a value or an error kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful outcome carrying a validated value.

    Operations in the domain and service layers return either ``Ok(value)`` or
    one of the error kinds in `agenda.domain.errors`. Callers branch with
    ``match``::

        match AgendaEvent.create(...):
            case Ok(event):
                ...
            case StructuralValidationError(reason=reason):
                ...
    """

    value: T
