"""In-memory repository adapters."""

from .repositories import (
    InMemoryAgendaData,
    InMemoryCategoryRepository,
    InMemoryEventRepository,
)

__all__ = [
    "InMemoryAgendaData",
    "InMemoryCategoryRepository",
    "InMemoryEventRepository",
]
