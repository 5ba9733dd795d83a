"""Domain layer for AGENDA.

Contains business rules: entities, value objects, the error-kind taxonomy and
the date-range matcher. This package is deliberately technology-agnostic and
free of clocks: anything time-dependent is passed in by the caller.

Dependency rule: do not import from `agenda.adapters` or `agenda.entrypoints`.
"""
