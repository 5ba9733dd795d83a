"""Service layer: commands, handlers, business rules and the message bus.

Handlers orchestrate the entity factories, the business rule validator and
the repositories. Every expected outcome is returned as a value (``Ok`` or an
error kind from `agenda.domain.errors`); only unclassified faults raise.
"""
