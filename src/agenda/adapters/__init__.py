"""Adapters for AGENDA.

Concrete implementations of the contracts in `agenda.interfaces`: in-memory
and SQLAlchemy repositories, clocks, and ID generators.
"""
