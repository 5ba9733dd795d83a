"""AGENDA

A small scheduling service for managing categorized agenda events.
It keeps entity invariants, lead-time rules and date-range filtering in a
technology-agnostic core, and exposes them through a command-line interface.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
