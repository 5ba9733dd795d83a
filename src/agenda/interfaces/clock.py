"""Interface for the current-moment provider."""

import abc
from datetime import datetime

# pylint: disable=too-few-public-methods


class Clock(abc.ABC):
    """Contract for a source of the current moment.

    Handlers read the clock once per request and pass the value down, so the
    business rules themselves never touch ambient time.
    """

    @abc.abstractmethod
    def now(self) -> datetime:
        """Return the current moment as a timezone-aware UTC datetime."""
