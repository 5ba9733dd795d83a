"""Clock adapters."""

from datetime import datetime, timezone

from agenda.domain.utils import as_utc
from agenda.interfaces.clock import Clock

# pylint: disable=too-few-public-methods


class SystemClock(Clock):
    """Reads the system clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """A clock frozen at a given moment; for tests and reproducible runs."""

    def __init__(self, moment: datetime) -> None:
        self.moment = as_utc(moment)

    def now(self) -> datetime:
        return self.moment
