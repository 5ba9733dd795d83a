"""Domain layer utilities."""

from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as a timezone-aware UTC datetime.

    Naive datetimes are interpreted as UTC; aware datetimes are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def clean_text(value: str | None) -> str | None:
    """Strip surrounding whitespace; blank strings become ``None``."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
