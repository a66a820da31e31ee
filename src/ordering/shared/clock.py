"""Time helpers."""

from datetime import UTC, datetime


def utc(value: datetime | None) -> datetime | None:
    """Normalize a datetime to timezone-aware UTC.

    Naive values are treated as UTC; stores differ in whether they hand
    back aware or naive datetimes.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def now() -> datetime:
    return datetime.now(UTC)
