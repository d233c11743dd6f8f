"""Date utilities."""

import typing as t
from datetime import date, datetime, timezone


def ensure_utc(moment: datetime) -> datetime:
    """Return the instant as an aware UTC datetime.

    Naive datetimes are interpreted as UTC.

    Args:
        moment (datetime): The instant to normalize.

    Returns:
        datetime: The same instant in UTC.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utc_day(moment: datetime) -> date:
    """Calendar day of an instant in UTC.

    Args:
        moment (datetime): The instant.

    Returns:
        date: The UTC calendar date, time-of-day stripped.
    """
    return ensure_utc(moment).date()


def parse_utc_date(value: t.Any) -> date | None:
    """Interpret a loosely typed value as a UTC calendar date.

    Accepts ``date`` and ``datetime`` objects as well as ISO 8601 strings,
    either plain dates (``2024-06-10``) or full timestamps, whose UTC day is
    returned.

    Args:
        value (t.Any): The value to interpret.

    Returns:
        date | None: The UTC calendar date, or None if it is not a date.
    """
    if isinstance(value, datetime):
        return utc_day(value)
    if isinstance(value, date):
        return value

    moment: datetime | None = parse_utc_datetime(value)
    return moment.date() if moment is not None else None


def parse_utc_datetime(value: t.Any) -> datetime | None:
    """Interpret a loosely typed value as a UTC instant.

    Args:
        value (t.Any): A datetime, date or ISO 8601 string.

    Returns:
        datetime | None: The aware UTC instant, or None if not parseable.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return ensure_utc(
            datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        )
    except ValueError:
        return None
