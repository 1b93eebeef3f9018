"""Time and date utilities."""

from datetime import date, datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def parse_calendar_date(value: Any) -> date | None:
    """Parse a calendar date from an ISO date or datetime string.

    The time-of-day part of a datetime string is discarded. ``date`` and
    ``datetime`` instances are accepted as-is.

    Args:
        value: Value submitted by the client

    Returns:
        Parsed date, or None if the value is not a parseable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    # Python < 3.11 does not accept a trailing "Z"
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None
