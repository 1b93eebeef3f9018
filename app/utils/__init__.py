"""Utility functions."""

from app.utils.time import parse_calendar_date, utc_now
from app.utils.validation import is_valid_id

__all__ = ["utc_now", "parse_calendar_date", "is_valid_id"]
