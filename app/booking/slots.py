"""Slot generation for the global availability settings.

Pure time arithmetic: nothing here touches the database. The settings
record is always passed in by the caller.
"""

import re
from collections.abc import Mapping
from typing import Any, Protocol

# Two-digit hour 00-23, colon, two-digit minute 00-59
TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")

MIN_SLOT_DURATION_MINUTES = 15
# One slot cannot outlast a day
MAX_SLOT_DURATION_MINUTES = 24 * 60

TIME_FIELDS = ("start_time", "end_time", "break_start_time", "break_end_time")

SETTINGS_FIELDS = (
    "start_time",
    "end_time",
    "slot_duration_minutes",
    "working_days",
    "break_start_time",
    "break_end_time",
)

# Used when the settings row is created for the first time.
# Working days: Monday to Saturday (0 = Sunday).
DEFAULT_AVAILABILITY: dict[str, Any] = {
    "start_time": "09:00",
    "end_time": "17:00",
    "slot_duration_minutes": 60,
    "working_days": [1, 2, 3, 4, 5, 6],
    "break_start_time": "13:00",
    "break_end_time": "14:00",
}


class SlotSettings(Protocol):
    """Attributes the slot generator reads from a settings record."""

    start_time: str
    end_time: str
    slot_duration_minutes: int
    break_start_time: str | None
    break_end_time: str | None


def is_valid_time(value: Any) -> bool:
    """Check that a value is an ``HH:mm`` 24-hour time string."""
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def parse_time_to_minutes(value: str) -> int:
    """Convert an ``HH:mm`` string to minutes since midnight.

    Raises:
        ValueError: If the value is not a valid ``HH:mm`` time
    """
    match = TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid time {value!r}, expected HH:mm")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_minutes_to_12_hour(total_minutes: int) -> str:
    """Render minutes since midnight as ``H:MM AM|PM``.

    Examples:
        >>> format_minutes_to_12_hour(0)
        '12:00 AM'
        >>> format_minutes_to_12_hour(13 * 60 + 5)
        '1:05 PM'
    """
    hours_24, minutes = divmod(total_minutes, 60)
    period = "PM" if hours_24 >= 12 else "AM"
    hours_12 = hours_24 % 12 or 12
    return f"{hours_12}:{minutes:02d} {period}"


def generate_slots(settings: SlotSettings) -> list[str]:
    """Build the ordered list of bookable slot labels for one day.

    A slot is emitted for every full ``slot_duration_minutes`` interval
    between start and end time, except those overlapping the break. The
    break only applies when both of its bounds are set. A trailing interval
    shorter than the slot duration is dropped.

    Args:
        settings: Availability settings (any object with the slot attributes)

    Returns:
        Slot labels such as ``["9:00 AM", "10:00 AM"]``
    """
    duration = int(settings.slot_duration_minutes)
    if duration <= 0:
        raise ValueError("slot_duration_minutes must be positive")

    start = parse_time_to_minutes(settings.start_time)
    end = parse_time_to_minutes(settings.end_time)

    break_window: tuple[int, int] | None = None
    if settings.break_start_time and settings.break_end_time:
        break_window = (
            parse_time_to_minutes(settings.break_start_time),
            parse_time_to_minutes(settings.break_end_time),
        )

    slots = []
    cursor = start
    while cursor + duration <= end:
        slot_end = cursor + duration
        in_break = break_window is not None and not (
            slot_end <= break_window[0] or cursor >= break_window[1]
        )
        if not in_break:
            slots.append(format_minutes_to_12_hour(cursor))
        cursor += duration

    return slots


def _as_integer(value: Any) -> int | None:
    """Return the integer a submitted value denotes, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def validate_settings_patch(patch: Mapping[str, Any]) -> str | None:
    """Validate an administrator's availability edit.

    Rules are checked in order and the first failure wins. No cross-field
    checks are made (start before end, break inside working hours).

    Returns:
        Error message, or None if the patch is valid
    """
    for field in TIME_FIELDS:
        value = patch.get(field)
        if value in (None, ""):
            continue
        if not is_valid_time(value):
            return f"{field} must be in HH:mm format."

    if "slot_duration_minutes" in patch:
        duration = _as_integer(patch["slot_duration_minutes"])
        if duration is None or duration < MIN_SLOT_DURATION_MINUTES:
            return (
                f"slot_duration_minutes must be an integer >= "
                f"{MIN_SLOT_DURATION_MINUTES}."
            )
        if duration > MAX_SLOT_DURATION_MINUTES:
            return (
                f"slot_duration_minutes must be at most "
                f"{MAX_SLOT_DURATION_MINUTES}."
            )

    if "working_days" in patch:
        days = patch["working_days"]
        valid = isinstance(days, (list, tuple)) and all(
            isinstance(day, int) and not isinstance(day, bool) and 0 <= day <= 6
            for day in days
        )
        if not valid:
            return "working_days must be a list with values between 0 and 6."

    return None


def normalize_settings_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    """Reduce a validated patch to the values to store.

    Unknown keys are dropped, the duration is coerced to ``int``, an empty
    break bound clears it and an empty start or end time is ignored.
    """
    changes: dict[str, Any] = {}
    for field in SETTINGS_FIELDS:
        if field not in patch:
            continue
        value = patch[field]

        if field in ("start_time", "end_time"):
            if value in (None, ""):
                continue
            changes[field] = value
        elif field in ("break_start_time", "break_end_time"):
            changes[field] = value or None
        elif field == "slot_duration_minutes":
            changes[field] = _as_integer(value)
        else:
            changes[field] = list(value)

    return changes
