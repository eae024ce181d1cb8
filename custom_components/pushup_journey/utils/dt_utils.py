# File: utils/dt_utils.py
"""Date and time utilities for Push-up Journey.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Functions:
    - dt_parse_date: Parse stored date strings
    - dt_to_iso_date: Format a date as YYYY-MM-DD
    - dt_days_between: Whole calendar days between two dates
    - dt_add_days: Shift a date by whole days
    - dt_weekday_sunday_first: Weekday index with 0 = Sunday
    - parse_reminder_time: Parse a single HH:MM string
    - validate_reminder_times: Validate a list of HH:MM strings
"""

from __future__ import annotations

from datetime import date, datetime, time
import logging

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)


# ==============================================================================
# Date Parsing / Formatting
# ==============================================================================


def dt_parse_date(date_str: str | date | None) -> date | None:
    """Safely parse a stored date into a `datetime.date`.

    Accepts:
    - "2025-04-07" (ISO format, as written by the integration)
    - "2025-04-07T09:15:00" (ISO datetime, time part is dropped)
    - datetime.date / datetime.datetime objects

    Args:
        date_str: Date value to parse, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(date_str).date()
    except ValueError:
        _LOGGER.debug("Unparseable date string: %s", date_str)
        return None


def dt_to_iso_date(value: date) -> str:
    """Return a date as ISO string (YYYY-MM-DD)."""
    return value.isoformat()


# ==============================================================================
# Date Arithmetic
# ==============================================================================


def dt_days_between(start: date, end: date) -> int:
    """Return the number of whole calendar days from start to end.

    Negative when end lies before start.

    Examples:
        dt_days_between(date(2025, 4, 7), date(2025, 4, 9)) → 2
        dt_days_between(date(2025, 4, 9), date(2025, 4, 7)) → -2
    """
    return (end - start).days


def dt_add_days(value: date, days: int) -> date:
    """Return value shifted by a number of whole days."""
    return value + relativedelta(days=days)


def dt_weekday_sunday_first(value: date) -> int:
    """Return the weekday index with 0 = Sunday ... 6 = Saturday.

    Python's date.weekday() uses 0 = Monday; stored reminder settings use the
    Sunday-first convention.
    """
    return (value.weekday() + 1) % 7


# ==============================================================================
# Reminder Time Parsing
# ==============================================================================


def parse_reminder_time(time_str: str | None) -> time | None:
    """Parse a reminder time in HH:MM format.

    Args:
        time_str: Time string such as "18:00"

    Returns:
        datetime.time or None if the string is not a valid HH:MM time.
    """
    if not time_str or not isinstance(time_str, str):
        return None

    try:
        hour_str, minute_str = time_str.strip().split(":")
        hour = int(hour_str)
        minute = int(minute_str)
    except (ValueError, AttributeError):
        _LOGGER.warning("Invalid reminder time format: %s (expected HH:MM)", time_str)
        return None

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        _LOGGER.warning("Invalid reminder time value: %s (out of range)", time_str)
        return None

    return time(hour, minute)


def validate_reminder_times(times: list[str]) -> tuple[bool, str | None]:
    """Validate a list of HH:MM reminder times.

    Returns:
        Tuple of (is_valid, first_invalid_value).
        If valid, returns (True, None).
    """
    for time_str in times:
        if parse_reminder_time(time_str) is None:
            return False, time_str
    return True, None
