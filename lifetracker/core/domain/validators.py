"""
Input validators shared by schemas and domain rules.

Pure functions: each returns the normalised value or raises
InvalidInputError with a message that can be shown to the user.
"""

import re
from datetime import date

from lifetracker.core.errors import InvalidInputError

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def normalize_time(value: str | None) -> str:
    """
    Validate a reminder time and normalise it to HH:MM.

    Examples:
        >>> normalize_time("7:05")
        '07:05'
    """
    if not value:
        raise InvalidInputError("Please enter a time")

    match = _TIME_RE.match(value.strip())
    if not match:
        raise InvalidInputError("Please enter time in HH:MM format")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23:
        raise InvalidInputError("Hour must be 00-23")
    if minute > 59:
        raise InvalidInputError("Minutes must be 00-59")

    return f"{hour:02d}:{minute:02d}"


def parse_date(value: str | date | None) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Rejects impossible dates (Feb 30) and years outside 2020-2100.
    """
    if isinstance(value, date):
        return value
    if not value:
        raise InvalidInputError("Please enter a date")

    match = _DATE_RE.match(value.strip())
    if not match:
        raise InvalidInputError("Please enter date in YYYY-MM-DD format")

    year, month, day = (int(part) for part in match.groups())
    if year < 2020 or year > 2100:
        raise InvalidInputError("Year must be 2020-2100")
    if month < 1 or month > 12:
        raise InvalidInputError("Month must be 01-12")

    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidInputError("Invalid date (e.g., Feb 30 doesn't exist)") from None


def parse_progress_value(value: int | str | None) -> int:
    """Parse a manually entered progress value; negatives are rejected."""
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidInputError("Please enter a valid number") from None

    if number < 0:
        raise InvalidInputError("Progress cannot be negative")
    return number
