"""
Reminder Domain Rules - when a reminder is scheduled and when it is due.

AICODE-NOTE: Pure date/time math, no store access. The host polls once a
minute; a reminder is due when the poll minute equals its time on a
scheduled day and it has not fired yet that day.
"""

from collections.abc import Iterable
from datetime import date, datetime

from lifetracker.core.domain.validators import normalize_time, parse_date
from lifetracker.core.errors import InvalidInputError
from lifetracker.core.schemas import DAY_NAMES, Reminder

WEEKDAYS = frozenset(DAY_NAMES[:5])
WEEKEND = frozenset(DAY_NAMES[5:])


def validate_time(value: str | None) -> tuple[bool, str]:
    """(True, "HH:MM") or (False, user-facing message)."""
    try:
        return True, normalize_time(value)
    except InvalidInputError as e:
        return False, e.message


def validate_date(value: str | None) -> tuple[bool, str]:
    """(True, "YYYY-MM-DD") or (False, user-facing message)."""
    try:
        return True, parse_date(value).isoformat()
    except InvalidInputError as e:
        return False, e.message


def day_name(day: date) -> str:
    return DAY_NAMES[day.weekday()]


def minutes_of(time_str: str) -> int:
    hour, minute = time_str.split(":")
    return int(hour) * 60 + int(minute)


def is_scheduled_on(reminder: Reminder, day: date) -> bool:
    """
    Does the reminder go off on `day`?

    Repeating reminders: active, started, and `day` is one of the repeat days.
    One-off reminders (no repeat days): on start_date if set, otherwise on
    the first day they fire.
    """
    if not reminder.active:
        return False
    if reminder.start_date and day < reminder.start_date:
        return False
    if reminder.repeat_days:
        return day_name(day) in reminder.repeat_days
    if reminder.start_date:
        return day == reminder.start_date
    return reminder.last_triggered in (None, day)


def is_due(reminder: Reminder, now: datetime) -> bool:
    """Fires once per day at its HH:MM."""
    today = now.date()
    return (
        reminder.time == now.strftime("%H:%M")
        and is_scheduled_on(reminder, today)
        and reminder.last_triggered != today
    )


def due_reminders(reminders: Iterable[Reminder], now: datetime) -> list[Reminder]:
    return [reminder for reminder in reminders if is_due(reminder, now)]


def today_reminders(reminders: Iterable[Reminder], today: date) -> list[Reminder]:
    """Reminders scheduled for today, sorted by time."""
    return sorted(
        (reminder for reminder in reminders if is_scheduled_on(reminder, today)),
        key=lambda reminder: reminder.time,
    )


def upcoming_today(reminders: Iterable[Reminder], now: datetime) -> list[Reminder]:
    """Today's reminders still ahead of `now`."""
    current = now.hour * 60 + now.minute
    return [
        reminder
        for reminder in today_reminders(reminders, now.date())
        if minutes_of(reminder.time) > current
    ]


def format_time_until(time_str: str, now: datetime) -> str:
    """
    Human-readable countdown.

    Examples:
        "now", "in 5 min", "in 2h", "in 1h 30m"
    """
    diff = minutes_of(time_str) - (now.hour * 60 + now.minute)
    if diff <= 0:
        return "now"
    if diff < 60:
        return f"in {diff} min"
    hours, minutes = divmod(diff, 60)
    if minutes:
        return f"in {hours}h {minutes}m"
    return f"in {hours}h"


def format_repeat_days(repeat_days: list[str]) -> str:
    """Short label: Once, Daily, Weekdays, Weekends, or Mon/Wed/..."""
    if not repeat_days:
        return "Once"
    days = set(repeat_days)
    if len(days) == 7:
        return "Daily"
    if days == WEEKDAYS:
        return "Weekdays"
    if days == WEEKEND:
        return "Weekends"
    return "/".join(day for day in DAY_NAMES if day in days)
