"""
Reminder Service - reminder CRUD and the per-minute tick body.

Simple architecture:
1. The host calls process_reminders() once a minute (its own timer)
2. Reminders whose HH:MM equals the current minute on a scheduled day fire
3. last_triggered is stamped with today so a reminder fires at most once a day

No scheduler here, only date math; the host decides how to show them.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pydantic import ValidationError

from lifetracker.core.clock import Clock, SystemClock
from lifetracker.core.domain.reminder_rules import (
    due_reminders,
    today_reminders,
    upcoming_today,
    validate_date,
    validate_time,
)
from lifetracker.core.schemas import Reminder
from lifetracker.storage import DocumentStore, ReminderRepository

logger = logging.getLogger(__name__)


@dataclass
class ReminderResult:
    """Result of a reminder write."""

    success: bool
    reminder: Reminder | None = None
    error_message: str = ""


@dataclass
class ReminderOverview:
    today: list[Reminder] = field(default_factory=list)
    upcoming: list[Reminder] = field(default_factory=list)


def _check_fields(data: dict[str, Any]) -> str:
    """Validate user-entered time/start date; returns an error message or ""."""
    if "time" in data:
        ok, value = validate_time(data["time"])
        if not ok:
            return value
        data["time"] = value

    if data.get("start_date") and not isinstance(data["start_date"], date):
        ok, value = validate_date(data["start_date"])
        if not ok:
            return value
        data["start_date"] = value

    return ""


async def create_reminder(
    store: DocumentStore,
    title: str,
    time: str,
    repeat_days: list[str] | None = None,
    start_date: date | str | None = None,
) -> ReminderResult:
    """
    Create a reminder from user input.

    Returns:
        ReminderResult with the stored reminder, or a user-facing error
    """
    data: dict[str, Any] = {
        "title": title,
        "time": time,
        "repeat_days": repeat_days or [],
        "start_date": start_date,
    }
    error = _check_fields(data)
    if error:
        return ReminderResult(success=False, error_message=error)

    try:
        reminder = await ReminderRepository(store).add(data)
    except ValidationError as e:
        logger.warning(f"Rejected reminder '{title}': {e.error_count()} error(s)")
        return ReminderResult(success=False, error_message="Please check the reminder title and days")

    return ReminderResult(success=True, reminder=reminder)


async def update_reminder(
    store: DocumentStore, reminder_id: int, patch: dict[str, Any]
) -> ReminderResult:
    """Edit a reminder. An unknown id is a failed result, not an error."""
    patch = dict(patch)
    error = _check_fields(patch)
    if error:
        return ReminderResult(success=False, error_message=error)

    try:
        reminder = await ReminderRepository(store).update(reminder_id, patch)
    except ValidationError:
        return ReminderResult(success=False, error_message="Please check the reminder title and days")

    if reminder is None:
        return ReminderResult(success=False, error_message="Reminder not found")
    return ReminderResult(success=True, reminder=reminder)


async def toggle_reminder(store: DocumentStore, reminder_id: int) -> ReminderResult:
    repo = ReminderRepository(store)
    reminder = await repo.get(reminder_id)
    if reminder is None:
        return ReminderResult(success=False, error_message="Reminder not found")
    reminder = await repo.update(reminder_id, {"active": not reminder.active})
    return ReminderResult(success=True, reminder=reminder)


async def delete_reminder(store: DocumentStore, reminder_id: int) -> bool:
    return await ReminderRepository(store).delete(reminder_id)


async def list_reminders(store: DocumentStore) -> list[Reminder]:
    """All reminders sorted by time of day."""
    return sorted(await ReminderRepository(store).load_all(), key=lambda r: r.time)


async def reminder_overview(store: DocumentStore, clock: Clock | None = None) -> ReminderOverview:
    """Today's reminders and the ones still ahead."""
    clock = clock or SystemClock()
    now = clock.now()
    reminders = await ReminderRepository(store).load_all()
    return ReminderOverview(
        today=today_reminders(reminders, now.date()),
        upcoming=upcoming_today(reminders, now),
    )


async def process_reminders(store: DocumentStore, clock: Clock | None = None) -> list[Reminder]:
    """
    Collect reminders due this minute and mark them fired for today.

    Returns:
        Due reminders, already stamped with last_triggered
    """
    clock = clock or SystemClock()
    now = clock.now()
    repo = ReminderRepository(store)

    reminders = await repo.load_all()
    due = due_reminders(reminders, now)
    if not due:
        return []

    for reminder in due:
        reminder.last_triggered = now.date()
    await repo.save_all(reminders)

    logger.info(f"Reminders processed at {now:%H:%M}: {len(due)} due")
    return due
