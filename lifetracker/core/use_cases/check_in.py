"""
Check-in Use Case - energy check-ins, mood entries, journal and reading.

AICODE-NOTE: Writes go to the DailyLog of the given date (created lazily)
and to the cached "today" state in UserSettings. Quest counts in the log
are left alone; only SyncDailyLogUseCase writes them.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from pydantic import ValidationError

from lifetracker.core.clock import Clock, SystemClock
from lifetracker.core.domain.mood_rules import hour_to_time_slot
from lifetracker.core.errors import InvalidInputError
from lifetracker.core.schemas import DailyLog, EnergyEntry, ReadingSnapshot, UserSettings
from lifetracker.storage import DailyLogRepository, DocumentStore, SettingsRepository

logger = logging.getLogger(__name__)


@dataclass
class CheckInResult:
    """Result of a check-in or journal write."""

    success: bool
    daily_log: DailyLog | None = None
    error_message: str = ""


@dataclass
class Reflection:
    date: date
    text: str
    written_at: datetime | None = None


def _require_energy(energy: str | None, settings: UserSettings) -> str:
    if not energy or energy not in settings.energy_categories:
        raise InvalidInputError(
            f"Unknown energy level. Choose one of: {', '.join(settings.energy_categories)}"
        )
    return energy


class CheckInUseCase:
    def __init__(self, store: DocumentStore, clock: Clock | None = None):
        self.clock = clock or SystemClock()
        self.settings_repo = SettingsRepository(store, self.clock)
        self.daily_log_repo = DailyLogRepository(store)

    async def set_today_energy(self, energy: str) -> CheckInResult:
        """
        Morning check-in: cache today's energy and record it on the DailyLog.

        The cache is keyed by today's date, so it expires on its own at
        midnight.
        """
        today = self.clock.today()
        settings = await self.settings_repo.load()
        try:
            energy = _require_energy(energy, settings)
        except InvalidInputError as e:
            return CheckInResult(success=False, error_message=e.message)

        settings.today_energy = energy
        settings.today_date = today
        await self.settings_repo.save(settings)

        daily_log = await self.daily_log_repo.get_or_new(today)
        daily_log.energy_level = energy
        await self.daily_log_repo.save(daily_log)

        logger.info(f"Energy for {today} set to {energy}")
        return CheckInResult(success=True, daily_log=daily_log)

    async def add_mood_entry(
        self, day: date | None = None, hour: int | None = None, energy: str | None = None
    ) -> CheckInResult:
        """
        Append an intra-day mood check-in (default: now).

        Entries are kept in order; the latest one in a time slot is the one
        the mood series shows.
        """
        now = self.clock.now()
        day = day or now.date()
        hour = now.hour if hour is None else hour

        settings = await self.settings_repo.load()
        try:
            energy = _require_energy(energy, settings)
            entry = EnergyEntry(
                hour=hour,
                energy=energy,
                time_slot=hour_to_time_slot(hour, settings.time_slots),
            )
        except InvalidInputError as e:
            return CheckInResult(success=False, error_message=e.message)
        except ValidationError:
            return CheckInResult(success=False, error_message="Hour must be 0-23")

        daily_log = await self.daily_log_repo.get_or_new(day)
        daily_log.energy_entries.append(entry)
        await self.daily_log_repo.save(daily_log)

        logger.info(f"Mood entry {energy} at {hour:02d}h ({entry.time_slot}) on {day}")
        return CheckInResult(success=True, daily_log=daily_log)

    async def save_reflection(self, text: str | None) -> CheckInResult:
        """Save today's reflection (replaces an earlier one from today)."""
        text = (text or "").strip()
        if not text:
            return CheckInResult(success=False, error_message="Reflection cannot be empty")

        now = self.clock.now()
        daily_log = await self.daily_log_repo.get_or_new(now.date())
        daily_log.reflection = text
        daily_log.reflection_time = now
        await self.daily_log_repo.save(daily_log)

        logger.info(f"Reflection saved for {now.date()} ({len(text)} chars)")
        return CheckInResult(success=True, daily_log=daily_log)

    async def recent_reflections(self, limit: int = 5) -> list[Reflection]:
        """Most recent reflections first."""
        logs = await self.daily_log_repo.load_all()
        items = [
            Reflection(date=day, text=log.reflection, written_at=log.reflection_time)
            for day, log in sorted(logs.items(), reverse=True)
            if log.reflection
        ]
        return items[:limit]

    async def log_reading(
        self, day: date | None, snapshot: ReadingSnapshot | dict[str, Any] | None
    ) -> CheckInResult:
        """
        Store the reader's activity for a day.

        None means the reader has no data; the log is left as is rather
        than recording zero pages.
        """
        day = day or self.clock.today()
        if snapshot is None:
            return CheckInResult(success=True, daily_log=await self.daily_log_repo.get(day))

        try:
            reading = (
                snapshot
                if isinstance(snapshot, ReadingSnapshot)
                else ReadingSnapshot.model_validate(snapshot)
            )
        except ValidationError:
            return CheckInResult(success=False, error_message="Invalid reading data")

        reading.last_updated = reading.last_updated or self.clock.now()
        daily_log = await self.daily_log_repo.get_or_new(day)
        daily_log.reading = reading
        await self.daily_log_repo.save(daily_log)

        logger.debug(f"Reading for {day}: {reading.pages_read} pages, {reading.time_spent}s")
        return CheckInResult(success=True, daily_log=daily_log)

    async def save_persistent_notes(self, text: str | None) -> UserSettings:
        """Free-form notes kept across days; empty text clears them."""
        settings = await self.settings_repo.load()
        settings.persistent_notes = (text or "").strip() or None
        return await self.settings_repo.save(settings)
