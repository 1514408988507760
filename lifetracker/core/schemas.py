"""
Pydantic schemas for the stored documents.

Structure:
- Quest: a habit with cadence, energy requirement and completion history
- DailyLog: per-date snapshot (counts, energy check-ins, reflection, reading)
- UserSettings: energy categories, time slots, global streak, id counter
- Reminder: time-of-day reminder with repeat days

Documents are plain nested dicts in the store. Every field has a safe
default and explicit nulls are treated as missing, so partially written or
older documents still load.
"""

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lifetracker.config import config
from lifetracker.core.domain.validators import normalize_time

ANY_ENERGY = "Any"
UNTITLED_QUEST = "Untitled quest"

# Week order used for repeat days and weekday names (date.weekday() index)
DAY_NAMES: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class Cadence(str, Enum):
    """Quest partitions."""

    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


CADENCES: tuple[Cadence, ...] = (Cadence.daily, Cadence.weekly, Cadence.monthly)


class Document(BaseModel):
    """Base for stored documents: tolerant on read, JSON on write."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def _coalesce_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# ============ Quests ============


class Quest(Document):
    """A habit. completion_history is the source of truth for "done on day X"."""

    id: int | None = None
    # Missing on read falls back to a placeholder; blank input is still rejected
    title: str = Field(default=UNTITLED_QUEST, min_length=1)
    cadence: Cadence = Cadence.daily

    # Category name, "Any", or a list of names (multi-select)
    energy_required: str | list[str] = ANY_ENERGY
    time_slot: str | None = None
    category: str | None = None

    # Progressive quests count toward a target instead of a single flag
    is_progressive: bool = False
    progress_current: int = Field(default=0, ge=0)
    progress_target: int = Field(default=1, ge=1)
    progress_unit: str | None = None
    progress_last_date: dt.date | None = None

    # Legacy projection of completion_history (last completion)
    completed: bool = False
    completed_date: dt.date | None = None

    completion_history: list[dt.date] = Field(default_factory=list)
    streak: int = Field(default=0, ge=0)
    skipped_date: dt.date | None = None
    created: dt.date | None = None

    @field_validator("completion_history")
    @classmethod
    def _sorted_unique(cls, v: list[dt.date]) -> list[dt.date]:
        return sorted(set(v))


# ============ Daily logs ============


class EnergyEntry(Document):
    """One mood check-in. Entries missing hour or energy are ignored by the mood series."""

    hour: int | None = Field(default=None, ge=0, le=23)
    energy: str | None = None
    time_slot: str | None = None


class ReadingSnapshot(Document):
    """Reading activity for a day, supplied by the reader."""

    pages_read: int = Field(default=0, ge=0)
    time_spent: int = Field(default=0, ge=0)  # seconds
    current_book: str | None = None
    sessions: int = 0
    last_updated: dt.datetime | None = None


class DailyLog(Document):
    """Per-date journal entry, keyed by date in the daily_logs collection."""

    date: dt.date | None = None

    # Snapshot of all quests, recomputed on every completion event
    quests_total: int = 0
    quests_completed: int = 0

    energy_level: str | None = None
    energy_entries: list[EnergyEntry] = Field(default_factory=list)

    reflection: str | None = None
    reflection_time: dt.datetime | None = None

    reading: ReadingSnapshot | None = None


# ============ Settings ============


class StreakData(Document):
    """Global streak across all quests."""

    current: int = 0
    longest: int = 0
    last_completed_date: dt.date | None = None


class UserSettings(Document):
    """User configuration and cached "today" state."""

    # Index 0 is the highest energy
    energy_categories: list[str] = Field(
        default_factory=lambda: list(config.DEFAULT_ENERGY_CATEGORIES), min_length=1
    )
    time_slots: list[str] = Field(
        default_factory=lambda: list(config.DEFAULT_TIME_SLOTS), min_length=1
    )
    quest_categories: list[str] = Field(
        default_factory=lambda: ["Health", "Work", "Personal", "Learning"]
    )

    streak_data: StreakData = Field(default_factory=StreakData)

    today_energy: str | None = None
    today_date: dt.date | None = None

    persistent_notes: str | None = None
    last_generated_id: int | None = None


# ============ Reminders ============


class Reminder(Document):
    """Reminder shown by the host's per-minute poll."""

    id: int | None = None
    title: str = Field(min_length=1)
    time: str  # HH:MM
    repeat_days: list[str] = Field(default_factory=list)  # empty = one-off
    start_date: dt.date | None = None
    active: bool = True
    last_triggered: dt.date | None = None

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, v: str) -> str:
        return normalize_time(v)

    @field_validator("repeat_days")
    @classmethod
    def _known_days(cls, v: list[str]) -> list[str]:
        unknown = [day for day in v if day not in DAY_NAMES]
        if unknown:
            raise ValueError(f"Unknown repeat days: {', '.join(unknown)}")
        return [day for day in DAY_NAMES if day in v]
