"""
Mood Domain Rules - energy check-ins mapped onto time slots.

AICODE-NOTE: Pure functions, no store access. The series leaves gaps unset;
renderers interpolate, not these rules.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from lifetracker.core.domain.heatmap_rules import window_dates
from lifetracker.core.schemas import DailyLog


@dataclass(frozen=True)
class MoodDay:
    date: date
    energy_level: str | None
    slots: dict[str, str | None]
    scores: dict[str, int | None] = field(default_factory=dict)


def hour_to_time_slot(hour: int, time_slots: Sequence[str]) -> str:
    """
    Map an hour of day (0-23) to a configured time slot.

    Four slots: Morning 5-12, Afternoon 12-17, Evening 17-21, Night 21-5.
    Three slots: 5-12, 12-18, rest. Otherwise the day is split evenly.
    """
    if len(time_slots) == 4:
        if 5 <= hour < 12:
            return time_slots[0]
        if 12 <= hour < 17:
            return time_slots[1]
        if 17 <= hour < 21:
            return time_slots[2]
        return time_slots[3]

    if len(time_slots) == 3:
        if 5 <= hour < 12:
            return time_slots[0]
        if 12 <= hour < 18:
            return time_slots[1]
        return time_slots[2]

    hours_per_slot = 24 / len(time_slots)
    index = math.floor(hour / hours_per_slot)
    return time_slots[min(index, len(time_slots) - 1)]


def energy_score(energy: str | None, energy_categories: Sequence[str]) -> int | None:
    """
    Score an energy category on a 0-10 scale (first category = highest).

    Examples:
        >>> energy_score("Energetic", ["Energetic", "Average", "Down"])
        10
        >>> energy_score("Down", ["Energetic", "Average", "Down"])
        3
    """
    if energy not in energy_categories:
        return None
    count = len(energy_categories)
    rank = list(energy_categories).index(energy)
    return math.floor((count - rank) * 10 / count)


def day_mood(
    log: DailyLog | None,
    day: date,
    time_slots: Sequence[str],
    energy_categories: Sequence[str] = (),
) -> MoodDay:
    """
    Energy per time slot for one day.

    The last check-in in a slot wins. A day with no check-ins at all uses its
    single energy_level for every slot; otherwise slots without a check-in
    stay unset. Entries without an energy or a placeable hour are ignored.
    """
    energy_level = log.energy_level if log else None
    entries = [
        entry
        for entry in (log.energy_entries if log else [])
        if entry.energy is not None and (entry.time_slot in time_slots or entry.hour is not None)
    ]

    if entries:
        slots: dict[str, str | None] = {slot: None for slot in time_slots}
        for entry in entries:
            if entry.time_slot in slots:
                slot = entry.time_slot
            else:
                slot = hour_to_time_slot(entry.hour, time_slots)
            slots[slot] = entry.energy
    else:
        slots = {slot: energy_level for slot in time_slots}

    return MoodDay(
        date=day,
        energy_level=energy_level,
        slots=slots,
        scores={slot: energy_score(value, energy_categories) for slot, value in slots.items()},
    )


def build_mood_series(
    logs: dict[date, DailyLog],
    today: date,
    time_slots: Sequence[str],
    energy_categories: Sequence[str] = (),
    days: int = 7,
) -> list[MoodDay]:
    """Mood per slot for the trailing `days` days, oldest first."""
    return [
        day_mood(logs.get(day), day, time_slots, energy_categories)
        for day in window_dates(today, days)
    ]
