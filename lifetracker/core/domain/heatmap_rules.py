"""
Heatmap Domain Rules - completion counts bucketed into intensity levels.

AICODE-NOTE: Pure functions over DailyLogs, no store access, no mutation.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from enum import IntEnum

from lifetracker.core.schemas import DailyLog

# At or below this maximum the fixed thresholds 1/2/3 are used
SMALL_MAX_COMPLETIONS = 4


class HeatLevel(IntEnum):
    none = 0
    low = 1
    mid = 2
    high = 3


@dataclass(frozen=True)
class HeatmapCell:
    date: date
    count: int
    level: HeatLevel


@dataclass(frozen=True)
class Heatmap:
    """Trailing window of 7-day buckets, oldest week first, last cell = today."""

    weeks: list[list[HeatmapCell]]
    max_completions: int
    thresholds: tuple[int, int, int]

    @property
    def cells(self) -> list[HeatmapCell]:
        return [cell for week in self.weeks for cell in week]


@dataclass(frozen=True)
class HeatmapStats:
    total_completions: int
    days_with_activity: int
    total_days: int
    current_streak: int
    longest_streak: int
    average_per_active_day: int


def completions_on(logs: dict[date, DailyLog], day: date) -> int:
    log = logs.get(day)
    return log.quests_completed if log else 0


def heat_thresholds(max_completions: int) -> tuple[int, int, int]:
    """
    Thresholds t1, t2, t3 for a window's maximum.

    - max == 0 → all thresholds collapse to 1 (everything renders "none")
    - max <= 4 → fixed 1, 2, 3 so small counts don't all land in the top bucket
    - otherwise ceil(max/4), ceil(max/2), ceil(3*max/4)
    """
    if max_completions <= 0:
        return 1, 1, 1
    if max_completions <= SMALL_MAX_COMPLETIONS:
        return 1, 2, 3
    return (
        math.ceil(max_completions / 4),
        math.ceil(max_completions / 2),
        math.ceil(3 * max_completions / 4),
    )


def heat_level(count: int, thresholds: tuple[int, int, int]) -> HeatLevel:
    """0 → none, (0, t1] → low, (t1, t2] → mid, above t2 → high."""
    t1, t2, _ = thresholds
    if count <= 0:
        return HeatLevel.none
    if count <= t1:
        return HeatLevel.low
    if count <= t2:
        return HeatLevel.mid
    return HeatLevel.high


def window_dates(today: date, days: int) -> list[date]:
    """The `days` dates ending at `today`, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def build_heatmap(logs: dict[date, DailyLog], today: date, weeks: int = 12) -> Heatmap:
    """
    Build heatmap buckets for the last `weeks` weeks.

    Args:
        logs: Daily logs keyed by date
        today: Last day of the window
        weeks: Number of 7-day buckets

    Returns:
        Heatmap with per-day levels relative to the window maximum
    """
    dates = window_dates(today, weeks * 7)
    counts = [completions_on(logs, day) for day in dates]

    max_completions = max(counts, default=0)
    thresholds = heat_thresholds(max_completions)

    cells = [
        HeatmapCell(date=day, count=count, level=heat_level(count, thresholds))
        for day, count in zip(dates, counts)
    ]
    return Heatmap(
        weeks=[cells[i : i + 7] for i in range(0, len(cells), 7)],
        max_completions=max_completions,
        thresholds=thresholds,
    )


def heatmap_stats(logs: dict[date, DailyLog], today: date, weeks: int = 12) -> HeatmapStats:
    """Totals and streaks over the heatmap window."""
    dates = window_dates(today, weeks * 7)
    counts = [completions_on(logs, day) for day in dates]

    longest = 0
    running = 0
    for count in counts:
        running = running + 1 if count > 0 else 0
        longest = max(longest, running)

    current = 0
    for count in reversed(counts):
        if count <= 0:
            break
        current += 1

    active_days = sum(1 for count in counts if count > 0)
    total = sum(counts)

    return HeatmapStats(
        total_completions=total,
        days_with_activity=active_days,
        total_days=len(dates),
        current_streak=current,
        longest_streak=longest,
        average_per_active_day=total // active_days if active_days else 0,
    )
