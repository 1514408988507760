"""
Insight Domain Rules - weekly stats and correlation insights.

AICODE-NOTE: Pure functions over DailyLogs, no store access.
Rates are exact fractions so threshold comparisons (gap > 0.3, > 0.2)
don't flip on float rounding.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum
from fractions import Fraction

from lifetracker.core.domain.heatmap_rules import window_dates
from lifetracker.core.schemas import DAY_NAMES, DailyLog

WEEK_DAYS = 7
READING_WINDOW_DAYS = 14

ENERGY_GAP = Fraction(3, 10)
READING_GAP = Fraction(2, 10)
READING_MIN_SAMPLE = 3

GREAT_WEEK_RATE = 80
MAX_MISSED_BEFORE_HINT = 5


class InsightKind(str, Enum):
    energy_productivity = "energy_productivity"
    great_week = "great_week"
    reduce_load = "reduce_load"
    reading_productivity = "reading_productivity"


@dataclass(frozen=True)
class Insight:
    kind: InsightKind
    message: str
    gap_percent: int | None = None


@dataclass(frozen=True)
class WeeklyStats:
    completion_rate: int  # 0-100, floored
    completed: int
    total: int
    best_day: date | None
    best_completed: int
    best_total: int

    @property
    def missed(self) -> int:
        return self.total - self.completed

    @property
    def best_day_name(self) -> str:
        return DAY_NAMES[self.best_day.weekday()] if self.best_day else "None"


@dataclass(frozen=True)
class MonthlySummary:
    year: int
    month: int
    days_tracked: int
    quests_completed: int
    quests_total: int
    completion_rate: int
    reading_pages: int
    reading_seconds: int

    @property
    def reading_hours(self) -> int:
        return self.reading_seconds // 3600


def completion_rate(log: DailyLog) -> Fraction:
    """Fraction of quests done that day (0 when nothing was assigned)."""
    if log.quests_total > 0:
        return Fraction(log.quests_completed, log.quests_total)
    return Fraction(0)


def percent(value: Fraction) -> int:
    return math.floor(value * 100)


def _mean(values: list[Fraction]) -> Fraction:
    return sum(values, Fraction(0)) / len(values) if values else Fraction(0)


def weekly_stats(logs: dict[date, DailyLog], today: date) -> WeeklyStats:
    """
    Completion totals over the trailing 7 days.

    The best day has the highest rate; ties go to the higher absolute count.
    """
    completed = 0
    total = 0
    best_day: date | None = None
    best_rate = Fraction(0)
    best_completed = 0
    best_total = 0

    for day in reversed(window_dates(today, WEEK_DAYS)):
        log = logs.get(day)
        if log is None:
            continue

        completed += log.quests_completed
        total += log.quests_total

        if log.quests_total > 0:
            rate = completion_rate(log)
            if rate > best_rate or (rate == best_rate and log.quests_completed > best_completed):
                best_day = day
                best_rate = rate
                best_completed = log.quests_completed
                best_total = log.quests_total

    return WeeklyStats(
        completion_rate=completed * 100 // total if total > 0 else 0,
        completed=completed,
        total=total,
        best_day=best_day,
        best_completed=best_completed,
        best_total=best_total,
    )


def energy_insight(
    logs: dict[date, DailyLog],
    today: date,
    energy_categories: Sequence[str],
    stats: WeeklyStats | None = None,
) -> Insight | None:
    """
    Pick one weekly insight; first match wins:

    1. Mean completion on highest-energy days beats lowest-energy days by
       more than 30 points
    2. Weekly completion rate >= 80 → "great week"
    3. More than 5 missed quests → suggest fewer / smaller quests
    """
    stats = stats or weekly_stats(logs, today)

    if len(energy_categories) >= 2:
        high_energy = energy_categories[0]
        low_energy = energy_categories[-1]
        high_rates: list[Fraction] = []
        low_rates: list[Fraction] = []

        for day in window_dates(today, WEEK_DAYS):
            log = logs.get(day)
            if log is None:
                continue
            if log.energy_level == high_energy:
                high_rates.append(completion_rate(log))
            elif log.energy_level == low_energy:
                low_rates.append(completion_rate(log))

        high_mean = _mean(high_rates)
        low_mean = _mean(low_rates)
        if high_mean > low_mean + ENERGY_GAP:
            gap = percent(high_mean - low_mean)
            return Insight(
                kind=InsightKind.energy_productivity,
                message=f"You complete {gap}% more on {high_energy} days.",
                gap_percent=gap,
            )

    if stats.completion_rate >= GREAT_WEEK_RATE:
        return Insight(
            kind=InsightKind.great_week,
            message="Great week! You're hitting your goals consistently.",
        )

    if stats.missed > MAX_MISSED_BEFORE_HINT:
        return Insight(
            kind=InsightKind.reduce_load,
            message="Consider reducing quest count or breaking tasks smaller.",
        )

    return None


def had_reading(log: DailyLog) -> bool:
    return log.reading is not None and log.reading.pages_read > 0


def reading_insight(logs: dict[date, DailyLog], today: date) -> Insight | None:
    """
    Compare completion on reading vs non-reading days over two weeks.

    Needs at least 3 logged days on each side; below that the correlation is
    noise and nothing is reported.
    """
    reading_rates: list[Fraction] = []
    other_rates: list[Fraction] = []

    for day in window_dates(today, READING_WINDOW_DAYS):
        log = logs.get(day)
        if log is None:
            continue
        if had_reading(log):
            reading_rates.append(completion_rate(log))
        else:
            other_rates.append(completion_rate(log))

    if len(reading_rates) < READING_MIN_SAMPLE or len(other_rates) < READING_MIN_SAMPLE:
        return None

    reading_mean = _mean(reading_rates)
    other_mean = _mean(other_rates)
    if reading_mean > other_mean + READING_GAP:
        gap = percent(reading_mean - other_mean)
        return Insight(
            kind=InsightKind.reading_productivity,
            message=f"Days with reading show {gap}% higher completion.",
            gap_percent=gap,
        )
    return None


def monthly_summary(logs: dict[date, DailyLog], today: date) -> MonthlySummary:
    """Totals for the calendar month containing `today`."""
    month_logs = [
        log for day, log in logs.items() if day.year == today.year and day.month == today.month
    ]
    completed = sum(log.quests_completed for log in month_logs)
    total = sum(log.quests_total for log in month_logs)

    return MonthlySummary(
        year=today.year,
        month=today.month,
        days_tracked=len(month_logs),
        quests_completed=completed,
        quests_total=total,
        completion_rate=completed * 100 // total if total > 0 else 0,
        reading_pages=sum(log.reading.pages_read for log in month_logs if log.reading),
        reading_seconds=sum(log.reading.time_spent for log in month_logs if log.reading),
    )

