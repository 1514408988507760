"""
Reading Domain Rules - reading activity totals from DailyLogs.

Reading data comes from the reader; a day without a snapshot means
"no reading data", which counts as zero pages in totals.
"""

from dataclasses import dataclass
from datetime import date

from lifetracker.core.domain.heatmap_rules import window_dates
from lifetracker.core.schemas import DailyLog


@dataclass(frozen=True)
class ReadingDay:
    date: date
    pages: int
    seconds: int


@dataclass(frozen=True)
class ReadingTotals:
    total_pages: int
    total_seconds: int
    days_read: int
    books: int
    daily: list[ReadingDay]


def format_reading_time(seconds: int | None) -> str:
    """
    Format seconds as "1h 23m" / "45m".

    Examples:
        >>> format_reading_time(4980)
        '1h 23m'
    """
    if not seconds:
        return "0m"
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def _totals(days: list[tuple[date, DailyLog | None]]) -> ReadingTotals:
    daily = []
    books = set()
    for day, log in days:
        reading = log.reading if log else None
        pages = reading.pages_read if reading else 0
        seconds = reading.time_spent if reading else 0
        if reading and reading.current_book:
            books.add(reading.current_book)
        daily.append(ReadingDay(date=day, pages=pages, seconds=seconds))

    return ReadingTotals(
        total_pages=sum(d.pages for d in daily),
        total_seconds=sum(d.seconds for d in daily),
        days_read=sum(1 for d in daily if d.pages > 0),
        books=len(books),
        daily=daily,
    )


def weekly_reading(logs: dict[date, DailyLog], today: date) -> ReadingTotals:
    """Reading over the trailing 7 days, oldest first."""
    return _totals([(day, logs.get(day)) for day in window_dates(today, 7)])


def monthly_reading(logs: dict[date, DailyLog], today: date) -> ReadingTotals:
    """Reading over logged days of the month containing `today`."""
    return _totals(
        [
            (day, log)
            for day, log in sorted(logs.items())
            if day.year == today.year and day.month == today.month
        ]
    )


def average_pages_per_day(logs: dict[date, DailyLog], today: date, days: int = 7) -> int:
    """Average pages over the days that had reading in the window."""
    totals = _totals([(day, logs.get(day)) for day in window_dates(today, days)])
    if totals.days_read == 0:
        return 0
    return totals.total_pages // totals.days_read
