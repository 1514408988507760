"""
Build Analytics Use Case - journal/dashboard numbers in one read.

AICODE-NOTE: Pure read. Loads DailyLogs and UserSettings once and hands
them to the analytics rules; nothing is written back.
"""

import logging
from dataclasses import dataclass, field

from lifetracker.config import config
from lifetracker.core.clock import Clock, SystemClock
from lifetracker.core.domain.heatmap_rules import (
    Heatmap,
    HeatmapStats,
    build_heatmap,
    heatmap_stats,
)
from lifetracker.core.domain.insight_rules import (
    Insight,
    MonthlySummary,
    WeeklyStats,
    energy_insight,
    monthly_summary,
    reading_insight,
    weekly_stats,
)
from lifetracker.core.domain.mood_rules import MoodDay, build_mood_series
from lifetracker.core.domain.reading_rules import (
    ReadingTotals,
    average_pages_per_day,
    monthly_reading,
    weekly_reading,
)
from lifetracker.core.schemas import StreakData
from lifetracker.storage import DailyLogRepository, DocumentStore, SettingsRepository

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsReport:
    """Everything the journal screen shows."""

    heatmap: Heatmap
    heatmap_stats: HeatmapStats
    weekly: WeeklyStats
    monthly: MonthlySummary
    mood: list[MoodDay]
    streak: StreakData
    weekly_reading: ReadingTotals
    monthly_reading: ReadingTotals
    average_pages: int
    insights: list[Insight] = field(default_factory=list)


class BuildAnalyticsUseCase:
    def __init__(self, store: DocumentStore, clock: Clock | None = None):
        self.clock = clock or SystemClock()
        self.settings_repo = SettingsRepository(store, self.clock)
        self.daily_log_repo = DailyLogRepository(store)

    async def execute(self, weeks: int | None = None) -> AnalyticsReport:
        """
        Build the analytics report for today.

        Args:
            weeks: Heatmap window in weeks (default: HEATMAP_WEEKS)

        Returns:
            AnalyticsReport; insights holds at most one weekly insight
            followed by at most one reading insight
        """
        today = self.clock.today()
        weeks = weeks or config.HEATMAP_WEEKS

        logs = await self.daily_log_repo.load_all()
        settings = await self.settings_repo.load()

        weekly = weekly_stats(logs, today)
        insights = [
            insight
            for insight in (
                energy_insight(logs, today, settings.energy_categories, weekly),
                reading_insight(logs, today),
            )
            if insight is not None
        ]

        report = AnalyticsReport(
            heatmap=build_heatmap(logs, today, weeks),
            heatmap_stats=heatmap_stats(logs, today, weeks),
            weekly=weekly,
            monthly=monthly_summary(logs, today),
            mood=build_mood_series(
                logs, today, settings.time_slots, settings.energy_categories
            ),
            streak=settings.streak_data,
            weekly_reading=weekly_reading(logs, today),
            monthly_reading=monthly_reading(logs, today),
            average_pages=average_pages_per_day(logs, today),
            insights=insights,
        )

        logger.debug(
            f"Analytics for {today}: {weekly.completion_rate}% weekly, "
            f"{len(insights)} insight(s)"
        )
        return report
