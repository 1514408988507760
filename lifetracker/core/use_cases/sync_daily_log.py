"""
Sync Daily Log Use Case - recompute the DailyLog snapshot for a date.

AICODE-NOTE: Counts are never maintained incrementally. Every completion
event recomputes total/completed over ALL quests, so re-running after a
partial failure converges to the same numbers.
"""

import logging
from datetime import date

from lifetracker.core.domain.completion_rules import count_completions
from lifetracker.core.domain.gamification import update_global_streak
from lifetracker.core.schemas import DailyLog
from lifetracker.storage import DailyLogRepository, QuestRepository, SettingsRepository

logger = logging.getLogger(__name__)


class SyncDailyLogUseCase:
    """Use case for the DailyLog recompute + global streak update."""

    def __init__(
        self,
        quest_repo: QuestRepository,
        daily_log_repo: DailyLogRepository,
        settings_repo: SettingsRepository,
    ):
        self.quest_repo = quest_repo
        self.daily_log_repo = daily_log_repo
        self.settings_repo = settings_repo

    async def execute(self, day: date, advance_streak: bool = False) -> DailyLog:
        """
        Recompute the snapshot for `day`.

        Args:
            day: Date of the completion event
            advance_streak: A quest was newly completed on `day`; the global
                streak advances at most once per calendar day

        Returns:
            The saved DailyLog
        """
        quests = await self.quest_repo.list_flat()
        total, completed = count_completions(quests, day)

        daily_log = await self.daily_log_repo.get_or_new(day)
        daily_log.quests_total = total
        daily_log.quests_completed = completed
        await self.daily_log_repo.save(daily_log)

        if advance_streak:
            settings = await self.settings_repo.load()
            if update_global_streak(settings.streak_data, day):
                await self.settings_repo.save(settings)
                logger.info(
                    f"Global streak advanced to {settings.streak_data.current} on {day}"
                )

        logger.debug(f"DailyLog {day} synced: {completed}/{total}")
        return daily_log
