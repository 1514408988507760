"""
Skip Quest Use Case - one-day deferral of a quest.

AICODE-NOTE: A skip only hides the quest on its date; completion history
is never touched and the DailyLog snapshot does not change.
"""

import logging
from datetime import date

from lifetracker.core.use_cases.complete_quest import (
    QUEST_NOT_FOUND,
    QuestActionResult,
    QuestUseCase,
)

logger = logging.getLogger(__name__)


class SkipQuestUseCase(QuestUseCase):
    """Use case for skipping a quest."""

    async def execute(self, quest_id: int, day: date | None = None) -> QuestActionResult:
        """
        Skip a quest for a date.

        Args:
            quest_id: Quest ID
            day: Date to hide the quest on (default: today)

        Returns:
            QuestActionResult with the updated quest
        """
        day = day or self.clock.today()

        quest = await self.quest_repo.find_by_id(quest_id)
        if quest is None:
            return QuestActionResult(success=False, error_message=QUEST_NOT_FOUND)

        if quest.skipped_date != day:
            quest.skipped_date = day
            await self.quest_repo.save(quest)
            logger.info(f"Quest {quest_id} skipped on {day}")

        return QuestActionResult(success=True, quest=quest)


class UnskipQuestUseCase(QuestUseCase):
    """Use case for undoing a skip."""

    async def execute(self, quest_id: int) -> QuestActionResult:
        quest = await self.quest_repo.find_by_id(quest_id)
        if quest is None:
            return QuestActionResult(success=False, error_message=QUEST_NOT_FOUND)

        if quest.skipped_date is not None:
            quest.skipped_date = None
            await self.quest_repo.save(quest)
            logger.info(f"Quest {quest_id} unskipped")

        return QuestActionResult(success=True, quest=quest)
