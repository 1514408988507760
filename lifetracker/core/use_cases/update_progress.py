"""
Update Progress Use Case - increment / decrement / set progress.

AICODE-NOTE: Every call reconciles with today first (lazy daily reset),
then clamps to [0, target]. Reaching the target completes the quest for
today; dropping below it after completion undoes today's completion.
"""

import logging

from lifetracker.core.domain.completion_rules import (
    apply_completion,
    apply_progress,
    apply_uncompletion,
    is_completed_on_date,
    is_target_reached,
    reconcile_progress,
)
from lifetracker.core.domain.validators import parse_progress_value
from lifetracker.core.errors import InvalidInputError
from lifetracker.core.use_cases.complete_quest import (
    QUEST_NOT_FOUND,
    QuestActionResult,
    QuestUseCase,
)

logger = logging.getLogger(__name__)


class UpdateProgressUseCase(QuestUseCase):
    """Use case for progressive quests."""

    async def increment(self, quest_id: int) -> QuestActionResult:
        return await self._change(quest_id, delta=1)

    async def decrement(self, quest_id: int) -> QuestActionResult:
        return await self._change(quest_id, delta=-1)

    async def set_progress(self, quest_id: int, value: int | str) -> QuestActionResult:
        """
        Set today's progress to an absolute value.

        Returns:
            Failed result with a user-facing message for negative or
            non-numeric values; values above the target are clamped
        """
        try:
            number = parse_progress_value(value)
        except InvalidInputError as e:
            return QuestActionResult(success=False, error_message=e.message)
        return await self._change(quest_id, value=number)

    async def _change(
        self, quest_id: int, delta: int = 0, value: int | None = None
    ) -> QuestActionResult:
        today = self.clock.today()

        quest = await self.quest_repo.find_by_id(quest_id)
        if quest is None:
            return QuestActionResult(success=False, error_message=QUEST_NOT_FOUND)

        if not quest.is_progressive:
            return QuestActionResult(
                success=False, quest=quest, error_message="Quest is not progressive"
            )

        reconcile_progress(quest, today)
        before = quest.progress_current
        apply_progress(quest, before + delta if value is None else value, today)

        newly_completed = False
        was_completed = is_completed_on_date(quest, today)
        if is_target_reached(quest) and not was_completed:
            newly_completed = apply_completion(quest, today)
        elif was_completed and not is_target_reached(quest):
            apply_uncompletion(quest, today)

        await self._persist(quest, today, newly_completed=newly_completed)

        logger.info(
            f"Quest {quest_id} progress {before} -> {quest.progress_current}"
            f"/{quest.progress_target}"
        )
        return QuestActionResult(success=True, quest=quest, newly_completed=newly_completed)
