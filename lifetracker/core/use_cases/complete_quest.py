"""
Complete Quest Use Case - complete / uncomplete / toggle a quest for a date.

AICODE-NOTE: Use case = repositories + domain rules. Callers pass a quest id
and get a QuestActionResult; an unknown id is a failed result, never an
exception. Store write failures propagate unmodified.
"""

import logging
from dataclasses import dataclass
from datetime import date

from lifetracker.core.clock import Clock, SystemClock
from lifetracker.core.domain.completion_rules import (
    apply_completion,
    apply_uncompletion,
    is_completed_on_date,
    reconcile_progress,
)
from lifetracker.core.schemas import Quest
from lifetracker.core.use_cases.sync_daily_log import SyncDailyLogUseCase
from lifetracker.storage import (
    DailyLogRepository,
    DocumentStore,
    QuestRepository,
    SettingsRepository,
)

logger = logging.getLogger(__name__)

QUEST_NOT_FOUND = "Quest not found"


@dataclass
class QuestActionResult:
    """Result of a quest action."""

    success: bool
    quest: Quest | None = None
    newly_completed: bool = False
    error_message: str = ""


class QuestUseCase:
    """Wires the repositories shared by quest actions."""

    def __init__(self, store: DocumentStore, clock: Clock | None = None):
        self.clock = clock or SystemClock()
        self.settings_repo = SettingsRepository(store, self.clock)
        self.quest_repo = QuestRepository(store, self.settings_repo, self.clock)
        self.daily_log_repo = DailyLogRepository(store)
        self.sync_daily_log = SyncDailyLogUseCase(
            self.quest_repo, self.daily_log_repo, self.settings_repo
        )

    async def _persist(self, quest: Quest, day: date, newly_completed: bool) -> None:
        await self.quest_repo.save(quest)
        await self.sync_daily_log.execute(day, advance_streak=newly_completed)


class CompleteQuestUseCase(QuestUseCase):
    """Use case for completing a quest."""

    async def execute(self, quest_id: int, day: date | None = None) -> QuestActionResult:
        """
        Complete a quest on a date.

        Args:
            quest_id: Quest ID
            day: Completion date (default: today)

        Returns:
            QuestActionResult; newly_completed is False when the quest was
            already done that day (no-op)
        """
        today = self.clock.today()
        day = day or today

        quest = await self.quest_repo.find_by_id(quest_id)
        if quest is None:
            return QuestActionResult(success=False, error_message=QUEST_NOT_FOUND)

        if not apply_completion(quest, day):
            return QuestActionResult(success=True, quest=quest)

        # A progressive quest ticked off directly counts as target reached
        if quest.is_progressive and day == today:
            quest.progress_current = quest.progress_target
            quest.progress_last_date = today

        await self._persist(quest, day, newly_completed=True)

        logger.info(f"Quest {quest_id} completed on {day}, streak {quest.streak}")
        return QuestActionResult(success=True, quest=quest, newly_completed=True)


class UncompleteQuestUseCase(QuestUseCase):
    """Use case for undoing a completion."""

    async def execute(self, quest_id: int, day: date | None = None) -> QuestActionResult:
        today = self.clock.today()
        day = day or today

        quest = await self.quest_repo.find_by_id(quest_id)
        if quest is None:
            return QuestActionResult(success=False, error_message=QUEST_NOT_FOUND)

        if not apply_uncompletion(quest, day):
            return QuestActionResult(success=True, quest=quest)

        if quest.is_progressive and day == today:
            reconcile_progress(quest, today)
            quest.progress_current = min(quest.progress_current, quest.progress_target - 1)

        await self._persist(quest, day, newly_completed=False)

        logger.info(f"Quest {quest_id} uncompleted on {day}, streak {quest.streak}")
        return QuestActionResult(success=True, quest=quest)


class ToggleQuestUseCase(QuestUseCase):
    """Complete if not done on the date, otherwise undo."""

    async def execute(self, quest_id: int, day: date | None = None) -> QuestActionResult:
        day = day or self.clock.today()

        quest = await self.quest_repo.find_by_id(quest_id)
        if quest is None:
            return QuestActionResult(success=False, error_message=QUEST_NOT_FOUND)

        if is_completed_on_date(quest, day):
            use_case = UncompleteQuestUseCase(self.quest_repo.store, self.clock)
        else:
            use_case = CompleteQuestUseCase(self.quest_repo.store, self.clock)
        return await use_case.execute(quest_id, day)
