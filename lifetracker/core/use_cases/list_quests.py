"""
List Quests Use Case - the "active today" list and timeline views.

AICODE-NOTE: Read-only. Progress is reconciled on copies; the stored
quests are only written by the action use cases.
"""

from datetime import date

from lifetracker.core.clock import Clock, SystemClock
from lifetracker.core.domain.completion_rules import is_completed_on_date, reconcile_progress
from lifetracker.core.domain.energy_rules import filter_quests
from lifetracker.core.domain.timeline_rules import (
    QuestView,
    ViewContext,
    quests_for_date,
    quests_for_slot,
)
from lifetracker.core.schemas import Cadence, Quest, UserSettings
from lifetracker.storage import DocumentStore, QuestRepository, SettingsRepository


def current_energy(settings: UserSettings, today: date) -> str | None:
    """Today's declared energy; a check-in from an earlier day doesn't count."""
    if settings.today_date == today:
        return settings.today_energy
    return None


class ListQuestsUseCase:
    def __init__(self, store: DocumentStore, clock: Clock | None = None):
        self.clock = clock or SystemClock()
        self.settings_repo = SettingsRepository(store, self.clock)
        self.quest_repo = QuestRepository(store, self.settings_repo, self.clock)

    async def today_quests(
        self,
        cadence: Cadence | str | None = None,
        energy: str | None = None,
        include_completed: bool = False,
    ) -> list[Quest]:
        """
        Quests to show as active today.

        Args:
            cadence: Limit to one partition (default: all)
            energy: Override the energy declared at today's check-in
            include_completed: Keep quests already done today

        Returns:
            Reconciled copies, filtered by energy and today's skips
        """
        today = self.clock.today()
        settings = await self.settings_repo.load()

        quests = await self.quest_repo.list_flat()
        if cadence is not None:
            cadence = Cadence(cadence)
            quests = [quest for quest in quests if quest.cadence == cadence]

        copies = []
        for quest in quests:
            clone = quest.model_copy(deep=True)
            reconcile_progress(clone, today)
            copies.append(clone)

        visible = filter_quests(
            copies,
            energy or current_energy(settings, today),
            today,
            settings.energy_categories,
        )
        if include_completed:
            return visible
        return [quest for quest in visible if not is_completed_on_date(quest, today)]

    async def for_date(self, context: ViewContext) -> list[QuestView]:
        """Timeline view of one cadence on the context's date."""
        quests = await self.quest_repo.list_flat()
        return quests_for_date(quests, context, self.clock.today())

    async def by_slot(self, context: ViewContext) -> dict[str, list[QuestView]]:
        """Timeline view grouped by configured time slot."""
        settings = await self.settings_repo.load()
        return quests_for_slot(await self.for_date(context), settings.time_slots)
