"""
Timeline Domain Rules - quest state as seen from a chosen date.

AICODE-NOTE: The timeline can show any date, not only today. Views are
built from copies, so the "completed" shown for a past date comes from
completion_history and never leaks back into the stored quest.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, timedelta

from lifetracker.core.domain.completion_rules import (
    is_completed_on_date,
    is_skipped_on,
    reconcile_progress,
)
from lifetracker.core.schemas import Cadence, Quest

UNSCHEDULED_SLOT = "Anytime"


@dataclass(frozen=True)
class ViewContext:
    """What the caller is looking at: a date and a cadence partition."""

    view_date: date
    cadence: Cadence = Cadence.daily

    def navigate(self, days: int) -> "ViewContext":
        return replace(self, view_date=self.view_date + timedelta(days=days))

    def with_cadence(self, cadence: Cadence | str) -> "ViewContext":
        return replace(self, cadence=Cadence(cadence))

    def is_today(self, today: date) -> bool:
        return self.view_date == today


@dataclass(frozen=True)
class QuestView:
    quest: Quest
    completed: bool
    skipped: bool

    @property
    def progress_label(self) -> str | None:
        if not self.quest.is_progressive:
            return None
        unit = f" {self.quest.progress_unit}" if self.quest.progress_unit else ""
        return f"{self.quest.progress_current}/{self.quest.progress_target}{unit}"


def quest_view(quest: Quest, view_date: date, today: date) -> QuestView:
    """
    Snapshot of a quest for `view_date`.

    Progress only counts for today; any other date shows zero progress.
    """
    clone = quest.model_copy(deep=True)
    if view_date == today:
        reconcile_progress(clone, today)
    elif clone.is_progressive:
        clone.progress_current = 0
    return QuestView(
        quest=clone,
        completed=is_completed_on_date(quest, view_date),
        skipped=is_skipped_on(quest, view_date),
    )


def quests_for_date(quests: Iterable[Quest], context: ViewContext, today: date) -> list[QuestView]:
    """Views of the quests in the context's cadence for its date."""
    return [
        quest_view(quest, context.view_date, today)
        for quest in quests
        if quest.cadence == context.cadence
    ]


def quests_for_slot(
    views: Iterable[QuestView], time_slots: Sequence[str]
) -> dict[str, list[QuestView]]:
    """
    Group views by time slot in configured order.

    Quests without a slot (or with one no longer configured) go under
    "Anytime", listed last.
    """
    grouped: dict[str, list[QuestView]] = {slot: [] for slot in time_slots}
    grouped[UNSCHEDULED_SLOT] = []
    for view in views:
        slot = view.quest.time_slot
        grouped[slot if slot in grouped else UNSCHEDULED_SLOT].append(view)
    return grouped
