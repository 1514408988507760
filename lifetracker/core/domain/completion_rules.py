"""
Completion Domain Rules - the per-quest completion/progress state machine.

AICODE-NOTE: Pure functions WITHOUT store access. They mutate the Quest
passed in and report whether anything changed; use cases persist the
result and trigger the DailyLog recompute.

States per (quest, date): Pending → Completed, Pending → Skipped(date) →
Pending (next day), and for progressive quests Pending → InProgress(n/target)
→ Completed.
"""

from collections.abc import Iterable
from datetime import date

from lifetracker.core.domain.gamification import (
    streak_after_completion,
    streak_after_undo,
)
from lifetracker.core.schemas import Quest


def is_completed_on_date(quest: Quest, day: date) -> bool:
    """
    Was the quest done on `day`?

    completion_history is authoritative; records written before the history
    existed fall back to the legacy completed/completed_date pair.
    """
    if day in quest.completion_history:
        return True
    return quest.completed and quest.completed_date == day


def is_skipped_on(quest: Quest, day: date) -> bool:
    """Skips are scoped to a single date."""
    return quest.skipped_date == day


def adopt_legacy_completion(quest: Quest) -> bool:
    """Copy a legacy-only completion into completion_history."""
    if quest.completed and quest.completed_date and quest.completed_date not in quest.completion_history:
        quest.completion_history = sorted({*quest.completion_history, quest.completed_date})
        return True
    return False


def apply_completion(quest: Quest, day: date) -> bool:
    """
    Mark the quest done on `day`.

    Idempotent: returns False and changes nothing if it was already done.
    The legacy completed/completed_date pair tracks the newest completion.
    """
    adopt_legacy_completion(quest)
    if day in quest.completion_history:
        return False

    history = set(quest.completion_history)
    last_completed = max(history) if history else quest.completed_date

    quest.streak = streak_after_completion(quest.streak, last_completed, history, day)

    history.add(day)
    quest.completion_history = sorted(history)

    if last_completed is None or day >= last_completed:
        quest.completed = True
        quest.completed_date = day
    return True


def apply_uncompletion(quest: Quest, day: date) -> bool:
    """
    Remove the completion for `day`.

    Returns False (no-op) if the quest was not done that day. Undoing the
    newest completion clears the `completed` flag and moves completed_date
    back to the previous completion.
    """
    adopt_legacy_completion(quest)
    if day not in quest.completion_history:
        return False

    history = set(quest.completion_history)
    history.discard(day)
    last_completed = quest.completed_date or day

    quest.streak = streak_after_undo(quest.streak, last_completed, history, day)
    quest.completion_history = sorted(history)

    if day == last_completed:
        quest.completed = False
        quest.completed_date = max(history) if history else None
    return True


def reconcile_progress(quest: Quest, today: date) -> bool:
    """
    Lazy daily reset: progress from another day counts as zero.

    Nothing resets progress in the background; every read and operation
    reconciles first.
    """
    if quest.is_progressive and quest.progress_last_date != today and quest.progress_current:
        quest.progress_current = 0
        return True
    return False


def clamp_progress(value: int, target: int) -> int:
    """Keep progress within [0, target]."""
    return max(0, min(value, target))


def apply_progress(quest: Quest, value: int, today: date) -> None:
    """Set today's progress (clamped) and stamp progress_last_date."""
    quest.progress_current = clamp_progress(value, quest.progress_target)
    quest.progress_last_date = today


def is_target_reached(quest: Quest) -> bool:
    return quest.progress_current >= quest.progress_target


def count_completions(quests: Iterable[Quest], day: date) -> tuple[int, int]:
    """
    Snapshot of all quests for a DailyLog.

    Returns:
        (quests_total, quests_completed) for `day`
    """
    total = 0
    completed = 0
    for quest in quests:
        total += 1
        if is_completed_on_date(quest, day):
            completed += 1
    return total, completed
