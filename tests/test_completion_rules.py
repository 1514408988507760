"""
Per-quest completion state machine: history, streaks, progress.
"""

from datetime import date, timedelta

import pytest

from lifetracker.core.domain.completion_rules import (
    apply_completion,
    apply_progress,
    apply_uncompletion,
    clamp_progress,
    count_completions,
    is_completed_on_date,
    reconcile_progress,
)
from lifetracker.core.schemas import Quest

D = date(2025, 3, 12)


def day(offset: int) -> date:
    return D + timedelta(days=offset)


def make_quest(**kwargs) -> Quest:
    return Quest(id=1, title="Read 20 pages", **kwargs)


def test_complete_is_idempotent():
    once = make_quest()
    apply_completion(once, D)

    twice = make_quest()
    assert apply_completion(twice, D) is True
    assert apply_completion(twice, D) is False

    assert twice.completion_history == once.completion_history == [D]
    assert twice.streak == once.streak == 1
    assert twice.completed is once.completed is True
    assert twice.completed_date == D


def test_streak_grows_on_consecutive_days():
    quest = make_quest()
    apply_completion(quest, day(-1))
    assert quest.streak == 1

    apply_completion(quest, D)
    assert quest.streak == 2


def test_streak_resets_after_gap():
    quest = make_quest()
    apply_completion(quest, day(-2))
    apply_completion(quest, D)

    assert quest.streak == 1
    assert quest.completion_history == [day(-2), D]


def test_undo_newest_completion_shortens_streak():
    quest = make_quest()
    for offset in (-2, -1, 0):
        apply_completion(quest, day(offset))
    assert quest.streak == 3

    assert apply_uncompletion(quest, D) is True

    assert quest.streak == 2
    assert quest.completed is False
    assert quest.completed_date == day(-1)
    assert not is_completed_on_date(quest, D)


def test_undo_inside_run_cuts_streak():
    quest = make_quest()
    for offset in (-2, -1, 0):
        apply_completion(quest, day(offset))

    apply_uncompletion(quest, day(-1))

    assert quest.streak == 1
    assert quest.completed is True
    assert quest.completed_date == D


def test_undo_when_not_completed_is_noop():
    quest = make_quest()
    apply_completion(quest, day(-1))

    assert apply_uncompletion(quest, D) is False
    assert quest.completion_history == [day(-1)]
    assert quest.streak == 1


def test_backfill_joins_runs():
    quest = make_quest()
    apply_completion(quest, day(-2))
    apply_completion(quest, D)
    assert quest.streak == 1

    apply_completion(quest, day(-1))

    assert quest.streak == 3
    # Back-filling an older day never moves the legacy projection backwards
    assert quest.completed_date == D


def test_legacy_completion_is_recognised():
    quest = make_quest(completed=True, completed_date=day(-1), streak=5)

    assert is_completed_on_date(quest, day(-1))
    assert not is_completed_on_date(quest, D)


def test_legacy_streak_survives_first_history_write():
    quest = make_quest(completed=True, completed_date=day(-1), streak=5)

    apply_completion(quest, D)

    assert quest.completion_history == [day(-1), D]
    assert quest.streak == 6

    apply_uncompletion(quest, D)
    assert quest.streak == 5
    assert quest.completed_date == day(-1)


def test_count_completions_covers_all_quests():
    done = make_quest()
    apply_completion(done, D)
    other_day = Quest(id=2, title="Walk")
    apply_completion(other_day, day(-1))
    pending = Quest(id=3, title="Stretch")

    assert count_completions([done, other_day, pending], D) == (3, 1)
    assert count_completions([], D) == (0, 0)


@pytest.mark.parametrize(
    "value, target, expected",
    [(-3, 10, 0), (0, 10, 0), (7, 10, 7), (10, 10, 10), (42, 10, 10)],
)
def test_clamp_progress(value, target, expected):
    assert clamp_progress(value, target) == expected


def test_progress_stays_in_bounds_for_any_sequence():
    quest = make_quest(is_progressive=True, progress_target=3)
    for delta in (1, 1, 1, 1, 1, -1, -1, -1, -1, -1, -1, 1):
        apply_progress(quest, quest.progress_current + delta, D)
        assert 0 <= quest.progress_current <= quest.progress_target
    assert quest.progress_current == 1


def test_reconcile_resets_progress_from_another_day():
    quest = make_quest(
        is_progressive=True, progress_target=10, progress_current=3, progress_last_date=day(-1)
    )

    assert reconcile_progress(quest, D) is True
    assert quest.progress_current == 0

    apply_progress(quest, quest.progress_current + 1, D)
    assert quest.progress_current == 1
    assert reconcile_progress(quest, D) is False
