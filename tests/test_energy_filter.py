from datetime import date, timedelta

import pytest

from lifetracker.core.domain.energy_rules import (
    filter_quests,
    is_quest_visible,
    resolve_energy_rank,
)
from lifetracker.core.schemas import Quest

TODAY = date(2025, 3, 12)
CATEGORIES = ["Energetic", "Average", "Down"]


def quest(energy, quest_id: int = 1, **kwargs) -> Quest:
    return Quest(id=quest_id, title=f"Quest {quest_id}", energy_required=energy, **kwargs)


@pytest.mark.parametrize(
    "current, visible",
    [("Energetic", True), ("Average", True), ("Down", False)],
)
def test_average_quest_visibility(current, visible):
    assert is_quest_visible(quest("Average"), current, CATEGORIES, TODAY) is visible


@pytest.mark.parametrize("current", CATEGORIES + [None])
def test_any_quest_always_visible(current):
    assert is_quest_visible(quest("Any"), current, CATEGORIES, TODAY)


def test_raising_energy_never_hides_a_quest():
    quests = [quest(energy, i) for i, energy in enumerate(CATEGORIES + ["Any"])]
    previous: set[int] = set()
    for current in reversed(CATEGORIES):
        visible = {q.id for q in filter_quests(quests, current, TODAY, CATEGORIES)}
        assert previous <= visible
        previous = visible
    assert previous == {0, 1, 2, 3}


def test_scenario_high_average_low():
    categories = ["High", "Average", "Low"]
    q = quest("Average")

    assert not is_quest_visible(q, "Low", categories, TODAY)
    assert is_quest_visible(q, "High", categories, TODAY)
    assert is_quest_visible(q, "Average", categories, TODAY)


def test_skipped_quest_reappears_next_day():
    q = quest("Any", skipped_date=TODAY)

    assert filter_quests([q], "Energetic", TODAY, CATEGORIES) == []
    assert filter_quests([q], "Energetic", TODAY + timedelta(days=1), CATEGORIES) == [q]


def test_unset_energy_defaults_to_middle_category():
    assert resolve_energy_rank(None, CATEGORIES) == 1
    assert resolve_energy_rank("Sleepy", CATEGORIES) == 1

    assert is_quest_visible(quest("Down"), None, CATEGORIES, TODAY)
    assert not is_quest_visible(quest("Energetic"), None, CATEGORIES, TODAY)


def test_multi_select_energy_matches_any_listed_level():
    q = quest(["Energetic", "Down"])

    assert is_quest_visible(q, "Down", CATEGORIES, TODAY)
    assert is_quest_visible(q, "Average", CATEGORIES, TODAY)


def test_unconfigured_required_energy_needs_exact_match_or_top_day():
    q = quest("Focused")

    assert not is_quest_visible(q, "Average", CATEGORIES, TODAY)
    assert is_quest_visible(q, "Energetic", CATEGORIES, TODAY)


def test_filter_keeps_original_order():
    quests = [quest("Down", 3), quest("Any", 1), quest("Average", 2)]

    result = filter_quests(quests, "Average", TODAY, CATEGORIES)

    assert [q.id for q in result] == [3, 1, 2]
