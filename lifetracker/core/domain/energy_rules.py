"""
Energy Filter Domain Rules - which quests are visible at an energy level.

AICODE-NOTE: Pure functions WITHOUT store access.

Energy categories are ordered, index 0 = highest energy. A quest shows when
its required energy is the same or lower effort than the user's current
level; the top level shows everything. Raising the declared level never
hides a quest; the only other exclusion is a same-day skip.
"""

from collections.abc import Iterable, Sequence
from datetime import date

from lifetracker.core.domain.completion_rules import is_skipped_on
from lifetracker.core.schemas import ANY_ENERGY, Quest


def build_energy_index(energy_categories: Sequence[str]) -> dict[str, int]:
    """Map category name → rank (0 = highest energy)."""
    return {name: rank for rank, name in enumerate(energy_categories)}


def resolve_energy_rank(
    current_energy: str | None, energy_categories: Sequence[str]
) -> int:
    """
    Rank of the user's current energy.

    Unset or unknown energy defaults to the middle category.
    """
    index = build_energy_index(energy_categories)
    if current_energy in index:
        return index[current_energy]
    return len(energy_categories) // 2


def _required_levels(quest: Quest) -> list[str]:
    required = quest.energy_required
    if isinstance(required, str):
        required = [required]
    return [level for level in required if level]


def requires_any_energy(quest: Quest) -> bool:
    levels = _required_levels(quest)
    return not levels or ANY_ENERGY in levels


def matches_energy(
    quest: Quest,
    current_energy: str | None,
    energy_index: dict[str, int],
    current_rank: int,
) -> bool:
    """
    Energy part of the visibility rule.

    A required category that is not configured only matches by exact name
    (or on a top-energy day).
    """
    if requires_any_energy(quest):
        return True

    if current_rank == 0:
        return True

    for level in _required_levels(quest):
        if level == current_energy:
            return True
        rank = energy_index.get(level)
        if rank is not None and rank >= current_rank:
            return True
    return False


def is_quest_visible(
    quest: Quest,
    current_energy: str | None,
    energy_categories: Sequence[str],
    today: date,
) -> bool:
    """Visibility of a single quest on `today`."""
    if is_skipped_on(quest, today):
        return False

    index = build_energy_index(energy_categories)
    rank = resolve_energy_rank(current_energy, energy_categories)
    return matches_energy(quest, current_energy, index, rank)


def filter_quests(
    quests: Iterable[Quest],
    current_energy: str | None,
    today: date,
    energy_categories: Sequence[str],
) -> list[Quest]:
    """
    Select the quests visible for an energy level on a date.

    Args:
        quests: Candidate quests (any cadence)
        current_energy: The user's declared energy (None = not checked in)
        today: Date the view is for; quests skipped on it are excluded
        energy_categories: Ordered categories, index 0 = highest

    Returns:
        Quests in their original order
    """
    index = build_energy_index(energy_categories)
    rank = resolve_energy_rank(current_energy, energy_categories)

    return [
        quest
        for quest in quests
        if not is_skipped_on(quest, today)
        and matches_energy(quest, current_energy, index, rank)
    ]
