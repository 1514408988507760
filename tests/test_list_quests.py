from datetime import timedelta

import pytest

from lifetracker.core.domain.timeline_rules import ViewContext
from lifetracker.core.schemas import Cadence
from lifetracker.core.use_cases.check_in import CheckInUseCase
from lifetracker.core.use_cases.complete_quest import CompleteQuestUseCase
from lifetracker.core.use_cases.list_quests import ListQuestsUseCase
from lifetracker.core.use_cases.skip_quest import SkipQuestUseCase
from lifetracker.storage import QuestRepository


@pytest.mark.asyncio
async def test_today_list_uses_checked_in_energy(store, clock):
    repo = QuestRepository(store, clock=clock)
    hard = await repo.add("daily", {"title": "Run 5k", "energy_required": "Energetic"})
    easy = await repo.add("daily", {"title": "Stretch", "energy_required": "Down"})
    listing = ListQuestsUseCase(store, clock)

    # Not checked in: middle energy
    assert [q.id for q in await listing.today_quests()] == [easy.id]

    await CheckInUseCase(store, clock).set_today_energy("Energetic")
    assert [q.id for q in await listing.today_quests()] == [hard.id, easy.id]

    # Yesterday's check-in does not carry over
    clock.advance(days=1)
    assert [q.id for q in await listing.today_quests()] == [easy.id]


@pytest.mark.asyncio
async def test_today_list_hides_done_and_skipped(store, clock):
    repo = QuestRepository(store, clock=clock)
    done = await repo.add("daily", {"title": "Journal"})
    skipped = await repo.add("daily", {"title": "Gym"})
    pending = await repo.add("weekly", {"title": "Laundry"})
    await CompleteQuestUseCase(store, clock).execute(done.id)
    await SkipQuestUseCase(store, clock).execute(skipped.id)
    listing = ListQuestsUseCase(store, clock)

    assert [q.id for q in await listing.today_quests()] == [pending.id]
    assert [q.id for q in await listing.today_quests(cadence="daily")] == []
    assert [q.id for q in await listing.today_quests(include_completed=True)] == [
        done.id,
        pending.id,
    ]

    clock.advance(days=1)
    assert [q.id for q in await listing.today_quests(cadence="daily")] == [done.id, skipped.id]


@pytest.mark.asyncio
async def test_today_list_reconciles_progress_without_writing(store, clock):
    yesterday = clock.today() - timedelta(days=1)
    quest = await QuestRepository(store, clock=clock).add(
        "daily",
        {
            "title": "Read",
            "is_progressive": True,
            "progress_target": 30,
            "progress_current": 12,
            "progress_last_date": yesterday.isoformat(),
        },
    )

    listed = await ListQuestsUseCase(store, clock).today_quests()

    assert listed[0].progress_current == 0
    assert (await QuestRepository(store).find_by_id(quest.id)).progress_current == 12


@pytest.mark.asyncio
async def test_timeline_shows_date_specific_state(store, clock):
    repo = QuestRepository(store, clock=clock)
    quest = await repo.add("daily", {"title": "Walk", "time_slot": "Morning"})
    loose = await repo.add("daily", {"title": "Tidy"})
    await repo.add("weekly", {"title": "Plan week"})
    yesterday = clock.today() - timedelta(days=1)
    await CompleteQuestUseCase(store, clock).execute(quest.id, yesterday)
    listing = ListQuestsUseCase(store, clock)

    context = ViewContext(view_date=clock.today())
    today_views = await listing.for_date(context)
    past_views = await listing.for_date(context.navigate(-1))

    assert [(v.quest.id, v.completed) for v in today_views] == [(quest.id, False), (loose.id, False)]
    assert [(v.quest.id, v.completed) for v in past_views] == [(quest.id, True), (loose.id, False)]

    by_slot = await listing.by_slot(context)
    assert [v.quest.id for v in by_slot["Morning"]] == [quest.id]
    assert [v.quest.id for v in by_slot["Anytime"]] == [loose.id]

    weekly = await listing.for_date(context.with_cadence(Cadence.weekly))
    assert [v.quest.title for v in weekly] == ["Plan week"]


def test_view_context_navigation(clock):
    context = ViewContext(view_date=clock.today())

    assert context.navigate(-1).navigate(1) == context
    assert context.is_today(clock.today())
    assert not context.navigate(1).is_today(clock.today())
    assert context.with_cadence("monthly").cadence is Cadence.monthly


@pytest.mark.asyncio
async def test_timeline_progress_label_only_counts_today(store, clock):
    repo = QuestRepository(store, clock=clock)
    await repo.add(
        "daily",
        {
            "title": "Read",
            "is_progressive": True,
            "progress_target": 8,
            "progress_current": 3,
            "progress_unit": "pages",
            "progress_last_date": clock.today().isoformat(),
        },
    )
    await repo.add("daily", {"title": "Walk"})
    context = ViewContext(view_date=clock.today())
    listing = ListQuestsUseCase(store, clock)

    today_views = await listing.for_date(context)
    past_views = await listing.for_date(context.navigate(-1))

    assert [v.progress_label for v in today_views] == ["3/8 pages", None]
    assert [v.progress_label for v in past_views] == ["0/8 pages", None]
