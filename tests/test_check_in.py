from datetime import datetime, timedelta

import pytest

from lifetracker.core.use_cases.check_in import CheckInUseCase
from lifetracker.storage import DailyLogRepository, SettingsRepository


@pytest.mark.asyncio
async def test_set_today_energy(store, clock):
    result = await CheckInUseCase(store, clock).set_today_energy("Down")

    assert result.success is True
    settings = await SettingsRepository(store).load()
    assert settings.today_energy == "Down"
    assert settings.today_date == clock.today()
    assert (await DailyLogRepository(store).get(clock.today())).energy_level == "Down"


@pytest.mark.asyncio
async def test_unknown_energy_is_rejected(store, clock):
    result = await CheckInUseCase(store, clock).set_today_energy("Hyper")

    assert result.success is False
    assert "Energetic, Average, Down" in result.error_message
    assert (await SettingsRepository(store).load()).today_energy is None


@pytest.mark.asyncio
async def test_mood_entries_map_to_time_slots(store, clock):
    check_in = CheckInUseCase(store, clock)

    await check_in.add_mood_entry(hour=7, energy="Energetic")
    clock.set(datetime.combine(clock.today(), datetime.min.time()).replace(hour=22))
    result = await check_in.add_mood_entry(energy="Down")

    entries = result.daily_log.energy_entries
    assert [(e.hour, e.time_slot, e.energy) for e in entries] == [
        (7, "Morning", "Energetic"),
        (22, "Night", "Down"),
    ]


@pytest.mark.asyncio
async def test_mood_entry_validation(store, clock):
    check_in = CheckInUseCase(store, clock)

    bad_hour = await check_in.add_mood_entry(hour=24, energy="Average")
    bad_energy = await check_in.add_mood_entry(hour=9, energy="Meh")

    assert bad_hour.success is False
    assert bad_hour.error_message == "Hour must be 0-23"
    assert bad_energy.success is False
    assert await DailyLogRepository(store).get(clock.today()) is None


@pytest.mark.asyncio
async def test_reflections(store, clock):
    check_in = CheckInUseCase(store, clock)

    empty = await check_in.save_reflection("   ")
    assert empty.success is False
    assert empty.error_message == "Reflection cannot be empty"

    for text in ("Slow start", "Good focus", "Tired"):
        await check_in.save_reflection(text)
        clock.advance(days=1)

    recent = await check_in.recent_reflections(limit=2)

    assert [r.text for r in recent] == ["Tired", "Good focus"]
    assert recent[0].date == clock.today() - timedelta(days=1)
    assert recent[0].written_at is not None


@pytest.mark.asyncio
async def test_log_reading(store, clock):
    check_in = CheckInUseCase(store, clock)

    nothing = await check_in.log_reading(None, None)
    assert nothing.success is True
    assert nothing.daily_log is None

    result = await check_in.log_reading(
        None, {"pages_read": 42, "time_spent": 1800, "current_book": "Dune"}
    )
    assert result.daily_log.reading.pages_read == 42
    assert result.daily_log.reading.last_updated == clock.now()

    invalid = await check_in.log_reading(None, {"pages_read": -5})
    assert invalid.success is False


@pytest.mark.asyncio
async def test_check_in_keeps_quest_counts(store, clock):
    logs = DailyLogRepository(store)
    log = await logs.get_or_new(clock.today())
    log.quests_total, log.quests_completed = 4, 2
    await logs.save(log)

    await CheckInUseCase(store, clock).save_reflection("Fine day")

    saved = await logs.get(clock.today())
    assert (saved.quests_completed, saved.quests_total) == (2, 4)
    assert saved.reflection == "Fine day"


@pytest.mark.asyncio
async def test_persistent_notes(store, clock):
    check_in = CheckInUseCase(store, clock)

    settings = await check_in.save_persistent_notes("  Drink water  ")
    assert settings.persistent_notes == "Drink water"

    cleared = await check_in.save_persistent_notes("")
    assert cleared.persistent_notes is None
