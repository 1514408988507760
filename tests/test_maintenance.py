"""
Host tick and the DailyLog recalculation script.
"""

from datetime import datetime, timedelta

import pytest

from lifetracker.config import config
from lifetracker.core.schemas import DailyLog
from lifetracker.main import tick
from lifetracker.scripts.recalc_daily_logs import recalculate_all_logs
from lifetracker.services import reminders
from lifetracker.services.backup import BackupService
from lifetracker.storage import DailyLogRepository, QuestRepository
from lifetracker.storage.document_store import QUESTS


@pytest.mark.asyncio
async def test_tick_fires_reminders_and_backs_up_once(store, clock, tmp_path, monkeypatch):
    monkeypatch.setattr(config, "BACKUP_DIR", str(tmp_path))
    await reminders.create_reminder(store, "Lunch", "12:00")

    first = await tick(store, clock)
    second = await tick(store, clock)

    assert first == {"reminders_due": 1, "backups_created": 1}
    assert second == {"reminders_due": 0, "backups_created": 0}
    assert [b.filename for b in BackupService(store, tmp_path, clock).list_backups()] == [
        f"lifetracker_auto_{clock.today():%Y%m%d}.json"
    ]


@pytest.mark.asyncio
async def test_recalculate_rebuilds_counts_from_history(store, clock, capsys):
    today = clock.today()
    yesterday = today - timedelta(days=1)
    await store.save(
        QUESTS,
        {
            "daily": [
                {"id": 1, "title": "Walk", "completion_history": [yesterday.isoformat()]},
                {
                    "id": 2,
                    "title": "Legacy",
                    "completed": True,
                    "completed_date": today.isoformat(),
                },
            ]
        },
    )
    logs = DailyLogRepository(store)
    await logs.save(
        DailyLog(date=today, quests_total=9, quests_completed=9, energy_level="Average")
    )

    count = await recalculate_all_logs(store)

    assert count == 2
    fixed = await logs.get(today)
    assert (fixed.quests_completed, fixed.quests_total) == (1, 2)
    assert fixed.energy_level == "Average"
    assert (await logs.get(yesterday)).quests_completed == 1

    legacy = await QuestRepository(store).find_by_id(2)
    assert legacy.completion_history == [today]
    assert "Copied 1 legacy completion(s)" in capsys.readouterr().out


def test_fixed_clock_starts_at_noon(clock):
    assert clock.now() == datetime.combine(clock.today(), datetime.min.time()).replace(hour=12)
