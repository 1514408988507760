"""
Recompute every DailyLog snapshot from quest completion histories.
Run: python -m lifetracker.scripts.recalc_daily_logs
"""

import asyncio
import logging

from tortoise import Tortoise

from lifetracker.core.domain.completion_rules import adopt_legacy_completion
from lifetracker.core.use_cases.sync_daily_log import SyncDailyLogUseCase
from lifetracker.database.config import TORTOISE_ORM
from lifetracker.storage import (
    DailyLogRepository,
    DocumentStore,
    QuestRepository,
    SettingsRepository,
)

logger = logging.getLogger(__name__)


async def recalculate_all_logs(store: DocumentStore) -> int:
    """
    Recompute counts for every logged or completed date.

    Returns:
        Number of DailyLogs rewritten
    """
    settings_repo = SettingsRepository(store)
    quest_repo = QuestRepository(store, settings_repo)
    daily_log_repo = DailyLogRepository(store)
    sync = SyncDailyLogUseCase(quest_repo, daily_log_repo, settings_repo)

    quests = await quest_repo.list_all()
    migrated = 0
    for partition in quests.values():
        for quest in partition:
            if adopt_legacy_completion(quest):
                migrated += 1
    if migrated:
        await quest_repo.save_all(quests)
        print(f"Copied {migrated} legacy completion(s) into completion_history")

    days = set((await daily_log_repo.load_all()).keys())
    for partition in quests.values():
        for quest in partition:
            days.update(quest.completion_history)

    print(f"Found {len(days)} days to recalculate")
    for day in sorted(days):
        before = await daily_log_repo.get(day)
        log = await sync.execute(day)
        old = f"{before.quests_completed}/{before.quests_total}" if before else "-"
        print(f"  {day}: {old} -> {log.quests_completed}/{log.quests_total}")

    return len(days)


async def main() -> None:
    await Tortoise.init(config=TORTOISE_ORM)
    await Tortoise.generate_schemas()
    try:
        count = await recalculate_all_logs(DocumentStore())
    finally:
        await Tortoise.close_connections()
    print(f"\nDone! {count} daily logs recalculated")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    asyncio.run(main())
