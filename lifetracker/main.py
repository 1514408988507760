"""
Life Tracker entry point: one host tick.

The host (reader plugin, cron, systemd timer) runs this once a minute:
initialise the database, fire due reminders, take the daily auto-backup.
"""

import asyncio
import logging

from tortoise import Tortoise

from lifetracker.config import config
from lifetracker.core.clock import Clock, SystemClock
from lifetracker.database.config import TORTOISE_ORM
from lifetracker.services import reminders
from lifetracker.services.backup import BackupService
from lifetracker.storage import DocumentStore

# Logging setup
logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def on_startup() -> None:
    """Initialise at start."""
    await Tortoise.init(config=TORTOISE_ORM)
    await Tortoise.generate_schemas()
    logger.info("Database initialized")


async def on_shutdown() -> None:
    """Close at stop."""
    await Tortoise.close_connections()
    logger.info("Database connections closed")


async def tick(store: DocumentStore, clock: Clock | None = None) -> dict[str, int]:
    """
    Run one host tick.

    Returns:
        Stats: {"reminders_due": N, "backups_created": 0|1}
    """
    clock = clock or SystemClock()
    due = await reminders.process_reminders(store, clock)
    for reminder in due:
        logger.info(f"Reminder: {reminder.title} ({reminder.time})")

    backup = await BackupService(store, clock=clock).auto_backup()
    return {"reminders_due": len(due), "backups_created": int(backup.success)}


async def main() -> None:
    logger.info(f"Starting Life Tracker tick in {config.ENVIRONMENT} mode...")
    await on_startup()
    try:
        stats = await tick(DocumentStore())
        logger.info(f"Tick done: {stats}")
    finally:
        await on_shutdown()


if __name__ == "__main__":
    asyncio.run(main())
