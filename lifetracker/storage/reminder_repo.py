"""
Reminder Repository - dumb CRUD over the reminders document.
"""

import logging
from typing import Any

from pydantic import ValidationError

from lifetracker.core.schemas import Reminder
from lifetracker.storage.document_store import REMINDERS, DocumentStore
from lifetracker.storage.settings_repo import SettingsRepository

logger = logging.getLogger(__name__)


class ReminderRepository:
    def __init__(self, store: DocumentStore, settings_repo: SettingsRepository | None = None):
        self.store = store
        self.settings_repo = settings_repo or SettingsRepository(store)

    async def load_all(self) -> list[Reminder]:
        """Stored reminders; unreadable records are skipped with a warning."""
        document = await self.store.load(REMINDERS)
        reminders = []
        for item in document.get("reminders") or []:
            try:
                reminders.append(Reminder.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable reminder {item!r}: {e}")
        return reminders

    async def save_all(self, reminders: list[Reminder]) -> None:
        await self.store.save(
            REMINDERS, {"reminders": [reminder.to_document() for reminder in reminders]}
        )

    async def get(self, reminder_id: int) -> Reminder | None:
        for reminder in await self.load_all():
            if reminder.id == reminder_id:
                return reminder
        return None

    async def add(self, reminder: Reminder | dict[str, Any]) -> Reminder:
        """
        Create a reminder (active, never triggered).

        Raises:
            pydantic.ValidationError: invalid time, title or repeat days
        """
        data = reminder.to_document() if isinstance(reminder, Reminder) else dict(reminder)
        data.update(active=True, last_triggered=None)
        new_reminder = Reminder.model_validate(data)
        new_reminder.id = await self.settings_repo.next_id()

        reminders = await self.load_all()
        reminders.append(new_reminder)
        await self.save_all(reminders)

        logger.info(f"Reminder {new_reminder.id} '{new_reminder.title}' at {new_reminder.time} added")
        return new_reminder

    async def update(self, reminder_id: int, patch: dict[str, Any]) -> Reminder | None:
        reminders = await self.load_all()
        for index, reminder in enumerate(reminders):
            if reminder.id == reminder_id:
                changes = {k: v for k, v in patch.items() if k != "id"}
                updated = Reminder.model_validate({**reminder.to_document(), **changes})
                reminders[index] = updated
                await self.save_all(reminders)
                return updated
        return None

    async def delete(self, reminder_id: int) -> bool:
        reminders = await self.load_all()
        remaining = [reminder for reminder in reminders if reminder.id != reminder_id]
        if len(remaining) == len(reminders):
            return False
        await self.save_all(remaining)
        logger.info(f"Reminder {reminder_id} deleted")
        return True
