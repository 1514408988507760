"""
Settings Repository - dumb CRUD over the user_settings document.

AICODE-NOTE: No business logic here. Global streak rules live in
core/domain/gamification.py.
"""

from lifetracker.core.clock import Clock, SystemClock
from lifetracker.core.schemas import UserSettings
from lifetracker.storage.document_store import USER_SETTINGS, DocumentStore


class SettingsRepository:
    def __init__(self, store: DocumentStore, clock: Clock | None = None):
        self.store = store
        self.clock = clock or SystemClock()

    async def load(self) -> UserSettings:
        """Load settings; a fresh install gets the defaults."""
        return UserSettings.model_validate(await self.store.load(USER_SETTINGS))

    async def save(self, settings: UserSettings) -> UserSettings:
        await self.store.save(USER_SETTINGS, settings.to_document())
        return settings

    async def next_id(self) -> int:
        """
        Generate a unique sequential id shared by quests and reminders.

        The counter is seeded from the current time in milliseconds and
        persisted, so ids never repeat even after deletes.
        """
        settings = await self.load()
        last_id = settings.last_generated_id or int(self.clock.now().timestamp() * 1000)
        settings.last_generated_id = last_id + 1
        await self.save(settings)
        return settings.last_generated_id
