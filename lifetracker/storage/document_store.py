"""
Document Store - dumb load/save of named collections.

AICODE-NOTE: The store holds no business logic and no schema. Repositories
turn documents into schemas; write failures (ORM exceptions) propagate to
the caller unmodified and are never retried here.
"""

import logging
from typing import Any

from lifetracker.database.models import CollectionDocument

logger = logging.getLogger(__name__)

QUESTS = "quests"
DAILY_LOGS = "daily_logs"
USER_SETTINGS = "user_settings"
REMINDERS = "reminders"

COLLECTIONS: tuple[str, ...] = (QUESTS, DAILY_LOGS, USER_SETTINGS, REMINDERS)


class DocumentStore:
    """Key-value persistence of collection documents (last write wins)."""

    async def load(self, name: str) -> dict[str, Any]:
        """Load a collection document; an unknown collection is an empty dict."""
        record = await CollectionDocument.get_or_none(name=name)
        if record is None or not isinstance(record.data, dict):
            return {}
        return record.data

    async def save(self, name: str, document: dict[str, Any]) -> None:
        """Replace a collection document."""
        record = await CollectionDocument.get_or_none(name=name)
        if record is None:
            await CollectionDocument.create(name=name, data=document)
        else:
            record.data = document
            await record.save()
        logger.debug(f"Collection '{name}' saved")

    async def clear(self, name: str) -> None:
        """Reset a collection to an empty document."""
        await self.save(name, {})
