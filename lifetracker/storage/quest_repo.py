"""
Quest Repository - dumb CRUD over the quests document.

AICODE-NOTE: The repository only reads and writes quests. Completion,
streak and progress rules live in core/domain and core/use_cases.

Unknown ids are a no-op (None / False), never an error: a repeated tap on a
quest deleted a moment ago must not crash the caller.
"""

import logging
from typing import Any

from pydantic import ValidationError

from lifetracker.core.clock import Clock, SystemClock
from lifetracker.core.schemas import CADENCES, Cadence, Quest
from lifetracker.storage.document_store import QUESTS, DocumentStore
from lifetracker.storage.settings_repo import SettingsRepository

logger = logging.getLogger(__name__)

QuestBook = dict[Cadence, list[Quest]]

# Fields a patch can never change (cadence moves go through move())
_IMMUTABLE_FIELDS = ("id", "cadence")


class QuestRepository:
    def __init__(
        self,
        store: DocumentStore,
        settings_repo: SettingsRepository | None = None,
        clock: Clock | None = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.settings_repo = settings_repo or SettingsRepository(store, self.clock)

    async def list_all(self) -> QuestBook:
        """
        Load all quests, partitioned by cadence.

        Missing fields take their defaults. A record that still does not
        validate is skipped with a warning so the other quests stay usable.
        """
        document = await self.store.load(QUESTS)
        quests: QuestBook = {}
        for cadence in CADENCES:
            quests[cadence] = []
            for item in document.get(cadence.value) or []:
                try:
                    quests[cadence].append(
                        Quest.model_validate({**item, "cadence": cadence.value})
                    )
                except (TypeError, ValidationError) as e:
                    logger.warning(f"Skipping unreadable {cadence.value} quest {item!r}: {e}")
        return quests

    async def list_flat(self) -> list[Quest]:
        """All quests in partition order (daily, weekly, monthly)."""
        quests = await self.list_all()
        return [quest for cadence in CADENCES for quest in quests[cadence]]

    async def save_all(self, quests: QuestBook) -> None:
        await self.store.save(
            QUESTS,
            {
                cadence.value: [quest.to_document() for quest in quests.get(cadence, [])]
                for cadence in CADENCES
            },
        )

    async def add(self, cadence: Cadence | str, quest: Quest | dict[str, Any]) -> Quest:
        """
        Create a quest in a partition.

        Args:
            cadence: Target partition
            quest: Draft quest (id and completion state are ignored)

        Returns:
            The stored quest with its new id

        Raises:
            pydantic.ValidationError: draft is invalid (e.g. empty title)
        """
        cadence = Cadence(cadence)
        data = quest.to_document() if isinstance(quest, Quest) else dict(quest)
        data.update(
            cadence=cadence.value,
            created=self.clock.today().isoformat(),
            completed=False,
            completed_date=None,
            completion_history=[],
            streak=0,
            skipped_date=None,
        )
        # Validate before consuming an id
        new_quest = Quest.model_validate(data)
        new_quest.id = await self.settings_repo.next_id()

        quests = await self.list_all()
        quests[cadence].append(new_quest)
        await self.save_all(quests)

        logger.info(f"Quest {new_quest.id} '{new_quest.title}' added to {cadence.value}")
        return new_quest

    async def update(
        self, cadence: Cadence | str, quest_id: int, patch: dict[str, Any]
    ) -> Quest | None:
        """Apply a partial update. Returns None if the id is not in the partition."""
        cadence = Cadence(cadence)
        quests = await self.list_all()
        partition = quests[cadence]

        for index, quest in enumerate(partition):
            if quest.id == quest_id:
                changes = {k: v for k, v in patch.items() if k not in _IMMUTABLE_FIELDS}
                updated = Quest.model_validate({**quest.to_document(), **changes})
                partition[index] = updated
                await self.save_all(quests)
                return updated

        logger.debug(f"Quest {quest_id} not found in {cadence.value}, update skipped")
        return None

    async def delete(self, cadence: Cadence | str, quest_id: int) -> bool:
        cadence = Cadence(cadence)
        quests = await self.list_all()
        partition = quests[cadence]

        for index, quest in enumerate(partition):
            if quest.id == quest_id:
                del partition[index]
                await self.save_all(quests)
                logger.info(f"Quest {quest_id} deleted from {cadence.value}")
                return True
        return False

    async def locate(self, quest_id: int) -> tuple[Cadence, Quest] | None:
        """Find a quest and its partition (linear scan; quest counts are small)."""
        quests = await self.list_all()
        for cadence in CADENCES:
            for quest in quests[cadence]:
                if quest.id == quest_id:
                    return cadence, quest
        return None

    async def find_by_id(self, quest_id: int) -> Quest | None:
        found = await self.locate(quest_id)
        return found[1] if found else None

    async def save(self, quest: Quest) -> Quest | None:
        """Replace a stored quest with a mutated copy (matched by id and cadence)."""
        quests = await self.list_all()
        partition = quests[quest.cadence]

        for index, stored in enumerate(partition):
            if stored.id == quest.id:
                partition[index] = quest
                await self.save_all(quests)
                return quest
        return None

    async def move(self, quest_id: int, cadence: Cadence | str) -> Quest | None:
        """
        Move a quest to another partition.

        Cadence is immutable, so this is delete + recreate: the new quest gets
        a fresh id and starts with an empty completion history.
        """
        cadence = Cadence(cadence)
        found = await self.locate(quest_id)
        if found is None:
            return None

        current_cadence, quest = found
        if current_cadence == cadence:
            return quest

        await self.delete(current_cadence, quest_id)
        return await self.add(cadence, quest)
