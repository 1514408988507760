"""
Store write failures reach the caller unchanged and are not retried.
"""

import pytest
import pytest_asyncio
from tortoise.exceptions import OperationalError

from lifetracker.core.clock import Clock
from lifetracker.core.use_cases.complete_quest import CompleteQuestUseCase
from lifetracker.core.use_cases.update_progress import UpdateProgressUseCase
from lifetracker.storage import DocumentStore, QuestRepository


class BrokenDiskStore(DocumentStore):
    """Reads work; every save fails once `broken` is set."""

    def __init__(self):
        self.broken = False
        self.save_calls = 0
        self.error = OperationalError("disk I/O error")

    async def save(self, name, document):
        if not self.broken:
            return await super().save(name, document)
        self.save_calls += 1
        raise self.error


@pytest_asyncio.fixture
async def broken_store(db) -> BrokenDiskStore:
    return BrokenDiskStore()


@pytest.mark.asyncio
async def test_complete_propagates_write_failure(broken_store, clock):
    quest = await QuestRepository(broken_store, clock=clock).add("daily", {"title": "Walk"})
    broken_store.broken = True

    with pytest.raises(OperationalError) as exc_info:
        await CompleteQuestUseCase(broken_store, clock).execute(quest.id)

    assert exc_info.value is broken_store.error
    assert broken_store.save_calls == 1

    broken_store.broken = False
    stored = await QuestRepository(broken_store).find_by_id(quest.id)
    assert stored.completion_history == []


@pytest.mark.asyncio
async def test_increment_propagates_write_failure(broken_store, clock):
    quest = await QuestRepository(broken_store, clock=clock).add(
        "daily", {"title": "Pushups", "is_progressive": True, "progress_target": 3}
    )
    broken_store.broken = True

    with pytest.raises(OperationalError) as exc_info:
        await UpdateProgressUseCase(broken_store, clock).increment(quest.id)

    assert exc_info.value is broken_store.error
    assert broken_store.save_calls == 1

    broken_store.broken = False
    stored = await QuestRepository(broken_store).find_by_id(quest.id)
    assert stored.progress_current == 0


def test_clock_is_abstract():
    with pytest.raises(TypeError):
        Clock()
