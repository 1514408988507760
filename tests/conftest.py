import os
import sys
from datetime import date

import pytest
import pytest_asyncio
from tortoise import Tortoise

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from lifetracker.core.clock import FixedClock  # noqa: E402
from lifetracker.storage import DocumentStore  # noqa: E402

# Wednesday
TODAY = date(2025, 3, 12)


@pytest_asyncio.fixture(scope="function")
async def db() -> None:
    """Lightweight in-memory DB per test."""
    await Tortoise.init(
        db_url="sqlite://:memory:", modules={"models": ["lifetracker.database.models"]}
    )
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest.fixture
def clock() -> FixedClock:
    """Noon on TODAY."""
    return FixedClock(TODAY)


@pytest_asyncio.fixture
async def store(db) -> DocumentStore:
    return DocumentStore()
