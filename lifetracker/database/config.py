"""
Database configuration (Tortoise ORM).
Supports SQLite (dev) and PostgreSQL (through DATABASE_URL).
"""

import logging

from lifetracker.config import config

logger = logging.getLogger(__name__)


def get_tortoise_db_url() -> str:
    """Get database URL with the scheme Tortoise ORM expects."""
    url = config.database_url

    logger.info(
        f"Database URL scheme: {url.split('://')[0] if '://' in url else 'unknown'}"
    )

    return url


TORTOISE_ORM = {
    "connections": {"default": get_tortoise_db_url()},
    "apps": {
        "models": {
            "models": ["lifetracker.database.models"],
            "default_connection": "default",
        },
    },
}
