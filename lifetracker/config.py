"""
Life Tracker configuration.
Loads variables from the environment or a .env file.
"""

from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    # Database URL (if set, overrides the SQLite path)
    DATABASE_URL: str | None = None
    SQLITE_PATH: str = "lifetracker.sqlite3"

    # Environment (development | production)
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Backups
    BACKUP_DIR: str = "lifetracker_backups"
    MAX_AUTO_BACKUPS: int = 7

    # Analytics
    HEATMAP_WEEKS: int = 12

    # Defaults for a fresh install (index 0 is the highest energy).
    # NoDecode: env values reach parse_name_list as raw strings
    DEFAULT_ENERGY_CATEGORIES: Annotated[list[str], NoDecode] = ["Energetic", "Average", "Down"]
    DEFAULT_TIME_SLOTS: Annotated[list[str], NoDecode] = ["Morning", "Afternoon", "Evening", "Night"]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @field_validator("DEFAULT_ENERGY_CATEGORIES", "DEFAULT_TIME_SLOTS", mode="before")
    @classmethod
    def parse_name_list(cls, v: str | list[Any]) -> list[str]:
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                import json

                try:
                    return [str(x) for x in json.loads(v)]
                except json.JSONDecodeError:
                    pass
            return [x.strip() for x in v.split(",") if x.strip()]
        return v

    @property
    def database_url(self) -> str:
        """
        Get database URL.

        Priority:
        1. DATABASE_URL env var
        2. SQLite file (default)
        """
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            # Tortoise expects postgres://, hosting providers hand out postgresql://
            if url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgres://", 1)
            return url

        return f"sqlite://{self.SQLITE_PATH}"


config = Settings()
