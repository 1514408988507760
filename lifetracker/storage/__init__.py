"""Storage layer - dumb CRUD repositories without business logic."""

from .daily_log_repo import DailyLogRepository
from .document_store import DocumentStore
from .quest_repo import QuestRepository
from .reminder_repo import ReminderRepository
from .settings_repo import SettingsRepository

__all__ = [
    "DailyLogRepository",
    "DocumentStore",
    "QuestRepository",
    "ReminderRepository",
    "SettingsRepository",
]
