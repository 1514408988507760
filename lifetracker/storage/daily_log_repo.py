"""
DailyLog Repository - dumb CRUD over the daily_logs document.

AICODE-NOTE: Logs are keyed by YYYY-MM-DD and created lazily on first
write. No business logic (counts, streaks) here.
"""

import logging
from datetime import date

from pydantic import ValidationError

from lifetracker.core.schemas import DailyLog
from lifetracker.storage.document_store import DAILY_LOGS, DocumentStore

logger = logging.getLogger(__name__)

DailyLogs = dict[date, DailyLog]


class DailyLogRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def load_all(self) -> DailyLogs:
        """Load all daily logs keyed by date."""
        document = await self.store.load(DAILY_LOGS)
        logs: DailyLogs = {}
        for key, entry in document.items():
            try:
                log_date = date.fromisoformat(key)
            except ValueError:
                logger.warning(f"Skipping daily log with malformed key '{key}'")
                continue
            try:
                log = DailyLog.model_validate(entry or {})
            except ValidationError as e:
                logger.warning(f"Skipping unreadable daily log for {key}: {e}")
                continue
            log.date = log_date
            logs[log_date] = log
        return logs

    async def save_all(self, logs: DailyLogs) -> None:
        await self.store.save(
            DAILY_LOGS,
            {log_date.isoformat(): log.to_document() for log_date, log in sorted(logs.items())},
        )

    async def get(self, log_date: date) -> DailyLog | None:
        """Get the DailyLog for a date."""
        return (await self.load_all()).get(log_date)

    async def get_or_new(self, log_date: date) -> DailyLog:
        """Get the DailyLog for a date or an unsaved empty one."""
        return await self.get(log_date) or DailyLog(date=log_date)

    async def get_range(self, start: date, end: date) -> DailyLogs:
        """Logs with start <= date <= end."""
        return {d: log for d, log in (await self.load_all()).items() if start <= d <= end}

    async def save(self, log: DailyLog) -> DailyLog:
        """Upsert one DailyLog (log.date is the key)."""
        if log.date is None:
            raise ValueError("DailyLog.date is required to save a log")
        logs = await self.load_all()
        logs[log.date] = log
        await self.save_all(logs)
        return log
