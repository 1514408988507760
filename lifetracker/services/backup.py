"""
Backup Service - snapshot, export and restore of all collections.

Backup file format (version 1):
    {
        "version": 1,
        "created_at": "YYYY-MM-DD HH:MM:SS",
        "timestamp": <unix seconds>,
        "data": {settings, persistent_notes, quests, logs, reminders}
    }

AICODE-NOTE: Files are written to a temp file and renamed into place, so a
crash mid-write never leaves a truncated backup. Import only reads files
inside BACKUP_DIR.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from lifetracker.config import config
from lifetracker.core.clock import Clock, SystemClock
from lifetracker.storage.document_store import (
    COLLECTIONS,
    DAILY_LOGS,
    QUESTS,
    REMINDERS,
    USER_SETTINGS,
    DocumentStore,
)

logger = logging.getLogger(__name__)

BACKUP_VERSION = 1
BACKUP_PREFIX = "lifetracker_"
AUTO_BACKUP_RE = re.compile(r"^lifetracker_auto_\d{8}\.json$")


@dataclass
class BackupResult:
    """Result of a backup operation."""

    success: bool
    message: str = ""
    path: Path | None = None


@dataclass
class BackupFile:
    filename: str
    path: Path
    created_at: str
    size: int


class BackupData(BaseModel):
    settings: dict[str, Any] | None = None
    persistent_notes: str | None = None
    quests: dict[str, list[dict[str, Any]]] | None = None
    logs: dict[str, dict[str, Any]] | None = None
    reminders: list[dict[str, Any]] | None = None


class BackupDocument(BaseModel):
    version: int
    created_at: str | None = None
    timestamp: int | None = None
    data: BackupData


def sanitize_filename(filename: str | None) -> str | None:
    """
    Strip path separators and ".." and force a .json suffix.

    Examples:
        >>> sanitize_filename("../etc/passwd")
        '__etc_passwd.json'
    """
    if not filename:
        return None
    sanitized = re.sub(r"[/\\]", "_", filename).replace("..", "_")
    if not sanitized.endswith(".json"):
        sanitized += ".json"
    if sanitized == ".json":
        return None
    return sanitized


def validate_backup(backup: Any) -> tuple[bool, str]:
    """
    Check a parsed backup before anything is overwritten.

    Returns:
        (True, "") or (False, user-facing message)
    """
    if not isinstance(backup, dict):
        return False, "Invalid backup data"

    version = backup.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        return False, "Backup version not found or invalid"
    if version > BACKUP_VERSION:
        return False, "Backup is from a newer version"
    if not isinstance(backup.get("data"), dict):
        return False, "No data found in backup"

    try:
        BackupDocument.model_validate(backup)
    except ValidationError as e:
        location = ".".join(str(part) for part in e.errors()[0]["loc"][1:]) or "data"
        return False, f"Invalid {location} format"
    return True, ""


class BackupService:
    def __init__(
        self,
        store: DocumentStore,
        backup_dir: str | Path | None = None,
        clock: Clock | None = None,
    ):
        self.store = store
        self.backup_dir = Path(backup_dir or config.BACKUP_DIR)
        self.clock = clock or SystemClock()

    async def create_backup(self) -> dict[str, Any]:
        """Snapshot every collection into a backup document."""
        now = self.clock.now()
        settings = await self.store.load(USER_SETTINGS)
        reminders = await self.store.load(REMINDERS)

        return {
            "version": BACKUP_VERSION,
            "created_at": now.strftime("%Y-%m-%d %H:%M:%S"),
            "timestamp": int(now.timestamp()),
            "data": {
                "settings": settings,
                "persistent_notes": settings.get("persistent_notes"),
                "quests": await self.store.load(QUESTS),
                "logs": await self.store.load(DAILY_LOGS),
                "reminders": reminders.get("reminders") or [],
            },
        }

    async def restore_backup(self, backup: Any) -> BackupResult:
        """Overwrite the collections present in the backup; absent sections are kept."""
        valid, error = validate_backup(backup)
        if not valid:
            return BackupResult(success=False, message=error)

        data = BackupDocument.model_validate(backup).data

        if data.settings is not None or data.persistent_notes is not None:
            settings = dict(data.settings or await self.store.load(USER_SETTINGS))
            if data.persistent_notes is not None:
                settings["persistent_notes"] = data.persistent_notes
            await self.store.save(USER_SETTINGS, settings)

        if data.quests is not None:
            await self.store.save(QUESTS, data.quests)

        if data.logs is not None:
            await self.store.save(DAILY_LOGS, data.logs)

        if data.reminders is not None:
            await self.store.save(REMINDERS, {"reminders": data.reminders})

        logger.info(f"Backup from {backup.get('created_at')} restored")
        return BackupResult(success=True, message="Data restored successfully")

    async def export_backup(self, filename: str | None = None) -> BackupResult:
        """Write a backup file (atomic temp-file + rename)."""
        self.backup_dir.mkdir(parents=True, exist_ok=True)

        filename = filename or f"{BACKUP_PREFIX}backup_{self.clock.now():%Y%m%d_%H%M%S}.json"
        safe_name = sanitize_filename(filename)
        if safe_name is None:
            return BackupResult(success=False, message="Invalid filename")

        path = self.backup_dir / safe_name
        temp_path = path.with_name(path.name + ".tmp")
        backup = await self.create_backup()

        try:
            temp_path.write_text(
                json.dumps(backup, indent=2, sort_keys=True, ensure_ascii=False),
                encoding="utf-8",
            )
            os.replace(temp_path, path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            logger.error(f"Failed to write backup {path}: {e}")
            return BackupResult(success=False, message=f"Failed to write backup: {e}")

        logger.info(f"Backup exported to {path}")
        return BackupResult(success=True, message=str(path), path=path)

    def is_valid_backup_path(self, path: str | Path) -> bool:
        """True if the path resolves to a file inside the backup directory."""
        try:
            Path(path).resolve().relative_to(self.backup_dir.resolve())
        except ValueError:
            return False
        return True

    async def import_backup(self, path: str | Path) -> BackupResult:
        if not self.is_valid_backup_path(path):
            return BackupResult(success=False, message="Invalid backup file path")

        path = Path(path)
        if not path.is_file():
            return BackupResult(success=False, message="Backup file not found")

        try:
            backup = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            return BackupResult(success=False, message=f"Failed to parse backup file: {e}")

        return await self.restore_backup(backup)

    def list_backups(self) -> list[BackupFile]:
        """Backup files in the backup directory, newest first."""
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        backups = []
        for path in self.backup_dir.glob(f"{BACKUP_PREFIX}*.json"):
            stat = path.stat()
            created_at = None
            try:
                created_at = json.loads(path.read_text(encoding="utf-8")).get("created_at")
            except (OSError, json.JSONDecodeError, AttributeError):
                logger.warning(f"Unreadable backup file {path.name}")
            backups.append(
                BackupFile(
                    filename=path.name,
                    path=path,
                    created_at=created_at
                    or datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S"),
                    size=stat.st_size,
                )
            )
        return sorted(backups, key=lambda b: b.created_at, reverse=True)

    def delete_backup(self, path: str | Path) -> bool:
        if not self.is_valid_backup_path(path) or not Path(path).is_file():
            return False
        Path(path).unlink()
        return True

    async def auto_backup(self, max_keep: int | None = None) -> BackupResult:
        """
        Once-a-day backup with rolling retention.

        Returns:
            success=False if today's auto-backup already exists
        """
        max_keep = config.MAX_AUTO_BACKUPS if max_keep is None else max_keep
        filename = f"{BACKUP_PREFIX}auto_{self.clock.today():%Y%m%d}.json"

        if (self.backup_dir / filename).is_file():
            return BackupResult(success=False, message="Auto-backup already exists for today")

        result = await self.export_backup(filename)
        if result.success:
            self.cleanup_auto_backups(max_keep)
            result.message = f"Auto-backup created: {filename}"
        return result

    def cleanup_auto_backups(self, max_keep: int) -> int:
        """Delete the oldest auto-backups beyond `max_keep`. Returns the count removed."""
        auto_backups = sorted(
            path for path in self.backup_dir.glob("*.json") if AUTO_BACKUP_RE.match(path.name)
        )
        stale = auto_backups[: max(len(auto_backups) - max_keep, 0)]
        for path in stale:
            path.unlink()
        if stale:
            logger.info(f"Removed {len(stale)} old auto-backup(s)")
        return len(stale)

    async def reset_all_data(self) -> None:
        """Clear every collection (settings go back to defaults on next load)."""
        for name in COLLECTIONS:
            await self.store.clear(name)
        logger.warning("All tracker data reset")