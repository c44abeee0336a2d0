"""
Folio Server - Maintenance Tasks

Bodies of the recurring backup and log cleanup jobs.
Retention counts come from the TotalBackups and TotalLogs settings.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from models.enums import ServerSettingKey
from managers.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "folio_backup_"


def _GetRetention(db_manager, key: ServerSettingKey, default: int = 30) -> int:
    with UnitOfWork(db_manager) as uow:
        raw = uow.settings.GetValue(key, str(default))
    try:
        return max(1, int(raw))
    except ValueError:
        logger.warning(f"Invalid {key.value} setting {raw!r}, keeping {default}")
        return default


def PruneOldest(files: List[Path], keep: int) -> List[Path]:
    """
    Delete all but the newest `keep` files (files must be sorted oldest first)

    Returns:
        Paths that were deleted
    """
    excess = len(files) - keep
    if excess <= 0:
        return []
    removed = []
    for path in files[:excess]:
        try:
            path.unlink()
            removed.append(path)
        except OSError as e:
            logger.warning(f"Could not delete {path}: {e}")
    return removed


def BackupDatabase(db_manager, directory_manager, now: Optional[datetime] = None) -> Optional[Path]:
    """
    Copy the SQLite database into the backup directory and prune old backups

    Returns:
        Path of the new backup, or None if the database file does not exist
    """
    db_file = Path(db_manager.db_path)
    if not db_file.exists():
        logger.error(f"Database file not found, skipping backup: {db_file}")
        return None

    backup_dir = Path(directory_manager.backup_directory)
    directory_manager.ExistOrCreate(backup_dir)

    timestamp = (now or datetime.now()).strftime('%Y%m%d_%H%M%S')
    backup_path = backup_dir / f"{BACKUP_PREFIX}{timestamp}.db"
    shutil.copy2(str(db_file), str(backup_path))
    logger.info(f"Database backup created: {backup_path.name}")

    total_backups = _GetRetention(db_manager, ServerSettingKey.TotalBackups)
    backups = directory_manager.ListFiles(backup_dir, f"{BACKUP_PREFIX}*.db")
    removed = PruneOldest(backups, total_backups)
    if removed:
        logger.info(f"Removed {len(removed)} old backups (keeping {total_backups})")

    return backup_path


def CleanupLogs(db_manager, directory_manager) -> List[Path]:
    """
    Keep only the newest TotalLogs log files

    Returns:
        Paths of the deleted log files
    """
    total_logs = _GetRetention(db_manager, ServerSettingKey.TotalLogs)
    logs = directory_manager.ListFiles(directory_manager.logs_directory, "*.log*")
    removed = PruneOldest(logs, total_logs)
    if removed:
        logger.info(f"Removed {len(removed)} old log files (keeping {total_logs})")
    return removed
