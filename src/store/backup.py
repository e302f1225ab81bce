"""Pre-write backup of target documents.

A run copies every target document that exists into a fresh timestamped
directory before its first write. Restoring that directory undoes the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
import shutil
from typing import Iterable

from core.constants import BACKUP_TIMESTAMP_FORMAT
from core.errors import MigrationBackupError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class BackupResult:
    """Backup directory and the document names copied into it."""

    path: Path
    files: tuple[str, ...]


def create_backup(
    data_root: Path,
    backup_root: Path,
    file_names: Iterable[str],
    started_at: datetime,
) -> BackupResult:
    """Copy existing target documents into a new backup directory.

    Args:
        data_root: Directory holding target documents.
        backup_root: Parent directory for timestamped backups.
        file_names: Target document names to back up when present.
        started_at: Run start time naming the backup directory.

    Returns:
        The backup directory and copied file names.

    Raises:
        MigrationBackupError: If the directory or a copy cannot be created.
    """
    backup_path = _create_unique_dir(backup_root, started_at.strftime(BACKUP_TIMESTAMP_FORMAT))
    copied: list[str] = []
    for file_name in file_names:
        source_path = data_root / file_name
        if not source_path.is_file():
            continue
        try:
            shutil.copy2(source_path, backup_path / file_name)
        except OSError as error:
            raise MigrationBackupError(
                f"Failed to back up {source_path} into {backup_path}: {error}. "
                "No target document has been modified; fix the backup location and retry."
            ) from error
        copied.append(file_name)
    _LOGGER.info("backup_created", backup_path=str(backup_path), files=copied)
    return BackupResult(path=backup_path, files=tuple(copied))


def _create_unique_dir(backup_root: Path, name: str) -> Path:
    """Create a fresh backup directory, suffixing ``-N`` on a name clash.

    Args:
        backup_root: Parent directory for backups.
        name: Preferred directory name.

    Returns:
        The created directory, never one that existed before.

    Raises:
        MigrationBackupError: If the directory cannot be created.
    """
    candidate = backup_root / name
    suffix = 0
    while True:
        try:
            candidate.mkdir(parents=True, exist_ok=False)
            return candidate
        except FileExistsError:
            suffix += 1
            candidate = backup_root / f"{name}-{suffix}"
        except OSError as error:
            raise MigrationBackupError(
                f"Failed to create backup directory {candidate}: {error}. "
                "Set CLICKUP_MIGRATE_BACKUP_DIR to a writable location and retry."
            ) from error
