"""File backup utilities."""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from mcpsync.errors import BackupFailure

if TYPE_CHECKING:
    from mcpsync.utils.logger import SyncLogger


def backup_path_for(path: Path, backup_dir: Path | None = None) -> Path:
    """Where the backup of *path* goes.

    Without *backup_dir* this is the sibling ``<name>.bak``; with it, a
    timestamped copy inside *backup_dir*.
    """
    if backup_dir is None:
        return path.with_name(f"{path.name}.bak")
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return backup_dir / f"{path.name}.{timestamp}.bak"


def backup_file(path: Path, log: SyncLogger, backup_dir: Path | None = None) -> Path | None:
    """Copy *path* to its backup location before it is overwritten.

    Returns the backup path on success, or ``None`` if *path* does not exist.

    Raises:
        BackupFailure: If the copy could not be made.
    """
    if not path.exists():
        return None

    dest = backup_path_for(path, backup_dir)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, dest)
    except OSError as exc:
        raise BackupFailure(f"Cannot back up {path} to {dest}: {exc}") from exc

    log.info(f"Backup: {path} -> {dest}")
    return dest
