"""File writing utilities that return WriteResult."""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mcpsync.errors import WriteFailure
from mcpsync.targets.base import WriteResult
from mcpsync.utils.backup import backup_file

if TYPE_CHECKING:
    from mcpsync.utils.logger import SyncLogger


def dump_json(data: Any) -> str:
    """Serialize *data* the way every target file is written."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(
    path: Path,
    data: Any,
    log: SyncLogger,
    *,
    backup: bool = True,
    backup_dir: Path | None = None,
    dry_run: bool = False,
) -> WriteResult:
    """Serialize *data* as JSON and write to *path*.

    In dry-run mode the document is only logged. Otherwise an existing file
    is backed up first (when *backup* is set) and the new content replaces it
    atomically.

    Raises:
        BackupFailure: If the existing file could not be backed up.
        WriteFailure: If the directory or file could not be written.
    """
    content = dump_json(data)
    nbytes = len(content.encode())

    if dry_run:
        if path.exists():
            existing = path.read_text(encoding="utf-8")
            if existing == content:
                msg = f"{path}: no changes"
            else:
                msg = f"{path}: WOULD UPDATE ({nbytes} bytes)"
        else:
            msg = f"{path}: WOULD CREATE ({nbytes} bytes)"
        log.info(msg)
        log.document(data)
        return WriteResult(path=str(path), written=False, bytes_written=0, message=msg)

    backup_path = backup_file(path, log, backup_dir) if backup else None

    _atomic_write(path, content)
    msg = f"Written: {path} ({nbytes} bytes)"
    log.info(msg)
    return WriteResult(
        path=str(path),
        written=True,
        bytes_written=nbytes,
        message=msg,
        backup_path=str(backup_path) if backup_path else None,
    )


# ------------------------------------------------------------------
# Internal helper
# ------------------------------------------------------------------

def _atomic_write(path: Path, content: str) -> None:
    # Symlinked targets are written through to the file they point at.
    path = path.resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteFailure(f"Cannot create directory {path.parent}: {exc}") from exc

    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteFailure(f"Cannot write {path}: {exc}") from exc
