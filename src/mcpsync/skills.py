"""Skill directory sync — copy-or-skip, no merging."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from mcpsync.errors import SourceMissing, UnknownEntity, WriteFailure

if TYPE_CHECKING:
    from mcpsync.utils.logger import SyncLogger

SKILL_MARKER = "SKILL.md"

COPIED = "copied"
SKIPPED = "skipped"
OVERWRITTEN = "overwritten"


@dataclass
class SkillResult:
    """Outcome of syncing one skill directory."""

    name: str
    status: str  # copied, skipped, overwritten
    dest: str
    written: bool = False


def list_source_skills(source_dir: Path) -> list[str]:
    """Names of subdirectories of *source_dir* that contain a ``SKILL.md``."""
    if not source_dir.is_dir():
        return []
    return sorted(
        d.name for d in source_dir.iterdir() if d.is_dir() and (d / SKILL_MARKER).is_file()
    )


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def sync_skill(
    name: str,
    source_dir: Path,
    dest_dir: Path,
    log: SyncLogger,
    *,
    force: bool = False,
    dry_run: bool = False,
) -> SkillResult:
    """Copy skill *name* from *source_dir* into *dest_dir*.

    An existing destination is skipped unless *force* is set, in which case
    it is replaced wholesale so no stale files survive. The copy is staged in
    a hidden sibling directory and swapped in only once complete.
    """
    src = source_dir / name
    dest = dest_dir / name

    available = list_source_skills(source_dir)
    if name not in available:
        raise UnknownEntity("skill", name, available)

    if dest.exists():
        if not force:
            log.info(f"skipped (already exists): {name} (use --force to overwrite)")
            return SkillResult(name=name, status=SKIPPED, dest=str(dest))
        status = OVERWRITTEN
        log.info(f"overwriting: {name}")
    else:
        status = COPIED
        log.info(f"copying: {name}")

    if dry_run:
        log.info(f"would copy -> {dest}")
        return SkillResult(name=name, status=status, dest=str(dest))

    staging = dest_dir / f".{name}.tmp"
    retired = dest_dir / f".{name}.old"
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        _remove(staging)
        _remove(retired)
        shutil.copytree(src, staging)
        if dest.exists() or dest.is_symlink():
            dest.rename(retired)
        try:
            staging.rename(dest)
        except OSError:
            if retired.exists() or retired.is_symlink():
                retired.rename(dest)
            raise
        _remove(retired)
    except OSError as exc:
        shutil.rmtree(staging, ignore_errors=True)
        raise WriteFailure(f"Cannot copy skill {name} to {dest}: {exc}") from exc

    log.info(f"copied -> {dest}")
    return SkillResult(name=name, status=status, dest=str(dest), written=True)


def sync_skills(
    source_dir: Path,
    dest_dir: Path,
    log: SyncLogger,
    *,
    skill: str | None = None,
    force: bool = False,
    dry_run: bool = False,
) -> list[SkillResult]:
    """Sync every source skill (or only *skill*) into *dest_dir*.

    Raises:
        SourceMissing: If *source_dir* does not exist or holds no skills.
        UnknownEntity: If *skill* is given but not present in the source.
    """
    if not source_dir.is_dir():
        raise SourceMissing(f"Skills source directory not found: {source_dir}")

    available = list_source_skills(source_dir)
    if skill is not None:
        if skill not in available:
            raise UnknownEntity("skill", skill, available)
        names = [skill]
    else:
        names = available

    if not names:
        raise SourceMissing(f"No skills found in source: {source_dir}")

    return [
        sync_skill(name, source_dir, dest_dir, log, force=force, dry_run=dry_run)
        for name in names
    ]
