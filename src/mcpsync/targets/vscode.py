"""VSCode Copilot targets — project ``.vscode/mcp.json`` and autostart settings."""

from __future__ import annotations

from pathlib import Path

from mcpsync.schema import VSCODE_SCHEMA
from mcpsync.store import RecordStore, load_document
from mcpsync.targets.base import Target, WriteResult
from mcpsync.targets.mcp import McpTarget
from mcpsync.utils.io import write_json
from mcpsync.utils.logger import SilentLogger, SyncLogger

AUTOSTART_KEY = "chat.mcp.autostart"


def enable_autostart(
    settings_path: Path,
    log: SyncLogger,
    *,
    backup: bool = True,
    backup_dir: Path | None = None,
    dry_run: bool = False,
) -> WriteResult:
    """Set ``chat.mcp.autostart`` to ``true`` in a VSCode ``settings.json``.

    Nothing is written when the setting is already ``true``. All other
    settings are preserved.
    """
    doc = load_document(settings_path)
    if doc.get_field(AUTOSTART_KEY) is True:
        msg = f"{settings_path}: {AUTOSTART_KEY} already enabled, nothing to do"
        log.info(msg)
        return WriteResult(path=str(settings_path), written=False, message=msg)

    updated = doc.with_field(AUTOSTART_KEY, True)
    return write_json(
        settings_path,
        updated.to_dict(),
        log,
        backup=backup,
        backup_dir=backup_dir,
        dry_run=dry_run,
    )


class VSCodeProjectTarget(McpTarget):
    """Writes ``<project>/.vscode/mcp.json`` in the VSCode schema.

    Copilot CLI reads the same file at project level. Also enables
    ``chat.mcp.autostart`` in ``<project>/.vscode/settings.json``.
    """

    name = "vscode-project"
    label = "VSCode Copilot + Copilot CLI project-level"

    def __init__(
        self,
        project_dir: Path,
        *,
        backup: bool = True,
        backup_dir: Path | None = None,
        logger: SyncLogger | None = None,
    ) -> None:
        super().__init__(
            project_dir / ".vscode" / "mcp.json",
            VSCODE_SCHEMA,
            use_adaptors=True,
            backup=backup,
            backup_dir=backup_dir,
            logger=logger,
        )
        self.project_dir = project_dir
        self.settings_path = project_dir / ".vscode" / "settings.json"

    def sync(self, servers: RecordStore, *, dry_run: bool = False) -> list[WriteResult]:
        results = super().sync(servers, dry_run=dry_run)
        self._log.info(f"{AUTOSTART_KEY} -> {self.settings_path}")
        results.append(
            enable_autostart(
                self.settings_path,
                self._log,
                backup=self._backup,
                backup_dir=self._backup_dir,
                dry_run=dry_run,
            )
        )
        return results

    def describe(self) -> str:
        return f"{self.path} + {self.settings_path}"


class VSCodeUserTarget(Target):
    """Enables ``chat.mcp.autostart`` in the VSCode user settings.

    No servers are written; the user-level settings only control whether
    configured servers start without a manual click.
    """

    name = "vscode-user"
    label = "VSCode user settings"

    def __init__(
        self,
        settings_path: Path,
        *,
        backup: bool = True,
        backup_dir: Path | None = None,
        logger: SyncLogger | None = None,
    ) -> None:
        super().__init__()
        self.settings_path = settings_path
        self._backup = backup
        self._backup_dir = backup_dir
        self._log = logger or SilentLogger()

    def sync(self, servers: RecordStore, *, dry_run: bool = False) -> list[WriteResult]:
        return [
            enable_autostart(
                self.settings_path,
                self._log,
                backup=self._backup,
                backup_dir=self._backup_dir,
                dry_run=dry_run,
            )
        ]

    def describe(self) -> str:
        return str(self.settings_path)
