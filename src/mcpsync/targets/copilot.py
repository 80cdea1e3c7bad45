"""Copilot CLI user-level target (~/.copilot/mcp-config.json)."""

from __future__ import annotations

from pathlib import Path

from mcpsync.schema import CLAUDE_SCHEMA
from mcpsync.targets.mcp import McpTarget
from mcpsync.utils.logger import SyncLogger


class CopilotCliUserTarget(McpTarget):
    """Same ``mcpServers`` schema as Claude Code, but adaptors are applied.

    At project level Copilot CLI reads ``.vscode/mcp.json``; that file is
    covered by :class:`~mcpsync.targets.vscode.VSCodeProjectTarget`.
    """

    name = "copilot-cli-user"
    label = "Copilot CLI user-level"

    def __init__(
        self,
        path: Path,
        *,
        backup: bool = True,
        backup_dir: Path | None = None,
        logger: SyncLogger | None = None,
    ) -> None:
        super().__init__(
            path,
            CLAUDE_SCHEMA,
            use_adaptors=True,
            backup=backup,
            backup_dir=backup_dir,
            logger=logger,
        )
