"""Claude Code user-level target (~/.claude.json)."""

from __future__ import annotations

from pathlib import Path

from mcpsync.schema import CLAUDE_SCHEMA
from mcpsync.targets.mcp import McpTarget
from mcpsync.utils.logger import SyncLogger


class ClaudeUserTarget(McpTarget):
    """Claude Code reads the source format, so no conversion and no adaptors."""

    name = "claude"
    label = "Claude Code user-level"

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
            use_adaptors=False,
            backup=backup,
            backup_dir=backup_dir,
            logger=logger,
        )
