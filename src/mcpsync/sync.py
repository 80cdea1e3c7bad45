"""Core sync orchestrator — loads the source once, then syncs each target."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from mcpsync.errors import SyncError
from mcpsync.schema import SOURCE_SCHEMA
from mcpsync.store import RecordStore, load_document
from mcpsync.targets.base import WriteResult
from mcpsync.utils.logger import SilentLogger, SyncLogger

if TYPE_CHECKING:
    from mcpsync.targets.base import Target


@dataclass
class TargetSyncResult:
    """Outcome of syncing a single target."""

    target_name: str
    success: bool
    writes: list[WriteResult] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class SyncResult:
    """Aggregate outcome of a full sync run."""

    success: bool
    dry_run: bool
    source: str = ""
    target_results: dict[str, TargetSyncResult] = field(default_factory=dict)


def load_source(source_path: Path) -> RecordStore:
    """Read the source-schema record store from *source_path*.

    Raises:
        SourceMissing: If the file does not exist.
        MalformedDocument: If it is not a JSON object with a valid store.
    """
    return load_document(source_path, required=True).get_store(SOURCE_SCHEMA.servers_key)


class SyncEngine:
    """Orchestrates sync from a single source document to multiple targets.

    A failing target is recorded and the remaining targets still run;
    writes already completed for earlier targets are not rolled back.
    """

    def __init__(
        self,
        source_path: Path,
        targets: dict[str, Target],
        logger: SyncLogger | None = None,
    ) -> None:
        self._source_path = source_path
        self._targets = targets
        self._log = logger or SilentLogger()

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def run(self, *, dry_run: bool = False) -> SyncResult:
        """Execute the sync pipeline.

        Raises:
            SourceMissing: Before any target is touched, if the source is absent.
            MalformedDocument: If the source document is malformed.
        """
        log = self._log
        result = SyncResult(success=True, dry_run=dry_run, source=str(self._source_path))

        log.section("Loading MCP servers")
        servers = load_source(self._source_path)
        log.info(f"Source: {self._source_path} ({len(servers)} servers)")

        for name, target in self._targets.items():
            tr = TargetSyncResult(target_name=name, success=True)
            log.section(f"{target.label or name}: {target.describe()}")

            try:
                tr.writes = target.sync(servers, dry_run=dry_run)
                tr.added = list(target.added)
            except SyncError as exc:
                tr.success = False
                tr.errors.append(str(exc))
                log.error(f"{name}: {exc}")

            result.target_results[name] = tr
            if not tr.success:
                result.success = False

        return result
