"""Generic MCP target: convert, adapt, merge into an existing JSON file, write."""

from __future__ import annotations

from pathlib import Path

from mcpsync.adaptors import adapted_names, apply_adaptors
from mcpsync.merge import diff_added_keys, merge
from mcpsync.schema import Schema, convert
from mcpsync.store import RecordStore, load_document
from mcpsync.targets.base import Target, WriteResult
from mcpsync.utils.io import write_json
from mcpsync.utils.logger import SilentLogger, SyncLogger


class McpTarget(Target):
    """Merges source servers into the record store of one JSON file.

    Existing entries in the file always win; only names the file does not
    have yet are added. Every other top-level key of the file is preserved.
    """

    def __init__(
        self,
        path: Path,
        schema: Schema,
        *,
        use_adaptors: bool = False,
        backup: bool = True,
        backup_dir: Path | None = None,
        logger: SyncLogger | None = None,
    ) -> None:
        super().__init__()
        self.path = path
        self.schema = schema
        self.use_adaptors = use_adaptors
        self._backup = backup
        self._backup_dir = backup_dir
        self._log = logger or SilentLogger()

    # ------------------------------------------------------------------
    # Target interface
    # ------------------------------------------------------------------

    def sync(self, servers: RecordStore, *, dry_run: bool = False) -> list[WriteResult]:
        incoming = self.prepare(servers)

        doc = load_document(self.path)
        existing = doc.get_store(self.schema.servers_key)

        self.added = sorted(diff_added_keys(incoming, existing))
        if self.added:
            self._log.info(f"{self.name}: servers to add: {', '.join(self.added)}")
        else:
            self._log.info(f"{self.name}: no new servers ({len(existing)} already present)")

        merged = merge(existing, incoming)
        final = doc.with_field(self.schema.servers_key, merged)

        return [
            write_json(
                self.path,
                final.to_dict(),
                self._log,
                backup=self._backup,
                backup_dir=self._backup_dir,
                dry_run=dry_run,
            )
        ]

    def describe(self) -> str:
        return str(self.path)

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def prepare(self, servers: RecordStore) -> RecordStore:
        """Convert *servers* to this target's schema and apply adaptors."""
        converted = convert(servers, self.schema)
        if not self.use_adaptors:
            return converted

        for name in adapted_names(converted):
            self._log.info(f"{self.name}: adaptor applied to '{name}'")
        return apply_adaptors(converted, self.schema)
