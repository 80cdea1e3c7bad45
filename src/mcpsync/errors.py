"""Error hierarchy shared by the sync engine and the CLI."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for every fatal sync error."""


class SourceMissing(SyncError):
    """Raised when the source document or directory does not exist."""


class TargetPrerequisiteMissing(SyncError):
    """Raised when a target needs a parameter (e.g. a project dir) that was not given."""


class UnknownEntity(SyncError):
    """Raised when a requested server or skill is not present in the source."""

    def __init__(self, kind: str, name: str, available: list[str]) -> None:
        self.kind = kind
        self.name = name
        self.available = available
        listing = ", ".join(available) if available else "(none)"
        super().__init__(f"{kind.capitalize()} '{name}' not found in source. Available: {listing}")


class MalformedDocument(SyncError):
    """Raised when a JSON document does not have the expected shape."""


class BackupFailure(SyncError):
    """Raised when an existing target could not be backed up before overwrite."""


class WriteFailure(SyncError):
    """Raised when the final document could not be written."""
