"""Abstract base class and result types for sync targets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcpsync.store import RecordStore


@dataclass
class WriteResult:
    """Result of a write operation."""

    path: str
    written: bool
    bytes_written: int = 0
    message: str = ""
    backup_path: str | None = None


class Target(ABC):
    """A destination that receives the source MCP servers.

    ``added`` holds the server names the last :meth:`sync` introduced (or
    would introduce, in dry-run mode).
    """

    name: str = ""
    label: str = ""

    def __init__(self) -> None:
        self.added: list[str] = []

    @abstractmethod
    def sync(self, servers: RecordStore, *, dry_run: bool = False) -> list[WriteResult]:
        """Merge *servers* (source schema) into this target's files."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable location(s) this target writes to."""
