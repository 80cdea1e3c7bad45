"""Run log for mcpsync: rich console echo plus a buffered log file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

LEVEL_STYLES = {"INFO": "green", "WARN": "yellow", "ERROR": "red"}


@dataclass
class LogEntry:
    """One buffered line of the run log."""

    level: str
    message: str
    dry_run: bool = False
    time: datetime = field(default_factory=datetime.now)

    def format(self) -> str:
        prefix = "[DRY-RUN] " if self.dry_run else ""
        return f"[{self.time:%H:%M:%S}] [{self.level}] {prefix}{self.message}"


class SyncLogger:
    """Echoes sync progress to the console and keeps every entry for the log file.

    Messages are printed as plain text, so paths or server names containing
    ``[...]`` are never read as rich markup.
    """

    def __init__(
        self, dry_run: bool = False, quiet: bool = False, console: Console | None = None
    ) -> None:
        self.dry_run = dry_run
        self.quiet = quiet
        self.console = console or Console(quiet=quiet)
        self.entries: list[LogEntry] = []

    @property
    def messages(self) -> list[str]:
        return [e.format() for e in self.entries]

    def count(self, level: str) -> int:
        return sum(1 for e in self.entries if e.level == level)

    def _add(self, level: str, msg: str) -> None:
        self.entries.append(LogEntry(level, msg, dry_run=self.dry_run))

    def _emit(self, level: str, msg: str) -> None:
        self._add(level, msg)
        line = Text.assemble("  ", (f"{level:<5}", LEVEL_STYLES[level]), " ", msg)
        self.console.print(line)

    def info(self, msg: str) -> None:
        self._emit("INFO", msg)

    def warn(self, msg: str) -> None:
        self._emit("WARN", msg)

    def error(self, msg: str) -> None:
        self._emit("ERROR", msg)

    def section(self, title: str) -> None:
        self._add("INFO", f"=== {title} ===")
        self.console.print(Rule(title))

    def document(self, data: Any) -> None:
        """Show a JSON document that would be written (dry-run preview)."""
        text = json.dumps(data, indent=2, ensure_ascii=False)
        self._add("DOC", text)
        self.console.print_json(text)

    def flush_to_file(self, log_dir: Path) -> Path | None:
        """Append buffered entries to ``mcpsync-<date>.log`` in *log_dir*.

        Returns the log file path, or ``None`` when nothing was logged.
        """
        if not self.entries:
            return None
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"mcpsync-{datetime.now():%Y-%m-%d}.log"
        with open(log_file, "a", encoding="utf-8") as f:
            f.write("\n".join(self.messages) + "\n")
        return log_file


class SilentLogger(SyncLogger):
    """No console output; entries are still kept."""

    def __init__(self, dry_run: bool = False) -> None:
        super().__init__(dry_run=dry_run, quiet=True)
