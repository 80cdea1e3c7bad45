"""Rich output helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from mcpsync.skills import SkillResult
    from mcpsync.sync import SyncResult
    from mcpsync.targets.base import Target


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n != 1 else ''}"


def print_sync_summary(result: SyncResult, console: Console | None = None) -> None:
    """Print a coloured summary of sync results."""
    con = console or Console()

    total_files = 0
    total_errors = 0

    for tr in result.target_results.values():
        total_files += sum(1 for w in tr.writes if w.written)
        total_errors += len(tr.errors)

    header = f"Sync complete: {_plural(len(result.target_results), 'target')}"
    header += f", {_plural(total_files, 'file')} written"
    if total_errors:
        header += f", [red]{_plural(total_errors, 'error')}[/red]"
    else:
        header += ", 0 errors"

    con.print()
    con.print(header)

    for name, tr in result.target_results.items():
        if tr.success:
            mark = "[green]✓[/green]"
            detail = f"+{len(tr.added)} servers"
            if tr.added:
                detail += f" ({', '.join(tr.added)})"
        else:
            mark = "[red]✗[/red]"
            detail = "; ".join(tr.errors) if tr.errors else "failed"

        con.print(f"  {name:<18} {mark}  {detail}", highlight=False)

    if result.dry_run:
        con.print()
        con.print("[yellow]DRY RUN — no files were written[/yellow]")


def print_skills_summary(
    results: dict[str, list[SkillResult]],
    dry_run: bool = False,
    console: Console | None = None,
) -> None:
    """Print per-destination counts of copied, overwritten and skipped skills."""
    con = console or Console()

    con.print()
    con.print("Skills sync complete")
    for label, skill_results in results.items():
        counts: dict[str, int] = {}
        for r in skill_results:
            counts[r.status] = counts.get(r.status, 0) + 1
        parts = [f"{n} {status}" for status, n in sorted(counts.items())]
        con.print(f"  {label:<10} {', '.join(parts) or 'nothing to do'}", highlight=False)

    if dry_run:
        con.print()
        con.print("[yellow]DRY RUN — no files were copied[/yellow]")


def print_skill_list(names: list[str], console: Console | None = None) -> None:
    con = console or Console()
    con.print("Available skills:")
    for name in names:
        con.print(f"  {name}", highlight=False)


def print_targets(targets: dict[str, Target], console: Console | None = None) -> None:
    """Print each MCP target with the file(s) it writes."""
    con = console or Console()

    table = Table(show_header=True, show_edge=False, pad_edge=False, box=None)
    table.add_column("Name", style="cyan", min_width=18, no_wrap=True)
    table.add_column("Description", min_width=10)
    table.add_column("Path", overflow="fold")

    for name, target in targets.items():
        table.add_row(name, target.label, target.describe())

    con.print(table)
