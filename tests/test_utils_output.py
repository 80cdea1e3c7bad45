"""Tests for mcpsync.utils.output — rich summaries."""

from __future__ import annotations

from rich.console import Console

from mcpsync.skills import SkillResult
from mcpsync.sync import SyncResult, TargetSyncResult
from mcpsync.targets.base import WriteResult
from mcpsync.utils.output import print_skills_summary, print_sync_summary


def _console() -> Console:
    return Console(record=True, width=120)


def test_sync_summary_success():
    result = SyncResult(success=True, dry_run=False)
    result.target_results["claude"] = TargetSyncResult(
        target_name="claude",
        success=True,
        writes=[WriteResult(path="a.json", written=True, bytes_written=10)],
        added=["foo"],
    )
    con = _console()

    print_sync_summary(result, con)

    text = con.export_text()
    assert "Sync complete: 1 target, 1 file written, 0 errors" in text
    assert "+1 servers (foo)" in text


def test_sync_summary_errors_and_dry_run():
    result = SyncResult(success=False, dry_run=True)
    result.target_results["vscode-project"] = TargetSyncResult(
        target_name="vscode-project", success=False, errors=["Cannot write x"]
    )
    con = _console()

    print_sync_summary(result, con)

    text = con.export_text()
    assert "1 error" in text
    assert "Cannot write x" in text
    assert "DRY RUN" in text


def test_skills_summary_counts():
    con = _console()
    print_skills_summary(
        {
            "user": [
                SkillResult(name="a", status="copied", dest="/x/a", written=True),
                SkillResult(name="b", status="skipped", dest="/x/b"),
                SkillResult(name="c", status="copied", dest="/x/c", written=True),
            ]
        },
        console=con,
    )
    text = con.export_text()
    assert "2 copied, 1 skipped" in text
